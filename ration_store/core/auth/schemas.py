from pydantic import Field, model_validator
from datetime import datetime
from typing import Optional

from ration_store.shared.schemas.common import CamelModel


class UserLogin(CamelModel):
    """Login with JSON body"""
    username: str = Field(..., min_length=1, description="Username")
    password: str = Field(..., min_length=1, description="Password")

    model_config = {
        "json_schema_extra": {
            "example": {
                "username": "operator",
                "password": "secret123"
            }
        }
    }


class UserRegister(CamelModel):
    """Create a new operator account"""
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=4, description="At least 4 characters")
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        self.username = self.username.strip()
        if not self.username:
            raise ValueError("Username is required")
        return self


class UserResponse(CamelModel):
    id: int
    username: str
    is_active: bool
    created_at: Optional[datetime] = None


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
