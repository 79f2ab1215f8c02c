from pydantic import Field, field_validator
from typing import List, Optional
from datetime import datetime

from ration_store.shared.schemas.common import CamelModel


class FamilyBase(CamelModel):
    family_id: str = Field(..., min_length=1, max_length=100, description="Ration card number")
    head_of_family: str = Field(..., min_length=1, max_length=255)
    num_members: int = Field(..., gt=0, description="Number of members on the card")
    member_list: List[str] = Field(..., description="Member names in card order")
    address: str = Field(..., min_length=1, max_length=500)
    phone: str = Field(..., min_length=1, max_length=50)
    aadhaar: Optional[str] = Field(None, max_length=20)
    card_type: Optional[str] = Field(None, max_length=50)

    @field_validator('family_id', 'head_of_family', 'address', 'phone')
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError('Field cannot be empty')
        return v.strip()

    @field_validator('member_list')
    @classmethod
    def validate_member_list(cls, v):
        return [name.strip() for name in v if name and name.strip()]


class FamilyCreate(FamilyBase):
    """Register a family"""


class FamilyUpdate(FamilyBase):
    """Replace every field of a family"""


class FamilyResponse(FamilyBase):
    id: int
    num_members: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
