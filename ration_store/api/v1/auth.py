from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from ration_store.config.database import get_db
from ration_store.core.auth.service import AuthService
from ration_store.core.auth.schemas import UserLogin, UserRegister, TokenResponse, UserResponse
from ration_store.core.auth.dependencies import get_current_user
from ration_store.core.exceptions import ConflictError, StoreError
from ration_store.shared.database.models import User

logger = logging.getLogger(__name__)

router = APIRouter()


def _token_response(user: User) -> TokenResponse:
    access_token = AuthService.create_access_token(
        data={"user_id": user.id, "username": user.username}
    )
    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        user=UserResponse.model_validate(user)
    )


def _authenticate(db: Session, username: str, password: str) -> User:
    user = db.query(User).filter(User.username == username.strip()).first()

    if not user or not AuthService.verify_password(password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user"
        )

    return user


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    db: Session = Depends(get_db)
):
    """
    Create an operator account and log it in

    **Body:**
    ```json
        {
            "username": "operator",
            "password": "secret",
            "confirmPassword": "secret"
        }
    ```
    """
    if db.query(User).filter(User.username == user_data.username).first():
        raise ConflictError("Username already exists")

    user = User(
        username=user_data.username,
        password_hash=AuthService.get_password_hash(user_data.password),
        is_active=True
    )

    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError:
        db.rollback()
        raise ConflictError("Username already exists")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error registering user")
        raise StoreError()

    logger.info(f"User registered: {user.username}")
    return _token_response(user)


@router.post("/login", response_model=TokenResponse)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """
    Login with an OAuth2 password form to obtain an access token

    **Parameters:**
    - **username**: account username
    - **password**: account password
    """
    user = _authenticate(db, form_data.username, form_data.password)
    return _token_response(user)


@router.post("/login-json", response_model=TokenResponse)
def login_json(
    user_login: UserLogin,
    db: Session = Depends(get_db)
):
    """Login alternative accepting a JSON body"""
    user = _authenticate(db, user_login.username, user_login.password)
    return _token_response(user)


@router.get("/me", response_model=UserResponse)
def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """
    Current user information

    **Required headers:**
    - Authorization: Bearer {token}
    """
    return current_user


@router.post("/logout")
async def logout():
    """
    Logout (stateless tokens, informational only)

    The client must discard its token.
    """
    return {"message": "Logged out. Discard the token on the client."}
