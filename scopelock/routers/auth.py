import logging
from datetime import timedelta
from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from scopelock.database import get_db
from scopelock.exceptions import AuthenticationError, InputValidationError
from scopelock.models.user import User, FREE_PLAN
from scopelock.schemas.user import UserCreate, UserResponse, Token
from scopelock.services.auth import (
    MAX_PASSWORD_BYTES,
    password_too_long,
    hash_password,
    verify_password,
    create_access_token,
    get_current_user,
)
from scopelock.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


def _token_response(user: User) -> Token:
    access_token = create_access_token(
        data={"sub": user.id},
        expires_delta=timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    return Token(access_token=access_token, user=UserResponse.model_validate(user))


@router.post("/register", response_model=Token)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user on the free plan and return an access token."""
    email = user_data.email.strip().lower()
    if not email or not user_data.password:
        raise InputValidationError("Email and password are required")
    if password_too_long(user_data.password):
        raise InputValidationError(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes",
            error_code="password_too_long",
        )

    existing_user = db.query(User).filter(User.email == email).first()
    if existing_user:
        raise InputValidationError("Email already registered", error_code="email_taken")

    user = User(
        email=email,
        hashed_password=hash_password(user_data.password),
        full_name=(user_data.full_name or "").strip() or None,
        plan=FREE_PLAN,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s", user.id)

    return _token_response(user)


@router.post("/login", response_model=Token)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """Login with email and password (OAuth2 form: 'username' is the email)."""
    user = db.query(User).filter(User.email == form_data.username.strip().lower()).first()

    if not user or not verify_password(form_data.password, user.hashed_password):
        raise AuthenticationError("Invalid email or password")

    return _token_response(user)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get current authenticated user."""
    return current_user
