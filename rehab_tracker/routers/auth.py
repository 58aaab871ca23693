"""Authentication router and the bearer-token dependency."""

from fastapi import APIRouter, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional

from rehab_tracker.database import get_db
from rehab_tracker.models import User
from rehab_tracker.schemas import UserRegister, UserLogin, TokenResponse, UserResponse
from rehab_tracker.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])

bearer_scheme = HTTPBearer(auto_error=False)


# ============== Dependencies ==============

def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to a user; UNAUTHENTICATED otherwise."""
    token = credentials.credentials if credentials else None
    return AuthService(db).user_from_token(token)


# ============== Auth Endpoints ==============

@router.post("/register", response_model=TokenResponse, status_code=201)
def register(
    user_data: UserRegister,
    db: Session = Depends(get_db),
):
    """Register a new trainer or athlete."""
    auth_service = AuthService(db)
    user = auth_service.register(
        email=user_data.email,
        password=user_data.password,
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        role=user_data.role,
        sport=user_data.sport,
        position=user_data.position,
    )
    return TokenResponse(
        access_token=auth_service.create_access_token(user),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=TokenResponse)
def login(
    credentials: UserLogin,
    db: Session = Depends(get_db),
):
    """Login with email and password."""
    auth_service = AuthService(db)
    user = auth_service.authenticate(credentials.email, credentials.password)
    return TokenResponse(
        access_token=auth_service.create_access_token(user),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: User = Depends(get_current_user),
):
    """Get current authenticated user info."""
    return current_user
