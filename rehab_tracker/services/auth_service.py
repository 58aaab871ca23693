"""Authentication service with JWT and password hashing."""

import logging
from datetime import datetime, timedelta
from typing import Optional
from passlib.context import CryptContext
from jose import jwt, JWTError
from sqlalchemy.orm import Session

from rehab_tracker.config import get_settings
from rehab_tracker.database import commit_or_raise
from rehab_tracker.errors import Conflict, Unauthenticated, ValidationFailed
from rehab_tracker.models import User, ROLES

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class AuthService:
    """Credential service: registration, login and bearer tokens."""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def get_password_hash(password: str) -> str:
        """Hash a password."""
        return pwd_context.hash(password)

    @staticmethod
    def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
        """Create a JWT access token for a user."""
        expire = datetime.utcnow() + (
            expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
        )
        to_encode = {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role,
            "exp": expire,
        }
        return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)

    @staticmethod
    def decode_token(token: str) -> Optional[dict]:
        """Decode and validate a JWT token."""
        try:
            payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
            return payload
        except JWTError:
            return None

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get a user by email."""
        return self.db.query(User).filter(User.email == email).first()

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by ID."""
        return self.db.get(User, user_id)

    def register(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        role: str,
        sport: Optional[str] = None,
        position: Optional[str] = None,
    ) -> User:
        """Create a new user. The role cannot be changed later."""
        if role not in ROLES:
            raise ValidationFailed("Invalid role. Must be trainer or athlete")
        if self.get_user_by_email(email):
            raise Conflict("User already exists")

        user = User(
            email=email,
            hashed_password=self.get_password_hash(password),
            first_name=first_name,
            last_name=last_name,
            role=role,
            sport=sport,
            position=position,
        )
        self.db.add(user)
        commit_or_raise(self.db, "Failed to create user")
        self.db.refresh(user)
        logger.info("Registered %s %s", role, user.id)
        return user

    def authenticate(self, email: str, password: str) -> User:
        """Authenticate a user by email and password."""
        user = self.get_user_by_email(email)
        if not user or not self.verify_password(password, user.hashed_password):
            logger.warning("Failed login for %s", email)
            raise Unauthenticated("Invalid credentials")
        return user

    def user_from_token(self, token: Optional[str]) -> User:
        """Resolve the bearer token to its user."""
        if not token:
            raise Unauthenticated()
        payload = self.decode_token(token)
        if not payload or not payload.get("sub"):
            raise Unauthenticated("Invalid token.")
        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError):
            raise Unauthenticated("Invalid token.")
        user = self.get_user_by_id(user_id)
        if not user:
            raise Unauthenticated("Invalid token.")
        return user
