"""User directory and profile service."""

from typing import List

from sqlalchemy.orm import Session

from rehab_tracker.database import commit_or_raise
from rehab_tracker.errors import NotFound, ValidationFailed
from rehab_tracker.models import User
from rehab_tracker.services import access_guard

PROFILE_FIELDS = ("first_name", "last_name", "sport", "position")


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def list_athletes(self, caller: User) -> List[User]:
        access_guard.require_trainer(caller)
        return (
            self.db.query(User)
            .filter(User.role == "athlete")
            .order_by(User.last_name, User.first_name)
            .all()
        )

    def list_trainers(self) -> List[User]:
        return (
            self.db.query(User)
            .filter(User.role == "trainer")
            .order_by(User.last_name, User.first_name)
            .all()
        )

    def get_user(self, caller: User, user_id: int) -> User:
        """Athletes may view only themselves; trainers may view anyone."""
        access_guard.require_athlete_scope(caller, user_id)
        user = self.db.get(User, user_id)
        if not user:
            raise NotFound("User not found")
        return user

    def update_profile(self, caller: User, user_id: int, fields: dict) -> User:
        access_guard.require_self(caller, user_id)
        unknown = set(fields) - set(PROFILE_FIELDS)
        if unknown:
            raise ValidationFailed(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
        for field in ("first_name", "last_name"):
            if field in fields and not fields[field]:
                raise ValidationFailed(f"{field} cannot be empty")

        user = self.db.get(User, user_id)
        if not user:
            raise NotFound("User not found")
        for field, value in fields.items():
            setattr(user, field, value)
        commit_or_raise(self.db, "Failed to update profile")
        self.db.refresh(user)
        return user
