"""User model for trainers and athletes."""

from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime

from rehab_tracker.database import Base

ROLES = ("trainer", "athlete")


class User(Base):
    """Account for a trainer or an athlete. Role is fixed at registration."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    role = Column(String(20), nullable=False, index=True)

    # Athlete profile
    sport = Column(String(100), nullable=True)
    position = Column(String(100), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    exercises = relationship("Exercise", back_populates="creator")
    notifications = relationship("Notification", back_populates="user")

    __table_args__ = (
        CheckConstraint("role IN ('trainer', 'athlete')", name="ck_users_role"),
    )

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"

    @property
    def name(self):
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_trainer(self):
        return self.role == "trainer"

    @property
    def is_athlete(self):
        return self.role == "athlete"
