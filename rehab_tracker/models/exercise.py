"""Exercise library model."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime

from rehab_tracker.database import Base


class Exercise(Base):
    """A rehabilitation exercise authored by a trainer."""

    __tablename__ = "exercises"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    instructions = Column(Text, nullable=True)
    video_url = Column(String(512), nullable=True)  # Returned by the media store
    body_part = Column(String(100), nullable=False, index=True)  # "ankle", "shoulder", ...
    category = Column(String(100), nullable=False, index=True)  # "mobility", "strength", ...

    # Prescription defaults
    duration = Column(Integer, nullable=True)  # seconds
    sets = Column(Integer, nullable=True)
    reps = Column(Integer, nullable=True)

    created_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    creator = relationship("User", back_populates="exercises")

    def __repr__(self):
        return f"<Exercise {self.name} ({self.body_part}/{self.category})>"

    @property
    def trainer_first_name(self):
        return self.creator.first_name if self.creator else None

    @property
    def trainer_last_name(self):
        return self.creator.last_name if self.creator else None
