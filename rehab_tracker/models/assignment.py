"""Exercise assignment model."""

from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Text, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime

from rehab_tracker.database import Base

FREQUENCIES = ("daily", "weekly", "twice_weekly", "three_times_weekly")
STATUSES = ("active", "completed", "paused")


class Assignment(Base):
    """A trainer's instruction for an athlete to perform an exercise on a schedule."""

    __tablename__ = "assignments"

    id = Column(Integer, primary_key=True, index=True)
    athlete_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    exercise_id = Column(Integer, ForeignKey("exercises.id"), nullable=False, index=True)
    trainer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Schedule
    frequency = Column(String(30), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)

    status = Column(String(20), nullable=False, default="active", index=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    # Relationships
    athlete = relationship("User", foreign_keys=[athlete_id])
    trainer = relationship("User", foreign_keys=[trainer_id])
    exercise = relationship("Exercise")

    __table_args__ = (
        CheckConstraint(
            "frequency IN ('daily', 'weekly', 'twice_weekly', 'three_times_weekly')",
            name="ck_assignments_frequency",
        ),
        CheckConstraint(
            "status IN ('active', 'completed', 'paused')",
            name="ck_assignments_status",
        ),
    )

    def __repr__(self):
        return f"<Assignment {self.id} athlete={self.athlete_id} {self.frequency} [{self.status}]>"
