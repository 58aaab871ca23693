"""Progress entry model: one completion per assignment per calendar day."""

from sqlalchemy import Column, Integer, Date, DateTime, Text, CheckConstraint, UniqueConstraint
from datetime import datetime

from rehab_tracker.database import Base


class Progress(Base):
    """A recorded completion of an assignment on a specific date."""

    __tablename__ = "progress"

    id = Column(Integer, primary_key=True, index=True)
    # No database foreign key: deleting an assignment leaves its progress rows behind
    assignment_id = Column(Integer, nullable=False, index=True)
    completed_date = Column(Date, nullable=False, index=True)

    notes = Column(Text, nullable=True)
    pain_level = Column(Integer, nullable=True)  # 1-10
    difficulty = Column(Integer, nullable=True)  # 1-5

    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint("assignment_id", "completed_date", name="uq_progress_assignment_day"),
        CheckConstraint("pain_level >= 1 AND pain_level <= 10", name="ck_progress_pain_level"),
        CheckConstraint("difficulty >= 1 AND difficulty <= 5", name="ck_progress_difficulty"),
    )

    def __repr__(self):
        return f"<Progress assignment={self.assignment_id} {self.completed_date}>"
