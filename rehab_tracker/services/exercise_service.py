"""Exercise library service."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from rehab_tracker.database import commit_or_raise
from rehab_tracker.errors import Conflict, NotFound, ValidationFailed
from rehab_tracker.models import Assignment, Exercise, User
from rehab_tracker.services import access_guard

logger = logging.getLogger(__name__)

EXERCISE_FIELDS = (
    "name", "description", "instructions", "video_url",
    "body_part", "category", "duration", "sets", "reps",
)
REQUIRED_FIELDS = ("name", "body_part", "category")


class ExerciseService:
    """Service for the trainer-authored exercise catalogue."""

    def __init__(self, db: Session):
        self.db = db

    def list_exercises(
        self,
        body_part: Optional[str] = None,
        category: Optional[str] = None,
        created_by: Optional[int] = None,
    ) -> List[Exercise]:
        """List exercises with optional filters, newest first."""
        query = self.db.query(Exercise).options(joinedload(Exercise.creator))

        if body_part:
            query = query.filter(Exercise.body_part == body_part)
        if category:
            query = query.filter(Exercise.category == category)
        if created_by:
            query = query.filter(Exercise.created_by == created_by)

        return query.order_by(Exercise.created_at.desc(), Exercise.id.desc()).all()

    def get_exercise(self, exercise_id: int) -> Exercise:
        exercise = self.db.get(Exercise, exercise_id)
        if not exercise:
            raise NotFound("Exercise not found")
        return exercise

    def create_exercise(self, caller: User, fields: dict) -> Exercise:
        access_guard.require_trainer(caller)
        self._check_fields(fields, creating=True)

        exercise = Exercise(created_by=caller.id, **fields)
        self.db.add(exercise)
        commit_or_raise(self.db, "Failed to create exercise")
        self.db.refresh(exercise)
        logger.info("Trainer %s created exercise %s (%s)", caller.id, exercise.id, exercise.name)
        return exercise

    def get_owned(self, caller: User, exercise_id: int) -> Exercise:
        access_guard.require_trainer(caller)
        exercise = (
            self.db.query(Exercise)
            .filter(Exercise.id == exercise_id, Exercise.created_by == caller.id)
            .first()
        )
        if not exercise:
            raise NotFound("Exercise not found or access denied")
        return exercise

    def update_exercise(self, caller: User, exercise_id: int, fields: dict) -> Exercise:
        exercise = self.get_owned(caller, exercise_id)
        self._check_fields(fields, creating=False)

        for field, value in fields.items():
            setattr(exercise, field, value)
        commit_or_raise(self.db, "Failed to update exercise")
        self.db.refresh(exercise)
        return exercise

    def set_video_url(self, caller: User, exercise_id: int, video_url: str) -> Exercise:
        """Store the media store's URL verbatim."""
        return self.update_exercise(caller, exercise_id, {"video_url": video_url})

    def delete_exercise(self, caller: User, exercise_id: int) -> None:
        exercise = self.get_owned(caller, exercise_id)
        in_use = self.db.query(Assignment.id).filter(Assignment.exercise_id == exercise.id).first()
        if in_use:
            raise Conflict("Exercise is still assigned to athletes")
        self.db.delete(exercise)
        commit_or_raise(self.db, "Failed to delete exercise")
        logger.info("Trainer %s deleted exercise %s", caller.id, exercise_id)

    def list_categories(self) -> List[str]:
        rows = self.db.query(Exercise.category).distinct().order_by(Exercise.category).all()
        return [category for (category,) in rows]

    def list_body_parts(self) -> List[str]:
        rows = self.db.query(Exercise.body_part).distinct().order_by(Exercise.body_part).all()
        return [body_part for (body_part,) in rows]

    @staticmethod
    def _check_fields(fields: dict, creating: bool) -> None:
        unknown = set(fields) - set(EXERCISE_FIELDS)
        if unknown:
            raise ValidationFailed(f"Unknown exercise fields: {', '.join(sorted(unknown))}")
        for field in REQUIRED_FIELDS:
            if (creating or field in fields) and not fields.get(field):
                raise ValidationFailed("Name, body part, and category are required")
