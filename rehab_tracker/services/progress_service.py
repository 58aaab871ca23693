"""Progress service - daily completion logging for assignments."""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rehab_tracker.database import commit_or_raise
from rehab_tracker.errors import Conflict, NotFound, ValidationFailed
from rehab_tracker.models import Assignment, Exercise, Progress, User
from rehab_tracker.schemas import AthleteProgressEntry
from rehab_tracker.services import access_guard
from rehab_tracker.services.clock import utc_today
from rehab_tracker.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

PAIN_LEVEL_RANGE = (1, 10)
DIFFICULTY_RANGE = (1, 5)
DEFAULT_LIMIT = 50


def find_orphaned_progress(db: Session) -> List[Progress]:
    """Progress entries whose assignment no longer exists."""
    return (
        db.query(Progress)
        .outerjoin(Assignment, Assignment.id == Progress.assignment_id)
        .filter(Assignment.id.is_(None))
        .order_by(Progress.assignment_id, Progress.completed_date)
        .all()
    )


def validate_scores(pain_level: Optional[int], difficulty: Optional[int]) -> None:
    """Scores are optional; when present they must fall inside their scale."""
    low, high = PAIN_LEVEL_RANGE
    if pain_level is not None and not low <= pain_level <= high:
        raise ValidationFailed(f"Pain level must be between {low} and {high}")
    low, high = DIFFICULTY_RANGE
    if difficulty is not None and not low <= difficulty <= high:
        raise ValidationFailed(f"Difficulty must be between {low} and {high}")


class ProgressService:
    """Service for recording and correcting assignment completions."""

    def __init__(self, db: Session, notifications: Optional[NotificationService] = None):
        self.db = db
        self.notifications = notifications or NotificationService(db)

    def log_progress(
        self,
        caller: User,
        assignment_id: int,
        notes: Optional[str] = None,
        pain_level: Optional[int] = None,
        difficulty: Optional[int] = None,
    ) -> Progress:
        """
        Record today's (UTC) completion of an assignment.

        At most one entry exists per assignment per day. The pre-check gives
        the common case a clean error; the unique constraint catches two
        submissions racing past it.
        """
        validate_scores(pain_level, difficulty)

        assignment = self.db.get(Assignment, assignment_id)
        if not assignment:
            raise NotFound("Assignment not found")
        access_guard.require_assignment_access(caller, assignment)

        today = utc_today()
        existing = (
            self.db.query(Progress.id)
            .filter(Progress.assignment_id == assignment.id, Progress.completed_date == today)
            .first()
        )
        if existing:
            logger.warning("Duplicate progress for assignment %s on %s", assignment.id, today)
            raise Conflict("Progress already logged for today")

        progress = Progress(
            assignment_id=assignment.id,
            completed_date=today,
            notes=notes,
            pain_level=pain_level,
            difficulty=difficulty,
        )
        self.db.add(progress)
        try:
            self.db.flush()
        except IntegrityError:
            self.db.rollback()
            logger.warning("Concurrent progress for assignment %s on %s", assignment.id, today)
            raise Conflict("Progress already logged for today")
        commit_or_raise(self.db, "Failed to log progress")
        self.db.refresh(progress)
        logger.info("User %s logged progress %s for assignment %s", caller.id, progress.id, assignment.id)

        self.notifications.notify_best_effort(
            assignment.trainer_id,
            "Exercise Completed",
            "An athlete has completed their assigned exercise.",
            "progress",
        )
        return progress

    def _get_with_assignment(self, progress_id: int):
        row = (
            self.db.query(Progress, Assignment)
            .outerjoin(Assignment, Assignment.id == Progress.assignment_id)
            .filter(Progress.id == progress_id)
            .first()
        )
        if not row:
            raise NotFound("Progress entry not found")
        return row

    def get_progress(self, caller: User, progress_id: int) -> Progress:
        """Fetch one entry. Entries whose assignment was deleted are visible to trainers."""
        progress, assignment = self._get_with_assignment(progress_id)
        if assignment is None:
            access_guard.require_trainer(caller)
        else:
            access_guard.require_assignment_access(caller, assignment)
        return progress

    def update_progress(
        self,
        caller: User,
        progress_id: int,
        notes: Optional[str] = None,
        pain_level: Optional[int] = None,
        difficulty: Optional[int] = None,
    ) -> Progress:
        """
        Correction path: overwrites notes and scores in place.

        Any trainer, or the athlete who owns the assignment, may correct an
        entry. The completed date never changes.
        """
        validate_scores(pain_level, difficulty)

        progress, assignment = self._get_with_assignment(progress_id)
        if assignment is None:
            raise NotFound("Progress entry not found")
        access_guard.require_assignment_access(caller, assignment)

        progress.notes = notes
        progress.pain_level = pain_level
        progress.difficulty = difficulty
        commit_or_raise(self.db, "Failed to update progress")
        self.db.refresh(progress)
        logger.info("User %s corrected progress %s", caller.id, progress.id)
        return progress

    def list_for_assignment(self, caller: User, assignment_id: int) -> List[Progress]:
        """Most recent first."""
        assignment = self.db.get(Assignment, assignment_id)
        if not assignment:
            raise NotFound("Assignment not found")
        access_guard.require_assignment_access(caller, assignment)

        return (
            self.db.query(Progress)
            .filter(Progress.assignment_id == assignment_id)
            .order_by(Progress.completed_date.desc(), Progress.id.desc())
            .all()
        )

    def list_for_athlete(
        self, caller: User, athlete_id: int, limit: int = DEFAULT_LIMIT
    ) -> List[AthleteProgressEntry]:
        """Most recent entries across all of an athlete's assignments."""
        access_guard.require_athlete_scope(caller, athlete_id)

        rows = (
            self.db.query(Progress, Assignment, Exercise)
            .join(Assignment, Assignment.id == Progress.assignment_id)
            .join(Exercise, Exercise.id == Assignment.exercise_id)
            .filter(Assignment.athlete_id == athlete_id)
            .order_by(Progress.completed_date.desc(), Progress.id.desc())
            .limit(limit)
            .all()
        )
        return [
            AthleteProgressEntry(
                id=progress.id,
                assignment_id=progress.assignment_id,
                completed_date=progress.completed_date,
                notes=progress.notes,
                pain_level=progress.pain_level,
                difficulty=progress.difficulty,
                created_at=progress.created_at,
                frequency=assignment.frequency,
                exercise_name=exercise.name,
                body_part=exercise.body_part,
                category=exercise.category,
            )
            for progress, assignment, exercise in rows
        ]
