"""Assignment service - trainers prescribe exercises to athletes."""

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from sqlalchemy import distinct, func
from sqlalchemy.orm import Session, aliased

from rehab_tracker.database import commit_or_raise
from rehab_tracker.errors import NotFound, ValidationFailed
from rehab_tracker.models import Assignment, Exercise, Progress, User, FREQUENCIES, STATUSES
from rehab_tracker.schemas import AssignmentDetail, ProgressResponse, TrainerStats
from rehab_tracker.services import access_guard
from rehab_tracker.services.clock import utc_today
from rehab_tracker.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("frequency", "start_date", "end_date", "notes", "status")
REQUIRED_FIELDS = ("frequency", "start_date", "status")

STATS_WINDOW_DAYS = 7


def validate_frequency(frequency: str) -> None:
    if frequency not in FREQUENCIES:
        raise ValidationFailed(
            "Invalid frequency. Must be daily, weekly, twice_weekly, or three_times_weekly"
        )


def validate_status(status: str) -> None:
    if status not in STATUSES:
        raise ValidationFailed("Invalid status. Must be active, completed, or paused")


class AssignmentService:
    """Service for assignment lifecycle and trainer dashboards."""

    def __init__(self, db: Session, notifications: Optional[NotificationService] = None):
        self.db = db
        self.notifications = notifications or NotificationService(db)

    def create_assignment(
        self,
        caller: User,
        athlete_id: int,
        exercise_id: int,
        frequency: str,
        start_date: date,
        end_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> Assignment:
        """
        Assign an exercise to an athlete on behalf of the calling trainer.

        The athlete is notified afterwards; that notification is best-effort
        and never undoes the assignment.
        """
        access_guard.require_trainer(caller)
        validate_frequency(frequency)
        if start_date is None:
            raise ValidationFailed("Start date is required")

        athlete = (
            self.db.query(User)
            .filter(User.id == athlete_id, User.role == "athlete")
            .first()
        )
        if not athlete:
            raise NotFound("Athlete not found")

        exercise = self.db.get(Exercise, exercise_id)
        if not exercise:
            raise NotFound("Exercise not found")

        assignment = Assignment(
            athlete_id=athlete.id,
            exercise_id=exercise.id,
            trainer_id=caller.id,
            frequency=frequency,
            start_date=start_date,
            end_date=end_date,
            notes=notes,
            status="active",
        )
        self.db.add(assignment)
        commit_or_raise(self.db, "Failed to create assignment")
        self.db.refresh(assignment)
        logger.info(
            "Trainer %s assigned exercise %s to athlete %s (assignment %s, %s)",
            caller.id, exercise.id, athlete.id, assignment.id, frequency,
        )

        self.notifications.notify_best_effort(
            athlete.id,
            "New Exercise Assignment",
            "You have been assigned a new exercise. Check your dashboard for details.",
            "assignment",
        )
        return assignment

    def _get_owned(self, caller: User, assignment_id: int) -> Assignment:
        access_guard.require_trainer(caller)
        assignment = (
            self.db.query(Assignment)
            .filter(Assignment.id == assignment_id, Assignment.trainer_id == caller.id)
            .first()
        )
        if not assignment:
            raise NotFound("Assignment not found or access denied")
        return assignment

    def update_assignment(self, caller: User, assignment_id: int, fields: Dict) -> Assignment:
        """Replace any of frequency/start_date/end_date/notes/status. Omitted keys stay."""
        assignment = self._get_owned(caller, assignment_id)

        unknown = set(fields) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValidationFailed(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
        for field in REQUIRED_FIELDS:
            if field in fields and fields[field] is None:
                raise ValidationFailed(f"{field} cannot be empty")
        if "frequency" in fields:
            validate_frequency(fields["frequency"])
        if "status" in fields:
            validate_status(fields["status"])

        for field, value in fields.items():
            setattr(assignment, field, value)

        commit_or_raise(self.db, "Failed to update assignment")
        self.db.refresh(assignment)
        logger.info("Trainer %s updated assignment %s: %s", caller.id, assignment.id, sorted(fields))
        return assignment

    def delete_assignment(self, caller: User, assignment_id: int) -> None:
        """Hard delete. Progress rows of the assignment are left in place."""
        assignment = self._get_owned(caller, assignment_id)
        self.db.delete(assignment)
        commit_or_raise(self.db, "Failed to delete assignment")
        logger.info("Trainer %s deleted assignment %s", caller.id, assignment_id)

    def list_for_trainer(self, caller: User, trainer_id: int) -> List[AssignmentDetail]:
        """All of a trainer's assignments with progress history, newest first."""
        access_guard.require_self_trainer(caller, trainer_id)
        rows = (
            self._detail_query()
            .filter(Assignment.trainer_id == trainer_id)
            .order_by(Assignment.created_at.desc(), Assignment.id.desc())
            .all()
        )
        return self._attach_progress(rows)

    def list_for_athlete(self, caller: User, athlete_id: int) -> List[AssignmentDetail]:
        """An athlete's active assignments with progress history, latest start first."""
        access_guard.require_athlete_scope(caller, athlete_id)
        rows = (
            self._detail_query()
            .filter(Assignment.athlete_id == athlete_id, Assignment.status == "active")
            .order_by(Assignment.start_date.desc(), Assignment.id.desc())
            .all()
        )
        return self._attach_progress(rows)

    def stats_for_trainer(self, caller: User, trainer_id: int) -> TrainerStats:
        access_guard.require_self_trainer(caller, trainer_id)

        total = (
            self.db.query(func.count(Assignment.id))
            .filter(Assignment.trainer_id == trainer_id)
            .scalar()
        )
        active = (
            self.db.query(func.count(Assignment.id))
            .filter(Assignment.trainer_id == trainer_id, Assignment.status == "active")
            .scalar()
        )
        since = utc_today() - timedelta(days=STATS_WINDOW_DAYS)
        completed = (
            self.db.query(func.count(distinct(Progress.assignment_id)))
            .join(Assignment, Assignment.id == Progress.assignment_id)
            .filter(Assignment.trainer_id == trainer_id, Progress.completed_date >= since)
            .scalar()
        )

        return TrainerStats(
            total_assignments=total or 0,
            active_assignments=active or 0,
            completed_this_week=completed or 0,
        )

    def _detail_query(self):
        athlete = aliased(User)
        trainer = aliased(User)
        return (
            self.db.query(Assignment, Exercise, athlete, trainer)
            .join(Exercise, Assignment.exercise_id == Exercise.id)
            .join(athlete, Assignment.athlete_id == athlete.id)
            .join(trainer, Assignment.trainer_id == trainer.id)
        )

    def _progress_by_assignment(self, assignment_ids: Iterable[int]) -> Dict[int, List[Progress]]:
        ids = list(assignment_ids)
        grouped = defaultdict(list)
        if not ids:
            return grouped
        entries = (
            self.db.query(Progress)
            .filter(Progress.assignment_id.in_(ids))
            .order_by(Progress.completed_date.desc(), Progress.id.desc())
            .all()
        )
        for entry in entries:
            grouped[entry.assignment_id].append(entry)
        return grouped

    def _attach_progress(self, rows) -> List[AssignmentDetail]:
        progress = self._progress_by_assignment(a.id for a, _, _, _ in rows)
        return [
            AssignmentDetail(
                assignment_id=assignment.id,
                frequency=assignment.frequency,
                start_date=assignment.start_date,
                end_date=assignment.end_date,
                notes=assignment.notes,
                status=assignment.status,
                created_at=assignment.created_at,
                exercise_id=exercise.id,
                exercise_name=exercise.name,
                description=exercise.description,
                instructions=exercise.instructions,
                video_url=exercise.video_url,
                body_part=exercise.body_part,
                category=exercise.category,
                duration=exercise.duration,
                sets=exercise.sets,
                reps=exercise.reps,
                athlete_id=athlete.id,
                athlete_first_name=athlete.first_name,
                athlete_last_name=athlete.last_name,
                athlete_email=athlete.email,
                athlete_sport=athlete.sport,
                trainer_id=trainer.id,
                trainer_first_name=trainer.first_name,
                trainer_last_name=trainer.last_name,
                progress=[ProgressResponse.model_validate(p) for p in progress.get(assignment.id, [])],
            )
            for assignment, exercise, athlete, trainer in rows
        ]
