"""Tests for the assignment lifecycle and trainer dashboards."""

from datetime import date
from unittest.mock import patch

import pytest

from conftest import add_progress, fail_on_commit, make_assignment
from rehab_tracker.errors import Forbidden, NotFound, ValidationFailed
from rehab_tracker.models import Assignment, Notification, Progress
from rehab_tracker.services.assignment_service import AssignmentService


TODAY = date(2026, 3, 15)


class TestCreate:
    def test_creates_active_assignment_and_notifies_athlete_once(self, db, trainer, athlete, exercise):
        assignment = AssignmentService(db).create_assignment(
            trainer, athlete.id, exercise.id, "twice_weekly", date(2026, 3, 1), notes="Slowly"
        )

        assert assignment.id is not None
        assert assignment.status == "active"
        assert assignment.trainer_id == trainer.id
        assert assignment.notes == "Slowly"

        notifications = db.query(Notification).filter(Notification.user_id == athlete.id).all()
        assert len(notifications) == 1
        assert notifications[0].title == "New Exercise Assignment"
        assert notifications[0].type == "assignment"
        assert notifications[0].is_read is False

    def test_athlete_cannot_create(self, db, athlete, exercise):
        with pytest.raises(Forbidden):
            AssignmentService(db).create_assignment(
                athlete, athlete.id, exercise.id, "daily", date(2026, 3, 1)
            )

    def test_invalid_frequency(self, db, trainer, athlete, exercise):
        with pytest.raises(ValidationFailed):
            AssignmentService(db).create_assignment(
                trainer, athlete.id, exercise.id, "hourly", date(2026, 3, 1)
            )
        assert db.query(Assignment).count() == 0

    def test_target_must_be_an_athlete(self, db, trainer, other_trainer, exercise):
        with pytest.raises(NotFound) as excinfo:
            AssignmentService(db).create_assignment(
                trainer, other_trainer.id, exercise.id, "daily", date(2026, 3, 1)
            )
        assert excinfo.value.message == "Athlete not found"

    def test_unknown_exercise(self, db, trainer, athlete):
        with pytest.raises(NotFound) as excinfo:
            AssignmentService(db).create_assignment(
                trainer, athlete.id, 404, "daily", date(2026, 3, 1)
            )
        assert excinfo.value.message == "Exercise not found"

    def test_notification_failure_does_not_undo_assignment(self, db, trainer, athlete, exercise):
        # First commit stores the assignment, the second one is the notification
        with fail_on_commit(db, failing_call=2):
            assignment = AssignmentService(db).create_assignment(
                trainer, athlete.id, exercise.id, "daily", date(2026, 3, 1)
            )

        db.expire_all()
        assert db.get(Assignment, assignment.id) is not None
        assert db.query(Notification).filter(Notification.user_id == athlete.id).count() == 0


class TestUpdate:
    def test_partial_update_keeps_omitted_fields(self, db, trainer, assignment):
        updated = AssignmentService(db).update_assignment(
            trainer, assignment.id, {"status": "paused", "notes": "Rest week"}
        )

        assert updated.status == "paused"
        assert updated.notes == "Rest week"
        assert updated.frequency == "daily"
        assert updated.start_date == date(2026, 1, 1)

    def test_only_owning_trainer(self, db, other_trainer, assignment):
        with pytest.raises(NotFound) as excinfo:
            AssignmentService(db).update_assignment(other_trainer, assignment.id, {"status": "paused"})
        assert excinfo.value.message == "Assignment not found or access denied"

    def test_athlete_is_forbidden(self, db, athlete, assignment):
        with pytest.raises(Forbidden):
            AssignmentService(db).update_assignment(athlete, assignment.id, {"status": "paused"})

    @pytest.mark.parametrize("fields", [
        {"frequency": "monthly"},
        {"status": "archived"},
        {"start_date": None},
        {"athlete_id": 99},
    ])
    def test_rejects_invalid_fields(self, db, trainer, assignment, fields):
        with pytest.raises(ValidationFailed):
            AssignmentService(db).update_assignment(trainer, assignment.id, fields)


class TestDelete:
    def test_delete_leaves_progress_orphaned(self, db, trainer, assignment):
        entry = add_progress(db, assignment, date(2026, 3, 10))
        assignment_id = assignment.id

        AssignmentService(db).delete_assignment(trainer, assignment_id)

        assert db.get(Assignment, assignment_id) is None
        db.expire_all()
        orphan = db.get(Progress, entry.id)
        assert orphan is not None
        assert orphan.assignment_id == assignment_id

    def test_other_trainer_cannot_delete(self, db, other_trainer, assignment):
        with pytest.raises(NotFound):
            AssignmentService(db).delete_assignment(other_trainer, assignment.id)
        assert db.get(Assignment, assignment.id) is not None


class TestListing:
    def test_trainer_list_includes_progress_and_names(self, db, trainer, athlete, assignment):
        add_progress(db, assignment, date(2026, 3, 10), pain_level=3)
        add_progress(db, assignment, date(2026, 3, 12), difficulty=2)

        details = AssignmentService(db).list_for_trainer(trainer, trainer.id)

        assert len(details) == 1
        detail = details[0]
        assert detail.assignment_id == assignment.id
        assert detail.exercise_name == "Ankle Circles"
        assert detail.athlete_first_name == "Alex"
        assert detail.trainer_last_name == "Coach"
        assert [p.completed_date for p in detail.progress] == [date(2026, 3, 12), date(2026, 3, 10)]

    def test_trainer_list_is_newest_first(self, db, trainer, athlete, exercise):
        first = make_assignment(db, trainer, athlete, exercise)
        second = make_assignment(db, trainer, athlete, exercise, frequency="weekly")

        ids = [d.assignment_id for d in AssignmentService(db).list_for_trainer(trainer, trainer.id)]

        assert ids == [second.id, first.id]

    def test_trainer_list_is_self_scoped(self, db, trainer, other_trainer):
        with pytest.raises(Forbidden):
            AssignmentService(db).list_for_trainer(other_trainer, trainer.id)

    def test_athlete_list_only_active_latest_start_first(self, db, trainer, athlete, exercise):
        older = make_assignment(db, trainer, athlete, exercise, start_date=date(2026, 1, 1))
        newer = make_assignment(db, trainer, athlete, exercise, start_date=date(2026, 2, 1))
        make_assignment(db, trainer, athlete, exercise, start_date=date(2026, 3, 1), status="paused")

        ids = [d.assignment_id for d in AssignmentService(db).list_for_athlete(athlete, athlete.id)]

        assert ids == [newer.id, older.id]

    def test_athlete_cannot_list_another_athlete(self, db, athlete, other_athlete):
        with pytest.raises(Forbidden):
            AssignmentService(db).list_for_athlete(other_athlete, athlete.id)


class TestStats:
    def test_counts(self, db, trainer, athlete, exercise):
        recent = make_assignment(db, trainer, athlete, exercise)
        stale = make_assignment(db, trainer, athlete, exercise)
        make_assignment(db, trainer, athlete, exercise, status="completed")

        add_progress(db, recent, date(2026, 3, 14))
        add_progress(db, recent, date(2026, 3, 13))
        add_progress(db, stale, date(2026, 3, 1))

        with patch("rehab_tracker.services.assignment_service.utc_today", return_value=TODAY):
            stats = AssignmentService(db).stats_for_trainer(trainer, trainer.id)

        assert stats.total_assignments == 3
        assert stats.active_assignments == 2
        assert stats.completed_this_week == 1

    def test_stats_are_self_scoped(self, db, trainer, other_trainer):
        with pytest.raises(Forbidden):
            AssignmentService(db).stats_for_trainer(other_trainer, trainer.id)
