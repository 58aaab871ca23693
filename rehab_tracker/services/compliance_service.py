"""Compliance engine - expected vs. actual completions over a rolling window.

The model is linear on purpose: each frequency maps to a completion count
for the whole window, and any completion dated inside the window counts
toward it regardless of which day it fell on.

    daily               -> days
    twice_weekly        -> days * 2
    three_times_weekly  -> days * 3
    weekly              -> ceil(days / 7)
"""

import logging
import math
from datetime import timedelta
from typing import List

from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from rehab_tracker.errors import ValidationFailed
from rehab_tracker.models import Assignment, Exercise, Progress, User
from rehab_tracker.schemas import AssignmentCompliance, ComplianceReport
from rehab_tracker.services import access_guard
from rehab_tracker.services.clock import utc_today

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 30


def expected_completions(frequency: str, days: int) -> int:
    """Completions expected from one assignment over ``days`` days."""
    if frequency == "daily":
        return days
    if frequency == "twice_weekly":
        return days * 2
    if frequency == "three_times_weekly":
        return days * 3
    if frequency == "weekly":
        return math.ceil(days / 7)
    return 0


def compliance_rate(completed: int, expected: int) -> float:
    """Percentage in [0, 100]; 0 when nothing is expected."""
    if expected <= 0:
        return 0.0
    rate = completed / expected * 100
    return max(0.0, min(rate, 100.0))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def overall_compliance(rates: List[float]) -> int:
    """Mean of the per-assignment rates, rounded to the nearest integer."""
    if not rates:
        return 0
    return round_half_up(sum(rates) / len(rates))


class ComplianceService:
    """Service for athlete compliance reports."""

    def __init__(self, db: Session):
        self.db = db

    def compliance_for_athlete(
        self, caller: User, athlete_id: int, days: int = DEFAULT_WINDOW_DAYS
    ) -> ComplianceReport:
        """
        Compliance of an athlete's active assignments over the last ``days`` days.

        Only assignments that had already started by the window start are
        scored. Completions are counted from the window start up to today.
        """
        access_guard.require_athlete_scope(caller, athlete_id)
        if days < 0:
            raise ValidationFailed("Days must be zero or positive")

        window_start = utc_today() - timedelta(days=days)

        rows = (
            self.db.query(
                Assignment.id,
                Assignment.frequency,
                Assignment.start_date,
                Exercise.name,
                func.count(Progress.id),
            )
            .join(Exercise, Exercise.id == Assignment.exercise_id)
            .outerjoin(
                Progress,
                and_(
                    Progress.assignment_id == Assignment.id,
                    Progress.completed_date >= window_start,
                ),
            )
            .filter(
                Assignment.athlete_id == athlete_id,
                Assignment.status == "active",
                Assignment.start_date <= window_start,
            )
            .group_by(Assignment.id, Assignment.frequency, Assignment.start_date, Exercise.name)
            .order_by(Assignment.id)
            .all()
        )

        items = []
        for assignment_id, frequency, start_date, exercise_name, completed in rows:
            expected = expected_completions(frequency, days)
            items.append(
                AssignmentCompliance(
                    assignment_id=assignment_id,
                    frequency=frequency,
                    start_date=start_date,
                    exercise_name=exercise_name,
                    completed_count=completed,
                    expected_count=expected,
                    compliance_rate=compliance_rate(completed, expected),
                )
            )

        overall = overall_compliance([item.compliance_rate for item in items])
        logger.info(
            "Compliance for athlete %s over %s days: %s%% across %s assignments",
            athlete_id, days, overall, len(items),
        )
        return ComplianceReport(
            period=f"{days} days",
            overall_compliance=overall,
            exercise_compliance=items,
        )
