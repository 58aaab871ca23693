"""Database models package."""

from rehab_tracker.models.user import User, ROLES
from rehab_tracker.models.exercise import Exercise
from rehab_tracker.models.assignment import Assignment, FREQUENCIES, STATUSES
from rehab_tracker.models.progress import Progress
from rehab_tracker.models.notification import Notification

__all__ = [
    "User",
    "Exercise",
    "Assignment",
    "Progress",
    "Notification",
    "ROLES",
    "FREQUENCIES",
    "STATUSES",
]
