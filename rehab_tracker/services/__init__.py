"""Services package."""

from rehab_tracker.services.auth_service import AuthService
from rehab_tracker.services.notification_service import NotificationService
from rehab_tracker.services.assignment_service import AssignmentService
from rehab_tracker.services.progress_service import ProgressService
from rehab_tracker.services.compliance_service import ComplianceService
from rehab_tracker.services.exercise_service import ExerciseService
from rehab_tracker.services.user_service import UserService
from rehab_tracker.services.media_store import MediaStore

__all__ = [
    "AuthService",
    "NotificationService",
    "AssignmentService",
    "ProgressService",
    "ComplianceService",
    "ExerciseService",
    "UserService",
    "MediaStore",
]
