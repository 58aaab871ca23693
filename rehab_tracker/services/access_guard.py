"""Role and ownership checks applied before mutating or sensitive reads.

Every check takes the authenticated caller (a ``User``) and raises
``Forbidden`` on denial. Owner mismatches on assignment and exercise
mutation are *not* handled here: those services look the row up scoped to
the caller and raise ``NotFound`` so that foreign rows are
indistinguishable from absent ones.
"""

import logging

from rehab_tracker.errors import Forbidden
from rehab_tracker.models import User, Assignment

logger = logging.getLogger(__name__)


def _deny(caller: User, reason: str, message: str = "Access denied."):
    logger.warning("Denied user %s (%s): %s", caller.id, caller.role, reason)
    raise Forbidden(message)


def require_trainer(caller: User) -> None:
    """Caller must be a trainer."""
    if not caller.is_trainer:
        _deny(caller, "trainer role required", "Access denied. Trainers only.")


def require_self_trainer(caller: User, trainer_id: int) -> None:
    """Caller must be the trainer named in the path."""
    if not caller.is_trainer or caller.id != trainer_id:
        _deny(caller, f"trainer-scoped resource of trainer {trainer_id}")


def require_self(caller: User, user_id: int) -> None:
    """Caller must be the user named in the path."""
    if caller.id != user_id:
        _deny(caller, f"resource owned by user {user_id}")


def require_athlete_scope(caller: User, athlete_id: int) -> None:
    """Athletes may read only their own data; trainers may read any athlete's."""
    if caller.is_athlete and caller.id != athlete_id:
        _deny(caller, f"data of athlete {athlete_id}")


def can_access_assignment(caller: User, assignment: Assignment) -> bool:
    """Trainers may act on any assignment's progress; athletes only on their own."""
    if caller.is_trainer:
        return True
    return caller.is_athlete and caller.id == assignment.athlete_id


def require_assignment_access(caller: User, assignment: Assignment) -> None:
    if not can_access_assignment(caller, assignment):
        _deny(caller, f"assignment {assignment.id} of athlete {assignment.athlete_id}")
