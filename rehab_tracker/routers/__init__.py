"""Routers package."""

from rehab_tracker.routers.auth import router as auth_router
from rehab_tracker.routers.users import router as users_router
from rehab_tracker.routers.exercises import router as exercises_router
from rehab_tracker.routers.assignments import router as assignments_router
from rehab_tracker.routers.progress import router as progress_router
from rehab_tracker.routers.notifications import router as notifications_router

__all__ = [
    "auth_router",
    "users_router",
    "exercises_router",
    "assignments_router",
    "progress_router",
    "notifications_router",
]
