"""Users API router."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from rehab_tracker.database import get_db
from rehab_tracker.models import User
from rehab_tracker.routers.auth import get_current_user
from rehab_tracker.schemas import AssignmentDetail, UserResponse, UserUpdate
from rehab_tracker.services.assignment_service import AssignmentService
from rehab_tracker.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/athletes", response_model=List[UserResponse])
def list_athletes(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """List all athletes (trainers only)."""
    return UserService(db).list_athletes(user)


@router.get("/trainers", response_model=List[UserResponse])
def list_trainers(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """List all trainers."""
    return UserService(db).list_trainers()


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return UserService(db).get_user(user, user_id)


@router.put("/{user_id}", response_model=UserResponse)
def update_profile(
    user_id: int,
    profile: UserUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Update the caller's own profile."""
    return UserService(db).update_profile(user, user_id, profile.model_dump(exclude_unset=True))


@router.get("/{user_id}/assignments", response_model=List[AssignmentDetail])
def list_athlete_assignments(
    user_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """An athlete's active assignments with their progress history."""
    return AssignmentService(db).list_for_athlete(user, user_id)
