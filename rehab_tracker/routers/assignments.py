"""Assignments API router."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from rehab_tracker.database import get_db
from rehab_tracker.models import User
from rehab_tracker.routers.auth import get_current_user
from rehab_tracker.schemas import (
    AssignmentCreate,
    AssignmentCreated,
    AssignmentDetail,
    AssignmentUpdate,
    MessageResponse,
    TrainerStats,
)
from rehab_tracker.services.assignment_service import AssignmentService

router = APIRouter(prefix="/assignments", tags=["assignments"])


@router.get("/trainer/{trainer_id}", response_model=List[AssignmentDetail])
def list_trainer_assignments(
    trainer_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """All assignments of the calling trainer, newest first, with progress."""
    return AssignmentService(db).list_for_trainer(user, trainer_id)


@router.get("/stats/{trainer_id}", response_model=TrainerStats)
def get_trainer_stats(
    trainer_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Dashboard counters for the calling trainer."""
    return AssignmentService(db).stats_for_trainer(user, trainer_id)


@router.post("/", response_model=AssignmentCreated, status_code=201)
def create_assignment(
    assignment_data: AssignmentCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Assign an exercise to an athlete (trainers only)."""
    assignment = AssignmentService(db).create_assignment(
        user,
        athlete_id=assignment_data.athlete_id,
        exercise_id=assignment_data.exercise_id,
        frequency=assignment_data.frequency,
        start_date=assignment_data.start_date,
        end_date=assignment_data.end_date,
        notes=assignment_data.notes,
    )
    return AssignmentCreated(assignment_id=assignment.id)


@router.put("/{assignment_id}", response_model=MessageResponse)
def update_assignment(
    assignment_id: int,
    assignment_data: AssignmentUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    AssignmentService(db).update_assignment(
        user, assignment_id, assignment_data.model_dump(exclude_unset=True)
    )
    return MessageResponse(message="Assignment updated successfully")


@router.delete("/{assignment_id}", response_model=MessageResponse)
def delete_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Delete an assignment. Its progress history is kept."""
    AssignmentService(db).delete_assignment(user, assignment_id)
    return MessageResponse(message="Assignment deleted successfully")
