"""Progress logging and compliance API router."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from rehab_tracker.database import get_db
from rehab_tracker.models import User
from rehab_tracker.routers.auth import get_current_user
from rehab_tracker.schemas import (
    AthleteProgressEntry,
    ComplianceReport,
    MessageResponse,
    ProgressCreate,
    ProgressLogged,
    ProgressResponse,
    ProgressUpdate,
)
from rehab_tracker.services.compliance_service import ComplianceService, DEFAULT_WINDOW_DAYS
from rehab_tracker.services.progress_service import ProgressService, DEFAULT_LIMIT

router = APIRouter(prefix="/progress", tags=["progress"])


@router.post("/", response_model=ProgressLogged, status_code=201)
def log_progress(
    progress_data: ProgressCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Log today's completion of an assignment."""
    progress = ProgressService(db).log_progress(
        user,
        progress_data.assignment_id,
        notes=progress_data.notes,
        pain_level=progress_data.pain_level,
        difficulty=progress_data.difficulty,
    )
    return ProgressLogged(progress_id=progress.id)


@router.get("/assignment/{assignment_id}", response_model=List[ProgressResponse])
def list_assignment_progress(
    assignment_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return ProgressService(db).list_for_assignment(user, assignment_id)


@router.get("/athlete/{athlete_id}", response_model=List[AthleteProgressEntry])
def list_athlete_progress(
    athlete_id: int,
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=500),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Recent progress across all of an athlete's assignments."""
    return ProgressService(db).list_for_athlete(user, athlete_id, limit=limit)


@router.get("/compliance/{athlete_id}", response_model=ComplianceReport)
def get_compliance(
    athlete_id: int,
    days: int = Query(DEFAULT_WINDOW_DAYS, ge=0),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Expected vs. actual completions over the last ``days`` days."""
    return ComplianceService(db).compliance_for_athlete(user, athlete_id, days=days)


@router.get("/{progress_id}", response_model=ProgressResponse)
def get_progress(
    progress_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return ProgressService(db).get_progress(user, progress_id)


@router.put("/{progress_id}", response_model=MessageResponse)
def update_progress(
    progress_id: int,
    progress_data: ProgressUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Correct notes and scores of an entry."""
    ProgressService(db).update_progress(
        user,
        progress_id,
        notes=progress_data.notes,
        pain_level=progress_data.pain_level,
        difficulty=progress_data.difficulty,
    )
    return MessageResponse(message="Progress updated successfully")
