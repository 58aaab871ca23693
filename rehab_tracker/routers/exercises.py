"""Exercise library API router."""

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session
from typing import List, Optional

from rehab_tracker.database import get_db
from rehab_tracker.models import User
from rehab_tracker.routers.auth import get_current_user
from rehab_tracker.schemas import ExerciseCreate, ExerciseResponse, ExerciseUpdate, MessageResponse
from rehab_tracker.services.exercise_service import ExerciseService
from rehab_tracker.services.media_store import MediaStore

router = APIRouter(prefix="/exercises", tags=["exercises"])


def get_media_store() -> MediaStore:
    return MediaStore()


@router.get("/", response_model=List[ExerciseResponse])
def list_exercises(
    body_part: Optional[str] = None,
    category: Optional[str] = None,
    created_by: Optional[int] = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """List exercises with optional filters."""
    return ExerciseService(db).list_exercises(
        body_part=body_part, category=category, created_by=created_by
    )


@router.get("/meta/categories", response_model=List[str])
def list_categories(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return ExerciseService(db).list_categories()


@router.get("/meta/body-parts", response_model=List[str])
def list_body_parts(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return ExerciseService(db).list_body_parts()


@router.get("/{exercise_id}", response_model=ExerciseResponse)
def get_exercise(
    exercise_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return ExerciseService(db).get_exercise(exercise_id)


@router.post("/", response_model=ExerciseResponse, status_code=201)
def create_exercise(
    exercise_data: ExerciseCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Create a new exercise (trainers only)."""
    return ExerciseService(db).create_exercise(user, exercise_data.model_dump())


@router.put("/{exercise_id}", response_model=ExerciseResponse)
def update_exercise(
    exercise_id: int,
    exercise_data: ExerciseUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Update an exercise the caller created."""
    return ExerciseService(db).update_exercise(
        user, exercise_id, exercise_data.model_dump(exclude_unset=True)
    )


@router.post("/{exercise_id}/video", response_model=ExerciseResponse)
def upload_video(
    exercise_id: int,
    video: UploadFile = File(...),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
    media_store: MediaStore = Depends(get_media_store),
):
    """Attach a demonstration video to an exercise the caller created."""
    exercise_service = ExerciseService(db)
    # Ownership is checked before anything is written to disk
    exercise_service.get_owned(user, exercise_id)
    video_url = media_store.save_video(video)
    return exercise_service.set_video_url(user, exercise_id, video_url)


@router.delete("/{exercise_id}", response_model=MessageResponse)
def delete_exercise(
    exercise_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    ExerciseService(db).delete_exercise(user, exercise_id)
    return MessageResponse(message="Exercise deleted successfully")
