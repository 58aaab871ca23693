"""Tests for the exercise catalogue and the media store."""

import io

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from conftest import make_assignment
from rehab_tracker.errors import Conflict, Forbidden, NotFound, ValidationFailed
from rehab_tracker.models import Exercise
from rehab_tracker.services.exercise_service import ExerciseService
from rehab_tracker.services.media_store import MediaStore


NEW_EXERCISE = {
    "name": "Wall Push-ups",
    "description": "Upper body strengthening",
    "body_part": "shoulder",
    "category": "strength",
    "sets": 3,
    "reps": 15,
}


def test_create_and_filter(db, trainer, exercise):
    service = ExerciseService(db)
    created = service.create_exercise(trainer, dict(NEW_EXERCISE))

    assert created.created_by == trainer.id
    assert [e.id for e in service.list_exercises(body_part="shoulder")] == [created.id]
    assert [e.id for e in service.list_exercises(category="mobility")] == [exercise.id]
    assert len(service.list_exercises(created_by=trainer.id)) == 2
    assert service.list_categories() == ["mobility", "strength"]
    assert service.list_body_parts() == ["ankle", "shoulder"]


def test_athlete_cannot_create(db, athlete):
    with pytest.raises(Forbidden):
        ExerciseService(db).create_exercise(athlete, dict(NEW_EXERCISE))


def test_required_fields(db, trainer):
    with pytest.raises(ValidationFailed):
        ExerciseService(db).create_exercise(trainer, {"name": "No category", "body_part": "knee"})


def test_update_only_by_creator(db, trainer, other_trainer, exercise):
    service = ExerciseService(db)

    updated = service.update_exercise(trainer, exercise.id, {"reps": 20})
    assert updated.reps == 20
    assert updated.name == "Ankle Circles"

    with pytest.raises(NotFound):
        service.update_exercise(other_trainer, exercise.id, {"reps": 1})


def test_delete(db, trainer, exercise):
    ExerciseService(db).delete_exercise(trainer, exercise.id)
    assert db.get(Exercise, exercise.id) is None


def test_delete_in_use_conflicts(db, trainer, athlete, exercise):
    make_assignment(db, trainer, athlete, exercise)
    with pytest.raises(Conflict):
        ExerciseService(db).delete_exercise(trainer, exercise.id)


def test_get_missing(db):
    with pytest.raises(NotFound):
        ExerciseService(db).get_exercise(42)


def make_upload(content: bytes, filename: str, content_type: str) -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


class TestMediaStore:
    def test_saves_video_and_returns_url(self, tmp_path):
        store = MediaStore(upload_dir=str(tmp_path), max_bytes=1024)

        url = store.save_video(make_upload(b"fake video", "Demo.MP4", "video/mp4"))

        assert url.startswith("/uploads/videos/exercise-")
        assert url.endswith(".mp4")
        stored = tmp_path / url.rsplit("/", 1)[-1]
        assert stored.read_bytes() == b"fake video"

    def test_rejects_non_video(self, tmp_path):
        store = MediaStore(upload_dir=str(tmp_path))
        with pytest.raises(ValidationFailed):
            store.save_video(make_upload(b"text", "notes.txt", "text/plain"))
        assert list(tmp_path.iterdir()) == []

    def test_rejects_oversize(self, tmp_path):
        store = MediaStore(upload_dir=str(tmp_path), max_bytes=4)
        with pytest.raises(ValidationFailed):
            store.save_video(make_upload(b"too large", "big.mp4", "video/mp4"))
        assert list(tmp_path.iterdir()) == []
