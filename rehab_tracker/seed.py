"""Default trainer account and starter exercise library."""

import logging

from sqlalchemy.orm import Session

from rehab_tracker.models import Exercise, User
from rehab_tracker.services.auth_service import AuthService

logger = logging.getLogger(__name__)

DEFAULT_TRAINER = {
    "email": "trainer@njit.edu",
    "password": "trainer123",
    "first_name": "John",
    "last_name": "Smith",
    "sport": "General",
}

SAMPLE_EXERCISES = [
    {
        "name": "Ankle Circles",
        "description": "Gentle ankle mobility exercise",
        "instructions": "Sit comfortably and slowly rotate your ankle in circles, both clockwise and counterclockwise",
        "body_part": "ankle",
        "category": "mobility",
        "duration": 60,
        "sets": 3,
        "reps": 10,
    },
    {
        "name": "Wall Push-ups",
        "description": "Modified push-up for shoulder rehabilitation",
        "instructions": "Stand facing a wall, place hands on wall at shoulder height, perform push-up motion",
        "body_part": "shoulder",
        "category": "strength",
        "duration": 120,
        "sets": 3,
        "reps": 15,
    },
    {
        "name": "Quad Stretch",
        "description": "Static stretch for quadriceps",
        "instructions": "Stand on one leg, pull other foot to glutes, hold stretch for 30 seconds",
        "body_part": "quadriceps",
        "category": "flexibility",
        "duration": 30,
        "sets": 2,
        "reps": 1,
    },
]


def seed_defaults(db: Session) -> User:
    """Create the default trainer and sample exercises unless already present."""
    trainer = db.query(User).filter(User.email == DEFAULT_TRAINER["email"]).first()
    if not trainer:
        trainer = AuthService(db).register(role="trainer", **DEFAULT_TRAINER)
        logger.info("Default trainer account created: %s", trainer.email)

    existing = {
        name for (name,) in db.query(Exercise.name).filter(Exercise.created_by == trainer.id)
    }
    added = 0
    for data in SAMPLE_EXERCISES:
        if data["name"] in existing:
            continue
        db.add(Exercise(created_by=trainer.id, **data))
        added += 1
    if added:
        db.commit()
        logger.info("Seeded %s sample exercises", added)
    return trainer
