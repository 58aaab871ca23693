#!/usr/bin/env python3
"""
Create the schema and seed the default trainer plus sample exercises.

Safe to re-run: existing tables and rows are left alone.

Run with: python scripts/init_db.py
"""

import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from rehab_tracker.database import SessionLocal, engine, init_db
from rehab_tracker.seed import DEFAULT_TRAINER, seed_defaults


def run():
    print("Creating tables...")
    init_db(engine)

    db = SessionLocal()
    try:
        trainer = seed_defaults(db)
        print(f"Default trainer account: {trainer.email} / {DEFAULT_TRAINER['password']}")
    finally:
        db.close()

    print("Database initialized successfully")


if __name__ == "__main__":
    run()
