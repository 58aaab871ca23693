#!/usr/bin/env python3
"""
Add the one-entry-per-day unique index to an existing progress table.

Databases created before the constraint existed may already hold duplicate
(assignment_id, completed_date) rows; those are listed and the index is not
created until they are resolved by hand.

Run with: python scripts/migrate_progress_unique.py
"""

import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from sqlalchemy import text

from rehab_tracker.database import engine


def run_migration():
    with engine.connect() as conn:
        print("Checking for duplicate progress entries...")
        duplicates = conn.execute(text("""
            SELECT assignment_id, completed_date, COUNT(*) AS entries
            FROM progress
            GROUP BY assignment_id, completed_date
            HAVING COUNT(*) > 1
            ORDER BY assignment_id, completed_date
        """)).all()

        if duplicates:
            print(f"Found {len(duplicates)} duplicated assignment/day pairs:")
            for assignment_id, completed_date, entries in duplicates:
                print(f"  assignment {assignment_id} on {completed_date}: {entries} entries")
            print("Resolve these rows, then re-run the migration.")
            return False

        print("Creating uq_progress_assignment_day...")
        conn.execute(text("""
            CREATE UNIQUE INDEX IF NOT EXISTS uq_progress_assignment_day
            ON progress(assignment_id, completed_date)
        """))
        conn.commit()

    print("Migration completed successfully!")
    return True


if __name__ == "__main__":
    sys.exit(0 if run_migration() else 1)
