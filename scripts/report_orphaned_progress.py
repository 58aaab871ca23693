#!/usr/bin/env python3
"""
List progress entries whose assignment has been deleted.

Deleting an assignment keeps its progress history; this report shows how
much of it is lying around.

Run with: python scripts/report_orphaned_progress.py
"""

import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from rehab_tracker.database import SessionLocal
from rehab_tracker.services.progress_service import find_orphaned_progress


def report():
    db = SessionLocal()
    try:
        orphans = find_orphaned_progress(db)
        if not orphans:
            print("No orphaned progress entries.")
            return

        print(f"Found {len(orphans)} orphaned progress entries")
        for entry in orphans:
            print(f"  progress {entry.id}: assignment {entry.assignment_id} on {entry.completed_date}")
    finally:
        db.close()


if __name__ == "__main__":
    report()
