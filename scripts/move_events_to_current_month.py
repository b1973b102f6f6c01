#!/usr/bin/env python3
"""Shift every event into the current month, for demo and staging data.

Day of month, time of day and duration are kept. Events that would land in
the past are pushed to tomorrow or a few days after.

Usage:
    python scripts/move_events_to_current_month.py
"""

import sys
from pathlib import Path

# Add backend to path for imports
# In Docker: script is at /app/scripts/, backend code is at /app/
# Locally: script is at scripts/, backend code is at backend/
script_dir = Path(__file__).resolve().parent
backend_dir = script_dir.parent / "backend"
if backend_dir.exists():
    sys.path.insert(0, str(backend_dir))
else:
    sys.path.insert(0, str(script_dir.parent))

from compass.models.base import SyncSessionLocal
from compass.services.maintenance import move_events_to_current_month


def main():
    db = SyncSessionLocal()
    try:
        result = move_events_to_current_month(db)
        print(f"Processed {result['processed']} events, moved {result['moved']}")
        return result
    except Exception as e:
        db.rollback()
        print(f"ERROR: Date shift failed: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
