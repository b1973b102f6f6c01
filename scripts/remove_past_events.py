#!/usr/bin/env python3
"""Delete events that have already ended.

Also runs nightly as the ``remove-past-events`` beat task.

Usage:
    python scripts/remove_past_events.py
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
from compass.services.maintenance import remove_past_events


def main():
    db = SyncSessionLocal()
    try:
        removed = remove_past_events(db)
        print(f"Removed {removed} past events")
        return {"removed": removed}
    except Exception as e:
        db.rollback()
        print(f"ERROR: Removal failed: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
