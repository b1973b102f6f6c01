#!/usr/bin/env python3
"""Replace scraped event descriptions with a link to the event page.

Also clears contact emails.

Usage:
    python scripts/reset_event_descriptions.py
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
from compass.services.maintenance import reset_event_descriptions


def main():
    db = SyncSessionLocal()
    try:
        result = reset_event_descriptions(db)
        print(f"Reset {result['reset']} event descriptions")
        return result
    except Exception as e:
        db.rollback()
        print(f"ERROR: Reset failed: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
