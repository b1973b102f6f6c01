#!/usr/bin/env python3
"""Seed the standard club and event categories. Safe to re-run.

Usage:
    python scripts/seed_categories.py
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
from compass.services.maintenance import seed_categories


def main():
    db = SyncSessionLocal()
    try:
        result = seed_categories(db)
        print(f"Created {result['created']} categories ({result['total']} standard categories total)")
        return result
    except Exception as e:
        db.rollback()
        print(f"ERROR: Seeding failed: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
