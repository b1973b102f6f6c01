#!/usr/bin/env python3
"""Delete categories that no club or event uses.

Non-standard categories that are still linked are listed but kept.

Usage:
    python scripts/cleanup_unused_categories.py
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
from compass.services.maintenance import cleanup_unused_categories


def main():
    db = SyncSessionLocal()
    try:
        result = cleanup_unused_categories(db)
        print(f"Deleted {len(result['deleted'])} unused categories")
        for name in result["deleted"]:
            print(f"  - {name}")

        if result["non_standard_in_use"]:
            print("\nNon-standard categories still in use:")
            for name, count in sorted(result["non_standard_in_use"].items()):
                print(f"  {name}: {count} links")
        return result
    except Exception as e:
        db.rollback()
        print(f"ERROR: Cleanup failed: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
