#!/usr/bin/env python3
"""Approve every PENDING club or event in one pass.

Usage:
    python scripts/approve_all.py --kind clubs
    python scripts/approve_all.py --kind events
"""

import argparse
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
from compass.services.content_approval import ContentKind, approve_all


def main():
    parser = argparse.ArgumentParser(description="Approve all pending content of one kind")
    parser.add_argument("--kind", choices=[k.value for k in ContentKind], required=True)
    args = parser.parse_args()
    kind = ContentKind(args.kind)

    db = SyncSessionLocal()
    try:
        count = approve_all(db, kind)
        if count == 0:
            print(f"No pending {kind.value} found to approve.")
        else:
            print(f"Successfully approved {count} {kind.value}.")
        return count
    except Exception as e:
        db.rollback()
        print(f"ERROR: Failed to approve {kind.value}: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
