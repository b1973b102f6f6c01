#!/usr/bin/env python3
"""Create an admin account, or promote an existing user.

Usage:
    python scripts/create_admin.py admin@hawaii.edu "Admin Name"
"""

import argparse
import getpass
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
from compass.models.user import User
from compass.services.auth_service import create_user, normalize_email


def main():
    parser = argparse.ArgumentParser(description="Create or promote an admin user")
    parser.add_argument("email")
    parser.add_argument("display_name", nargs="?", default="Admin")
    args = parser.parse_args()

    db = SyncSessionLocal()
    try:
        user = db.query(User).filter(User.email == normalize_email(args.email)).first()
        if user:
            user.is_admin = True
            db.commit()
            print(f"Promoted {user.email} to admin")
            return

        password = getpass.getpass("Password: ")
        if not password:
            print("Password must not be empty")
            sys.exit(1)
        user = create_user(db, args.email, password, args.display_name, is_admin=True)
        print(f"Created admin {user.email}")
    except Exception as e:
        db.rollback()
        print(f"ERROR: Failed to create admin: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
