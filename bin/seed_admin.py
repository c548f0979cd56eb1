# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Bootstrap script – creates the first admin account.

Run once after the initial migration:
    python bin/seed_admin.py

Reads FIRST_ADMIN_USERNAME, FIRST_ADMIN_EMAIL, FIRST_ADMIN_CONTACT and
FIRST_ADMIN_PASSWORD from etc/app.conf (or the environment).  After the row
is inserted those values are no longer used by the application.
"""

import sys
import os

# ---------------------------------------------------------------------------
# Path setup so backend modules are importable
# ---------------------------------------------------------------------------
# bin/seed_admin.py  →  ../  →  project root
_PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
_BACKEND_DIR  = os.path.join(_PROJECT_ROOT, "backend")
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)

from core.config import settings          # noqa: E402
from core.security import hash_password   # noqa: E402
from database import SessionLocal         # noqa: E402
from models.user import Admin             # noqa: E402


def seed(db=None) -> bool:
    """Insert the configured admin.  Returns True if a row was created."""
    required = (
        settings.first_admin_username,
        settings.first_admin_email,
        settings.first_admin_contact,
        settings.first_admin_password,
    )
    if not all(required):
        print("[seed_admin] FIRST_ADMIN_* not fully set in etc/app.conf – nothing to do.")
        return False

    owns_session = db is None
    db = db or SessionLocal()
    try:
        existing = (
            db.query(Admin)
            .filter(
                (Admin.username == settings.first_admin_username)
                | (Admin.email == settings.first_admin_email)
            )
            .first()
        )
        if existing:
            print(f"[seed_admin] Admin '{settings.first_admin_username}' already exists – skipping.")
            return False

        db.add(Admin(
            username=settings.first_admin_username,
            email=settings.first_admin_email,
            contact=settings.first_admin_contact,
            password=hash_password(settings.first_admin_password),
        ))
        db.commit()
        print(f"[seed_admin] Admin '{settings.first_admin_username}' created successfully.")
        return True
    finally:
        if owns_session:
            db.close()


if __name__ == "__main__":
    seed()
