"""Create the initial privileged accounts (superior admin, admin).

Passwords come from SUPERADMIN_PASSWORD / ADMIN_PASSWORD; accounts whose email
is already registered are left untouched.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.cleaning_tracker.cleaning_tracker.container import build_container
from src.cleaning_tracker.cleaning_tracker.core.enums import Role
from src.cleaning_tracker.cleaning_tracker.identity.gate import load_role_map


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        store_backend=settings.STORE_BACKEND,
        role_map=load_role_map(settings.ROLE_MAP, path=settings.ROLE_MAP_FILE),
    )

    for user in settings.SEED_USERS:
        if not user.get("password"):
            print(f"SKIP: no password configured for {user['email']}")
            continue
        created = container.cleaner_service.ensure_privileged_user(
            email=user["email"],
            password=user["password"],
            name=user["name"],
            role=Role(user["role"]),
        )
        print(f"{'OK: created' if created else 'OK: exists'} {user['email']} ({user['role']})")


if __name__ == "__main__":
    main()
