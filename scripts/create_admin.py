"""Create an admin account.

Usage:
  python scripts/create_admin.py --email admin@example.com --first-name Ada --last-name Admin

The password is prompted for (or read from ADMIN_PASSWORD).
"""
from __future__ import annotations

import argparse
import getpass
import importlib
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.user_portal.user_portal.container import build_container
from src.user_portal.user_portal.core.constants import DEFAULT_PASSWORD_HASH_METHOD
from src.user_portal.user_portal.core.enums import Role
from src.user_portal.user_portal.core.exceptions import DomainError


def main() -> int:
    parser = argparse.ArgumentParser(description="Create an admin user")
    parser.add_argument("--email", required=True)
    parser.add_argument("--first-name", required=True)
    parser.add_argument("--last-name", required=True)
    parser.add_argument("--phone-number", default="-")
    parser.add_argument("--address", default="-")
    args = parser.parse_args()

    password = os.getenv("ADMIN_PASSWORD") or getpass.getpass("Password: ")

    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        password_hash_method=getattr(settings, "PASSWORD_HASH_METHOD", DEFAULT_PASSWORD_HASH_METHOD),
        allow_admin_self_registration=True,
    )

    try:
        s_user = container.auth_service.register(
            {
                "firstName": args.first_name,
                "lastName": args.last_name,
                "phoneNumber": args.phone_number,
                "address": args.address,
                "role": Role.ADMIN.value,
                "email": args.email,
                "password": password,
            }
        )
    except DomainError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(f"OK: Created admin {s_user.email} (id={s_user.user_id})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
