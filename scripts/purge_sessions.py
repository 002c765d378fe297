from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.user_portal.user_portal.container import build_container


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=dict(settings.DB_CONFIG))
    removed = container.session_store.purge_expired()
    print(f"OK: Removed {removed} expired session(s)")


if __name__ == "__main__":
    main()
