from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used by the access guards."""

    ADMIN = "admin"
    USER = "user"
