from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.constants import DEFAULT_PASSWORD_HASH_METHOD


class PasswordHasher:
    """One-way password hashing with a fixed work factor."""

    def __init__(self, method: str = DEFAULT_PASSWORD_HASH_METHOD):
        self._method = method

    def hash(self, plain: str) -> str:
        if not plain:
            raise ValueError("Empty password")
        return generate_password_hash(plain, method=self._method)

    def verify(self, password_hash: str, plain: str) -> bool:
        if not password_hash or not plain:
            return False
        try:
            return check_password_hash(password_hash, plain)
        except ValueError:
            # e.g. placeholder or corrupted hashes
            return False
