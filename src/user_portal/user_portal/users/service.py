from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import require_fields
from ..core.constants import REGISTRATION_FIELDS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .model import PublicUser, User
from .passwords import PasswordHasher
from .repository import UserRepository

logger = logging.getLogger(__name__)

# request field -> User attribute
_UPDATE_FIELDS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "phoneNumber": "phone_number",
    "address": "address",
    "role": "role",
    "email": "email",
}


@dataclass(frozen=True)
class SessionUser:
    """What we store into the server-side session after login or registration.

    A snapshot of the user at that moment, not a live reference.
    """

    user_id: str
    email: str
    first_name: str
    last_name: str
    role: str

    @classmethod
    def from_user(cls, user: User) -> "SessionUser":
        return cls(
            user_id=user.user_id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
        )

    def to_session(self) -> dict:
        return {
            "id": self.user_id,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "role": self.role,
        }


class AuthService:
    """Use cases: register and authenticate."""

    def __init__(self, users: UserRepository, hasher: PasswordHasher, *, allow_admin_self_registration: bool = True):
        self._users = users
        self._hasher = hasher
        self._allow_admin_self_registration = allow_admin_self_registration

    def register(self, data: Mapping[str, Any]) -> SessionUser:
        fields = require_fields(data, REGISTRATION_FIELDS)
        # stored exactly as given; only the exact "admin" string grants admin
        role = fields["role"]

        if role == Role.ADMIN.value and not self._allow_admin_self_registration:
            raise AuthorizationError("Admin accounts cannot be self-registered!")

        if self._users.get_by_email(fields["email"]):
            raise ValidationError("Email already registered!")

        user = self._users.create_user(
            first_name=fields["firstName"],
            last_name=fields["lastName"],
            phone_number=fields["phoneNumber"],
            address=fields["address"],
            role=role,
            email=fields["email"],
            password_hash=self._hasher.hash(fields["password"]),
        )
        logger.info("Registered user %s with role %s", user.user_id, user.role)
        return SessionUser.from_user(user)

    def authenticate(self, email: Optional[str], password: Optional[str]) -> SessionUser:
        user = self._users.get_by_email(email) if email else None
        if not user:
            raise NotFoundError("User not found!")

        if not self._hasher.verify(user.password_hash, password or ""):
            raise AuthenticationError("Incorrect password!")

        return SessionUser.from_user(user)


class UserService:
    """Use cases: update a user, list users for the admin screen."""

    def __init__(self, users: UserRepository, hasher: PasswordHasher):
        self._users = users
        self._hasher = hasher

    def update_user(self, user_id: Optional[str], data: Mapping[str, Any]) -> PublicUser:
        """Partially update a user; only supplied (non-null, non-blank) fields change."""
        user = self._users.get_by_id(str(user_id)) if user_id else None
        if not user:
            raise NotFoundError("User not found.")

        changes: dict = {}
        for key, attr in _UPDATE_FIELDS.items():
            value = data.get(key)
            if value is None or not str(value).strip():
                continue
            changes[attr] = str(value)

        if "email" in changes and changes["email"] != user.email:
            other = self._users.get_by_email(changes["email"])
            if other and other.user_id != user.user_id:
                raise ValidationError("Email already registered!")

        password = data.get("password")
        if password:
            changes["password_hash"] = self._hasher.hash(str(password))

        updated = self._users.update_user(user.user_id, changes)
        if not updated:
            raise NotFoundError("User not found.")
        return updated.to_public()

    def list_public(self) -> Sequence[PublicUser]:
        return [u.to_public() for u in self._users.list_all()]
