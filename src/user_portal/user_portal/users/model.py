from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object; the password is only ever held as a hash.
    """

    user_id: str
    first_name: str
    last_name: str
    phone_number: str
    address: str
    role: str
    email: str
    password_hash: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_public(self) -> "PublicUser":
        return PublicUser(
            user_id=self.user_id,
            first_name=self.first_name,
            last_name=self.last_name,
            phone_number=self.phone_number,
            address=self.address,
            role=self.role,
            email=self.email,
        )


@dataclass(frozen=True)
class PublicUser:
    """Read projection of a User: everything except the password hash."""

    user_id: str
    first_name: str
    last_name: str
    phone_number: str
    address: str
    role: str
    email: str

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "phoneNumber": self.phone_number,
            "address": self.address,
            "role": self.role,
            "email": self.email,
        }
