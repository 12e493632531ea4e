"""
Local Greece - Users and roles

Business users own listings; admins review them. The role lives in the
auth user's metadata.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from local_greece.backend.client import DirectoryClient
from local_greece.shared.errors import PermissionDeniedError

Role = Literal["business", "admin"]


@dataclass(frozen=True)
class User:
    """An authenticated directory user."""

    id: str
    email: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> User:
        return cls(
            id=str(record["id"]),
            email=record.get("email"),
            metadata=dict(record.get("user_metadata") or {}),
        )

    @property
    def role(self) -> Role | None:
        role = self.metadata.get("role")
        return role if role in ("business", "admin") else None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def display_name(self) -> str:
        return self.metadata.get("full_name") or self.email or self.id


def current_user(client: DirectoryClient) -> User:
    """Resolve the user behind the client's access token."""
    return User.from_record(client.get_user())


def require_admin(user: User | None) -> User:
    """
    Raises:
        PermissionDeniedError: Unless the user is an admin.
    """
    if user is None or not user.is_admin:
        raise PermissionDeniedError("Admin role required", 403)
    return user


def require_user(user: User | None) -> User:
    """
    Raises:
        PermissionDeniedError: If nobody is signed in.
    """
    if user is None:
        raise PermissionDeniedError("Sign in required", 401)
    return user
