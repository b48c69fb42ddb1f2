from __future__ import annotations

from dataclasses import dataclass

from ..core.ids import ID


@dataclass(frozen=True)
class Staff:
    """Domain entity: an operator who logs into the admin screens."""

    id: ID["Staff"]
    first_name: str
    last_name: str
    email: str
    password_hash: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Permission:
    """A permission granted to a staff member through ``role_key``."""

    permission_id: ID["Permission"]
    role_key: str
    category_key: str
    permission_key: str
    permission_name: str
