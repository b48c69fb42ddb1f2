from __future__ import annotations

from enum import Enum


class RoleKey(str, Enum):
    """Role keys granted to staff through ``staff_roles``."""

    ADMIN = "ADMIN"
    USER = "USER"
