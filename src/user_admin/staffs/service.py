from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

from werkzeug.security import check_password_hash

from ..common.validators import require_non_empty
from ..core.exceptions import AuthenticationError, ValidationError
from ..core.ids import ID
from .model import Staff
from .reducers import group_by_role
from .repository import StaffPermissionDao, StaffRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionStaff:
    """What we store into the Flask session after login."""

    staff_id: int
    full_name: str
    roles: Tuple[str, ...]
    permissions: Tuple[str, ...]


class AuthService:
    """Use case: authenticate staff (login) and resolve their grants."""

    def __init__(self, staffs: StaffRepository, permissions: StaffPermissionDao):
        self._staffs = staffs
        self._permissions = permissions

    def load_grants(self, staff_id: ID[Staff]) -> Dict[str, List[str]]:
        return self._permissions.select_by_staff_id(staff_id, group_by_role)

    def authenticate(self, email: str, password: str) -> SessionStaff:
        try:
            email = require_non_empty(email, "Email")
        except ValidationError:
            raise AuthenticationError("Invalid email or password")

        staff = self._staffs.get_by_email(email)
        if not staff:
            logger.info("login rejected: unknown email %s", email)
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(staff.password_hash, password or "")
        except ValueError:
            # placeholder or corrupted hash values
            ok = False

        if not ok:
            logger.info("login rejected: wrong password for staff_id=%s", staff.id)
            raise AuthenticationError("Invalid email or password")

        grants = self.load_grants(staff.id)
        permissions = sorted({key for keys in grants.values() for key in keys})

        logger.info("staff_id=%s logged in with roles=%s", staff.id, sorted(grants))
        return SessionStaff(
            staff_id=staff.id.value,
            full_name=staff.full_name,
            roles=tuple(sorted(grants)),
            permissions=tuple(permissions),
        )
