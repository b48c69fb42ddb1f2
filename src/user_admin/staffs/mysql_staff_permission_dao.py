from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, TypeVar

from ..core.ids import ID
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, stream_rows
from .model import Permission, Staff
from .repository import StaffPermissionDao

logger = logging.getLogger(__name__)

R = TypeVar("R")

SELECT_BY_STAFF_ID = """
    SELECT p.permission_id, sr.role_key, p.category_key, p.permission_key, p.permission_name
    FROM staff_roles sr
    JOIN role_permissions rp ON rp.role_key = sr.role_key AND rp.is_enabled = 1
    JOIN permissions p ON p.permission_key = rp.permission_key
    WHERE sr.staff_id = %s
    ORDER BY sr.role_key, p.permission_id
"""


def _to_permission(row: Dict[str, Any]) -> Permission:
    return Permission(
        permission_id=ID.of(row["permission_id"]),
        role_key=row["role_key"],
        category_key=row["category_key"],
        permission_key=row["permission_key"],
        permission_name=row["permission_name"],
    )


class MySQLStaffPermissionDao(StaffPermissionDao):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def select_by_staff_id(self, staff_id: ID[Staff], reducer: Callable[[Iterable[Permission]], R]) -> R:
        logger.debug("loading permissions for staff_id=%s", staff_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(SELECT_BY_STAFF_ID, (staff_id.value,))
            rows = stream_rows(cur)
            result = reducer(_to_permission(r) for r in rows)
            # An unbuffered cursor refuses to close with unread rows left behind.
            for _ in rows:
                pass
            return result
