from __future__ import annotations

from typing import Any, Dict, Optional

from ..core.ids import ID
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Staff
from .repository import StaffRepository

_SELECT_STAFF = """
    SELECT staff_id, first_name, last_name, email, password
    FROM staffs
"""


def _to_staff(row: Dict[str, Any]) -> Staff:
    return Staff(
        id=ID.of(row["staff_id"]),
        first_name=row["first_name"],
        last_name=row["last_name"],
        email=row["email"],
        password_hash=row["password"],
    )


class MySQLStaffRepository(StaffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_STAFF + " WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_staff(row) if row else None
