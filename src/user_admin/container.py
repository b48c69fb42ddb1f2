from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from .common.session_forms import FormSessionStore
from .core.constants import DEFAULT_FORM_STORE_SESSIONS, DEFAULT_SESSION_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .staffs.mysql_staff_permission_dao import MySQLStaffPermissionDao
from .staffs.mysql_staff_repository import MySQLStaffRepository
from .staffs.repository import StaffPermissionDao, StaffRepository
from .staffs.service import AuthService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    staffs_repo: StaffRepository
    staff_permission_dao: StaffPermissionDao

    user_service: UserService
    auth_service: AuthService

    form_store: FormSessionStore


def assemble(
    *,
    users_repo: UserRepository,
    staffs_repo: StaffRepository,
    staff_permission_dao: StaffPermissionDao,
    conn: Optional[DatabaseConnection] = None,
    form_store: Optional[FormSessionStore] = None,
) -> Container:
    """Wire services on top of the given repositories."""
    return Container(
        conn=conn,
        users_repo=users_repo,
        staffs_repo=staffs_repo,
        staff_permission_dao=staff_permission_dao,
        user_service=UserService(users_repo),
        auth_service=AuthService(staffs_repo, staff_permission_dao),
        form_store=form_store or FormSessionStore(),
    )


def build_container(
    *,
    db_config: dict,
    session_days: int = DEFAULT_SESSION_DAYS,
    max_form_sessions: int = DEFAULT_FORM_STORE_SESSIONS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return assemble(
        conn=conn,
        form_store=FormSessionStore(max_age=timedelta(days=session_days), max_sessions=max_form_sessions),
        users_repo=MySQLUserRepository(conn),
        staffs_repo=MySQLStaffRepository(conn),
        staff_permission_dao=MySQLStaffPermissionDao(conn),
    )
