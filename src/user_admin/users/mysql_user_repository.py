from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

from ..common.pagination import Page, Pageable
from ..core.ids import ID
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, stream_rows, to_bytes
from .model import UploadFile, User, UserCriteria
from .repository import UserRepository

_USER_COLUMNS = "u.user_id, u.first_name, u.last_name, u.email, u.password, u.tel, u.zip, u.address, u.upload_file_id"


def _to_upload_file(row: Dict[str, Any]) -> Optional[UploadFile]:
    if row.get("upload_file_id") is None or row.get("content") is None:
        return None
    return UploadFile(
        upload_file_id=ID.of(row["upload_file_id"]),
        file_name=row["file_name"],
        original_file_name=row["original_file_name"],
        content_type=row["content_type"],
        content=to_bytes(row["content"]),
    )


def _to_user(row: Dict[str, Any]) -> User:
    return User(
        id=ID.of(row["user_id"]),
        first_name=row["first_name"],
        last_name=row["last_name"],
        email=row["email"],
        password=row["password"],
        tel=row.get("tel"),
        zip=row.get("zip"),
        address=row.get("address"),
        upload_file=_to_upload_file(row),
    )


def _where(criteria: UserCriteria) -> Tuple[str, list]:
    clauses = ["1=1"]
    params: list[object] = []

    if criteria.user_id is not None:
        clauses.append("u.user_id=%s")
        params.append(criteria.user_id.value)
    if criteria.first_name:
        clauses.append("u.first_name LIKE %s")
        params.append(f"{criteria.first_name}%")
    if criteria.last_name:
        clauses.append("u.last_name LIKE %s")
        params.append(f"{criteria.last_name}%")
    if criteria.email:
        clauses.append("u.email LIKE %s")
        params.append(f"{criteria.email}%")

    return " AND ".join(clauses), params


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: ID[User]) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_USER_COLUMNS},
                       f.file_name, f.original_file_name, f.content_type, f.content
                FROM users u
                LEFT JOIN upload_files f ON f.upload_file_id = u.upload_file_id
                WHERE u.user_id=%s
                """,
                (user_id.value,),
            )
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        # Attachment content is not needed for uniqueness checks.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users u WHERE u.email=%s", (email,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def select_all(self, criteria: UserCriteria, pageable: Optional[Pageable] = None) -> Page[User]:
        """List rows carry no attachment; load a single user for its image."""
        where, params = _where(criteria)
        limit = ""
        if pageable is not None:
            limit = " LIMIT %s OFFSET %s"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS cnt FROM users u WHERE {where}", tuple(params))
            count = int(fetchone(cur)["cnt"])

            data_params = list(params)
            if pageable is not None:
                data_params += [pageable.per_page, pageable.offset]
            cur.execute(
                f"SELECT {_USER_COLUMNS} FROM users u WHERE {where} ORDER BY u.user_id{limit}",
                tuple(data_params),
            )
            data = [_to_user(r) for r in stream_rows(cur)]

        if pageable is None:
            return Page(data=data, count=count, page=1, per_page=max(count, 1))
        return Page(data=data, count=count, page=pageable.page, per_page=pageable.per_page)

    def insert(self, user: User) -> User:
        with db_cursor(self._conn_factory) as (_, cur):
            upload_file = user.upload_file
            if upload_file is not None:
                upload_file = self._save_upload_file(cur, upload_file)

            cur.execute(
                """
                INSERT INTO users(first_name, last_name, email, password, tel, zip, address, upload_file_id)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    user.first_name,
                    user.last_name,
                    user.email,
                    user.password,
                    user.tel,
                    user.zip,
                    user.address,
                    upload_file.upload_file_id.value if upload_file else None,
                ),
            )
            return replace(user, id=ID.of(cur.lastrowid), upload_file=upload_file)

    def update(self, user: User) -> User:
        if user.id is None:
            raise ValueError("cannot update a user without id")

        with db_cursor(self._conn_factory) as (_, cur):
            upload_file = user.upload_file
            if upload_file is not None:
                upload_file = self._save_upload_file(cur, upload_file)

            cur.execute(
                """
                UPDATE users
                SET first_name=%s, last_name=%s, email=%s, password=%s,
                    tel=%s, zip=%s, address=%s, upload_file_id=%s
                WHERE user_id=%s
                """,
                (
                    user.first_name,
                    user.last_name,
                    user.email,
                    user.password,
                    user.tel,
                    user.zip,
                    user.address,
                    upload_file.upload_file_id.value if upload_file else None,
                    user.id.value,
                ),
            )
            return replace(user, upload_file=upload_file)

    @staticmethod
    def _save_upload_file(cur, upload_file: UploadFile) -> UploadFile:
        if upload_file.upload_file_id is not None:
            cur.execute(
                """
                UPDATE upload_files
                SET file_name=%s, original_file_name=%s, content_type=%s, content=%s
                WHERE upload_file_id=%s
                """,
                (
                    upload_file.file_name,
                    upload_file.original_file_name,
                    upload_file.content_type,
                    upload_file.content,
                    upload_file.upload_file_id.value,
                ),
            )
            return upload_file

        cur.execute(
            """
            INSERT INTO upload_files(file_name, original_file_name, content_type, content)
            VALUES(%s,%s,%s,%s)
            """,
            (
                upload_file.file_name,
                upload_file.original_file_name,
                upload_file.content_type,
                upload_file.content,
            ),
        )
        return replace(upload_file, upload_file_id=ID.of(cur.lastrowid))
