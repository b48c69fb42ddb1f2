"""Schema and demo-data helpers used by ``create_app`` and ``scripts/``."""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Union

from werkzeug.security import generate_password_hash

from ..core.enums import RoleKey
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

SQL_DIR = Path(__file__).resolve().parent
SCHEMA_PATH = SQL_DIR / "schema.sql"
SEED_PATH = SQL_DIR / "seed.sql"

DEMO_STAFFS = (
    ("Admin", "Staff", "admin@example.com", "passw0rd", RoleKey.ADMIN),
    ("Plain", "Staff", "staff@example.com", "passw0rd", RoleKey.USER),
)


def _strip_create_db_and_use(sql: str) -> str:
    # The target database comes from settings, not from the script.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ``;`` outside quotes. ``--`` comment lines are dropped."""
    buf: list[str] = []
    quote = None
    escape = False

    for line in sql.splitlines(keepends=True):
        if quote is None and line.lstrip().startswith("--"):
            continue
        for ch in line:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif quote is not None:
                if ch == quote:
                    quote = None
            elif ch in ("'", '"'):
                quote = ch
            elif ch == ";":
                stmt = "".join(buf).strip()
                buf.clear()
                if stmt:
                    yield stmt
                continue
            buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(conn_factory: DatabaseConnection, path: Union[str, Path]) -> int:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    conn = conn_factory.connect()
    count = 0
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    finally:
        conn.close()
    return count


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    name = conn_factory.config.database
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: Union[str, Path] = SCHEMA_PATH) -> None:
    ensure_database_exists(conn_factory)
    count = _run_script(conn_factory, schema_path)
    logger.info("applied %d schema statements to %s", count, conn_factory.config.describe())


def apply_seed_sql(conn_factory: DatabaseConnection, *, seed_path: Union[str, Path] = SEED_PATH) -> None:
    count = _run_script(conn_factory, seed_path)
    logger.info("applied %d seed statements to %s", count, conn_factory.config.describe())


def ensure_demo_staffs(conn_factory: DatabaseConnection) -> None:
    """Upsert demo staff accounts with freshly hashed passwords and their roles."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=True)
        for first_name, last_name, email, password, role in DEMO_STAFFS:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT staff_id FROM staffs WHERE email=%s", (email,))
            existing = cur.fetchone()
            if existing:
                staff_id = int(existing["staff_id"])
                cur.execute(
                    "UPDATE staffs SET first_name=%s, last_name=%s, password=%s WHERE staff_id=%s",
                    (first_name, last_name, password_hash, staff_id),
                )
            else:
                cur.execute(
                    "INSERT INTO staffs(first_name, last_name, email, password) VALUES(%s,%s,%s,%s)",
                    (first_name, last_name, email, password_hash),
                )
                staff_id = int(cur.lastrowid)

            cur.execute("DELETE FROM staff_roles WHERE staff_id=%s", (staff_id,))
            cur.execute("INSERT INTO staff_roles(staff_id, role_key) VALUES(%s,%s)", (staff_id, role.value))
        conn.commit()
    finally:
        conn.close()
    logger.info("demo staff accounts ready (%d)", len(DEMO_STAFFS))


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
