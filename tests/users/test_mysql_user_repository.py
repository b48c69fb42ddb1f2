from __future__ import annotations

from user_admin.common.pagination import Pageable
from user_admin.core.ids import ID
from user_admin.users.model import UploadFile, UserCriteria
from user_admin.users.mysql_user_repository import MySQLUserRepository

from conftest import make_user


class ScriptedCursor:
    """Returns queued result sets in execute order and hands out increasing row ids."""

    def __init__(self, results=()):
        self._results = list(results)
        self._rows = []
        self.executed = []
        self.lastrowid = 0

    def execute(self, sql, params=None):
        self.executed.append((" ".join(sql.split()), params))
        if sql.lstrip().upper().startswith("INSERT"):
            self.lastrowid += 1
        if sql.lstrip().upper().startswith("SELECT"):
            self._rows = list(self._results.pop(0)) if self._results else []

    def fetchone(self):
        return self._rows.pop(0) if self._rows else None

    def close(self):
        pass


class _Conn:
    def __init__(self, cur):
        self._cur = cur

    def cursor(self, dictionary=False):
        return self._cur

    def commit(self):
        pass

    def rollback(self):
        pass

    def close(self):
        pass


class _Factory:
    def __init__(self, cur):
        self.cur = cur

    def connect(self, with_database=True):
        return _Conn(self.cur)


def _user_row(uid, **extra):
    row = {
        "user_id": uid,
        "first_name": "Taro",
        "last_name": "Yamada",
        "email": f"u{uid}@example.com",
        "password": "hash",
        "tel": None,
        "zip": None,
        "address": None,
        "upload_file_id": None,
    }
    row.update(extra)
    return row


def test_get_by_id_maps_attachment():
    row = _user_row(
        4,
        upload_file_id=9,
        file_name="a.png",
        original_file_name="a.png",
        content_type="image/png",
        content=bytearray(b"img"),
    )
    repo = MySQLUserRepository(_Factory(ScriptedCursor([[row]])))

    user = repo.get_by_id(ID.of(4))

    assert user.id == ID.of(4)
    assert user.upload_file.upload_file_id == ID.of(9)
    assert user.upload_file.content == b"img"


def test_get_by_id_missing_returns_none():
    repo = MySQLUserRepository(_Factory(ScriptedCursor([[]])))

    assert repo.get_by_id(ID.of(1)) is None


def test_select_all_uses_prefix_match_and_limit():
    cur = ScriptedCursor([[{"cnt": 12}], [_user_row(11), _user_row(12)]])
    repo = MySQLUserRepository(_Factory(cur))

    page = repo.select_all(UserCriteria(first_name="Ta"), Pageable(page=2, per_page=10))

    assert page.count == 12
    assert [u.id.value for u in page.data] == [11, 12]
    assert all(u.upload_file is None for u in page.data)

    count_sql, count_params = cur.executed[0]
    data_sql, data_params = cur.executed[1]
    assert "LIKE %s" in count_sql and count_params == ("Ta%",)
    assert data_sql.endswith("LIMIT %s OFFSET %s")
    assert data_params == ("Ta%", 10, 10)


def test_select_all_unpaged_has_no_limit():
    cur = ScriptedCursor([[{"cnt": 0}], []])
    repo = MySQLUserRepository(_Factory(cur))

    page = repo.select_all(UserCriteria())

    assert page.data == []
    assert "LIMIT" not in cur.executed[1][0]


def test_insert_saves_attachment_first():
    cur = ScriptedCursor()
    repo = MySQLUserRepository(_Factory(cur))
    upload = UploadFile(None, "a.png", "a.png", "image/png", b"img")

    created = repo.insert(make_user(upload_file=upload))

    assert cur.executed[0][0].startswith("INSERT INTO upload_files")
    assert created.upload_file.upload_file_id == ID.of(1)
    assert created.id == ID.of(2)
    assert cur.executed[1][1][-1] == 1


def test_update_rewrites_existing_attachment_row():
    cur = ScriptedCursor()
    repo = MySQLUserRepository(_Factory(cur))
    upload = UploadFile(ID.of(7), "b.png", "b.png", "image/png", b"new")

    repo.update(make_user(id=ID.of(3), upload_file=upload))

    assert cur.executed[0][0].startswith("UPDATE upload_files")
    assert cur.executed[0][1][-1] == 7
    assert cur.executed[1][0].startswith("UPDATE users")
    assert cur.executed[1][1][-2:] == (7, 3)
