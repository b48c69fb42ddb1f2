from __future__ import annotations

from dataclasses import replace
from typing import Callable, Iterable, Optional

import pytest
from werkzeug.security import generate_password_hash

from user_admin import create_app
from user_admin.common.pagination import Page, Pageable
from user_admin.container import assemble
from user_admin.core.ids import ID
from user_admin.staffs.model import Permission, Staff
from user_admin.users.model import UploadFile, User, UserCriteria


class InMemoryUsers:
    def __init__(self):
        self.users: dict[int, User] = {}
        self._next_id = 0
        self._next_file_id = 0
        self.inserted: list[User] = []
        self.updated: list[User] = []

    def _save_file(self, upload_file: Optional[UploadFile]) -> Optional[UploadFile]:
        if upload_file is None or upload_file.upload_file_id is not None:
            return upload_file
        self._next_file_id += 1
        return replace(upload_file, upload_file_id=ID.of(self._next_file_id))

    def get_by_id(self, user_id):
        return self.users.get(user_id.value)

    def get_by_email(self, email):
        for u in self.users.values():
            if u.email == email:
                return u
        return None

    def select_all(self, criteria: UserCriteria, pageable: Optional[Pageable] = None) -> Page[User]:
        rows = sorted(self.users.values(), key=lambda u: u.id.value)
        if criteria.user_id is not None:
            rows = [u for u in rows if u.id == criteria.user_id]
        if criteria.first_name:
            rows = [u for u in rows if u.first_name.startswith(criteria.first_name)]
        if criteria.last_name:
            rows = [u for u in rows if u.last_name.startswith(criteria.last_name)]
        if criteria.email:
            rows = [u for u in rows if u.email.startswith(criteria.email)]

        if pageable is None:
            return Page(data=rows, count=len(rows), page=1, per_page=max(len(rows), 1))
        data = rows[pageable.offset : pageable.offset + pageable.per_page]
        return Page(data=data, count=len(rows), page=pageable.page, per_page=pageable.per_page)

    def insert(self, user: User) -> User:
        self._next_id += 1
        created = replace(user, id=ID.of(self._next_id), upload_file=self._save_file(user.upload_file))
        self.users[created.id.value] = created
        self.inserted.append(created)
        return created

    def update(self, user: User) -> User:
        saved = replace(user, upload_file=self._save_file(user.upload_file))
        self.users[saved.id.value] = saved
        self.updated.append(saved)
        return saved


class InMemoryStaffs:
    def __init__(self, staffs: Iterable[Staff] = ()):
        self.staffs = {s.email: s for s in staffs}

    def get_by_email(self, email):
        return self.staffs.get(email)


class InMemoryStaffPermissions:
    def __init__(self, grants: dict[int, list[Permission]]):
        self.grants = grants
        self.calls: list[ID] = []

    def select_by_staff_id(self, staff_id, reducer: Callable):
        self.calls.append(staff_id)
        return reducer(iter(self.grants.get(staff_id.value, [])))


def make_permission(pid: int, role_key: str, permission_key: str) -> Permission:
    return Permission(
        permission_id=ID.of(pid),
        role_key=role_key,
        category_key=permission_key.split(".")[0],
        permission_key=permission_key,
        permission_name=permission_key,
    )


def make_user(**overrides) -> User:
    fields = dict(
        id=None,
        first_name="Taro",
        last_name="Yamada",
        email="taro@example.com",
        password=generate_password_hash("secret"),
        tel="0312345678",
        zip="1000001",
        address="Tokyo",
        upload_file=None,
    )
    fields.update(overrides)
    return User(**fields)


@pytest.fixture
def users_repo():
    return InMemoryUsers()


@pytest.fixture
def staffs_repo():
    return InMemoryStaffs(
        [
            Staff(ID.of(1), "Ada", "Admin", "admin@example.com", generate_password_hash("passw0rd")),
            Staff(ID.of(2), "Sam", "Staff", "staff@example.com", generate_password_hash("passw0rd")),
        ]
    )


@pytest.fixture
def permission_dao():
    return InMemoryStaffPermissions(
        {
            1: [
                make_permission(1, "ADMIN", "users.read"),
                make_permission(2, "ADMIN", "users.write"),
                make_permission(3, "ADMIN", "users.export"),
            ],
            2: [make_permission(1, "USER", "users.read")],
        }
    )


@pytest.fixture
def container(users_repo, staffs_repo, permission_dao):
    return assemble(users_repo=users_repo, staffs_repo=staffs_repo, staff_permission_dao=permission_dao)


@pytest.fixture
def app(container):
    return create_app("config.testing", container=container)


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, *, staff_id: int, name: str, roles: list[str]):
    with client.session_transaction() as sess:
        sess["staff_id"] = staff_id
        sess["name"] = name
        sess["roles"] = roles
    return client


@pytest.fixture
def admin_client(client):
    return _login(client, staff_id=1, name="Ada Admin", roles=["ADMIN"])


@pytest.fixture
def staff_client(client):
    return _login(client, staff_id=2, name="Sam Staff", roles=["USER"])
