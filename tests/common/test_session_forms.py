from __future__ import annotations

from datetime import timedelta

from flask import Flask, session

from user_admin import create_app
from user_admin.common.session_forms import FORM_TOKEN_KEY, FormSessionStore, form_token
from user_admin.container import assemble


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_store_is_keyed_by_token_and_name():
    store = FormSessionStore()
    store.put("a", "userForm", 1)
    store.put("a", "searchUserForm", 2)
    store.put("b", "userForm", 3)

    assert store.get("a", "userForm") == 1
    assert store.get("b", "userForm") == 3
    assert store.get("c", "userForm") is None

    store.clear("a", "userForm")
    assert store.get("a", "userForm") is None
    assert len(store) == 2


def test_discard_session_only_drops_that_token():
    store = FormSessionStore()
    store.put("a", "userForm", 1)
    store.put("a", "searchUserForm", 2)
    store.put("b", "userForm", 3)

    store.discard_session("a")

    assert len(store) == 1
    assert store.get("b", "userForm") == 3


def test_form_token_is_stable_within_session():
    app = Flask(__name__)
    app.secret_key = "test"

    with app.test_request_context():
        first = form_token()
        assert session[FORM_TOKEN_KEY] == first
        assert form_token() == first


def test_idle_sessions_expire_on_put():
    clock = FakeClock()
    store = FormSessionStore(max_age=timedelta(hours=1), clock=clock)
    store.put("idle", "userForm", 1)
    store.put("active", "userForm", 2)

    clock.now = 1800
    assert store.get("active", "userForm") == 2

    clock.now = 3700
    store.put("new", "searchUserForm", 3)

    assert store.get("idle", "userForm") is None
    assert store.get("active", "userForm") == 2
    assert len(store) == 2


def test_least_recently_used_sessions_are_dropped_over_the_cap():
    clock = FakeClock()
    store = FormSessionStore(max_sessions=2, clock=clock)
    store.put("a", "userForm", 1)
    clock.now = 1
    store.put("b", "userForm", 2)
    clock.now = 2
    store.get("a", "userForm")
    clock.now = 3
    store.put("c", "userForm", 3)

    assert store.get("b", "userForm") is None
    assert store.get("a", "userForm") == 1
    assert store.get("c", "userForm") == 3


def test_clearing_the_last_form_forgets_the_token():
    store = FormSessionStore()
    store.put("a", "userForm", 1)

    store.clear("a", "userForm")
    store.clear("missing", "userForm")

    assert len(store) == 0


def test_abandoned_browser_sessions_do_not_pile_up(users_repo, staffs_repo, permission_dao):
    store = FormSessionStore(max_sessions=10)
    container = assemble(
        users_repo=users_repo,
        staffs_repo=staffs_repo,
        staff_permission_dao=permission_dao,
        form_store=store,
    )
    app = create_app("config.testing", container=container)

    for _ in range(50):
        client = app.test_client()
        with client.session_transaction() as sess:
            sess["staff_id"] = 1
            sess["roles"] = ["ADMIN"]
        client.get("/users/new")
        client.get("/users/find")

    assert len(store) <= 20
