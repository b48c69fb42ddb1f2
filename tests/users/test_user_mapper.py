from __future__ import annotations

from user_admin.common.files import MultipartFile
from user_admin.core.ids import ID
from user_admin.users.forms import SearchUserForm, UserForm
from user_admin.users.mapper import (
    apply_image,
    form_to_user,
    search_form_to_criteria,
    user_to_csv_row,
    user_to_form,
)
from user_admin.users.model import UploadFile

from conftest import make_user


def test_form_to_new_user_never_copies_password():
    form = UserForm(first_name="A", last_name="B", email="a@example.com", password="plain", tel="")

    user = form_to_user(form)

    assert user.id is None
    assert user.password == ""
    assert user.tel is None


def test_form_over_existing_user_keeps_identity_and_hash():
    base = make_user(id=ID.of(5))
    form = UserForm(id=5, first_name="Jiro", last_name="Yamada", email="jiro@example.com", password="plain")

    user = form_to_user(form, base=base)

    assert user.id == ID.of(5)
    assert user.first_name == "Jiro"
    assert user.password == base.password


def test_user_to_form_leaves_password_blank():
    user = make_user(id=ID.of(9), tel=None)

    form = user_to_form(user)

    assert form.id == 9
    assert form.password == ""
    assert form.tel == ""
    assert form.user_image is None


def test_apply_image_reuses_row_id():
    existing = UploadFile(ID.of(4), "old.png", "old.png", "image/png", b"old")
    image = MultipartFile("new.png", "new.png", "image/png", b"new")

    replaced = apply_image(existing, image)
    created = apply_image(None, image)

    assert replaced.upload_file_id == ID.of(4)
    assert replaced.content == b"new"
    assert created.upload_file_id is None


def test_search_form_to_criteria():
    criteria = search_form_to_criteria(SearchUserForm(user_id="12", first_name=" ", email="ta"))

    assert criteria.user_id == ID.of(12)
    assert criteria.first_name is None
    assert criteria.email == "ta"


def test_search_form_with_non_numeric_id_has_no_id_filter():
    assert search_form_to_criteria(SearchUserForm(user_id="abc")).user_id is None


def test_csv_row_shape():
    row = user_to_csv_row(make_user(id=ID.of(3), address=None))

    assert row == {
        "user_id": 3,
        "first_name": "Taro",
        "last_name": "Yamada",
        "email": "taro@example.com",
        "tel": "0312345678",
        "zip": "1000001",
        "address": "",
    }
