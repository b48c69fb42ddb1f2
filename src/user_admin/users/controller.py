from __future__ import annotations

import logging
from dataclasses import replace

from flask import Flask, redirect, render_template, request, url_for
from werkzeug.security import generate_password_hash

from ..common.auth import login_required, role_required
from ..common.csv_export import write_csv_response
from ..common.files import to_image_data_uri
from ..common.pagination import Pageable
from ..common.session_forms import form_token
from ..core.constants import DEFAULT_PAGE_SIZE, SEARCH_USER_FORM, USER_FORM
from ..core.enums import RoleKey
from ..core.exceptions import ValidationError
from ..core.ids import ID
from ..container import Container
from .forms import SearchUserForm, UserForm
from .mapper import USER_CSV_FIELDS, apply_image, form_to_user, search_form_to_criteria, user_to_csv_row, user_to_form

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    forms = container.form_store
    users = container.user_service

    def _render_user_form(form: UserForm, *, user_id=None):
        if user_id is None:
            action = url_for("new_user")
        else:
            action = url_for("edit_user", user_id=user_id)
        return render_template("users/new.html", form=form, action=action, user_id=user_id)

    def _render_find(form: SearchUserForm, pages=None):
        page_urls = {}
        if pages is not None:
            query = form.query_args()
            page_urls = {
                "previous": url_for("find_user", page=pages.page - 1, **query),
                "next": url_for("find_user", page=pages.page + 1, **query),
            }
        return render_template("users/find.html", form=form, pages=pages, page_urls=page_urls)

    # ---- registration ----
    @app.route("/users/new", methods=["GET"], endpoint="new_user")
    @login_required
    def new_user():
        form = UserForm()
        forms.put(form_token(), USER_FORM, form)
        return _render_user_form(form)

    @app.route("/users/new", methods=["POST"], endpoint="create_user")
    @login_required
    def create_user():
        token = form_token()
        form = forms.get(token, USER_FORM)
        if form is None or form.id is not None:
            form = UserForm()
        form.bind(request.form, request.files)
        forms.put(token, USER_FORM, form)

        if not form.validate(is_new=True):
            return _render_user_form(form)

        input_user = form_to_user(form)
        input_user = replace(input_user, password=generate_password_hash(form.password))
        if form.user_image is not None:
            input_user = replace(input_user, upload_file=apply_image(None, form.user_image))

        try:
            created = users.create(input_user)
        except ValidationError as e:
            form.add_error("email", str(e))
            return _render_user_form(form)

        forms.clear(token, USER_FORM)
        return redirect(url_for("show_user", user_id=created.id.value))

    # ---- search ----
    @app.route("/users/find", methods=["GET"], endpoint="find_user")
    @login_required
    def find_user():
        token = form_token()
        form = forms.get(token, SEARCH_USER_FORM) or SearchUserForm()
        form.bind(request.args)
        form.errors = {}
        forms.put(token, SEARCH_USER_FORM, form)

        page = max(request.args.get("page", 1, type=int) or 1, 1)
        criteria = search_form_to_criteria(form)
        pages = users.find_all(criteria, Pageable(page=page, per_page=DEFAULT_PAGE_SIZE))
        return _render_find(form, pages)

    @app.route("/users/find", methods=["POST"], endpoint="search_user")
    @login_required
    def search_user():
        token = form_token()
        form = forms.get(token, SEARCH_USER_FORM) or SearchUserForm()
        form.bind(request.form)
        forms.put(token, SEARCH_USER_FORM, form)

        if not form.validate():
            return _render_find(form)

        return redirect(url_for("find_user"))

    # ---- detail ----
    @app.route("/users/show/<int:user_id>", methods=["GET"], endpoint="show_user")
    @login_required
    def show_user(user_id: int):
        user = users.find_by_id(ID.of(user_id))

        image = None
        if user.upload_file is not None:
            image = to_image_data_uri(user.upload_file.content)

        return render_template("users/show.html", user=user, image=image)

    # ---- edit ----
    @app.route("/users/edit/<int:user_id>", methods=["GET"], endpoint="edit_user")
    @login_required
    def edit_user(user_id: int):
        token = form_token()
        form = forms.get(token, USER_FORM)

        # An in-flight form for this user keeps its pending file choice.
        if form is None or form.id != user_id:
            user = users.find_by_id(ID.of(user_id))
            form = user_to_form(user)
            forms.put(token, USER_FORM, form)

        return _render_user_form(form, user_id=user_id)

    @app.route("/users/edit/<int:user_id>", methods=["POST"], endpoint="update_user")
    @login_required
    def update_user(user_id: int):
        token = form_token()
        form = forms.get(token, USER_FORM)
        if form is None or form.id != user_id:
            form = user_to_form(users.find_by_id(ID.of(user_id)))
        form.bind(request.form, request.files)
        forms.put(token, USER_FORM, form)

        if not form.validate(is_new=False):
            return _render_user_form(form, user_id=user_id)

        user = users.find_by_id(ID.of(user_id))
        user = form_to_user(form, base=user)
        if form.password:
            user = replace(user, password=generate_password_hash(form.password))

        image = form.user_image
        if image is not None:
            user = replace(user, upload_file=apply_image(user.upload_file, image))

        try:
            updated = users.update(user)
        except ValidationError as e:
            form.add_error("email", str(e))
            return _render_user_form(form, user_id=user_id)

        forms.clear(token, USER_FORM)
        return redirect(url_for("show_user", user_id=updated.id.value))

    # ---- export ----
    @app.route("/users/download/<filename>", methods=["GET"], endpoint="download_users_csv")
    @login_required
    def download_users_csv(filename: str):
        all_users = users.find_all_unpaged()
        rows = [user_to_csv_row(u) for u in all_users]
        logger.info("exporting %d users as %s", len(rows), filename)
        return write_csv_response(rows=rows, fieldnames=USER_CSV_FIELDS, filename=filename)

    # ---- role probe ----
    @app.route("/users/testRole", methods=["GET"], endpoint="test_role")
    @role_required(RoleKey.ADMIN)
    def test_role():
        return redirect(url_for("index"))
