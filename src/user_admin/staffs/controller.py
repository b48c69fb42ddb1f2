from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.auth import login_required
from ..common.session_forms import FORM_TOKEN_KEY
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.exceptions import AuthenticationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    session_days = int(app.config.get("SESSION_DAYS", DEFAULT_SESSION_DAYS))
    app.permanent_session_lifetime = timedelta(days=session_days)

    @app.route("/", endpoint="index")
    @login_required
    def index():
        return render_template(
            "index.html",
            name=session.get("name"),
            roles=session.get("roles", []),
            permissions=session.get("permissions", []),
        )

    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        if "staff_id" in session:
            return redirect(url_for("index"))

        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")
            remember = request.form.get("remember_me")

            try:
                s_staff = container.auth_service.authenticate(email, password)
            except AuthenticationError as e:
                flash(str(e), "danger")
                return render_template("login.html", email=email)

            session.clear()
            session.permanent = bool(remember)
            session["staff_id"] = s_staff.staff_id
            session["name"] = s_staff.full_name
            session["roles"] = list(s_staff.roles)
            session["permissions"] = list(s_staff.permissions)

            flash("Logged in.", "success")
            return redirect(url_for("index"))

        return render_template("login.html", email="")

    @app.route("/logout", endpoint="logout")
    def logout():
        token = session.get(FORM_TOKEN_KEY)
        if token:
            container.form_store.discard_session(token)
        session.clear()
        flash("Logged out.", "info")
        return redirect(url_for("login"))
