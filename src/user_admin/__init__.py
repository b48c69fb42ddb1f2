"""User Admin package.

This package is organized by feature modules (users, staffs) with a thin
Flask controller layer on top of service and repository layers.
"""
from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, render_template
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .common.auth import current_staff
from .container import Container, build_container
from .core.constants import DEFAULT_FORM_STORE_SESSIONS, DEFAULT_MAX_UPLOAD_BYTES, DEFAULT_SESSION_DAYS
from .core.exceptions import AuthorizationError, NoDataFoundError
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_staffs, list_tables
from .staffs.controller import register as register_staffs
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _configure_logging(app: Flask, level_name: str) -> None:
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    app.logger.setLevel(level)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(NoDataFoundError)
    def not_found(e: NoDataFoundError):
        return render_template("error.html", status=404, message=str(e)), 404

    @app.errorhandler(AuthorizationError)
    def forbidden(e: AuthorizationError):
        app.logger.info("forbidden: %s", e)
        return render_template("403.html", current_staff=current_staff()), 403

    @app.errorhandler(Exception)
    def unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return e
        app.logger.exception("unhandled error")
        return render_template("error.html", status=500, message="Internal server error"), 500


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES))
    app.config["SESSION_DAYS"] = int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS))

    _configure_logging(app, getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        container = build_container(
            db_config=db_config,
            session_days=app.config["SESSION_DAYS"],
            max_form_sessions=int(getattr(settings, "FORM_STORE_MAX_SESSIONS", DEFAULT_FORM_STORE_SESSIONS)),
        )
        logger.info("settings=%s db=%s", settings_module, container.conn.config.describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn)
            logger.info("schema ready (tables=%d)", len(list_tables(container.conn)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(container.conn)
            ensure_demo_staffs(container.conn)

    app.extensions["container"] = container

    register_staffs(app, container)
    register_users(app, container)
    _register_error_handlers(app)

    return app
