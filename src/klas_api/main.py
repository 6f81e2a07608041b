from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .admin.controller import register as register_admin
from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .config import get_settings_module
from .container import Container, build_container
from .core.enums import ErrorCode
from .core.exceptions import DomainError
from .core.responses import error_body
from .schedules.controller import register as register_schedules
from .students.controller import register as register_students
from .teachers.controller import register as register_teachers

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return jsonify(error_body(e.code, e.message, e.details)), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        if e.code == 404:
            code = ErrorCode.NOT_FOUND.value
        elif e.code == 413:
            code = ErrorCode.FILE_TOO_LARGE.value
        else:
            code = e.name.upper().replace(" ", "_")
        return jsonify(error_body(code, e.description or e.name)), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("unhandled error")
        return jsonify(error_body(ErrorCode.INTERNAL_ERROR, "Internal server error")), 500


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_CONTENT_LENGTH", 10 * 1024 * 1024))
    app.json.sort_keys = False

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("settings=%s supabase=%s", settings_module, getattr(settings, "SUPABASE_URL", "") or "<unset>")

    CORS(app, origins=getattr(settings, "CORS_ORIGINS", "*"))

    if container is None:
        container = build_container(settings=settings)

    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        return "Klas king!"

    register_auth(app, container)
    register_schedules(app, container)
    register_attendance(app, container)
    register_students(app, container)
    register_teachers(app, container)
    register_admin(app, container)
    register_error_handlers(app)

    return app
