from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.exceptions import (
    AlreadyLocked,
    AlreadyMarked,
    AuthenticationError,
    AuthorizationError,
    DomainError,
    DuplicateRequest,
    NotFound,
    StaleStatement,
)
from .database.bootstrap import apply_schema
from .database.connection import DBConfig
from .leaves.controller import register as register_leaves
from .payroll.controller import register as register_payroll
from .settings import get_settings_module
from .stores.controller import register as register_stores

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFound, 404),
    (AlreadyLocked, 409),
    (AlreadyMarked, 409),
    (DuplicateRequest, 409),
    (StaleStatement, 409),
)


def status_for(exc: DomainError) -> int:
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(exc, cls):
            return status
    return 422


def create_app(*, settings_module: Optional[str] = None, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    backend = str(getattr(settings, "STORAGE_BACKEND", "mysql")).lower()
    if container is None and backend == "mysql" and getattr(settings, "AUTO_INIT_DB", False):
        apply_schema(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))

    container = container or build_container(settings=settings)
    app.extensions["staff_payroll"] = container
    logger.info("staff-payroll started (settings=%s, backend=%s)", settings_module, backend)

    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        return jsonify({"error": exc.code, "message": str(exc)}), status_for(exc)

    register_attendance(app, container)
    register_leaves(app, container)
    register_payroll(app, container)
    register_stores(app, container)

    return app
