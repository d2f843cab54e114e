from __future__ import annotations

import importlib
import logging
from datetime import datetime
from typing import Callable, Optional

from dotenv import load_dotenv
from flask import Flask, redirect, url_for

from .attendance.controller import register as register_attendance
from .common.datetime_utils import now_local
from .common.logging_setup import configure_logging
from .config import get_settings_module
from .container import build_container
from .core.constants import DEFAULT_GEOLOCATION_TIMEOUT_MS
from .core.enums import Role
from .customers.controller import register as register_customers
from .reports.controller import register as register_reports
from .storage import KeyValueStorage
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(
    settings_module: Optional[str] = None,
    *,
    backend: Optional[KeyValueStorage] = None,
    clock: Callable[[], datetime] = now_local,
) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["GEOLOCATION_TIMEOUT_MS"] = int(getattr(settings, "GEOLOCATION_TIMEOUT_MS", DEFAULT_GEOLOCATION_TIMEOUT_MS))

    container = build_container(settings, backend=backend, clock=clock)
    app.extensions["radiant_crm"] = container
    logger.info("Started with settings=%s backend=%s", settings_module, type(container.backend).__name__)
    if getattr(settings, "WARN_SHARED_SESSION", False):
        logger.warning("Login session is shared by every client of this server; run one instance per user")

    @app.context_processor
    def inject_session():
        return {"current_user": container.auth_service.current_user(), "Role": Role}

    @app.errorhandler(404)
    def not_found(_error):
        return redirect(url_for("login"))

    register_users(app, container)
    register_attendance(app, container)
    register_customers(app, container)
    register_reports(app, container)

    return app
