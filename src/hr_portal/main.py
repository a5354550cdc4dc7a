from __future__ import annotations

import importlib
import logging
import random
from datetime import datetime, timedelta
from typing import Callable, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from werkzeug.security import generate_password_hash

from .common.datetime_utils import utc_now
from .config import get_settings_module
from .container import build_container
from .core.exceptions import AuthenticationError, AuthorizationError, DomainError, NotFoundError
from .database.bootstrap import apply_schema
from .functions.store import FunctionStore
from .store.seed import load_seed

from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .billing.controller import register as register_billing
from .functions.controller import register as register_functions
from .leave.controller import register as register_leave
from .notifications.controller import register as register_notifications
from .onboarding.controller import register as register_onboarding
from .organizations.controller import register as register_organizations
from .permissions.controller import register as register_permissions
from .reports.controller import register as register_reports
from .settings.controller import register as register_settings
from .support.controller import register as register_support
from .tasks.controller import register as register_tasks
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

_ERROR_STATUS = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def domain_error(e: DomainError):
        status = next((code for cls, code in _ERROR_STATUS if isinstance(e, cls)), 400)
        return jsonify({"success": False, "message": str(e)}), status

    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        return jsonify({"success": False, "message": e.description}), e.code

    @app.errorhandler(Exception)
    def unexpected_error(e: Exception):
        logger.exception("Unhandled error")
        message = f"Internal error: {e}" if app.config.get("DEBUG") else "Something went wrong. Please try again."
        return jsonify({"success": False, "message": message}), 500


def create_app(
    settings_overrides: Optional[dict] = None,
    *,
    clock: Callable[[], datetime] = utc_now,
    verification_rng: Optional[random.Random] = None,
    function_store_factory: Optional[Callable[[], FunctionStore]] = None,
) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config.from_object(settings)
    app.config.update(settings_overrides or {})
    app.secret_key = app.config["SECRET_KEY"]
    app.permanent_session_lifetime = timedelta(days=int(app.config.get("SESSION_DAYS", 7)))

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    db_config = app.config.get("DB_CONFIG") or {}
    logger.info(
        "settings=%s functions db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if app.config.get("AUTO_INIT_DB"):
        apply_schema(db_config)

    container = build_container(
        app.config,
        clock=clock,
        verification_rng=verification_rng,
        function_store_factory=function_store_factory,
    )
    if app.config.get("SEED_DATA"):
        load_seed(
            container.db,
            seed_dir=app.config.get("SEED_DIR"),
            today=container.today(),
            password_hash=generate_password_hash,
            default_password=app.config["DEMO_PASSWORD"],
        )
    app.extensions["hr_portal"] = container

    _register_error_handlers(app)

    register_auth(app, container)
    register_users(app, container)
    register_permissions(app, container)
    register_organizations(app, container)
    register_onboarding(app, container)
    register_attendance(app, container)
    register_reports(app, container)
    register_leave(app, container)
    register_settings(app, container)
    register_tasks(app, container)
    register_notifications(app, container)
    register_support(app, container)
    register_billing(app, container)
    register_functions(app, container)

    return app
