from __future__ import annotations

import asyncio
import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .container import PROJECT_ROOT, Container, build_container
from .core.exceptions import AuthorizationError, StorageError, ValidationError
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig
from .messaging.controller import register as register_messaging
from .payroll.controller import register as register_payroll
from .records.controller import register as register_records

logger = logging.getLogger(__name__)


def _error(status: int, message: str):
    return jsonify({"success": False, "message": message}), status


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def on_validation_error(e: ValidationError):
        return _error(400, str(e))

    @app.errorhandler(AuthorizationError)
    def on_authorization_error(e: AuthorizationError):
        return _error(403, str(e))

    @app.errorhandler(StorageError)
    def on_storage_error(e: StorageError):
        logger.error("Storage failure: %s", e)
        return _error(503, "Storage backend unavailable")

    @app.errorhandler(401)
    def unauthorized(_):
        return _error(401, "Login required")

    @app.errorhandler(404)
    def not_found(_):
        return _error(404, "Not found")


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        use_remote = bool(getattr(settings, "USE_REMOTE_DB", False))
        if use_remote and bool(getattr(settings, "AUTO_INIT_DB", False)):
            db_config = DBConfig.from_url(str(settings.DB_URL), secret=str(getattr(settings, "DB_SECRET", "")))
            apply_schema(db_config, schema_path=PROJECT_ROOT / "database" / "schema.sql")
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container(settings)

    logger.info("settings=%s backend=%s", settings_module, container.store.backend_name)
    seeded = asyncio.run(container.store.initialize())
    if seeded:
        logger.info("Seed data written to the %s store", container.store.backend_name)

    _register_error_handlers(app)
    register_records(app, container)
    register_payroll(app, container)
    register_messaging(app, container)

    return app
