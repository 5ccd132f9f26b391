"""Daily Journal application factory and bootstrap."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Optional

from flask import Flask, request
from werkzeug.exceptions import HTTPException

from daily_journal.config import config_by_name, engine_options_from_uri
from daily_journal.core.errors import JournalError
from daily_journal.core.events.event_bus import event_bus
from daily_journal.extensions import init_extensions, jwt


def create_app(config_name: Optional[str] = None, overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    """Create and configure the Daily Journal Flask application."""
    env_name = (config_name or os.environ.get("APP_ENV") or "development").lower()
    project_root = Path(__file__).resolve().parent.parent
    instance_root = project_root / "instance"

    app = Flask(__name__, instance_path=str(instance_root), instance_relative_config=True)
    config_cls = config_by_name.get(env_name, config_by_name["development"])
    app.config.from_object(config_cls)
    if overrides:
        app.config.update(overrides)
        if "SQLALCHEMY_DATABASE_URI" in overrides and "SQLALCHEMY_ENGINE_OPTIONS" not in overrides:
            app.config["SQLALCHEMY_ENGINE_OPTIONS"] = engine_options_from_uri(overrides["SQLALCHEMY_DATABASE_URI"])

    # Normalize relative sqlite paths to the project root
    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI") or ""
    if db_uri.startswith("sqlite:///") and db_uri != "sqlite:///:memory:":
        db_path = Path(db_uri.replace("sqlite:///", "", 1))
        if not db_path.is_absolute():
            db_path = project_root / db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)
        app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{db_path}"

    _configure_logging(app)
    init_extensions(app)

    from daily_journal.core.auth.gate import register_auth_gate
    from daily_journal.domains.journal.services.lifecycle import register_subscriptions
    from daily_journal.domains.journal.stores import build_entry_store

    register_auth_gate(jwt)
    app.extensions["entry_store"] = build_entry_store(app.config["ENTRY_STORE_BACKEND"])
    app.extensions["event_bus"] = event_bus
    register_subscriptions(event_bus)

    _register_blueprints(app)
    _register_error_handlers(app)

    @app.before_request
    def _log_request():
        app.logger.debug("%s %s", request.method, request.path)

    @app.get("/api/health")
    def health():
        return {
            "ok": True,
            "status": "OK",
            "timestamp": datetime.now().isoformat(),
            "environment": app.config.get("ENV", env_name),
        }, 200

    @app.get("/api")
    def api_index():
        return {
            "ok": True,
            "message": "Daily Journal API",
            "endpoints": {
                "auth": "/api/auth",
                "entries": "/api/entries",
                "users": "/api/users",
                "health": "/api/health",
            },
        }, 200

    # Register CLI commands
    from daily_journal.scripts.recompute_stats import register_commands

    register_commands(app)

    return app


def _configure_logging(app: Flask) -> None:
    level = app.config.get("LOG_LEVEL", "INFO")
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    app.logger.setLevel(level)
    logging.getLogger("daily_journal").setLevel(level)


def _register_blueprints(app: Flask) -> None:
    """Lazy import and register all controllers."""
    from daily_journal.core.auth.controllers import auth_bp  # local import to avoid circulars
    from daily_journal.core.users.controllers import user_api_bp
    from daily_journal.domains.journal.controllers.journal_api import journal_api_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(user_api_bp, url_prefix="/api/users")
    app.register_blueprint(journal_api_bp, url_prefix="/api/entries")


def _register_error_handlers(app: Flask) -> None:
    """JSON error responses."""

    @app.errorhandler(JournalError)
    def _journal_error(exc: JournalError):
        if exc.status_code >= 500:
            app.logger.exception("Journal error: %s", exc)
        return exc.to_dict(), exc.status_code

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        code = (exc.name or "error").lower().replace(" ", "_")
        return {"ok": False, "error": code, "message": exc.description}, exc.code

    @app.errorhandler(Exception)
    def _generic_error(exc: Exception):
        app.logger.exception("Unhandled error: %s", exc)
        # In debug/testing, surface the exception message to speed up diagnosis
        if app.debug or app.testing:
            return {"ok": False, "error": "unexpected_error", "message": str(exc)}, 500
        return {"ok": False, "error": "unexpected_error"}, 500
