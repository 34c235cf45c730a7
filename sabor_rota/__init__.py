"""Flask application factory for Sabor Rota restaurant search."""

from __future__ import annotations

import logging
import os

from flask import Flask, jsonify

from .config import Config
from .extensions import db, init_extensions

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_logging(app: Flask) -> None:
    """Настроить корневой логгер по LOG_LEVEL / LOG_FILE.

    Повторный вызов (несколько create_app в тестах) не добавляет
    дублирующих обработчиков.
    """
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT, level=level)
    root.setLevel(level)

    log_file = app.config.get("LOG_FILE")
    if log_file:
        # FileHandler хранит абсолютный путь
        log_file = os.path.abspath(log_file)
    if log_file and not any(
        isinstance(h, logging.FileHandler) and h.baseFilename == log_file for h in root.handlers
    ):
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)


def _register_blueprints(app: Flask) -> None:
    """Register all API blueprints used by the project."""
    from .addresses import bp as addresses_bp
    from .restaurants import bp as restaurants_bp

    app.register_blueprint(restaurants_bp, url_prefix="/api")
    app.register_blueprint(addresses_bp, url_prefix="/api")


def _register_common_routes(app: Flask) -> None:
    @app.get("/health")
    def health():
        return ("", 204)

    @app.get("/ready")
    def ready():
        return jsonify(status="ok"), 200


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(404)
    def _not_found(_err):
        return jsonify(error="not_found"), 404

    @app.errorhandler(500)
    def _internal_error(_err):
        return jsonify(error="internal_error"), 500


def _apply_security_headers(app: Flask) -> None:
    @app.after_request
    def _set_headers(resp):
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "same-origin")
        return resp


def create_app(config_class: type[Config] = Config) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_class)

    _configure_logging(app)
    init_extensions(app)

    with app.app_context():
        from . import models  # noqa: F401
        db.create_all()

    from .commands import register_commands

    register_commands(app)
    _register_blueprints(app)
    _register_common_routes(app)
    _register_error_handlers(app)
    _apply_security_headers(app)
    return app
