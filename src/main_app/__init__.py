"""
main_app - Flask Application Package

This package contains the WikiPreview Flask application using the factory pattern.
The create_app() function is the entry point for creating application instances.

Usage:
    # Development
    from main_app import create_app
    app = create_app()

    # Testing
    from main_app import create_app
    from config import TestingConfig
    app = create_app(TestingConfig)
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from flask import Flask, Response, current_app, flash
from werkzeug.exceptions import RequestEntityTooLarge

from config import Config, DevelopmentConfig
from extensions import csrf, limiter
from mwpreview import Outcome, WikiContext, WikiSettings


def create_app(config_class: Optional[type] = None) -> Flask:
    """
    Create and configure a Flask application with extensions, blueprints, error handlers and the shared WikiContext.

    Parameters:
        config_class (type, optional): Configuration class to apply to the app. If omitted, uses DevelopmentConfig when the environment variable FLASK_DEBUG is "1", otherwise uses Config.

    Returns:
        Flask: The configured Flask application instance.
    """
    if config_class is None:
        if os.environ.get("FLASK_DEBUG") == "1":
            config_class = DevelopmentConfig
        else:
            config_class = Config

    # __file__ is in main_app/, so parent is src/
    src_dir = Path(__file__).parent.parent
    app = Flask(
        __name__,
        template_folder=str(src_dir / "templates"),
    )
    app.config.from_object(config_class)

    csrf.init_app(app)
    limiter.init_app(app)

    # One context per application: the logged-in site and the live preview
    # panel are shared by every request.
    app.extensions["wiki_context"] = WikiContext(WikiSettings.from_mapping(app.config))

    from main_app.main import bp as main_bp
    from main_app.panels import bp as panels_bp
    from main_app.wiki import bp as wiki_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(wiki_bp, url_prefix="/wiki")
    app.register_blueprint(panels_bp, url_prefix="/panels")

    app.register_error_handler(RequestEntityTooLarge, _handle_large_request)
    app.after_request(_add_security_headers)

    if not app.debug and not app.testing:
        _configure_logging(app)

    return app


def wiki_context() -> WikiContext:
    """Return the WikiContext of the current application."""
    return current_app.extensions["wiki_context"]


def flash_outcome(outcome: Optional[Outcome]) -> None:
    """Flash the message of a workflow outcome, if it has one."""
    if outcome is None or not outcome.message:
        return
    current_app.logger.info("%s: %s", outcome.category, outcome.message)
    flash(outcome.message, outcome.category or "info")


def _handle_large_request(e: RequestEntityTooLarge) -> tuple[Response, int]:
    """
    Return a 413 JSON response for requests that exceed the configured maximum content length.
    """
    from flask import jsonify
    return jsonify({
        "error": "Request too large",
        "message": "Submitted wikitext exceeds the allowed size limit"
    }), 413


def _add_security_headers(response: Response) -> Response:
    """
    Attach common security-related HTTP headers to the given response.

    Panel content sets its own Content-Security-Policy, so only the
    framing and sniffing headers are added here. HSTS is added when
    SESSION_COOKIE_SECURE is enabled.
    """
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "SAMEORIGIN"

    if current_app.config.get("SESSION_COOKIE_SECURE"):
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

    return response


def _configure_logging(app: Flask) -> None:
    """
    Set up rotating file logging for production.

    Attaches a RotatingFileHandler writing to "logs/wikipreview.log" to the
    application logger and to the mwpreview package logger, both at INFO.
    """
    if not os.path.exists("logs"):
        os.mkdir("logs")

    file_handler = RotatingFileHandler(
        "logs/wikipreview.log",
        maxBytes=10240,  # 10KB per file
        backupCount=10
    )
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]"
    ))
    file_handler.setLevel(logging.INFO)

    app.logger.addHandler(file_handler)
    app.logger.setLevel(logging.INFO)

    package_logger = logging.getLogger("mwpreview")
    package_logger.addHandler(file_handler)
    package_logger.setLevel(logging.INFO)

    app.logger.info("WikiPreview startup")
