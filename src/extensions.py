"""
extensions.py - Flask Extensions Module

This module initializes Flask extensions without binding them to a specific
application instance, so they can be imported by the blueprints without
circular imports. They are bound to the app in create_app() using the
init_app pattern.

Example:
    from extensions import csrf, limiter

    def create_app(config_class=Config):
        app = Flask(__name__)
        app.config.from_object(config_class)

        csrf.init_app(app)
        limiter.init_app(app)

        return app
"""

from __future__ import annotations

from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_wtf.csrf import CSRFProtect

# Bound to the app in create_app()
csrf = CSRFProtect()

# Every preview or page view costs one round trip to the wiki.
# Limits can be customized per-route using @limiter.limit()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["2000 per day", "300 per hour"],
    storage_uri="memory://",
    strategy="fixed-window",
)
