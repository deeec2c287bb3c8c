# config.py
# Flask application configuration

import os
import warnings

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, default))
    except (TypeError, ValueError):
        return default


class Config:
    """Flask configuration class."""

    # Secret key for session security
    _secret_key = os.environ.get("FLASK_SECRET_KEY")
    if not _secret_key:
        warnings.warn(
            "FLASK_SECRET_KEY not set. Using default key which is insecure for production!",
            UserWarning,
            stacklevel=2
        )
        _secret_key = "change-me-in-production"
    SECRET_KEY = _secret_key

    # Maximum request size (wikitext posted from the editor)
    MAX_CONTENT_LENGTH = _env_int("MAX_CONTENT_LENGTH", 16 * 1024 * 1024)

    # Maximum title length
    MAX_TITLE_LENGTH = 255

    # Debug mode
    DEBUG = os.environ.get("FLASK_DEBUG", "0") == "1"

    # WTF CSRF protection
    WTF_CSRF_ENABLED = True

    # Session cookies
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_SECURE = False

    # Rate limiting
    RATELIMIT_ENABLED = True

    # Wiki connection
    WIKI_HOST = os.environ.get("WIKI_HOST", "")
    WIKI_TRANSFER_PROTOCOL = os.environ.get("WIKI_TRANSFER_PROTOCOL", "https://")
    WIKI_ARTICLE_PATH = os.environ.get("WIKI_ARTICLE_PATH", "/wiki/")
    WIKI_API_PATH = os.environ.get("WIKI_API_PATH", "/w/api.php")
    WIKI_REQUEST_TIMEOUT = _env_int("WIKI_REQUEST_TIMEOUT", 30)

    # Credentials used by the login action
    WIKI_USERNAME = os.environ.get("WIKI_USERNAME", "")
    WIKI_PASSWORD = os.environ.get("WIKI_PASSWORD", "")

    # Preview rendering
    WIKI_ENABLE_JAVASCRIPT = _env_flag("WIKI_ENABLE_JAVASCRIPT")
    WIKI_GET_CSS = _env_flag("WIKI_GET_CSS")
    WIKI_PREVIEW_CSS_STYLE = os.environ.get(
        "WIKI_PREVIEW_CSS_STYLE",
        "body { background-color: #ffffff; color: #202122; }"
    )
    WIKI_REDIRECTS = _env_flag("WIKI_REDIRECTS", "1")
    WIKI_SUMMARY_SUFFIX = os.environ.get("WIKI_SUMMARY_SUFFIX", " // Edit via WikiPreview")

    # Page viewer panels kept open before the oldest is closed
    WIKI_MAX_VIEWERS = _env_int("WIKI_MAX_VIEWERS", 20)


class DevelopmentConfig(Config):
    DEBUG = True


class TestingConfig(Config):
    TESTING = True
    DEBUG = True
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False
    WIKI_HOST = "wiki.example"
    WIKI_USERNAME = "Tester"
    WIKI_PASSWORD = "secret"


class ProductionConfig(Config):
    DEBUG = False
    SESSION_COOKIE_SECURE = True
