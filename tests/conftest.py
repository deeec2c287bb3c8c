# tests/conftest.py
# Shared pytest fixtures for WikiPreview tests

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from config import TestingConfig
from main_app import create_app
from mwpreview import WikiContext, WikiSettings
from mwpreview.panels import DisplaySurface


def parse_response(text: Optional[str] = "<p>Hi</p>", displaytitle: Optional[str] = "Hi",
                   categorieshtml: Optional[str] = None, headhtml: Optional[str] = None) -> Dict[str, Any]:
    """A formatversion=1 parse response holding the given fragments."""
    parse: Dict[str, Any] = {"title": "API", "pageid": 0}
    if text is not None:
        parse["text"] = {"*": text}
    if displaytitle is not None:
        parse["displaytitle"] = displaytitle
    if categorieshtml is not None:
        parse["categorieshtml"] = {"*": categorieshtml}
    if headhtml is not None:
        parse["headhtml"] = {"*": headhtml}
    return {"parse": parse}


class FakeSite:
    """
    Stand-in for mwclient.Site.

    ``responses`` maps an action name to a response dict, an exception to
    raise, or a callable receiving the request parameters.
    """

    def __init__(self, responses: Optional[Dict[str, Any]] = None, events: Optional[List[str]] = None):
        self.responses = responses or {}
        self.events = events if events is not None else []
        self.calls: List[Dict[str, Any]] = []
        self.pages = MagicMock()
        self.login = MagicMock()
        self.api = MagicMock(return_value={})
        self.get_token = MagicMock(return_value="csrf+\\")
        self.host = "wiki.example"

    def raw_api(self, action: str, http_method: str = "POST", retry_on_error: bool = True, **kwargs: Any):
        self.events.append(f"request:{action}")
        self.calls.append({"action": action, "http_method": http_method, **kwargs})
        response = self.responses.get(action, {})
        if isinstance(response, BaseException):
            raise response
        if callable(response):
            return response(kwargs)
        return response


class RecordingSurface(DisplaySurface):
    """Display surface that records every write into a shared event list."""

    def __init__(self, events: List[str]):
        self.events = events
        self._html = ""
        self._title = ""
        self._closed = False
        self._handlers: List[Callable[[DisplaySurface], None]] = []

    @property
    def html(self) -> str:
        return self._html

    @html.setter
    def html(self, value: str) -> None:
        self.events.append(f"html:{value}")
        self._html = value

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value: str) -> None:
        self.events.append(f"title:{value}")
        self._title = value

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True
        for handler in self._handlers:
            handler(self)

    def on_closed(self, handler: Callable[[DisplaySurface], None]) -> None:
        self._handlers.append(handler)


@pytest.fixture
def settings():
    return WikiSettings(
        host="wiki.example",
        article_path="/wiki/",
        api_path="/w/api.php",
        preview_css_style="p { color: red; }",
        username="Tester",
        password="secret",
    )


@pytest.fixture
def fake_site():
    return FakeSite(responses={"parse": parse_response()})


@pytest.fixture
def context(settings, fake_site):
    return WikiContext(settings, site_factory=lambda _settings: fake_site)


@pytest.fixture
def app(fake_site):
    app = create_app(TestingConfig)
    app.extensions["wiki_context"].site_factory = lambda _settings: fake_site
    return app


@pytest.fixture
def client(app):
    return app.test_client()
