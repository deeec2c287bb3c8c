"""
mwpreview - MediaWiki preview pipeline

This package renders wikitext and wiki pages through a wiki's parse API and
exchanges page content with it:

Modules:
    models: Parse requests and the tagged result variants
    decode: Total decoders for parse, query and edit responses
    render: Assembly of decoded results into standalone HTML documents
    panels: Display surfaces and the live-preview Panel Session Manager
    api: mwclient calls with transport errors mapped to messages
    context: WikiContext holding the session state and the workflows
    settings: WikiSettings built from the WIKI_* configuration keys

Typical Usage:
    >>> from mwpreview import decode_parse_response, assemble
    >>> result = decode_parse_response({"parse": {"text": {"*": "<p>Hi</p>"}, "displaytitle": "Hi"}})
    >>> assemble(result, "https://wiki.example/", "").title
    'WikitextPreviewer: Hi'
"""

from __future__ import annotations

from .context import Outcome, WikiContext
from .decode import decode_edit_response, decode_parse_response, decode_query_response
from .errors import NotLoggedIn, PageUnavailable, WikiApiError, WikiError
from .models import (
    ApiError,
    EditResult,
    InterwikiPage,
    MissingPage,
    PageSource,
    ParseOk,
    ParseRequest,
    RenderedDocument,
    RequestMode,
)
from .panels import PanelRegistry, PanelSessionManager, PreviewPanel, PreviewSession, open_viewer
from .render import assemble, info_document
from .settings import WikiSettings

__all__ = [
    # context module
    "Outcome",
    "WikiContext",
    # decode module
    "decode_parse_response",
    "decode_query_response",
    "decode_edit_response",
    # errors module
    "WikiError",
    "WikiApiError",
    "PageUnavailable",
    "NotLoggedIn",
    # models module
    "ParseRequest",
    "RequestMode",
    "ParseOk",
    "ApiError",
    "MissingPage",
    "InterwikiPage",
    "RenderedDocument",
    "PageSource",
    "EditResult",
    # panels module
    "PanelRegistry",
    "PanelSessionManager",
    "PreviewPanel",
    "PreviewSession",
    "open_viewer",
    # render module
    "assemble",
    "info_document",
    # settings module
    "WikiSettings",
]

__version__ = "1.0.0"
