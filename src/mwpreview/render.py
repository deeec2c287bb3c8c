# mwpreview/render.py
# HTML Assembler: decoded parse results -> standalone HTML documents

from __future__ import annotations

import re
from typing import Final

from markupsafe import escape

from .errors import PageUnavailable, WikiApiError
from .models import ApiError, InterwikiPage, MissingPage, ParseResult, RenderedDocument

PREVIEWER_LABEL: Final[str] = "WikitextPreviewer"
VIEWER_LABEL: Final[str] = "WikiViewer"

LOADING_MESSAGE: Final[str] = "Loading..."
ERROR_MESSAGE: Final[str] = "Error"

# First opening <head> tag, with or without attributes.
HEAD_TAG_PATTERN: Final[re.Pattern[str]] = re.compile(r"<head(?:\s[^>]*)?>", re.IGNORECASE)

DOCUMENT_END: Final[str] = "</body></html>"


def info_document(message: str) -> str:
    """Minimal placeholder document showing a single heading."""
    return f"<!DOCTYPE html><html><body><h2>{escape(message)}</h2></body></html>"


def base_tag(base_url: str) -> str:
    return f'<base href="{escape(base_url)}" />'


def style_block(style_css: str) -> str:
    return f"<style>{style_css}</style>"


def build_head(head_html: str | None, base_url: str, style_css: str) -> str:
    """
    Return the document prefix up to and including the opening of the body.

    When the wiki supplied its own head HTML, the base tag and style block
    are injected right after the first ``<head>`` tag. Otherwise a minimal
    head holding only those two elements is synthesized.
    """
    injected = base_tag(base_url) + style_block(style_css)
    if head_html:
        match = HEAD_TAG_PATTERN.search(head_html)
        if match:
            return head_html[:match.end()] + injected + head_html[match.end():]
    return f"<!DOCTYPE html><html><head>{injected}</head><body>"


def panel_title(viewer_label: str, display_title: str | None) -> str:
    if display_title:
        return f"{viewer_label}: {display_title}"
    return viewer_label


def assemble(result: ParseResult, base_url: str, style_css: str,
             viewer_label: str = PREVIEWER_LABEL) -> RenderedDocument:
    """
    Assemble a decoded parse result into a displayable document.

    Args:
        result: Output of :func:`mwpreview.decode.decode_parse_response`.
        base_url: Article URL prefix used for the ``<base>`` tag.
        style_css: CSS injected into a ``<style>`` block.
        viewer_label: Prefix of the panel title.

    Returns:
        The rendered document. Identical inputs give identical output.

    Raises:
        WikiApiError: ``result`` is an API error.
        PageUnavailable: ``result`` is a missing page or an interwiki target.
    """
    if isinstance(result, ApiError):
        raise WikiApiError(result.code, result.info)
    if isinstance(result, (MissingPage, InterwikiPage)):
        raise PageUnavailable(result.message)

    html = build_head(result.head_html, base_url, style_css) + (result.body_html or "")
    if result.categories_html:
        html += "<hr />" + result.categories_html
    html += DOCUMENT_END

    return RenderedDocument(html=html, title=panel_title(viewer_label, result.display_title))
