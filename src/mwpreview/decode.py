"""
mwpreview/decode.py - Response Decoder

Turns the semi-structured JSON returned by the MediaWiki Action API into the
tagged result types of :mod:`mwpreview.models`.

Both JSON format versions are accepted:

    formatversion=1   {"parse": {"text": {"*": "<p>Hi</p>"}, "displaytitle": "Hi"}}
    formatversion=2   {"parse": {"text": "<p>Hi</p>", "displaytitle": "Hi"}}

Every decoder here is total. Missing or malformed nodes degrade to ``None``
and never raise, so callers only have to branch on the returned variant.

Precedence, highest first:
    1. a top-level ``error`` object -> ApiError
    2. an interwiki target         -> InterwikiPage
    3. a missing or invalid page   -> MissingPage
    4. anything else               -> ParseOk / PageSource / EditResult
"""

from __future__ import annotations

import json
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from .models import (
    ApiError,
    EditResult,
    InterwikiPage,
    MissingPage,
    PageSource,
    ParseOk,
    ParseResult,
    QueryResult,
    SoftFailure,
)

RawResponse = Union[Mapping[str, Any], str, bytes, None]


def _load(raw: RawResponse) -> Mapping[str, Any]:
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            return {}
    if not isinstance(raw, Mapping):
        return {}
    return raw


def _node(value: Any, *path: Union[str, int]) -> Any:
    """Walk ``path`` through nested mappings and lists, returning None on any gap."""
    for key in path:
        if isinstance(value, Mapping):
            value = value.get(key)
        elif isinstance(value, list) and isinstance(key, int) and -len(value) <= key < len(value):
            value = value[key]
        else:
            return None
    return value


def _text(value: Any) -> Optional[str]:
    """Read a string that may be wrapped in a formatversion=1 ``{"*": ...}`` node."""
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        for key in ("*", "content"):
            inner = value.get(key)
            if isinstance(inner, str):
                return inner
    return None


def _str(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (Mapping, list)):
        return None
    return str(value)


def _int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _flag(node: Any, key: str) -> bool:
    """formatversion=1 marks flags with an empty string, formatversion=2 with true."""
    return isinstance(node, Mapping) and key in node and node[key] is not False and node[key] is not None


def _entries(value: Any) -> List[Mapping[str, Any]]:
    """Normalize a list-or-dict-of-objects node to a list of mappings."""
    if isinstance(value, Mapping):
        value = list(value.values())
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def _pair(value: Any) -> Optional[Tuple[str, str]]:
    entries = _entries(value)
    if not entries:
        return None
    source, target = _str(entries[0].get("from")), _str(entries[0].get("to"))
    if source is None or target is None:
        return None
    return source, target


def _api_error(data: Mapping[str, Any]) -> Optional[ApiError]:
    error = data.get("error")
    if not isinstance(error, Mapping):
        return None
    return ApiError(
        code=_str(error.get("code")) or "unknown",
        info=_str(error.get("info")) or _str(error.get("*")) or "",
    )


def _soft_failure(nodes: Iterable[Any], fallback_title: Optional[str] = None) -> Optional[SoftFailure]:
    """Look for an interwiki target first, then for a missing or invalid page."""
    nodes = [node for node in nodes if isinstance(node, Mapping)]

    for node in nodes:
        interwiki = _entries(node.get("interwiki"))
        if interwiki:
            return InterwikiPage(title=_str(interwiki[0].get("title")), space=_str(interwiki[0].get("iw")))

    for node in nodes:
        candidates = [node] + _entries(node.get("pages"))
        for page in candidates:
            if _flag(page, "missing") or _flag(page, "invalid"):
                return MissingPage(
                    title=_str(page.get("title")) or fallback_title,
                    reason=_str(page.get("invalidreason")),
                )
    return None


def decode_parse_response(raw: RawResponse, requested_title: Optional[str] = None) -> ParseResult:
    """
    Decode an ``action=parse`` response.

    Args:
        raw: The response as a mapping or as JSON text.
        requested_title: Title that was asked for. Used for a missing page
            whose response carries no title of its own.

    Returns:
        One of ParseOk, ApiError, MissingPage or InterwikiPage. Never raises.
    """
    data = _load(raw)

    error = _api_error(data)
    if error is not None:
        return error

    parse = data.get("parse")
    failure = _soft_failure([parse, data.get("query")], fallback_title=requested_title)
    if failure is not None:
        return failure

    return ParseOk(
        display_title=_text(_node(parse, "displaytitle")),
        body_html=_text(_node(parse, "text")),
        head_html=_text(_node(parse, "headhtml")),
        categories_html=_text(_node(parse, "categorieshtml")),
    )


def decode_query_response(raw: RawResponse, requested_title: Optional[str] = None) -> QueryResult:
    """
    Decode an ``action=query&prop=revisions`` response to the page source.

    A page without any revision content is reported as missing.
    """
    data = _load(raw)

    error = _api_error(data)
    if error is not None:
        return error

    query = data.get("query")
    failure = _soft_failure([query], fallback_title=requested_title)
    if failure is not None:
        return failure

    pages = _entries(_node(query, "pages"))
    if not pages:
        return MissingPage(title=requested_title)
    page = pages[0]
    title = _str(page.get("title")) or requested_title or ""

    revision = _node(page, "revisions", 0)
    slot = _node(revision, "slots", "main")
    content = _text(slot) if slot is not None else _text(revision)
    if content is None:
        return MissingPage(title=title)

    content_model = _str(_node(slot, "contentmodel")) or _str(_node(revision, "contentmodel"))

    return PageSource(
        title=title,
        content=content,
        content_model=content_model,
        page_id=_int(page.get("pageid")),
        normalized=_pair(_node(query, "normalized")),
        redirect=_pair(_node(query, "redirects")),
    )


def decode_edit_response(raw: RawResponse) -> Union[EditResult, ApiError]:
    """Decode the ``edit`` object of an edit response (or the bare object itself)."""
    data = _load(raw)

    error = _api_error(data)
    if error is not None:
        return error

    edit = data.get("edit") if isinstance(data.get("edit"), Mapping) else data
    return EditResult(
        title=_str(edit.get("title")),
        result=_str(edit.get("result")),
        page_id=_int(edit.get("pageid")),
        content_model=_str(edit.get("contentmodel")),
        old_revid=_int(edit.get("oldrevid")),
        new_revid=_int(edit.get("newrevid")),
        timestamp=_str(edit.get("newtimestamp")),
        nochange=_flag(edit, "nochange"),
    )
