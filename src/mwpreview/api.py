# mwpreview/api.py
# Calls against the MediaWiki Action API through mwclient

from __future__ import annotations

import logging
from typing import Optional, Tuple

import mwclient
import requests
from mwclient.errors import APIError, InvalidResponse, LoginError, MwClientError

from .decode import decode_edit_response, decode_parse_response, decode_query_response
from .models import ApiError, EditResult, ParseRequest, ParseResult, QueryResult, RequestMode
from .settings import WikiSettings

logger = logging.getLogger(__name__)

# Following Wikimedia's User-Agent policy: https://meta.wikimedia.org/wiki/User-Agent_policy
USER_AGENT = "WikiPreview/1.0 (wikitext preview and page exchange for MediaWiki sites)"


def connect(settings: WikiSettings) -> mwclient.Site:
    """
    Create an anonymous site handle for the configured wiki.

    No request is sent here. Site information is only fetched when logging in.
    """
    path, ext = settings.script_path()
    return mwclient.Site(
        settings.host,
        path=path,
        ext=ext,
        scheme=settings.scheme,
        clients_useragent=USER_AGENT,
        max_retries=0,
        do_init=False,
        connection_options={"timeout": settings.request_timeout},
    )


def describe_failure(exc: Exception) -> str:
    """Map a transport or client exception to a message that is safe to show."""
    if isinstance(exc, requests.exceptions.Timeout):
        return "Request timed out. Please try again."
    if isinstance(exc, requests.exceptions.ConnectionError):
        return "Failed to connect to the wiki API. Please check the host and your internet connection."
    if isinstance(exc, requests.exceptions.HTTPError):
        response = exc.response
        status_code = response.status_code if response is not None else "unknown"
        if status_code == 429:
            return "Too many requests. Please wait a moment and try again."
        return f"The wiki API returned an error (HTTP {status_code}). Please try again later."
    if isinstance(exc, requests.exceptions.RequestException):
        return "Failed to reach the wiki API. Please try again."
    if isinstance(exc, (InvalidResponse, ValueError)):
        return "Received invalid response from the wiki API. Please try again."
    if isinstance(exc, APIError):
        return f"ErrorCode:{exc.code}| ErrorInfo:{exc.info}"
    if isinstance(exc, MwClientError):
        return f"Wiki client error: {exc}"
    return "An unexpected error occurred. Please try again."


def request_parse(site: mwclient.Site, request: ParseRequest) -> Tuple[Optional[ParseResult], Optional[str]]:
    """
    Send a parse request and decode the answer.

    Returns:
        Tuple of (result, error_message):
        - On a response: (decoded result, None). API errors are part of the result.
        - On transport failure: (None, error_message)
    """
    params = request.to_params()
    logger.debug("parse request: mode=%s prop=%s", request.mode.value, params["prop"])
    try:
        raw = site.raw_api("parse", "POST", retry_on_error=False, **params)
    except (requests.exceptions.RequestException, MwClientError, ValueError) as e:
        logger.warning("parse request failed: %r", e)
        return None, describe_failure(e)
    requested_title = request.title_or_text if request.mode is RequestMode.BY_TITLE else None
    return decode_parse_response(raw, requested_title=requested_title), None


def request_page_source(site: mwclient.Site, title: str,
                        follow_redirects: bool = False) -> Tuple[Optional[QueryResult], Optional[str]]:
    """Fetch the latest revision content of ``title``."""
    params = {
        "prop": "revisions",
        "rvprop": "content|ids",
        "rvslots": "*",
        "titles": title,
    }
    if follow_redirects:
        params["redirects"] = "1"
    logger.debug("query request: titles=%s", title)
    try:
        raw = site.raw_api("query", "GET", retry_on_error=False, **params)
    except (requests.exceptions.RequestException, MwClientError, ValueError) as e:
        logger.warning("query request failed: %r", e)
        return None, describe_failure(e)
    return decode_query_response(raw, requested_title=title), None


def edit_page(site: mwclient.Site, title: str, content: str,
              summary: str) -> Tuple[Optional[EditResult], Optional[str]]:
    """Save ``content`` as a new revision of ``title``."""
    try:
        page = site.pages[title]
        raw = page.edit(content, summary=summary)
    except APIError as e:
        return None, ApiError(code=str(e.code), info=str(e.info)).message
    except (requests.exceptions.RequestException, MwClientError, ValueError) as e:
        logger.warning("edit of %r failed: %r", title, e)
        return None, describe_failure(e)

    result = decode_edit_response(raw)
    if isinstance(result, ApiError):
        return None, result.message
    logger.info("edited %r: result=%s nochange=%s", result.title, result.result, result.nochange)
    return result, None


def login(site: mwclient.Site, username: str, password: str) -> Optional[str]:
    """Log ``site`` in. Returns an error message, or None on success."""
    try:
        site.login(username, password)
    except LoginError as e:
        info = getattr(e, "info", None) or getattr(e, "code", None) or str(e)
        return f"Login failed: {info}"
    except (requests.exceptions.RequestException, MwClientError, ValueError) as e:
        return describe_failure(e)
    logger.info("logged in to %s as %s", site.host, username)
    return None


def logout(site: mwclient.Site) -> Optional[str]:
    """End the session held by ``site``. Returns an error message, or None on success."""
    try:
        site.api("logout", "POST", token=site.get_token("csrf"))
    except (requests.exceptions.RequestException, MwClientError, ValueError) as e:
        return describe_failure(e)
    return None
