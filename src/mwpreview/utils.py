# mwpreview/utils.py
# Title and page-text helpers shared by the workflows

from __future__ import annotations

import re
from typing import Optional, Tuple

# <%-- [PAGE_INFO] ... [END_PAGE_INFO] --%> header written above fetched pages.
PAGE_INFO_PATTERN = re.compile(r"<%--\s*\[PAGE_INFO\][\s\S]*?\[END_PAGE_INFO\]\s*--%>\s*")

INVALID_TITLE_CHARS = ("#", "<", ">", "[", "]", "|", "{", "}")


def strip_page_info(text: str) -> str:
    """
    Remove the first page-info header block from a document.

    The block only carries metadata for the editor and must not be sent to
    the parser.
    """
    return PAGE_INFO_PATTERN.sub("", text, count=1)


def clean_title(title: Optional[str]) -> str:
    """Trim a user supplied page title; underscores are kept as typed."""
    return (title or "").strip()


def validate_page_title(title: str, max_length: int = 255) -> Tuple[bool, Optional[str]]:
    """
    Validate a wiki page title.

    Args:
        title: The page title to validate
        max_length: Maximum allowed length (default: 255)

    Returns:
        Tuple of (is_valid, error_message):
        - On success: (True, None)
        - On failure: (False, error_message)
    """
    if not title or not title.strip():
        return False, "Page title is required"

    title = title.strip()

    if len(title) > max_length:
        return False, f"Page title must be {max_length} characters or less"

    # MediaWiki doesn't allow these characters in titles
    for char in INVALID_TITLE_CHARS:
        if char in title:
            return False, f"Page title contains invalid character: {char}"

    return True, None
