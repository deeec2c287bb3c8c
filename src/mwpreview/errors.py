# mwpreview/errors.py
# Exceptions raised while talking to the wiki or rendering its responses

from __future__ import annotations


class WikiError(Exception):
    """Base class for every error surfaced to the user by mwpreview."""

    category = "error"


class WikiApiError(WikiError):
    """The wiki answered with an ``error`` object."""

    def __init__(self, code: str, info: str):
        self.code = code
        self.info = info
        super().__init__(f"ErrorCode:{code}| ErrorInfo:{info}")


class PageUnavailable(WikiError):
    """
    Warning-class failure: the requested page is missing, invalid or lives on
    another wiki. Nothing is rendered for it.
    """

    category = "warning"


class NotLoggedIn(WikiError):
    category = "warning"

    def __init__(self, message: str = "You are not logged in. Please log in and try again."):
        super().__init__(message)
