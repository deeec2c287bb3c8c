# mwpreview/models.py
# Dataclasses for parse requests and decoded API results

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union


class RequestMode(str, Enum):
    """Which parameter of the parse action carries the input."""
    BY_TITLE = "page"
    BY_RAW_TEXT = "text"


WIKITEXT_MODEL = "wikitext"


@dataclass(frozen=True)
class ParseRequest:
    """Parameters sent to the wiki's ``action=parse`` endpoint."""
    mode: RequestMode
    title_or_text: str
    want_display_title: bool = True
    want_categories_html: bool = True
    want_head_html: bool = False
    follow_redirects: bool = False
    content_model: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.title_or_text:
            raise ValueError("A parse request needs a title or some text")
        if self.content_model is not None and self.mode is not RequestMode.BY_RAW_TEXT:
            raise ValueError("content_model only applies to raw text requests")

    @classmethod
    def for_text(cls, text: str, want_head_html: bool = False,
                 content_model: str = WIKITEXT_MODEL) -> "ParseRequest":
        return cls(
            mode=RequestMode.BY_RAW_TEXT,
            title_or_text=text,
            want_head_html=want_head_html,
            content_model=content_model,
        )

    @classmethod
    def for_title(cls, title: str, want_head_html: bool = False,
                  follow_redirects: bool = False) -> "ParseRequest":
        return cls(
            mode=RequestMode.BY_TITLE,
            title_or_text=title,
            want_head_html=want_head_html,
            follow_redirects=follow_redirects,
        )

    @property
    def prop(self) -> str:
        props = ["text"]
        if self.want_display_title:
            props.append("displaytitle")
        if self.want_categories_html:
            props.append("categorieshtml")
        if self.want_head_html:
            props.append("headhtml")
        return "|".join(props)

    def to_params(self) -> Dict[str, str]:
        """
        Build the keyword arguments for the parse action.

        Raw text requests pre-save-transform the text and hide section edit
        links. Title requests only ask the server to follow redirects when
        ``follow_redirects`` is set.
        """
        params = {"prop": self.prop}
        if self.mode is RequestMode.BY_RAW_TEXT:
            params["text"] = self.title_or_text
            params["contentmodel"] = self.content_model or WIKITEXT_MODEL
            params["pst"] = "1"
            params["disableeditsection"] = "1"
        else:
            params["page"] = self.title_or_text
            if self.follow_redirects:
                params["redirects"] = "1"
        return params


@dataclass(frozen=True)
class ParseOk:
    display_title: Optional[str] = None
    body_html: Optional[str] = None
    head_html: Optional[str] = None
    categories_html: Optional[str] = None


@dataclass(frozen=True)
class ApiError:
    code: str
    info: str

    @property
    def message(self) -> str:
        return f"ErrorCode:{self.code}| ErrorInfo:{self.info}"


@dataclass(frozen=True)
class MissingPage:
    title: Optional[str]
    reason: Optional[str] = None

    @property
    def message(self) -> str:
        return f'The page "{self.title}" you are looking for does not exist.' + (self.reason or "")


@dataclass(frozen=True)
class InterwikiPage:
    title: Optional[str]
    space: Optional[str]

    @property
    def message(self) -> str:
        return (
            f'Interwiki page "{self.title}" in space "{self.space}" are currently not supported. '
            "Please try to modify host."
        )


ParseResult = Union[ParseOk, ApiError, MissingPage, InterwikiPage]
SoftFailure = Union[MissingPage, InterwikiPage]


@dataclass(frozen=True)
class RenderedDocument:
    """A complete HTML document and the title of the panel showing it."""
    html: str
    title: str


@dataclass(frozen=True)
class PageSource:
    """Source of a page as returned by ``prop=revisions``."""
    title: str
    content: str
    content_model: Optional[str] = None
    page_id: Optional[int] = None
    normalized: Optional[Tuple[str, str]] = None
    redirect: Optional[Tuple[str, str]] = None

    @property
    def message(self) -> str:
        text = f'Opened page "{self.title}" (page ID:"{self.page_id}") with Model {self.content_model}.'
        if self.normalized:
            text += f' Normalized: "{self.normalized[0]}" => "{self.normalized[1]}".'
        if self.redirect:
            text += f' Redirect: "{self.redirect[0]}" => "{self.redirect[1]}"'
        return text


QueryResult = Union[PageSource, ApiError, MissingPage, InterwikiPage]


@dataclass(frozen=True)
class EditResult:
    title: Optional[str]
    result: Optional[str]
    page_id: Optional[int] = None
    content_model: Optional[str] = None
    old_revid: Optional[int] = None
    new_revid: Optional[int] = None
    timestamp: Optional[str] = None
    nochange: bool = False

    @property
    def message(self) -> str:
        if self.nochange:
            return (
                f'No changes have occurred. Edit page "{self.title}" (Page ID: "{self.page_id}") '
                f'action status is "{self.result}" with Content Model "{self.content_model}".'
            )
        return (
            f'Edit page "{self.title}" (Page ID: "{self.page_id}") action status is "{self.result}" '
            f'with Content Model "{self.content_model}" '
            f'(Version: "{self.old_revid}" => "{self.new_revid}", Time: "{self.timestamp}").'
        )
