# mwpreview/settings.py
# Wiki connection and preview settings, read from the Flask config

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

DEFAULT_PREVIEW_CSS = "body { background-color: #ffffff; color: #202122; }"


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


@dataclass(frozen=True)
class WikiSettings:
    """Settings shared by every workflow in a WikiContext."""
    host: str = ""
    transfer_protocol: str = "https://"
    article_path: str = "/wiki/"
    api_path: str = "/w/api.php"
    enable_javascript: bool = False
    get_css: bool = False
    preview_css_style: str = DEFAULT_PREVIEW_CSS
    redirects: bool = True
    username: Optional[str] = None
    password: Optional[str] = None
    request_timeout: int = 30
    summary_suffix: str = " // Edit via WikiPreview"
    max_viewers: int = 20

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "WikiSettings":
        """Build settings from ``WIKI_*`` keys, falling back to the defaults above."""
        defaults = cls()
        return cls(
            host=(config.get("WIKI_HOST") or "").strip(),
            transfer_protocol=config.get("WIKI_TRANSFER_PROTOCOL") or defaults.transfer_protocol,
            article_path=config.get("WIKI_ARTICLE_PATH") or defaults.article_path,
            api_path=config.get("WIKI_API_PATH") or defaults.api_path,
            enable_javascript=_as_bool(config.get("WIKI_ENABLE_JAVASCRIPT", defaults.enable_javascript)),
            get_css=_as_bool(config.get("WIKI_GET_CSS", defaults.get_css)),
            preview_css_style=config.get("WIKI_PREVIEW_CSS_STYLE", defaults.preview_css_style) or "",
            redirects=_as_bool(config.get("WIKI_REDIRECTS", defaults.redirects)),
            username=config.get("WIKI_USERNAME") or None,
            password=config.get("WIKI_PASSWORD") or None,
            request_timeout=int(config.get("WIKI_REQUEST_TIMEOUT", defaults.request_timeout)),
            summary_suffix=config.get("WIKI_SUMMARY_SUFFIX", defaults.summary_suffix),
            max_viewers=int(config.get("WIKI_MAX_VIEWERS", defaults.max_viewers)),
        )

    @property
    def has_host(self) -> bool:
        return bool(self.host)

    @property
    def base_href(self) -> str:
        """Article URL prefix that relative links in rendered HTML resolve against."""
        return f"{self.transfer_protocol}{self.host}{self.article_path}"

    @property
    def scheme(self) -> str:
        return self.transfer_protocol.split(":", 1)[0] or "https"

    def script_path(self) -> Tuple[str, str]:
        """
        Split ``api_path`` into the script directory and extension that
        mwclient expects, e.g. ``/w/api.php`` -> (``/w/``, ``.php``).
        """
        directory, _, filename = self.api_path.rpartition("/")
        _, dot, ext = filename.partition(".")
        return f"{directory}/", f"{dot}{ext}"
