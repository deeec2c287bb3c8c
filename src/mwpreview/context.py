"""
mwpreview/context.py - WikiContext and the user-facing workflows

A WikiContext owns the state that lives between requests:
    - the optional logged-in mwclient site
    - the panel registry and the live-preview session manager
    - the page title last read, offered again when writing

Every workflow returns an :class:`Outcome` for the host to display, or None
when a precondition is missing (no host configured, empty input). Missing
preconditions are silent no-ops: nothing is shown and no panel is touched.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

import mwclient

from . import api
from .errors import NotLoggedIn, PageUnavailable, WikiApiError
from .models import ApiError, InterwikiPage, MissingPage, PageSource, ParseRequest, ParseResult
from .panels import DisplaySurface, PanelRegistry, PanelSessionManager, PreviewSession, open_viewer
from .render import PREVIEWER_LABEL, VIEWER_LABEL, assemble
from .settings import WikiSettings
from .utils import clean_title, strip_page_info

logger = logging.getLogger(__name__)

SiteFactory = Callable[[WikiSettings], mwclient.Site]


@dataclass
class Outcome:
    """Result of a workflow, shown to the user by the host."""
    category: Optional[str] = None
    message: Optional[str] = None
    panel: Optional[DisplaySurface] = None
    source: Optional[PageSource] = None
    stale: bool = False


class WikiContext:
    def __init__(self, settings: WikiSettings, site_factory: SiteFactory = api.connect,
                 registry: Optional[PanelRegistry] = None):
        self.settings = settings
        self.registry = registry if registry is not None else PanelRegistry(max_viewers=settings.max_viewers)
        self.sessions = PanelSessionManager(self._create_preview_surface)
        self.last_page_title = ""
        self.site_factory = site_factory
        self._site: Optional[mwclient.Site] = None
        self._lock = threading.Lock()

    def _create_preview_surface(self) -> DisplaySurface:
        return self.registry.create("previewer", PREVIEWER_LABEL,
                                    enable_scripts=self.settings.enable_javascript)

    # -- authenticated session -------------------------------------------

    @property
    def logged_in(self) -> bool:
        with self._lock:
            return self._site is not None

    def set_site(self, site: mwclient.Site) -> None:
        with self._lock:
            self._site = site

    def clear_site(self) -> Optional[mwclient.Site]:
        with self._lock:
            site, self._site = self._site, None
        return site

    def get_site(self) -> mwclient.Site:
        """The logged-in site if there is one, otherwise a fresh anonymous one."""
        with self._lock:
            site = self._site
        return site if site is not None else self.site_factory(self.settings)

    def login(self) -> Optional[Outcome]:
        if not self.settings.has_host:
            return None
        username, password = self.settings.username, self.settings.password
        if not username or not password:
            return Outcome("warning", "You have not filled in the user name or password, "
                                      "please go to the settings to edit them and try again.")

        site = self.site_factory(self.settings)
        error = api.login(site, username, password)
        if error:
            return Outcome("error", error)
        self.set_site(site)
        return Outcome("success", f'User "{username}" logged in to {self.settings.host}.')

    def logout(self) -> Outcome:
        with self._lock:
            site = self._site
        if site is None:
            return Outcome("warning", NotLoggedIn().args[0])
        error = api.logout(site)
        if error:
            return Outcome("error", error)
        self.clear_site()
        return Outcome("success", 'result: "Success"')

    # -- preview -----------------------------------------------------------

    def live_preview(self, source_text: Optional[str]) -> Optional[Outcome]:
        """
        Render the editor's text into the tracked live-preview panel.

        The panel shows a loading placeholder before the request goes out.
        A response that arrives after a newer preview was started is dropped.
        """
        if not self.settings.has_host or not source_text:
            return None
        text = strip_page_info(source_text)
        if not text:
            return None

        request = ParseRequest.for_text(text, want_head_html=self.settings.get_css)
        session = self.sessions.get_or_create_session()
        generation = self.sessions.next_generation()
        self.sessions.show_loading(session)

        result, error = api.request_parse(self.get_site(), request)
        return self._apply(session, result, error, PREVIEWER_LABEL, generation)

    def view_page(self, title: Optional[str]) -> Optional[Outcome]:
        """Render a wiki page into a new, untracked viewer panel."""
        title = clean_title(title)
        if not self.settings.has_host or not title:
            return None

        request = ParseRequest.for_title(title, want_head_html=self.settings.get_css,
                                         follow_redirects=self.settings.redirects)
        session = open_viewer(self.registry, VIEWER_LABEL, enable_scripts=self.settings.enable_javascript)
        self.sessions.show_loading(session)

        result, error = api.request_parse(self.get_site(), request)
        return self._apply(session, result, error, VIEWER_LABEL)

    def _apply(self, session: PreviewSession, result: Optional[ParseResult], error: Optional[str],
               label: str, generation: Optional[int] = None) -> Outcome:
        panel = session.handle
        if error is not None or result is None:
            if not self.sessions.show_error(session, generation=generation):
                return Outcome(panel=panel, stale=True)
            return Outcome("error", error, panel=panel)

        try:
            doc = assemble(result, self.settings.base_href, self.settings.preview_css_style, label)
        except WikiApiError as e:
            if not self.sessions.show_error(session, generation=generation):
                return Outcome(panel=panel, stale=True)
            return Outcome("error", str(e), panel=panel)
        except PageUnavailable as e:
            # The panel keeps whatever it showed before.
            if not self.sessions.is_current(generation):
                return Outcome(panel=panel, stale=True)
            return Outcome(e.category, str(e), panel=panel)

        if not self.sessions.show_rendered(session, doc, generation=generation):
            logger.info("dropped stale preview response (generation %s)", generation)
            return Outcome(panel=panel, stale=True)
        return Outcome("success", None, panel=panel)

    # -- page source -------------------------------------------------------

    def read_page(self, title: Optional[str]) -> Optional[Outcome]:
        """Fetch a page's source so it can be opened in the editor."""
        title = clean_title(title)
        if not self.settings.has_host or not title:
            return None

        result, error = api.request_page_source(self.get_site(), title,
                                                follow_redirects=self.settings.redirects)
        if error is not None or result is None:
            return Outcome("error", error)
        if isinstance(result, ApiError):
            return Outcome("error", result.message)
        if isinstance(result, (MissingPage, InterwikiPage)):
            return Outcome("warning", result.message)

        self.last_page_title = result.title
        return Outcome("info", result.message, source=result)

    def write_page(self, title: Optional[str], content: Optional[str],
                   summary: Optional[str] = "") -> Optional[Outcome]:
        """Save ``content`` as a new revision. Requires a logged-in site."""
        if content is None:
            return Outcome("warning", "There is no active text editor.")
        with self._lock:
            site = self._site
        if site is None:
            return Outcome("warning", NotLoggedIn().args[0])
        title = clean_title(title)
        if not title:
            return None

        result, error = api.edit_page(site, title, content, (summary or "") + self.settings.summary_suffix)
        if error is not None or result is None:
            return Outcome("error", error)
        self.last_page_title = result.title or title
        if result.nochange:
            return Outcome("warning", result.message)
        return Outcome("success", result.message)
