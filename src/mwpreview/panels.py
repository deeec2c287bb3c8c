"""
mwpreview/panels.py - Display surfaces and the Panel Session Manager

A display surface is anything that can show an HTML document under a title
and tell its owner when the user closed it. The web host serves
:class:`PreviewPanel` objects out of a :class:`PanelRegistry`.

The live preview reuses one tracked surface, held by
:class:`PanelSessionManager`. The page viewer opens a fresh, untracked
surface for every request (see :func:`open_viewer`).

Thread Safety:
    Flask may serve requests from several threads. The tracked session and
    the request generation counter are only touched while holding the
    manager's lock. The lock is never held across a network round trip.
"""

from __future__ import annotations

import logging
import threading
import uuid
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Callable, Dict, List, Optional

from .models import RenderedDocument
from .render import ERROR_MESSAGE, LOADING_MESSAGE, info_document

logger = logging.getLogger(__name__)

DEFAULT_MAX_VIEWERS = 20

CloseHandler = Callable[["DisplaySurface"], None]


class DisplaySurface(ABC):
    """Externally owned surface that shows one HTML document."""

    html: str
    title: str

    @property
    @abstractmethod
    def closed(self) -> bool:
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the surface as if the user dismissed it."""

    @abstractmethod
    def on_closed(self, handler: CloseHandler) -> None:
        """Register ``handler`` to run once when the surface closes."""


class PreviewPanel(DisplaySurface):
    """In-memory surface rendered by the web host inside a sandboxed iframe."""

    def __init__(self, kind: str, title: str, enable_scripts: bool = False):
        self.id = uuid.uuid4().hex
        self.kind = kind
        self.title = title
        self.html = ""
        self.enable_scripts = enable_scripts
        self._closed = False
        self._handlers: List[CloseHandler] = []

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        handlers, self._handlers = self._handlers, []
        for handler in handlers:
            handler(self)

    def on_closed(self, handler: CloseHandler) -> None:
        self._handlers.append(handler)

    def __repr__(self) -> str:
        return f"PreviewPanel(id={self.id!r}, kind={self.kind!r}, title={self.title!r}, closed={self._closed})"


class PanelRegistry:
    """
    Open panels by id. Closed panels are forgotten.

    Panels created with ``evictable=True`` are the untracked page viewers.
    At most ``max_viewers`` of them stay open; creating one more closes the
    oldest.
    """

    def __init__(self, max_viewers: int = DEFAULT_MAX_VIEWERS) -> None:
        self.max_viewers = max(1, max_viewers)
        self._panels: Dict[str, PreviewPanel] = {}
        self._viewers: "OrderedDict[str, PreviewPanel]" = OrderedDict()
        self._lock = threading.Lock()

    def create(self, kind: str, title: str, enable_scripts: bool = False,
               evictable: bool = False) -> PreviewPanel:
        panel = PreviewPanel(kind, title, enable_scripts=enable_scripts)
        panel.on_closed(self._forget)
        evicted: List[PreviewPanel] = []
        with self._lock:
            self._panels[panel.id] = panel
            if evictable:
                self._viewers[panel.id] = panel
                while len(self._viewers) > self.max_viewers:
                    _, oldest = self._viewers.popitem(last=False)
                    evicted.append(oldest)
        # close() runs the handlers, which take the lock again
        for oldest in evicted:
            logger.info("closing viewer panel %s to stay within %d viewers", oldest.id, self.max_viewers)
            oldest.close()
        return panel

    def get(self, panel_id: str) -> Optional[PreviewPanel]:
        with self._lock:
            return self._panels.get(panel_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._panels)

    def _forget(self, surface: DisplaySurface) -> None:
        panel_id = getattr(surface, "id", None)
        with self._lock:
            self._panels.pop(panel_id, None)
            self._viewers.pop(panel_id, None)


class PreviewSession:
    """The reusable live-preview surface."""

    def __init__(self, handle: DisplaySurface):
        self.handle = handle

    @property
    def is_open(self) -> bool:
        return not self.handle.closed


class PanelSessionManager:
    """
    Tracks at most one live-preview session and applies renders to it.

    Each preview request takes a generation number from
    :meth:`next_generation`. ``show_rendered``/``show_error`` calls that carry
    an older generation are dropped, so a slow response can never overwrite
    the result of a newer request.
    """

    def __init__(self, surface_factory: Callable[[], DisplaySurface]):
        self._surface_factory = surface_factory
        self._session: Optional[PreviewSession] = None
        self._generation = 0
        self._lock = threading.RLock()

    @property
    def session(self) -> Optional[PreviewSession]:
        with self._lock:
            return self._session

    def get_or_create_session(self) -> PreviewSession:
        with self._lock:
            if self._session is not None and self._session.is_open:
                return self._session
            session = PreviewSession(self._surface_factory())
            session.handle.on_closed(lambda _surface: self.on_session_closed_by_user(session))
            self._session = session
            return session

    def on_session_closed_by_user(self, session: PreviewSession) -> None:
        with self._lock:
            if self._session is session:
                self._session = None

    def next_generation(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def is_current(self, generation: Optional[int]) -> bool:
        with self._lock:
            return generation is None or generation == self._generation

    def show_loading(self, session: PreviewSession) -> None:
        with self._lock:
            session.handle.html = info_document(LOADING_MESSAGE)

    def show_rendered(self, session: PreviewSession, doc: RenderedDocument,
                      generation: Optional[int] = None) -> bool:
        """Replace the session's content and title. Returns False if the write was dropped."""
        with self._lock:
            if not self.is_current(generation):
                return False
            session.handle.html = doc.html
            session.handle.title = doc.title
            return True

    def show_error(self, session: PreviewSession, message: str = ERROR_MESSAGE,
                   generation: Optional[int] = None) -> bool:
        """Replace the session's content with an error placeholder; the title is kept."""
        with self._lock:
            if not self.is_current(generation):
                return False
            session.handle.html = info_document(message)
            return True


def open_viewer(registry: PanelRegistry, title: str, enable_scripts: bool = False,
                kind: str = "pageViewer") -> PreviewSession:
    """
    Open an independent surface for the page viewer. It is never tracked or
    reused, and the registry may close it once newer viewers push it out.
    """
    return PreviewSession(registry.create(kind, title, enable_scripts=enable_scripts, evictable=True))
