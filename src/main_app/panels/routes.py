"""
panels/routes.py - Panels Blueprint Routes

Each panel is shown as a page holding a sandboxed iframe. The iframe loads
the panel's raw HTML from the content route. Scripts only run in it when
WIKI_ENABLE_JAVASCRIPT is set.
"""

from __future__ import annotations

from flask import Response, abort, redirect, render_template, url_for
from werkzeug.wrappers import Response as WerkzeugResponse

from main_app import wiki_context
from main_app.panels import bp
from mwpreview import PreviewPanel

# Type alias for route return values
RouteResponse = str | Response | WerkzeugResponse


def _get_panel(panel_id: str) -> PreviewPanel:
    panel = wiki_context().registry.get(panel_id)
    if panel is None:
        abort(404)
    return panel


@bp.route("/live")
def live_panel() -> RouteResponse:
    """Redirect to the live preview panel, or to the editor when none is open."""
    session = wiki_context().sessions.session
    if session is None or not session.is_open:
        return redirect(url_for("main.index"))
    return redirect(url_for("panels.show_panel", panel_id=session.handle.id))


@bp.route("/<panel_id>")
def show_panel(panel_id: str) -> str:
    """Render the frame page of a panel."""
    panel = _get_panel(panel_id)
    return render_template("panel.html", panel=panel)


@bp.route("/<panel_id>/content")
def panel_content(panel_id: str) -> Response:
    """
    Serve the HTML document currently held by a panel.

    Without WIKI_ENABLE_JAVASCRIPT a Content-Security-Policy forbids scripts,
    in addition to the iframe sandbox.
    """
    panel = _get_panel(panel_id)
    response = Response(panel.html, mimetype="text/html")
    if not panel.enable_scripts:
        response.headers["Content-Security-Policy"] = "script-src 'none'"
    return response


@bp.route("/<panel_id>/close", methods=["POST"])
def close_panel(panel_id: str) -> WerkzeugResponse:
    """Close a panel as the user. A closed live preview is recreated by the next preview."""
    _get_panel(panel_id).close()
    return redirect(url_for("main.index"))
