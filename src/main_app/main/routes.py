"""
main/routes.py - Main Blueprint Routes

Routes for the editor page and the live preview.
"""

from __future__ import annotations

from flask import Response, jsonify, render_template, request
from werkzeug.wrappers import Response as WerkzeugResponse

from extensions import limiter
from main_app import flash_outcome, wiki_context
from main_app.main import bp

# Type alias for route return values
RouteResponse = str | Response | WerkzeugResponse


def render_editor(wikitext: str = "", page_title: str = "", summary: str = "",
                  content_model: str | None = None) -> str:
    """
    Render the editor page.

    The live preview panel is embedded when one is open. The title field
    defaults to the page that was last read or written.
    """
    context = wiki_context()
    session = context.sessions.session
    live_panel = session.handle if session is not None and session.is_open else None
    return render_template(
        "index.html",
        wikitext=wikitext,
        page_title=page_title or context.last_page_title,
        summary=summary,
        content_model=content_model,
        live_panel=live_panel,
        logged_in=context.logged_in,
        host=context.settings.host,
    )


@bp.route("/health")
def health() -> Response:
    """
    Health check endpoint returning service status and metadata.

    Returns:
        JSON object with "status", "service", "version" and whether a wiki host is configured.
    """
    return jsonify({
        "status": "healthy",
        "service": "wikipreview",
        "version": "1.0.0",
        "wiki_configured": wiki_context().settings.has_host,
    })


@bp.route("/")
def index() -> str:
    """Render an empty editor."""
    return render_editor()


@bp.route("/preview", methods=["POST"])
@limiter.limit("60 per minute")
def preview() -> RouteResponse:
    """
    Render the submitted wikitext into the live preview panel and show the editor again.

    An empty document or a missing host is a silent no-op.
    """
    wikitext = request.form.get("wikitext", "")
    outcome = wiki_context().live_preview(wikitext)
    flash_outcome(outcome)
    return render_editor(
        wikitext=wikitext,
        page_title=request.form.get("title", ""),
        summary=request.form.get("summary", ""),
    )
