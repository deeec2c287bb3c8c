"""
wiki/routes.py - Wiki Blueprint Routes

Routes that read from and write to the configured wiki.
"""

from __future__ import annotations

from flask import Response, current_app, flash, redirect, render_template, request, url_for
from werkzeug.wrappers import Response as WerkzeugResponse

from extensions import limiter
from main_app import flash_outcome, wiki_context
from main_app.main.routes import render_editor
from main_app.wiki import bp
from mwpreview.utils import validate_page_title

# Type alias for route return values
RouteResponse = str | Response | WerkzeugResponse


def _checked_title(template: str) -> tuple[str, RouteResponse | None]:
    """
    Read and validate the "title" form field.

    Returns the title and, when it cannot be used, the response to send
    instead. An empty title just shows the form again without a message.
    """
    title = request.form.get("title", "").strip()
    if not title:
        return title, render_template(template, title=title)

    max_title = current_app.config.get("MAX_TITLE_LENGTH", 255)
    is_valid, error_msg = validate_page_title(title, max_length=max_title)
    if not is_valid:
        flash(error_msg, "error")
        return title, render_template(template, title=title)
    return title, None


@bp.route("/login", methods=["POST"])
def login() -> RouteResponse:
    """Log in with the configured credentials and return to the editor."""
    flash_outcome(wiki_context().login())
    return redirect(url_for("main.index"))


@bp.route("/logout", methods=["POST"])
def logout() -> RouteResponse:
    """Log out of the wiki and return to the editor."""
    flash_outcome(wiki_context().logout())
    return redirect(url_for("main.index"))


@bp.route("/read", methods=["GET", "POST"])
@limiter.limit("30 per minute")
def read_page() -> RouteResponse:
    """Fetch a page's source and open it in the editor."""
    if request.method == "GET":
        return render_template("read_page.html", title=wiki_context().last_page_title)

    title, response = _checked_title("read_page.html")
    if response is not None:
        return response

    outcome = wiki_context().read_page(title)
    flash_outcome(outcome)
    if outcome is None or outcome.source is None:
        return render_template("read_page.html", title=title)

    source = outcome.source
    return render_editor(
        wikitext=source.content,
        page_title=source.title,
        content_model=source.content_model,
    )


@bp.route("/write", methods=["POST"])
@limiter.limit("10 per minute")
def write_page() -> RouteResponse:
    """Save the editor's content as a new revision of the given page."""
    wikitext = request.form.get("wikitext")
    title = request.form.get("title", "")
    summary = request.form.get("summary", "")

    outcome = wiki_context().write_page(title, wikitext, summary)
    flash_outcome(outcome)
    return render_editor(wikitext=wikitext or "", page_title=title.strip(), summary=summary)


@bp.route("/view", methods=["GET", "POST"])
@limiter.limit("30 per minute")
def view_page() -> RouteResponse:
    """Render a wiki page into a new viewer panel and show it."""
    if request.method == "GET":
        return render_template("view_page.html", title="")

    title, response = _checked_title("view_page.html")
    if response is not None:
        return response

    outcome = wiki_context().view_page(title)
    flash_outcome(outcome)
    if outcome is None or outcome.panel is None:
        return render_template("view_page.html", title=title)
    return redirect(url_for("panels.show_panel", panel_id=outcome.panel.id))
