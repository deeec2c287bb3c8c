"""
tests/test_routes.py - Tests for the main, wiki and panels blueprints

The wiki is replaced by the FakeSite from conftest.py.
"""

from __future__ import annotations

import requests

from conftest import parse_response


def _context(app):
    return app.extensions["wiki_context"]


class TestMainRoutes:
    """Tests for the editor and live preview routes."""

    def test_index(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert b"wikitext" in response.data
        assert b"<iframe" not in response.data

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.get_json() == {
            "status": "healthy",
            "service": "wikipreview",
            "version": "1.0.0",
            "wiki_configured": True,
        }

    def test_preview_embeds_live_panel(self, app, client):
        response = client.post("/preview", data={"wikitext": "'''Hi'''", "title": "Sandbox"})
        assert response.status_code == 200

        panel = _context(app).sessions.session.handle
        assert f"/panels/{panel.id}/content".encode() in response.data
        assert b"WikitextPreviewer: Hi" in response.data
        assert b"'''Hi'''" in response.data or b"&#39;&#39;&#39;Hi&#39;&#39;&#39;" in response.data

    def test_preview_iframe_sandbox_blocks_scripts(self, client):
        response = client.post("/preview", data={"wikitext": "x"})
        assert b'sandbox=""' in response.data

    def test_preview_empty_text_is_silent(self, app, client):
        response = client.post("/preview", data={"wikitext": ""})
        assert response.status_code == 200
        assert _context(app).sessions.session is None
        assert b'class="flash' not in response.data

    def test_preview_api_error_flashes(self, client, fake_site):
        fake_site.responses["parse"] = {"error": {"code": "badtoken", "info": "Invalid token"}}
        response = client.post("/preview", data={"wikitext": "x"})
        assert b"ErrorCode:badtoken| ErrorInfo:Invalid token" in response.data

    def test_security_headers(self, client):
        response = client.get("/")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "SAMEORIGIN"


class TestPanelRoutes:
    """Tests for the panels blueprint."""

    def test_content_serves_panel_html(self, app, client):
        client.post("/preview", data={"wikitext": "x"})
        panel = _context(app).sessions.session.handle

        response = client.get(f"/panels/{panel.id}/content")
        assert response.status_code == 200
        assert response.mimetype == "text/html"
        assert response.get_data(as_text=True) == panel.html
        assert response.headers["Content-Security-Policy"] == "script-src 'none'"

    def test_show_panel(self, app, client):
        client.post("/preview", data={"wikitext": "x"})
        panel = _context(app).sessions.session.handle
        response = client.get(f"/panels/{panel.id}")
        assert response.status_code == 200
        assert b"WikitextPreviewer: Hi" in response.data

    def test_unknown_panel(self, client):
        assert client.get("/panels/doesnotexist").status_code == 404
        assert client.get("/panels/doesnotexist/content").status_code == 404

    def test_live_redirect(self, app, client):
        response = client.get("/panels/live")
        assert response.status_code == 302
        assert response.location.endswith("/")

        client.post("/preview", data={"wikitext": "x"})
        panel = _context(app).sessions.session.handle
        response = client.get("/panels/live")
        assert response.location.endswith(f"/panels/{panel.id}")

    def test_close_live_panel(self, app, client):
        client.post("/preview", data={"wikitext": "x"})
        panel = _context(app).sessions.session.handle

        response = client.post(f"/panels/{panel.id}/close")
        assert response.status_code == 302
        assert _context(app).sessions.session is None
        assert client.get(f"/panels/{panel.id}/content").status_code == 404

        client.post("/preview", data={"wikitext": "y"})
        assert _context(app).sessions.session.handle is not panel


class TestWikiRoutes:
    """Tests for the wiki blueprint."""

    def test_view_redirects_to_new_panel(self, app, client, fake_site):
        response = client.post("/wiki/view", data={"title": "Main Page"})
        assert response.status_code == 302
        panel_id = response.location.rsplit("/", 1)[-1]
        panel = _context(app).registry.get(panel_id)
        assert panel.title == "WikiViewer: Hi"
        assert fake_site.calls[0]["page"] == "Main Page"

    def test_view_form(self, client):
        response = client.get("/wiki/view")
        assert response.status_code == 200
        assert b"Enter the page name here." in response.data

    def test_view_invalid_title(self, client, fake_site):
        response = client.post("/wiki/view", data={"title": "Foo|Bar"})
        assert response.status_code == 200
        assert b"invalid character" in response.data
        assert fake_site.calls == []

    def test_view_empty_title_is_silent(self, client, fake_site):
        response = client.post("/wiki/view", data={"title": "  "})
        assert response.status_code == 200
        assert b'class="flash' not in response.data
        assert fake_site.calls == []

    def test_view_missing_page_warns(self, client, fake_site):
        fake_site.responses["parse"] = {"parse": {"title": "Nope", "missing": ""}}
        response = client.post("/wiki/view", data={"title": "Nope"}, follow_redirects=True)
        assert response.status_code == 200
        assert b"flash warning" in response.data
        assert b"Nope" in response.data
        # The viewer was not updated and still shows its title without a page name
        assert b"<h3>WikiViewer</h3>" in response.data

    def test_read_opens_source_in_editor(self, client, fake_site):
        fake_site.responses["query"] = {"query": {"pages": [{
            "pageid": 5, "title": "Foo",
            "revisions": [{"slots": {"main": {"contentmodel": "wikitext", "content": "Foo source"}}}],
        }]}}
        response = client.post("/wiki/read", data={"title": "Foo"})
        assert response.status_code == 200
        assert b"Foo source" in response.data
        assert b"Content model: wikitext" in response.data
        assert b'Opened page &#34;Foo&#34;' in response.data

    def test_read_failure_shows_form(self, client, fake_site):
        fake_site.responses["query"] = requests.exceptions.Timeout()
        response = client.post("/wiki/read", data={"title": "Foo"})
        assert response.status_code == 200
        assert b"timed out" in response.data
        assert b"Open in editor" in response.data

    def test_write_requires_login(self, client):
        response = client.post("/wiki/write", data={"title": "Sandbox", "wikitext": "x", "summary": ""})
        assert response.status_code == 200
        assert b"not logged in" in response.data

    def test_login_write_logout(self, app, client, fake_site):
        fake_site.pages.__getitem__.return_value.edit.return_value = {
            "result": "Success", "pageid": 1, "title": "Sandbox", "contentmodel": "wikitext",
            "oldrevid": 1, "newrevid": 2, "newtimestamp": "2024-01-01T00:00:00Z",
        }

        response = client.post("/wiki/login", follow_redirects=True)
        assert b"logged in to wiki.example" in response.data
        assert _context(app).logged_in is True

        response = client.post("/wiki/write", data={"title": "Sandbox", "wikitext": "x", "summary": "s"})
        assert b"flash success" in response.data
        fake_site.pages.__getitem__.return_value.edit.assert_called_once_with(
            "x", summary="s // Edit via WikiPreview")

        response = client.post("/wiki/logout", follow_redirects=True)
        assert b"Success" in response.data
        assert _context(app).logged_in is False
