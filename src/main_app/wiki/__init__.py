"""
wiki - Wiki Blueprint

This blueprint handles the routes that talk to the configured wiki:
- Login and logout
- Reading a page's source into the editor
- Writing the editor's content back as a revision
- Viewing a rendered page in its own panel
"""

from flask import Blueprint

bp = Blueprint("wiki", __name__)

from main_app.wiki import routes  # Import routes after bp is created
