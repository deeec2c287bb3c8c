"""
main - Main Blueprint

This blueprint handles the editor routes:
- Editor page with the live preview panel (index)
- Live preview of the submitted wikitext
- Health check
"""

from flask import Blueprint

bp = Blueprint("main", __name__)

from main_app.main import routes  # Import routes after bp is created
