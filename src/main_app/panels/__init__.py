"""
panels - Panels Blueprint

This blueprint serves the display surfaces created by the preview workflows.
"""

from flask import Blueprint

bp = Blueprint("panels", __name__)

from main_app.panels import routes  # Import routes after bp is created
