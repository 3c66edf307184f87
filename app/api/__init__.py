"""API blueprint shared by the route modules under app.api."""

from flask import Blueprint

api_bp = Blueprint("api", __name__)
