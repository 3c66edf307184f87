#
# API routes and endpoints
#
# Routes live in small modules under `app.api.*`:
#   - app.api.health: Health check endpoint
#   - app.api.signing: Signed CDN URL endpoint
#
# Importing them here registers their routes on the shared `api_bp` blueprint.
#
# ruff: noqa: I001
import importlib

from app.api import api_bp

importlib.import_module("app.api.health")
importlib.import_module("app.api.signing")

__all__ = ["api_bp"]
