"""Health endpoints for the API blueprint.

Mounts served by this module:

- GET /health
    - Purpose: simple liveness/health-check used by load balancers and orchestration
        to verify the API process is running.
    - Parameters: none
"""

from flask import jsonify

from app.api import api_bp
from app.version import get_version


@api_bp.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint.

    Returns a JSON payload with a short status message. No auth required.
    """
    return jsonify(
        {
            "status": "healthy",
            "message": "Abstract Altitudes API is running",
            "version": get_version(),
        }
    )
