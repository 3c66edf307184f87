"""Signed CDN URL endpoint.

- POST /sign-url
    - Body: ``{"path": "/folder/file.webp", "width": 800, "height": 600}``
      (width/height optional)
    - 200: ``{"signedUrl": "<cdn>/folder/file.webp?width=800&height=600&token=...&expires=..."}``
    - 400: ``{"error": "Missing path"}`` or ``{"error": "Invalid path"}``
    - 500: ``{"error": "Failed to generate signed URL"}``

The frontend falls back to a placeholder when this call fails; no partial
URL is ever returned.
"""

import structlog
from flask import current_app, jsonify, request

from app.api import api_bp
from app.cdn import InvalidInputError, current_signer
from app.error_utils import handle_api_exception

logger = structlog.get_logger(__name__)


@api_bp.route("/sign-url", methods=["POST"])
def sign_url():
    """Return a token-authenticated CDN URL for a private media path."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    path = data.get("path")
    if not path:
        return jsonify({"error": "Missing path"}), 400

    try:
        signed = current_signer().get_signed_url(
            path, width=data.get("width"), height=data.get("height")
        )
    except InvalidInputError as e:
        logger.warning("sign_url_rejected", reason=str(e))
        return jsonify({"error": "Invalid path"}), 400
    except Exception:
        body, status = handle_api_exception(
            current_app.logger,
            "sign-url error",
            status_code=500,
            public_message="Failed to generate signed URL",
            path=path if isinstance(path, str) else repr(path),
        )
        return jsonify(body), status

    return jsonify({"signedUrl": signed})
