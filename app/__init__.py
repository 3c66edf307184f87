"""
Flask application factory and configuration.

This module contains the Flask application factory that initializes
and configures all extensions, blueprints, and application settings.
"""
import os
import uuid

from flask import Flask, g, jsonify, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_talisman import Talisman

from config.settings import DevelopmentConfig, ProductionConfig, TestingConfig


def create_app(config_class=None):
    """
    Create and configure Flask application.

    Args:
        config_class: Configuration class to use. If None, will be determined
                     from FLASK_ENV environment variable.

    Returns:
        Flask: Configured Flask application instance

    Raises:
        ConfigurationError: the CDN signing secret or base URL is missing.
    """
    app = Flask(__name__)

    if config_class is None:
        env = os.environ.get("FLASK_ENV", "development")
        if env == "production":
            config_class = ProductionConfig
        elif env == "testing":
            config_class = TestingConfig
        else:
            config_class = DevelopmentConfig

    app.config.from_object(config_class)

    # Configure structured logging early
    try:
        from app.structured_logging import configure_structlog

        configure_structlog(app, role="web")
    except Exception:
        # Never fail startup due to logging setup
        app.logger.warning("structured logging setup failed", exc_info=True)

    init_extensions(app)
    register_blueprints(app)
    register_request_hooks(app)
    register_error_handlers(app)

    return app


def init_extensions(app):
    """
    Initialize Flask extensions and the signed URL service.

    Args:
        app: Flask application instance
    """
    from app.cache import build_url_cache, init_cache
    from app.cdn.signer import EXTENSION_KEY, SignedUrlService

    init_cache(app)

    # Fails fast on missing secret/base URL rather than on the first request
    app.extensions[EXTENSION_KEY] = SignedUrlService.from_config(
        app.config, cache=build_url_cache(app)
    )

    # CORS for the gallery frontend
    CORS(app, origins=app.config.get("CORS_ORIGINS", []))

    # Setup security headers (only in production or if explicitly enabled)
    if app.config.get("FORCE_HTTPS") or not app.debug:
        Talisman(
            app,
            force_https=app.config.get("FORCE_HTTPS", False),
            strict_transport_security=app.config.get("STRICT_TRANSPORT_SECURITY", True),
            content_security_policy=app.config.get("CONTENT_SECURITY_POLICY"),
        )

    # Rate limiting (can be disabled via RATELIMIT_ENABLED=False)
    if app.config.get("RATELIMIT_ENABLED", True):
        limiter = Limiter(
            key_func=get_remote_address,
            default_limits=[app.config.get("RATELIMIT_DEFAULT", "600 per hour")],
            storage_uri=app.config.get("RATELIMIT_STORAGE_URL"),
        )
        limiter.init_app(app)


def register_blueprints(flask_app):
    """
    Register Flask blueprints.

    Args:
        flask_app: Flask application instance
    """
    # Importing routes registers every endpoint on the shared api_bp blueprint
    from app.api.routes import api_bp

    flask_app.register_blueprint(api_bp, url_prefix="/api")


def register_request_hooks(app):
    """Tag every request with an id that shows up in logs and responses."""

    @app.before_request
    def _assign_request_id():
        incoming = (request.headers.get("X-Request-ID") or "").strip()
        g.request_id = incoming[:64] or uuid.uuid4().hex

    @app.after_request
    def _echo_request_id(response):
        if hasattr(g, "request_id"):
            response.headers["X-Request-ID"] = g.request_id
        return response


def register_error_handlers(app):
    """
    Register JSON error handlers for common HTTP errors.

    Args:
        app: Flask application instance
    """

    @app.errorhandler(400)
    def bad_request(error):
        """Handle 400 Bad Request errors."""
        return jsonify({"error": "Bad request"}), 400

    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 Not Found errors."""
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        """Handle 405 Method Not Allowed errors."""
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(429)
    def ratelimit_handler(error):
        """Handle 429 Too Many Requests errors."""
        return jsonify({"error": "Too many requests"}), 429

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 Internal Server Error."""
        from app.error_utils import safe_log_error

        safe_log_error(app.logger, "Unhandled server error", exc_info=False, path=request.path)
        return jsonify({"error": "Internal server error"}), 500
