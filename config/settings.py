"""
Configuration settings for the Flask application.
This module contains all configuration classes for different environments.
"""
import os

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in {"1", "true", "yes", "on"}


class Config:
    """
    Base configuration class containing common settings.

    This class defines the default configuration that other
    environment-specific classes will inherit from.
    """

    SECRET_KEY = os.environ.get("SECRET_KEY") or "change-me-in-production"

    # BunnyCDN token authentication. Both values are required; the app refuses
    # to start without them. The secret must never reach the browser.
    BUNNYCDN_TOKEN_SECRET = os.environ.get("BUNNYCDN_TOKEN_SECRET")
    BUNNYCDN_BASE_URL = os.environ.get("BUNNYCDN_BASE_URL") or os.environ.get(
        "VITE_BUNNYCDN_BASE_URL"
    )

    # Token validity (seconds) and how long issued URLs are reused.
    # The cache TTL is clamped to the token TTL.
    SIGNED_URL_TTL = int(os.environ.get("SIGNED_URL_TTL", 300))
    SIGNED_URL_CACHE_TTL = int(
        os.environ.get("SIGNED_URL_CACHE_TTL", SIGNED_URL_TTL)
    )

    # Optional Redis: shared signed URL cache and rate limit storage
    REDIS_URL = os.environ.get("REDIS_URL")

    # Flask Configuration
    DEBUG = _env_flag("FLASK_DEBUG")
    HOST = os.environ.get("FLASK_HOST", "0.0.0.0")
    PORT = int(os.environ.get("FLASK_PORT", 5000))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Frontend origins allowed to call the API
    CORS_ORIGINS = [
        o.strip()
        for o in os.environ.get(
            "CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
        ).split(",")
        if o.strip()
    ]

    # Rate Limiting Configuration
    RATELIMIT_ENABLED = _env_flag("RATELIMIT_ENABLED", "true")
    RATELIMIT_STORAGE_URL = REDIS_URL or "memory://"
    RATELIMIT_DEFAULT = os.environ.get("RATELIMIT_DEFAULT", "600 per hour")

    # Security Headers (Talisman)
    FORCE_HTTPS = False
    STRICT_TRANSPORT_SECURITY = True
    CONTENT_SECURITY_POLICY = {
        "default-src": "'none'",
        "frame-ancestors": "'none'",
    }


class DevelopmentConfig(Config):
    """
    Development environment configuration.

    Debug mode on, HTTPS and rate limiting off.
    """

    DEBUG = True
    FORCE_HTTPS = False
    RATELIMIT_ENABLED = False


class ProductionConfig(Config):
    """
    Production environment configuration.
    """

    DEBUG = False
    FORCE_HTTPS = True
    RATELIMIT_DEFAULT = os.environ.get("RATELIMIT_DEFAULT", "300 per hour")


class TestingConfig(Config):
    """
    Testing environment configuration.

    Fixed signing credentials so tests never depend on the developer's .env.
    """

    TESTING = True
    DEBUG = True

    BUNNYCDN_TOKEN_SECRET = "test-token-secret"
    BUNNYCDN_BASE_URL = "https://cdn.example.test/"
    SIGNED_URL_TTL = 300
    SIGNED_URL_CACHE_TTL = 300
    REDIS_URL = None
    CORS_ORIGINS = ["http://localhost:3000"]

    RATELIMIT_ENABLED = False
    RATELIMIT_STORAGE_URL = "memory://"
