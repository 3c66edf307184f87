"""Signed URL service for private media on the BunnyCDN pull zone.

Usage:
    from app.cdn import current_signer
    url = current_signer().get_signed_url("/folder/file.webp", width=800, height=600)

The service owns its cache and its clock so that tests can build isolated
instances and move time forward explicitly.
"""
from __future__ import annotations

import time
from collections.abc import Callable
from urllib.parse import urlsplit

import structlog
from flask import current_app

from .errors import ConfigurationError, InvalidInputError
from .paths import encode_query, parse_resource_path, set_query_param
from .token import generate_token

logger = structlog.get_logger(__name__)

DEFAULT_TOKEN_TTL = 300
EXTENSION_KEY = "signed_urls"


def _dimension(value, name: str) -> int | None:
    """Normalize a width/height value; ``None`` and ``""`` mean absent."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise InvalidInputError(f"{name} must be an integer")
    if isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        number = int(value.strip())
    else:
        raise InvalidInputError(f"{name} must be an integer")
    if number < 0:
        raise InvalidInputError(f"{name} must not be negative")
    return number


def canonical_path(path: str, width=None, height=None) -> str:
    """Resolve ``path`` and apply the display size parameters.

    ``width``/``height`` replace any value already present in the query.
    Without them the original query string is kept as it was.
    """
    resource = parse_resource_path(path)
    width = _dimension(width, "width")
    height = _dimension(height, "height")
    if width is None and height is None:
        return resource.full_path

    params = list(resource.params)
    if width is not None:
        params = set_query_param(params, "width", str(width))
    if height is not None:
        params = set_query_param(params, "height", str(height))
    query = encode_query(params)
    return resource.pathname + (f"?{query}" if query else "")


def _validate_base_url(base_url) -> str:
    if not isinstance(base_url, str) or not base_url.strip():
        raise ConfigurationError("BUNNYCDN_BASE_URL is not configured")
    parts = urlsplit(base_url.strip())
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigurationError("BUNNYCDN_BASE_URL must be an absolute http(s) URL")
    if parts.query or parts.fragment:
        raise ConfigurationError("BUNNYCDN_BASE_URL must not carry a query or fragment")
    return base_url.strip().rstrip("/")


class SignedUrlService:
    """Build cached, token-authenticated CDN URLs.

    Args:
        secret: Pull zone token authentication key.
        base_url: CDN base URL, e.g. ``https://example.b-cdn.net``.
        cache: Object with ``get``/``set``/``has`` (see app.cache).
        token_ttl: Seconds a freshly issued token stays valid.
        clock: Callable returning the current unix time.

    Raises:
        ConfigurationError: secret or base URL missing/malformed.
    """

    def __init__(
        self,
        secret: str,
        base_url: str,
        cache,
        token_ttl: int = DEFAULT_TOKEN_TTL,
        clock: Callable[[], float] = time.time,
    ):
        if not isinstance(secret, str) or not secret:
            raise ConfigurationError("BUNNYCDN_TOKEN_SECRET is not configured")
        self._secret = secret
        self.base_url = _validate_base_url(base_url)
        self.cache = cache
        self.token_ttl = int(token_ttl)
        if self.token_ttl <= 0:
            raise ConfigurationError("SIGNED_URL_TTL must be positive")
        cache_ttl = getattr(cache, "ttl", None)
        if cache_ttl is not None and cache_ttl > self.token_ttl:
            raise ConfigurationError(
                "signed URL cache TTL must not exceed the token lifetime"
            )
        self.clock = clock

    @classmethod
    def from_config(cls, config, cache, clock: Callable[[], float] = time.time):
        """Build the service from a Flask config mapping."""
        return cls(
            secret=config.get("BUNNYCDN_TOKEN_SECRET"),
            base_url=config.get("BUNNYCDN_BASE_URL"),
            cache=cache,
            token_ttl=config.get("SIGNED_URL_TTL", DEFAULT_TOKEN_TTL),
            clock=clock,
        )

    def __repr__(self):
        return f"<SignedUrlService base_url={self.base_url!r} ttl={self.token_ttl}>"

    def public_url(self, path: str) -> str:
        """Unsigned URL for public assets (thumbnails, panorama tiles)."""
        return self.base_url + parse_resource_path(path).full_path

    def get_signed_url(self, path: str, width=None, height=None) -> str:
        """Return a signed URL for ``path``, reusing a cached one when present.

        Raises:
            InvalidInputError: path or size parameters are unusable.
            HashingError: token digest failed.
        """
        key = canonical_path(path, width=width, height=height)

        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("signed_url_cache_hit", path=key)
            return cached

        expires = int(self.clock()) + self.token_ttl
        result = generate_token(key, self._secret, expires)
        separator = "&" if "?" in key else "?"
        signed = (
            f"{self.base_url}{key}{separator}"
            f"token={result.token}&expires={result.expires}"
        )
        self.cache.set(key, signed)
        logger.info("signed_url_issued", path=key, expires=result.expires)
        return signed


def current_signer() -> SignedUrlService:
    """Return the SignedUrlService attached to the current Flask app."""
    try:
        return current_app.extensions[EXTENSION_KEY]
    except KeyError:
        raise ConfigurationError("signed URL service was not initialized") from None
