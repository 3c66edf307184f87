"""
Caching for signed CDN URLs.

Signing is cheap, but handing the browser the same URL for the same image
lets it reuse its own HTTP cache, so issued URLs are kept for a few minutes:

- MemoryUrlCache: per-process TTL cache (default)
- SharedUrlCache: Flask-Caching/Redis backend shared by all workers,
  used when REDIS_URL is configured
"""
import math
import threading
import time

from cachetools import TTLCache
from flask_caching import Cache

# Initialize cache instance
cache = Cache()

DEFAULT_URL_CACHE_TTL = 300


def init_cache(app):
    """
    Initialize Flask-Caching with Redis backend.

    Falls back to SimpleCache for development if Redis unavailable.

    Args:
        app: Flask application instance
    """
    cache_config = {
        "CACHE_TYPE": "RedisCache" if app.config.get("REDIS_URL") else "SimpleCache",
        "CACHE_DEFAULT_TIMEOUT": DEFAULT_URL_CACHE_TTL,
        "CACHE_KEY_PREFIX": "altitudes:",
    }

    if app.config.get("REDIS_URL"):
        cache_config["CACHE_REDIS_URL"] = app.config["REDIS_URL"]

    app.config.update(cache_config)
    cache.init_app(app)

    app.logger.info(
        f"Cache initialized: {cache_config['CACHE_TYPE']} backend",
        extra={"cache_type": cache_config["CACHE_TYPE"]},
    )

    return cache


class MemoryUrlCache:
    """In-process mapping of canonical path -> signed URL with a fixed TTL.

    ``timer`` is the clock used for expiry bookkeeping; tests pass a fake one.
    There is no size bound unless ``maxsize`` is given.
    """

    def __init__(self, ttl=DEFAULT_URL_CACHE_TTL, timer=time.time, maxsize=math.inf):
        self.ttl = ttl
        self._entries = TTLCache(maxsize=maxsize, ttl=ttl, timer=timer)
        self._lock = threading.Lock()

    def get(self, key):
        with self._lock:
            return self._entries.get(key)

    def set(self, key, url):
        with self._lock:
            self._entries[key] = url

    def has(self, key):
        with self._lock:
            return key in self._entries

    __contains__ = has

    def __len__(self):
        with self._lock:
            self._entries.expire()
            return len(self._entries)


class SharedUrlCache:
    """Signed URL cache stored in the Flask-Caching backend."""

    def __init__(self, backend=None, ttl=DEFAULT_URL_CACHE_TTL, prefix="signed-url:"):
        self.backend = backend or cache
        self.ttl = ttl
        self.prefix = prefix

    def get(self, key):
        return self.backend.get(self.prefix + key)

    def set(self, key, url):
        self.backend.set(self.prefix + key, url, timeout=self.ttl)

    def has(self, key):
        return bool(self.backend.has(self.prefix + key))

    __contains__ = has


def url_cache_ttl(config) -> int:
    """Cache TTL from config, never longer than the token validity window."""
    token_ttl = int(config.get("SIGNED_URL_TTL", DEFAULT_URL_CACHE_TTL))
    ttl = int(config.get("SIGNED_URL_CACHE_TTL", token_ttl))
    return max(1, min(ttl, token_ttl))


def build_url_cache(app):
    """
    Pick the signed URL cache for this app.

    Args:
        app: Flask application instance (init_cache must have run)

    Returns:
        SharedUrlCache when REDIS_URL is set, otherwise MemoryUrlCache
    """
    ttl = url_cache_ttl(app.config)
    if app.config.get("REDIS_URL"):
        return SharedUrlCache(cache, ttl=ttl)
    return MemoryUrlCache(ttl=ttl)
