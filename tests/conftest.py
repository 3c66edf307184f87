import tempfile

import pytest

from app import create_app
from app.cache import MemoryUrlCache
from app.cdn.signer import SignedUrlService
from config.settings import TestingConfig

CDN_BASE = "https://cdn.example.test"
SECRET = "s3cret"


class FakeClock:
    """Manually advanced clock returning unix seconds."""

    def __init__(self, now: float = 1_700_000_000):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def app():
    flask_app = create_app(TestingConfig)
    flask_app.instance_path = tempfile.mkdtemp()
    yield flask_app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def url_cache(clock):
    return MemoryUrlCache(ttl=300, timer=clock)


@pytest.fixture()
def signer(url_cache, clock):
    """Isolated service with a fake clock, independent of any Flask app."""
    return SignedUrlService(
        secret=SECRET, base_url=CDN_BASE + "/", cache=url_cache, clock=clock
    )
