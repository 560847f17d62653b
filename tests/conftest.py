import pytest
from application import application
from huc_cache import HucCache


@pytest.fixture
def client():
    """Create a Flask test client."""
    with application.test_client() as client:
        yield client


class FakeClock:
    """Controllable stand-in for time.time()."""

    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fresh_cache(monkeypatch, clock):
    """Replace the process-wide HUC cache with an empty one on a fake clock."""
    cache = HucCache(ttl=24 * 60 * 60, clock=clock)
    monkeypatch.setattr("routes.huc.huc_cache", cache)
    return cache


class StubUpstream:
    """Records WBD queries and answers them with a canned response."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def __call__(self, url, params, timeout=None):
        self.calls.append((url, params))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def upstream(monkeypatch, fresh_cache):
    """Stub out the WBD query; tests set `.response` or `.error`."""
    stub = StubUpstream(response={"features": []})
    monkeypatch.setattr("routes.huc.fetch_arcgis_query", stub)
    return stub
