import pytest
from starlette.applications import Starlette
from starlette.responses import PlainTextResponse
from starlette.testclient import TestClient

from utils.constants import RATE_LIMIT_BODY
from utils.rate_limiter import RateLimiter, RateLimitMiddleware


async def ok(request):
    return PlainTextResponse("ok")


@pytest.fixture
def limited_client():
    app = Starlette()
    app.add_middleware(RateLimitMiddleware, limiter=RateLimiter(max_requests=2, window_minutes=15))
    app.add_route("/api/ping", ok)
    app.add_route("/ping", ok)
    return TestClient(app)


def test_hit_counts_down_remaining():
    """Given a fresh limiter, when a caller hits it, then remaining requests decrease."""
    limiter = RateLimiter(max_requests=3, window_minutes=15)
    first = limiter.hit("10.0.0.1")
    second = limiter.hit("10.0.0.1")
    assert first.allowed and second.allowed
    assert first.remaining == 2
    assert second.remaining == 1
    assert 0 < second.reset_after <= 15 * 60


def test_hit_rejects_after_limit():
    """Given a caller at its limit, when it hits again, then the request is rejected."""
    limiter = RateLimiter(max_requests=2, window_minutes=15)
    limiter.hit("10.0.0.1")
    limiter.hit("10.0.0.1")
    result = limiter.hit("10.0.0.1")
    assert result.allowed is False
    assert result.remaining == 0


def test_hit_tracks_callers_independently():
    """Given one caller over its limit, when another caller hits, then the other is unaffected."""
    limiter = RateLimiter(max_requests=1, window_minutes=15)
    limiter.hit("10.0.0.1")
    assert limiter.hit("10.0.0.1").allowed is False
    assert limiter.hit("10.0.0.2").allowed is True


def test_reset_clears_counters():
    """Given an exhausted caller, when the limiter is reset, then the caller is allowed again."""
    limiter = RateLimiter(max_requests=1, window_minutes=15)
    limiter.hit("10.0.0.1")
    limiter.reset()
    assert limiter.hit("10.0.0.1").allowed is True


def test_middleware_rejects_excess_api_requests(limited_client):
    """Given a caller over the limit, when it calls an /api path, then it receives the fixed 429 body."""
    assert limited_client.get("/api/ping").status_code == 200
    assert limited_client.get("/api/ping").status_code == 200

    response = limited_client.get("/api/ping")
    assert response.status_code == 429
    assert response.json() == RATE_LIMIT_BODY
    assert response.headers["RateLimit-Remaining"] == "0"


def test_middleware_sets_rate_limit_headers(limited_client):
    """Given an allowed /api request, when it completes, then standard rate limit headers are present."""
    response = limited_client.get("/api/ping")
    assert response.headers["RateLimit-Limit"] == "2"
    assert response.headers["RateLimit-Remaining"] == "1"
    assert "RateLimit-Reset" in response.headers


def test_middleware_ignores_paths_outside_prefix(limited_client):
    """Given many requests to a non-API path, when sent, then none are limited."""
    for _ in range(5):
        response = limited_client.get("/ping")
        assert response.status_code == 200
        assert "RateLimit-Limit" not in response.headers
