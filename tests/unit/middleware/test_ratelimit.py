"""Unit tests for the rate limiting middleware."""

import pytest
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from genomeapi.middleware.ratelimit import RateLimitMiddleware, SlidingWindow


def _make_app(max_requests: int = 5, window_seconds: float = 10) -> Starlette:
    """Create a test Starlette app with rate limiting."""

    async def homepage(request: Request) -> PlainTextResponse:
        return PlainTextResponse("ok")

    app = Starlette(routes=[Route("/", homepage)])
    app.add_middleware(
        RateLimitMiddleware, max_requests=max_requests, window_seconds=window_seconds
    )
    return app


class TestSlidingWindow:
    @pytest.mark.unit
    def test_allows_up_to_limit(self):
        window = SlidingWindow(max_requests=2, window_seconds=10)
        assert window.hit("a", 0.0) is None
        assert window.hit("a", 1.0) is None
        assert window.hit("a", 2.0) == pytest.approx(8.0)

    @pytest.mark.unit
    def test_window_slides(self):
        window = SlidingWindow(max_requests=1, window_seconds=10)
        assert window.hit("a", 0.0) is None
        assert window.hit("a", 9.0) is not None
        assert window.hit("a", 10.0) is None

    @pytest.mark.unit
    def test_keys_independent(self):
        window = SlidingWindow(max_requests=1, window_seconds=10)
        assert window.hit("a", 0.0) is None
        assert window.hit("b", 0.0) is None

    @pytest.mark.unit
    def test_prune_drops_idle_keys(self):
        window = SlidingWindow(max_requests=1, window_seconds=10)
        window.hit("a", 0.0)
        window.hit("b", 5.0)
        window.prune(12.0)
        assert set(window._hits) == {"b"}


class TestRateLimitMiddleware:
    """Tests for RateLimitMiddleware."""

    @pytest.mark.unit
    def test_allows_requests_under_limit(self):
        client = TestClient(_make_app(max_requests=5))
        for _ in range(5):
            assert client.get("/").status_code == 200

    @pytest.mark.unit
    def test_blocks_requests_over_limit(self):
        client = TestClient(_make_app(max_requests=3))
        for _ in range(3):
            assert client.get("/").status_code == 200

        resp = client.get("/")
        assert resp.status_code == 429
        assert resp.json() == {"error": "Rate limit exceeded"}

    @pytest.mark.unit
    def test_retry_after_header(self):
        client = TestClient(_make_app(max_requests=1, window_seconds=10))
        client.get("/")

        resp = client.get("/")
        assert resp.status_code == 429
        assert 1 <= int(resp.headers["Retry-After"]) <= 10

    @pytest.mark.unit
    def test_forwarded_clients_tracked_separately(self):
        client = TestClient(_make_app(max_requests=1))
        assert client.get("/", headers={"X-Forwarded-For": "10.0.0.1"}).status_code == 200
        assert client.get("/", headers={"X-Forwarded-For": "10.0.0.2"}).status_code == 200
        assert client.get("/", headers={"X-Forwarded-For": "10.0.0.1"}).status_code == 429

    @pytest.mark.unit
    def test_first_forwarded_hop_used(self):
        client = TestClient(_make_app(max_requests=1))
        client.get("/", headers={"X-Forwarded-For": "10.0.0.1, 192.168.0.1"})
        resp = client.get("/", headers={"X-Forwarded-For": "10.0.0.1, 172.16.0.9"})
        assert resp.status_code == 429
