"""
ShipView API — Origin Policy Tests
====================================

What:  Tests for prefix-based Origin allow-listing.
How:   Unit tests for the matching helpers plus requests through the app.
"""

import re

import pytest

from shipview_api.config import DEFAULT_CORS_ORIGINS
from shipview_api.middleware.origin_guard import is_origin_allowed, origin_prefix_regex

ALLOWED = DEFAULT_CORS_ORIGINS.split(",")


class TestOriginMatching:

    def test_missing_origin_allowed(self):
        assert is_origin_allowed(None, ALLOWED)
        assert is_origin_allowed("", ALLOWED)

    @pytest.mark.parametrize(
        "origin",
        [
            "https://shipview.pages.dev",
            "https://shipview.pages.dev/foo",
            "http://localhost:8080",
            "http://localhost:3000",
        ],
    )
    def test_allowed_prefixes(self, origin):
        assert is_origin_allowed(origin, ALLOWED)

    @pytest.mark.parametrize(
        "origin",
        ["https://evil.example", "http://localhost:5173", "http://shipview.pages.dev"],
    )
    def test_rejected_origins(self, origin):
        assert not is_origin_allowed(origin, ALLOWED)

    def test_regex_agrees_with_prefix_match(self):
        pattern = re.compile(origin_prefix_regex(ALLOWED))

        assert pattern.fullmatch("https://shipview.pages.dev/foo")
        assert pattern.fullmatch("http://localhost:3000")
        assert not pattern.fullmatch("https://evil.example")
        assert not pattern.fullmatch("https://shipviewXpages.dev")


class TestOriginGuardMiddleware:

    @pytest.mark.asyncio
    async def test_foreign_origin_rejected_before_routing(self, test_client):
        response = await test_client.get("/api/orders", headers={"Origin": "https://evil.example"})

        assert response.status_code == 403
        assert response.json()["error"] == "Not allowed by CORS"

    @pytest.mark.asyncio
    async def test_allowed_origin_gets_cors_headers(self, test_client):
        origin = "https://shipview.pages.dev/foo"
        response = await test_client.get("/api/filters", headers={"Origin": origin})

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == origin

    @pytest.mark.asyncio
    async def test_no_origin_accepted(self, test_client):
        response = await test_client.get("/api/filters")

        assert response.status_code == 200
        assert "access-control-allow-origin" not in response.headers

    @pytest.mark.asyncio
    async def test_preflight_from_foreign_origin_rejected(self, test_client):
        response = await test_client.options(
            "/api/orders",
            headers={
                "Origin": "https://evil.example",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.status_code == 403
