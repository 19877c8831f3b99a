"""
Blog Backend — Application Wiring Tests
========================================

What we test:
    ✅ /health liveness response
    ✅ X-Request-ID generated or echoed
    ✅ Framework 404/405 and unexpected failures use the {"error"} body
"""

import pytest


class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "T" in data["timestamp"]


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated(self, test_client):
        response = await test_client.get("/api/posts")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_client_value_is_echoed(self, test_client):
        response = await test_client.get("/api/posts", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"


class TestErrorBodies:

    @pytest.mark.asyncio
    async def test_unknown_route(self, test_client):
        response = await test_client.get("/api/nothing-here")
        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}

    @pytest.mark.asyncio
    async def test_method_not_allowed(self, test_client):
        response = await test_client.put("/api/posts")
        assert response.status_code == 405
        assert response.json() == {"error": "Method Not Allowed"}

    @pytest.mark.asyncio
    async def test_invalid_json(self, test_client):
        response = await test_client.post(
            "/api/auth/login",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON body"}

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_opaque(self, app, test_client):
        class BrokenPostService:
            async def list_published(self, store):
                raise RuntimeError("connection details that must not leak")

        app.state.post_service = BrokenPostService()
        response = await test_client.get("/api/posts")
        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
