import importlib

import pytest
from httpx import ASGITransport, AsyncClient

import userhub.main
from userhub.core import config


@pytest.fixture
def configured_app(monkeypatch):
    """Rebuild the app module with patched settings, then restore it."""
    def _build(**settings):
        for name, value in settings.items():
            monkeypatch.setattr(config, name, value)
        return importlib.reload(userhub.main).app

    yield _build
    monkeypatch.undo()
    importlib.reload(userhub.main)


@pytest.mark.asyncio
async def test_rate_limit_returns_429(configured_app):
    app = configured_app(RATE_LIMIT="2/minute", RATE_LIMIT_ENABLED=True)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        statuses = [(await client.get("/health")).status_code for _ in range(4)]
        limited = await client.get("/health")

    assert statuses == [200, 200, 429, 429]
    assert limited.json() == {"error": "You are going too fast"}


@pytest.mark.asyncio
async def test_rate_limit_disabled(configured_app):
    app = configured_app(RATE_LIMIT="1/minute", RATE_LIMIT_ENABLED=False)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        statuses = [(await client.get("/health")).status_code for _ in range(3)]

    assert statuses == [200, 200, 200]


@pytest.mark.asyncio
async def test_cors_preflight_for_allowed_origin(configured_app):
    app = configured_app(ALLOW_ORIGIN="http://frontend.test", RATE_LIMIT_ENABLED=False)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        resp = await client.options(
            "/api/users",
            headers={
                "Origin": "http://frontend.test",
                "Access-Control-Request-Method": "POST",
            },
        )
        plain = await client.get("/health", headers={"Origin": "http://frontend.test"})

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "http://frontend.test"
    assert "POST" in resp.headers["access-control-allow-methods"]
    assert resp.headers["access-control-allow-credentials"] == "true"
    assert plain.headers["access-control-allow-origin"] == "http://frontend.test"


@pytest.mark.asyncio
async def test_no_cors_headers_without_allow_origin(configured_app):
    app = configured_app(ALLOW_ORIGIN=None, RATE_LIMIT_ENABLED=False)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        resp = await client.get("/health", headers={"Origin": "http://frontend.test"})

    assert resp.status_code == 200
    assert "access-control-allow-origin" not in resp.headers
