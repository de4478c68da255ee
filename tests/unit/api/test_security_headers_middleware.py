import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from credcore.api.middleware.security_headers import SecurityHeadersMiddleware


def build_app(**options):
    app = FastAPI()
    app.add_middleware(SecurityHeadersMiddleware, **options)

    @app.get("/ping")
    async def ping():
        return {"pong": True}

    return app


async def fetch(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        return await ac.get("/ping")


@pytest.mark.asyncio
async def test_custom_hsts_max_age():
    response = await fetch(build_app(hsts_max_age=600))

    assert response.status_code == 200
    assert response.headers["Strict-Transport-Security"] == (
        "max-age=600; includeSubDomains; preload"
    )


@pytest.mark.asyncio
async def test_zero_max_age_disables_hsts():
    response = await fetch(build_app(hsts_max_age=0))

    assert "Strict-Transport-Security" not in response.headers
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
