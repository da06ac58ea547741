"""Fixtures compartidas para las pruebas."""

import pytest
from httpx import ASGITransport, AsyncClient

from kotha.core.config import settings
from kotha.main import app
from kotha.services.twilio import get_request_validator


@pytest.fixture(name="async_client")
async def fixture_async_client() -> AsyncClient:
    """Retorna un cliente asíncrono contra la app principal utilizando ASGITransport."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture(name="signed_webhooks")
def fixture_signed_webhooks(monkeypatch: pytest.MonkeyPatch) -> str:
    """Activa la validación de firmas de Twilio con un token conocido."""
    token = "test-auth-token"
    monkeypatch.setattr(settings, "twilio_validate_signature", True)
    monkeypatch.setattr(settings, "twilio_auth_token", token)
    get_request_validator.cache_clear()
    yield token
    get_request_validator.cache_clear()
