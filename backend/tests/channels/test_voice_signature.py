"""Validación de `X-Twilio-Signature` en los webhooks de voz."""

from __future__ import annotations

import pytest
from httpx import AsyncClient
from twilio.request_validator import RequestValidator

from kotha.core.config import settings

FORM_HEADERS = {"content-type": "application/x-www-form-urlencoded"}


async def test_unsigned_webhook_is_rejected(
    async_client: AsyncClient, signed_webhooks: str
) -> None:
    response = await async_client.post(
        "/api/twilio/record", content="Digits=123456", headers=FORM_HEADERS
    )
    assert response.status_code == 403


async def test_signed_webhook_is_accepted(
    async_client: AsyncClient, signed_webhooks: str
) -> None:
    signature = RequestValidator(signed_webhooks).compute_signature(
        "http://test/api/twilio/record", {"Digits": "123456"}
    )

    response = await async_client.post(
        "/api/twilio/record",
        content="Digits=123456",
        headers={**FORM_HEADERS, "x-twilio-signature": signature},
    )

    assert response.status_code == 200
    assert b"pincode=123456" in response.content


async def test_signature_uses_public_base_url(
    async_client: AsyncClient, signed_webhooks: str, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(settings, "public_base_url", "https://kotha.example.org/")
    signature = RequestValidator(signed_webhooks).compute_signature(
        "https://kotha.example.org/api/twilio/voice", {}
    )

    response = await async_client.post(
        "/api/twilio/voice", headers={"x-twilio-signature": signature}
    )

    assert response.status_code == 200
