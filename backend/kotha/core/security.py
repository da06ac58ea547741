"""Helpers de validación para webhooks de Twilio y enmascarado de datos."""

from collections.abc import Mapping

from kotha.services.twilio import get_request_validator


class SignatureError(Exception):
    """La firma `X-Twilio-Signature` no corresponde al request recibido."""


def verify_twilio_signature(url: str, params: Mapping[str, str], signature: str) -> None:
    """Verifica la firma HMAC-SHA1 que Twilio adjunta a cada webhook.

    Args:
        url: URL completa (con query string) que Twilio invocó.
        params: Campos del formulario POST recibido.
        signature: Valor del encabezado `X-Twilio-Signature`.
    """
    if not signature:
        raise SignatureError("Missing Twilio signature")
    validator = get_request_validator()
    if not validator.validate(url, dict(params), signature):
        raise SignatureError("Invalid signature received")


def mask_secret(value: str | None) -> str | None:
    """Enmascara secretos y PINs para logging seguro."""
    if not value:
        return value
    if len(value) <= 4:
        return "***"
    return f"{value[:2]}***{value[-2:]}"
