"""Acceso centralizado a utilidades de Twilio."""

from functools import lru_cache

from twilio.request_validator import RequestValidator

from kotha.core.config import settings


@lru_cache(maxsize=1)
def get_request_validator() -> RequestValidator:
    """Retorna el validador de firmas reutilizable de Twilio."""
    if not settings.twilio_auth_token:
        msg = "Twilio auth token is not configured"
        raise RuntimeError(msg)
    return RequestValidator(settings.twilio_auth_token)
