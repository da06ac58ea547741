"""Dependencias relacionadas a voz."""

import logging

from fastapi import Header, HTTPException, Request, status

from kotha.core.config import settings
from kotha.core.logging import get_logger, log_event
from kotha.core.security import SignatureError, verify_twilio_signature

from .forms import MalformedRequestError, parse_webhook_form

logger = get_logger("kotha.channels.voice")


def _signed_url(request: Request) -> str:
    """URL que Twilio firmó; usa la URL pública cuando hay proxy de por medio."""
    if not settings.public_base_url:
        return str(request.url)
    url = f"{settings.public_base_url.rstrip('/')}{request.url.path}"
    if request.url.query:
        url = f"{url}?{request.url.query}"
    return url


async def verify_twilio_request(
    request: Request,
    x_twilio_signature: str = Header(default=""),
) -> None:
    """Rechaza webhooks sin firma válida cuando la validación está activa."""
    if not settings.twilio_validate_signature:
        return

    try:
        params = await parse_webhook_form(request)
    except MalformedRequestError:
        params = {}

    try:
        verify_twilio_signature(_signed_url(request), params, x_twilio_signature)
    except SignatureError as exc:
        log_event(
            logger,
            "voice.signature_rejected",
            level=logging.WARNING,
            path=request.url.path,
        )
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
