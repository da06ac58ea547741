"""Lectura de los formularios que Twilio envía a los webhooks de voz."""

from __future__ import annotations

from urllib.parse import parse_qsl

from fastapi import Request
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException

_URLENCODED = "application/x-www-form-urlencoded"
_MULTIPART = "multipart/form-data"


class MalformedRequestError(Exception):
    """El cuerpo del webhook no puede interpretarse como formulario."""


async def parse_webhook_form(request: Request) -> dict[str, str]:
    """Devuelve los campos de texto del formulario recibido.

    Sólo se aceptan cuerpos `application/x-www-form-urlencoded` o
    `multipart/form-data`; un formulario vacío equivale a no tener campos.
    Cualquier otro contenido levanta `MalformedRequestError`.
    """
    media_type = request.headers.get("content-type", "").split(";", 1)[0].strip().lower()
    if media_type not in (_URLENCODED, _MULTIPART):
        raise MalformedRequestError(f"Unsupported content type: {media_type or 'none'}")

    body = await request.body()
    if not body:
        return {}

    if media_type == _URLENCODED:
        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedRequestError("Body is not valid urlencoded form data") from exc
        # Igual que los navegadores: los `&` sobrantes se ignoran.
        return dict(parse_qsl(text, keep_blank_values=True))

    try:
        form = await request.form()
    except (HTTPException, MultiPartException, ValueError) as exc:
        raise MalformedRequestError("Body is not valid multipart form data") from exc
    return {key: value for key, value in form.items() if isinstance(value, str)}
