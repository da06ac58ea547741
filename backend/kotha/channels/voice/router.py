"""Webhooks de Twilio Voice para el flujo IVR de reportes."""

from fastapi import APIRouter, Depends, Query, Request, Response

from kotha.core.logging import get_logger

from . import service
from .deps import verify_twilio_request
from .flow import StageResult
from .forms import MalformedRequestError, parse_webhook_form

router = APIRouter(
    prefix="/twilio",
    tags=["voice"],
    dependencies=[Depends(verify_twilio_request)],
)

logger = get_logger("kotha.channels.voice")

ENTRY_CACHE_CONTROL = "no-cache, no-store, must-revalidate"
DEFAULT_CACHE_CONTROL = "no-cache"


def _twiml_response(result: StageResult, *, cache_control: str = DEFAULT_CACHE_CONTROL) -> Response:
    # Twilio espera 200 aun cuando el resultado lógico es un error.
    return Response(
        content=result.twiml,
        media_type="text/xml",
        headers={"Cache-Control": cache_control},
    )


@router.post("/voice", summary="Inicio de llamada: solicita el PIN")
async def voice_entry() -> Response:
    """Primer webhook de la llamada."""
    return _twiml_response(service.handle_entry(), cache_control=ENTRY_CACHE_CONTROL)


@router.post("/record", summary="Recibe el PIN y solicita la grabación")
async def voice_record(request: Request) -> Response:
    """Webhook del `<Gather>`; cualquier falla se responde con TwiML de error."""
    try:
        form = await parse_webhook_form(request)
        result = service.handle_collection(form)
    except MalformedRequestError as exc:
        result = service.handle_system_error(exc)
    except Exception as exc:  # pragma: no cover - última barrera ante errores inesperados
        logger.exception("voice.record_failed")
        result = service.handle_system_error(exc)
    return _twiml_response(result)


@router.post("/callback", summary="Cierre de la grabación")
async def voice_callback(
    request: Request,
    pincode: str | None = Query(default=None),
) -> Response:
    """Webhook del `<Record>`: entrega el reporte y termina la llamada."""
    try:
        form = await parse_webhook_form(request)
        result = await service.handle_recording_callback(pincode, form)
    except MalformedRequestError as exc:
        result = service.handle_system_error(exc)
    except Exception as exc:  # pragma: no cover - última barrera ante errores inesperados
        logger.exception("voice.callback_failed")
        result = service.handle_system_error(exc)
    return _twiml_response(result)
