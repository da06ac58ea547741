"""Lógica de los webhooks del flujo IVR de reportes por voz.

Cada función recibe sólo lo que Twilio envió en el request actual y devuelve
el TwiML de la siguiente etapa; nada se comparte entre invocaciones.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from pydantic import ValidationError

from kotha.core.config import settings
from kotha.core.logging import get_logger, log_event
from kotha.core.security import mask_secret
from kotha.services import report_forwarder

from . import twiml
from .flow import Collecting, Entry, Recording, StageResult, Terminal
from .schemas import (
    PINCODE_SENTINEL,
    RecordingCallback,
    VoiceReport,
    normalise_digits,
    normalise_recording_url,
    validate_pincode,
)

logger = get_logger("kotha.channels.voice")


def handle_entry() -> StageResult:
    """Saluda y pide el PIN; no depende del contenido del request."""
    stage = Entry()
    log_event(logger, "voice.entry_served", stage=stage.name)
    return StageResult(stage=stage, twiml=twiml.build_entry_response(settings))


def handle_collection(form: Mapping[str, str]) -> StageResult:
    """Recibe los dígitos del `<Gather>` y ordena grabar el reporte."""
    pincode = normalise_digits(form.get("Digits"))
    collected = Collecting(pincode=pincode)
    if pincode == PINCODE_SENTINEL:
        log_event(
            logger,
            "voice.digits_missing",
            level=logging.WARNING,
            stage=collected.name,
            call_sid=form.get("CallSid"),
        )

    stage = Recording(pincode=pincode)
    log_event(
        logger,
        "voice.recording_requested",
        stage=stage.name,
        pincode=mask_secret(pincode),
        call_sid=form.get("CallSid"),
    )
    return StageResult(stage=stage, twiml=twiml.build_record_response(pincode, settings))


def handle_system_error(exc: Exception | None = None) -> StageResult:
    """Respuesta terminal cuando el webhook no pudo procesarse."""
    stage = Terminal(reason="system_error")
    log_event(
        logger,
        "voice.system_error",
        level=logging.WARNING,
        stage=stage.name,
        error=str(exc) if exc else None,
    )
    return StageResult(stage=stage, twiml=twiml.build_error_response(settings))


async def handle_recording_callback(
    pincode: str | None, form: Mapping[str, str]
) -> StageResult:
    """Cierra la llamada tras la grabación y entrega el reporte."""
    valid_pincode = validate_pincode(pincode, length=settings.pincode_length)
    if pincode and pincode != PINCODE_SENTINEL and valid_pincode is None:
        log_event(
            logger,
            "voice.pincode_rejected",
            level=logging.WARNING,
            pincode=mask_secret(pincode),
            call_sid=form.get("CallSid"),
        )

    try:
        callback = RecordingCallback.model_validate(form)
    except ValidationError as exc:
        return handle_system_error(exc)

    report = VoiceReport(
        pincode=valid_pincode,
        caller=callback.from_ or "unknown",
        audio_url=normalise_recording_url(callback.recording_url),
        recording_sid=callback.recording_sid,
        duration_seconds=callback.recording_duration,
        call_sid=callback.call_sid,
    )

    try:
        await report_forwarder.forward_report(report)
    except report_forwarder.ReportForwardError as exc:
        logger.exception("voice.report_forward_failed", extra={"call_sid": report.call_sid})
        return handle_system_error(exc)

    stage = Terminal(reason="report_received")
    log_event(
        logger,
        "voice.report_received",
        stage=stage.name,
        pincode=mask_secret(valid_pincode),
        call_sid=report.call_sid,
    )
    return StageResult(
        stage=stage, twiml=twiml.build_report_received_response(valid_pincode, settings)
    )
