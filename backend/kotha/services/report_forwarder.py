"""Entrega de reportes de voz al servicio de recepción."""

from __future__ import annotations

import httpx

from kotha.channels.voice.schemas import VoiceReport
from kotha.core.config import settings
from kotha.core.logging import get_logger, log_event
from kotha.core.security import mask_secret

logger = get_logger("kotha.channels.voice.forwarder")


class ReportForwardError(Exception):
    """El servicio de recepción no aceptó el reporte."""


async def forward_report(report: VoiceReport) -> None:
    """Envía el reporte como JSON al servicio configurado.

    Sin `report_forward_url` el reporte sólo queda registrado en logs.
    """
    url = settings.report_forward_url
    if not url:
        log_event(
            logger,
            "voice.report_forward_skipped",
            pincode=mask_secret(report.pincode),
            recording_sid=report.recording_sid,
        )
        return

    headers: dict[str, str] = {}
    if settings.report_forward_token:
        headers["Authorization"] = f"Bearer {settings.report_forward_token}"

    try:
        async with httpx.AsyncClient(timeout=settings.report_forward_timeout_seconds) as client:
            response = await client.post(url, json=report.model_dump(mode="json"), headers=headers)
    except httpx.RequestError as exc:
        raise ReportForwardError(f"Report forwarding failed: {exc}") from exc

    if response.status_code >= 400:
        raise ReportForwardError(f"Report forwarding rejected with status {response.status_code}")

    log_event(
        logger,
        "voice.report_forwarded",
        pincode=mask_secret(report.pincode),
        recording_sid=report.recording_sid,
        status=response.status_code,
    )
