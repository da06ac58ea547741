"""Middlewares personalizados para Kotha."""

from __future__ import annotations

import time
from uuid import uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from kotha.core.config import settings
from kotha.core.logging import get_logger, resolve_log_level

logger = get_logger("kotha.request")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Registra cada webhook entrante con su id de request y duración."""

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if path.startswith(settings.request_log_skip_prefixes):
            return await call_next(request)

        level = resolve_log_level(settings.request_log_level)
        request_id = uuid4().hex
        start = time.perf_counter()
        client_ip = request.headers.get("x-forwarded-for")
        if client_ip:
            client_ip = client_ip.split(",")[0].strip()
        elif request.client:
            client_ip = request.client.host

        base = {
            "request_id": request_id,
            "method": request.method,
            "path": path,
            "client_ip": client_ip,
            # Twilio reenvía el mismo token cuando reintenta un webhook.
            "idempotency_token": request.headers.get("i-twilio-idempotency-token"),
        }
        logger.log(level, "request.started", extra=base)

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.exception(
                "request.failed", extra={**base, "duration_ms": round(duration_ms, 2)}
            )
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        response.headers["x-request-id"] = request_id

        logger.log(
            level,
            "request.completed",
            extra={
                **base,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
