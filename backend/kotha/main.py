"""Punto de entrada principal para la aplicación FastAPI."""

import logging
from pathlib import Path

from fastapi import FastAPI

from kotha.api.routes.health import router as health_router
from kotha.channels.voice.router import router as voice_router
from kotha.core.config import settings
from kotha.core.logging import configure_logging, get_logger, resolve_log_level
from kotha.core.middleware import RequestLoggingMiddleware


def create_app() -> FastAPI:
    """Crea y configura la instancia de FastAPI."""
    default_log_level = logging.DEBUG if settings.environment != "production" else logging.INFO
    log_level = resolve_log_level(settings.log_level, default=default_log_level)

    per_logger_files: dict[str, str] = {}
    if settings.log_file_path:
        log_dir = Path(settings.log_file_path).parent
        per_logger_files = {
            "kotha.request": str(log_dir / "request.log"),
            "kotha.channels.voice": str(log_dir / "voice.log"),
        }

    configure_logging(
        level=log_level,
        log_file=settings.log_file_path,
        per_logger_files=per_logger_files,
    )

    app = FastAPI(title="Kotha Voice API", version="0.1.0")
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health_router, prefix=settings.api_prefix)
    app.include_router(voice_router, prefix=settings.api_prefix)

    get_logger("kotha").info(
        "app.started",
        extra={"environment": settings.environment, "voice_prefix": settings.twilio_prefix},
    )
    return app


app = create_app()
