"""Endpoint de salud mínimo para validaciones rápidas."""
from fastapi import APIRouter

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", summary="Estado del servicio")
def healthcheck() -> dict[str, str]:
    """Confirma que la API responde; Twilio no depende de esta ruta."""
    return {"status": "ok"}
