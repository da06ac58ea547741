"""Esquemas para los webhooks de Twilio Voice."""

from pydantic import BaseModel, ConfigDict, Field

PINCODE_SENTINEL = "unknown"


def normalise_digits(value: str | None) -> str:
    """Devuelve los dígitos recibidos o el centinela cuando faltan o vienen en blanco."""
    if value is None:
        return PINCODE_SENTINEL
    return value.strip() or PINCODE_SENTINEL


def validate_pincode(value: str | None, *, length: int) -> str | None:
    """Acepta sólo PINs de exactamente `length` dígitos ASCII."""
    if not value or value == PINCODE_SENTINEL:
        return None
    text = value.strip()
    if len(text) != length or not (text.isascii() and text.isdigit()):
        return None
    return text


def normalise_recording_url(raw: str) -> str:
    """Construye la URL absoluta del WAV a partir de `RecordingUrl`."""
    url = raw.strip()
    if not url.startswith(("http://", "https://")):
        url = f"https://{url}"
    return url if url.endswith(".wav") else f"{url}.wav"


class RecordingCallback(BaseModel):
    """Campos relevantes del callback de `<Record>`."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    recording_url: str = Field(min_length=1, alias="RecordingUrl")
    recording_sid: str | None = Field(default=None, alias="RecordingSid")
    recording_duration: int | None = Field(default=None, alias="RecordingDuration")
    from_: str | None = Field(default=None, alias="From")
    call_sid: str | None = Field(default=None, alias="CallSid")


class VoiceReport(BaseModel):
    """Reporte de voz que se entrega al servicio de recepción."""

    pincode: str | None
    caller: str = "unknown"
    audio_url: str
    recording_sid: str | None = None
    duration_seconds: int | None = None
    call_sid: str | None = None
