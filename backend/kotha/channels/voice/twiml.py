"""Construcción del TwiML devuelto por cada webhook de voz."""

from __future__ import annotations

from urllib.parse import urlencode

from twilio.twiml.voice_response import VoiceResponse

from kotha.core.config import Settings

TIMEOUT_MESSAGE = "Signal timeout. Please try again later. Goodbye."
KEYPAD_PROMPT = "Please enter your six digit pincode using your keypad."
RECORD_PROMPT = "Thank you. Now, please describe the urban issue clearly. Press star when finished."
RECORD_FALLBACK = "Signal lost. Goodbye."
SYSTEM_ERROR_MESSAGE = "System error. Please call back later."


def build_continuation_url(path: str, **params: str) -> str:
    """Une una ruta del mismo origen con parámetros codificados para Twilio."""
    if not params:
        return path
    return f"{path}?{urlencode(params)}"


def build_entry_response(settings: Settings) -> str:
    """Saludo inicial y `<Gather>` del PIN."""
    response = VoiceResponse()
    response.say(f"Welcome to {settings.system_name}.", voice=settings.voice)
    gather = response.gather(
        action=settings.record_path,
        method="POST",
        num_digits=settings.pincode_length,
        timeout=settings.gather_timeout_seconds,
    )
    # Sólo suena si quien llama aún no comenzó a marcar.
    gather.say(KEYPAD_PROMPT, voice=settings.voice)
    # Twilio llega aquí únicamente cuando el Gather vence sin dígitos.
    response.say(TIMEOUT_MESSAGE, voice=settings.voice)
    return str(response)


def build_record_response(pincode: str, settings: Settings) -> str:
    """Confirmación del PIN y `<Record>` con el PIN en la URL de continuación."""
    response = VoiceResponse()
    response.say(RECORD_PROMPT, voice=settings.voice)
    response.record(
        action=build_continuation_url(settings.callback_path, pincode=pincode),
        method="POST",
        max_length=settings.record_max_length_seconds,
        finish_on_key=settings.record_finish_on_key,
        play_beep=settings.record_play_beep,
    )
    response.say(RECORD_FALLBACK, voice=settings.voice)
    return str(response)


def build_report_received_response(pincode: str | None, settings: Settings) -> str:
    """Confirmación final tras entregar el reporte; la llamada termina."""
    response = VoiceResponse()
    if pincode:
        # Los dígitos se separan para que el TTS los lea uno a uno.
        spoken = " ".join(pincode)
        message = f"Signal synchronized. Your report for area {spoken} has been received. Goodbye."
    else:
        message = "Signal synchronized. Your report has been received. Goodbye."
    response.say(message, voice=settings.voice)
    return str(response)


def build_error_response(settings: Settings) -> str:
    """Disculpa final; no se ofrece reintento y la llamada termina."""
    response = VoiceResponse()
    response.say(SYSTEM_ERROR_MESSAGE, voice=settings.voice)
    return str(response)
