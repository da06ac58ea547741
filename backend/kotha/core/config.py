"""Configuración central basada en variables de entorno."""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Valores globales leídos desde `.env` o el entorno."""

    environment: str = "development"
    log_level: str | None = Field(
        default=None,
        description="Nivel de logging global (ej. debug, info, warning). Cuando no se define, usa un valor por ambiente.",
    )
    request_log_level: str = Field(
        default="info",
        description=(
            "Nivel mínimo para registrar solicitudes en middleware. "
            "Valores más altos (warning/error) reducen registros de peticiones exitosas."
        ),
    )
    request_log_skip_prefixes: tuple[str, ...] = Field(
        default=("/favicon", "/robots.txt", "/docs", "/openapi"),
        description="Prefijos de ruta para los que no se registrarán eventos de request.started/completed.",
    )
    log_file_path: str | None = Field(
        default=None,
        description="Archivo principal de logs. Sin valor, sólo se escribe a stderr.",
    )
    api_prefix: str = "/api"

    twilio_auth_token: str | None = None
    twilio_validate_signature: bool = Field(
        default=False,
        description="Exige `X-Twilio-Signature` válido en los webhooks de voz.",
    )
    public_base_url: str | None = Field(
        default=None,
        description=(
            "URL pública (ej. https://kotha.example.org) usada para validar firmas "
            "cuando la app corre detrás de un proxy."
        ),
    )

    voice: str = "Polly.Amy"
    system_name: str = "Shohor Kotha Community Intelligence System"
    pincode_length: int = Field(default=6, ge=1, le=20)
    gather_timeout_seconds: int = Field(default=10, ge=1)
    record_max_length_seconds: int = Field(default=60, ge=1)
    record_finish_on_key: str = "*"
    record_play_beep: bool = True

    report_forward_url: str | None = Field(
        default=None,
        description="Servicio que recibe los reportes de voz completados. Sin valor, sólo se registran.",
    )
    report_forward_token: str | None = None
    report_forward_timeout_seconds: float = 6.0

    model_config = SettingsConfigDict(env_file=".env", env_prefix="KOTHA_", extra="allow")

    @model_validator(mode="after")
    def _require_token_for_signatures(self) -> "Settings":
        if self.twilio_validate_signature and not self.twilio_auth_token:
            msg = "KOTHA_TWILIO_AUTH_TOKEN is required when signature validation is enabled"
            raise ValueError(msg)
        return self

    @property
    def twilio_prefix(self) -> str:
        return f"{self.api_prefix}/twilio"

    @property
    def record_path(self) -> str:
        return f"{self.twilio_prefix}/record"

    @property
    def callback_path(self) -> str:
        return f"{self.twilio_prefix}/callback"


settings = Settings()
