"""Etapas de la llamada IVR.

El servicio no guarda sesión: Twilio es quien mantiene el estado de la llamada
e invoca el siguiente webhook indicado en el TwiML. Estas etapas sólo describen
a dónde apunta cada respuesta y se usan para logging y pruebas.

    Entry ──(dígitos)──> Collecting(pin) ──> Recording(pin) ──> Terminal(report_received)
      │                                          │
      └──(timeout)──> Terminal(timeout)          └──(silencio/corte)──> Terminal(timeout)

Un formulario ilegible en cualquier webhook lleva directo a Terminal(system_error).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

TerminalReason = Literal["timeout", "system_error", "report_received"]


@dataclass(frozen=True, slots=True)
class Entry:
    """Inicio de la llamada: saludo y solicitud del PIN."""

    name: str = "entry"


@dataclass(frozen=True, slots=True)
class Collecting:
    """Twilio entregó los dígitos marcados por quien llama."""

    pincode: str
    name: str = "collecting"


@dataclass(frozen=True, slots=True)
class Recording:
    """Se indicó a Twilio grabar el reporte hablado."""

    pincode: str
    name: str = "recording"


@dataclass(frozen=True, slots=True)
class Terminal:
    """La llamada termina con la respuesta emitida."""

    reason: TerminalReason
    name: str = "terminal"


CallStage = Entry | Collecting | Recording | Terminal


@dataclass(frozen=True, slots=True)
class StageResult:
    """Resultado de un webhook: la etapa descrita y el TwiML a devolver."""

    stage: CallStage
    twiml: str
