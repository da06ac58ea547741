"""Pruebas unitarias de las etapas del flujo IVR."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from kotha.channels.voice import schemas, service, twiml
from kotha.channels.voice.flow import Entry, Recording, Terminal
from kotha.core.config import Settings


def test_entry_stage_is_deterministic() -> None:
    first = service.handle_entry()
    second = service.handle_entry()

    assert first.stage == Entry()
    assert first.twiml == second.twiml


def test_collection_moves_to_recording_with_pincode() -> None:
    result = service.handle_collection({"Digits": "908172", "CallSid": "CA1"})

    assert result.stage == Recording(pincode="908172")
    record = ET.fromstring(result.twiml).find("Record")
    assert record.get("action") == "/api/twilio/callback?pincode=908172"


@pytest.mark.parametrize("form", [{}, {"Digits": ""}, {"Digits": "   "}])
def test_collection_substitutes_sentinel(form: dict[str, str]) -> None:
    result = service.handle_collection(form)

    assert result.stage == Recording(pincode=schemas.PINCODE_SENTINEL)


def test_system_error_is_terminal() -> None:
    result = service.handle_system_error(ValueError("bad form"))

    assert result.stage == Terminal(reason="system_error")
    root = ET.fromstring(result.twiml)
    assert [child.tag for child in root] == ["Say"]


def test_builders_follow_configured_call_settings() -> None:
    custom = Settings(
        voice="Polly.Joanna",
        pincode_length=4,
        gather_timeout_seconds=5,
        record_max_length_seconds=30,
        api_prefix="/hooks",
    )

    entry = ET.fromstring(twiml.build_entry_response(custom))
    gather = entry.find("Gather")
    assert gather.get("numDigits") == "4"
    assert gather.get("timeout") == "5"
    assert gather.get("action") == "/hooks/twilio/record"
    assert {say.get("voice") for say in entry.iter("Say")} == {"Polly.Joanna"}

    record = ET.fromstring(twiml.build_record_response("1234", custom)).find("Record")
    assert record.get("action") == "/hooks/twilio/callback?pincode=1234"
    assert record.get("maxLength") == "30"


def test_continuation_url_without_params_is_plain_path() -> None:
    assert twiml.build_continuation_url("/api/twilio/record") == "/api/twilio/record"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("123456", "123456"),
        (" 123456 ", "123456"),
        ("unknown", None),
        ("", None),
        (None, None),
        ("12345", None),
        ("12345#", None),
        ("١٢٣٤٥٦", None),
    ],
)
def test_validate_pincode(value: str | None, expected: str | None) -> None:
    assert schemas.validate_pincode(value, length=6) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("https://api.twilio.com/Recordings/RE1", "https://api.twilio.com/Recordings/RE1.wav"),
        ("api.twilio.com/Recordings/RE1", "https://api.twilio.com/Recordings/RE1.wav"),
        ("https://api.twilio.com/Recordings/RE1.wav", "https://api.twilio.com/Recordings/RE1.wav"),
    ],
)
def test_normalise_recording_url(raw: str, expected: str) -> None:
    assert schemas.normalise_recording_url(raw) == expected
