"""Tests for packet and recording models."""

import json

import pytest
from pydantic import ValidationError

from sessionreel.models.enums import BoundaryKind, SessionState
from sessionreel.models.recording import FORMAT_VERSION, MAX_MILLIS, Packet, Recording


def test_session_state_values():
    assert SessionState.IDLE == "idle"
    assert {s.value for s in SessionState} == {
        "idle", "recording", "playback_active", "playback_paused",
    }


def test_boundary_kind_values():
    assert set(BoundaryKind) == {
        BoundaryKind.NONE, BoundaryKind.SESSION_START, BoundaryKind.SESSION_END,
    }


def test_packet_payload_serialized_as_base64():
    packet = Packet(delay_millis=5, payload=b"\x00\xffhi")
    data = json.loads(packet.model_dump_json())
    assert data == {"delay_millis": 5, "payload": "AP9oaQ=="}


def test_packet_python_dump_keeps_bytes():
    packet = Packet(delay_millis=5, payload=b"raw")
    assert packet.model_dump()["payload"] == b"raw"


def test_packet_decodes_base64_text_from_json():
    packet = Packet.model_validate_json('{"delay_millis": 1, "payload": "AP9oaQ=="}')
    assert packet.payload == b"\x00\xffhi"


def test_packet_rejects_invalid_base64_in_json():
    with pytest.raises(ValidationError):
        Packet.model_validate_json('{"delay_millis": 1, "payload": "not base64!"}')


@pytest.mark.parametrize("text", ["abcd", "hello"])
def test_packet_str_payload_is_not_base64_decoded_in_python(text):
    packet = Packet(delay_millis=0, payload=text)
    assert packet.payload == text.encode()


def test_packet_delay_limited_to_unsigned_64_bit():
    assert Packet(delay_millis=MAX_MILLIS, payload=b"").delay_millis == 2**64 - 1
    with pytest.raises(ValidationError):
        Packet(delay_millis=2**64, payload=b"")


def test_recording_times_limited_to_unsigned_64_bit():
    with pytest.raises(ValidationError):
        Recording(start_time_epoch_millis=2**64, packets=())
    with pytest.raises(ValidationError):
        Recording(start_time_epoch_millis=0, duration_millis=2**64, packets=())


def test_packet_rejects_negative_delay():
    with pytest.raises(ValidationError):
        Packet(delay_millis=-1, payload=b"")


def test_recording_is_immutable(sample_recording):
    with pytest.raises(ValidationError):
        sample_recording.duration_millis = 1
    assert isinstance(sample_recording.packets, tuple)


def test_recording_requires_packets():
    with pytest.raises(ValidationError):
        Recording.model_validate({"start_time_epoch_millis": 1, "duration_millis": 2})


def test_recording_defaults(empty_recording):
    assert empty_recording.format_version == FORMAT_VERSION
    assert empty_recording.is_empty
    assert empty_recording.packet_count == 0


def test_recording_ignores_unknown_fields():
    recording = Recording.model_validate_json(
        json.dumps(
            {
                "start_time_epoch_millis": 1,
                "packets": [{"delay_millis": 0, "payload": "", "opcode": 7}],
                "annotations": {"map": "arena"},
            }
        )
    )
    assert recording.packet_count == 1
    assert recording.packets[0].payload == b""
