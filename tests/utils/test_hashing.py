"""Tests for hashing utilities."""

from sessionreel.models.recording import Packet, Recording
from sessionreel.utils.hashing import fingerprint_recording


def test_fingerprint_ignores_start_time_and_duration(sample_recording):
    shifted = sample_recording.model_copy(
        update={"start_time_epoch_millis": 1, "duration_millis": 9999}
    )
    assert fingerprint_recording(shifted) == fingerprint_recording(sample_recording)


def test_fingerprint_sensitive_to_timing_and_order():
    a = Packet(delay_millis=0, payload=b"a")
    b = Packet(delay_millis=10, payload=b"b")
    base = Recording(start_time_epoch_millis=0, packets=(a, b))
    reordered = Recording(start_time_epoch_millis=0, packets=(b, a))
    retimed = Recording(
        start_time_epoch_millis=0, packets=(a, Packet(delay_millis=11, payload=b"b"))
    )
    assert fingerprint_recording(base) != fingerprint_recording(reordered)
    assert fingerprint_recording(base) != fingerprint_recording(retimed)


def test_fingerprint_distinguishes_payload_boundaries():
    split_one = Recording(
        start_time_epoch_millis=0,
        packets=(Packet(delay_millis=0, payload=b"ab"), Packet(delay_millis=0, payload=b"c")),
    )
    split_two = Recording(
        start_time_epoch_millis=0,
        packets=(Packet(delay_millis=0, payload=b"a"), Packet(delay_millis=0, payload=b"bc")),
    )
    assert fingerprint_recording(split_one) != fingerprint_recording(split_two)
