"""Shared test fixtures."""

from __future__ import annotations

import pytest

from sessionreel.models.enums import BoundaryKind
from sessionreel.models.recording import Packet, Recording
from sessionreel.storage.store import RecordingStore

SUMMARY_PREFIX = b"\x7fsummary:"


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, now: int = 0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int) -> None:
        self.now += millis


def marker_classifier(payload: bytes) -> BoundaryKind:
    if payload.startswith(b"\x01"):
        return BoundaryKind.SESSION_START
    if payload.startswith(b"\x02"):
        return BoundaryKind.SESSION_END
    return BoundaryKind.NONE


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(10_000)


@pytest.fixture
def wall_clock() -> FakeClock:
    return FakeClock(1_700_000_000_000)


@pytest.fixture
def classifier():
    return marker_classifier


@pytest.fixture
def store(tmp_path) -> RecordingStore:
    return RecordingStore(tmp_path / "recordings")


@pytest.fixture
def delivered() -> list[bytes]:
    return []


@pytest.fixture
def sink(delivered):
    return delivered.append


@pytest.fixture
def sample_recording() -> Recording:
    return Recording(
        start_time_epoch_millis=1_700_000_000_000,
        duration_millis=400,
        packets=(
            Packet(delay_millis=0, payload=b"hello"),
            Packet(delay_millis=50, payload=b"\x00\xff\x10binary"),
            Packet(delay_millis=120, payload=b""),
            Packet(delay_millis=120, payload=SUMMARY_PREFIX + b"score=42"),
            Packet(delay_millis=300, payload=b"tail"),
        ),
    )


@pytest.fixture
def empty_recording() -> Recording:
    return Recording(start_time_epoch_millis=1_700_000_000_500, duration_millis=75, packets=())
