"""Shared enumerations for SessionReel domain objects."""

from enum import StrEnum


class SessionState(StrEnum):
    """Lifecycle state shared by the recorder and the playback scheduler."""

    IDLE = "idle"
    RECORDING = "recording"
    PLAYBACK_ACTIVE = "playback_active"
    PLAYBACK_PAUSED = "playback_paused"


class BoundaryKind(StrEnum):
    """Result of classifying an inbound message against session boundaries."""

    NONE = "none"
    SESSION_START = "session_start"
    SESSION_END = "session_end"
