"""Domain models for SessionReel."""

from sessionreel.models.enums import BoundaryKind, SessionState
from sessionreel.models.recording import FORMAT_VERSION, Packet, Recording

__all__ = ["BoundaryKind", "SessionState", "Packet", "Recording", "FORMAT_VERSION"]
