"""Durable storage of recordings."""

from sessionreel.storage.store import RecordingStore, recording_identifier

__all__ = ["RecordingStore", "recording_identifier"]
