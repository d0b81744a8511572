"""Content hashing utilities for recordings."""

import hashlib

from sessionreel.models.recording import Recording


def fingerprint_recording(recording: Recording) -> str:
    """Compute a deterministic fingerprint over a recording's timing and payloads.

    Two recordings with the same fingerprint replay identically. The
    start time and duration are excluded since they do not affect replay.

    Args:
        recording: Recording to fingerprint

    Returns:
        str: First 16 characters of hex digest
    """
    h = hashlib.sha256()
    for packet in recording.packets:
        h.update(packet.delay_millis.to_bytes(8, "big"))
        h.update(len(packet.payload).to_bytes(8, "big"))
        h.update(packet.payload)
    return h.hexdigest()[:16]
