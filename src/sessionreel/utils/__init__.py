"""Utility functions for SessionReel."""

from sessionreel.utils.hashing import fingerprint_recording
from sessionreel.utils.timestamps import epoch_millis, from_epoch_millis, monotonic_millis

__all__ = [
    "epoch_millis",
    "monotonic_millis",
    "from_epoch_millis",
    "fingerprint_recording",
]
