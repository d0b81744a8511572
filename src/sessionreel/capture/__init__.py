"""Capture of live inbound traffic."""

from sessionreel.capture.recorder import BoundaryClassifier, CaptureRecorder

__all__ = ["BoundaryClassifier", "CaptureRecorder"]
