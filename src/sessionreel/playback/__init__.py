"""Timed replay of recordings."""

from sessionreel.playback.clock import PlaybackClock
from sessionreel.playback.lookup import find_all, find_first, find_first_packet
from sessionreel.playback.scheduler import PlaybackScheduler

__all__ = ["PlaybackClock", "PlaybackScheduler", "find_first", "find_first_packet", "find_all"]
