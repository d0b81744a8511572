"""Pausable millisecond stopwatch for driving playback."""

from __future__ import annotations

from collections.abc import Callable

from sessionreel.utils.timestamps import monotonic_millis


class PlaybackClock:
    """Elapsed time that only advances while running.

    Pausing freezes elapsed time, so due packets stay queued instead of
    piling up while playback is paused.
    """

    def __init__(self, source: Callable[[], int] = monotonic_millis) -> None:
        self._source = source
        self._accumulated = 0
        self._running_since: int | None = None

    @property
    def running(self) -> bool:
        return self._running_since is not None

    def start(self) -> None:
        """Reset to zero and start running."""
        self._accumulated = 0
        self._running_since = self._source()

    def pause(self) -> None:
        if self._running_since is None:
            return
        self._accumulated += self._source() - self._running_since
        self._running_since = None

    def resume(self) -> None:
        if self._running_since is None:
            self._running_since = self._source()

    def reset(self) -> None:
        """Stop and return to zero."""
        self._accumulated = 0
        self._running_since = None

    def elapsed_millis(self) -> int:
        if self._running_since is None:
            return self._accumulated
        return self._accumulated + self._source() - self._running_since
