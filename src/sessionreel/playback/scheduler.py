"""Playback scheduler: re-delivers a recording at its original cadence."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable

from sessionreel.models.enums import SessionState
from sessionreel.models.recording import Packet, Recording
from sessionreel.session.state import SessionStateMachine

logger = logging.getLogger(__name__)

PacketSink = Callable[[bytes], None]


class PlaybackScheduler:
    """Releases due packets to a sink, driven by an external tick.

    The scheduler never sleeps or spawns threads. Each ``tick`` receives
    the elapsed playback time and delivers every packet whose delay has
    passed, in capture order. ``offset_millis`` shifts the schedule
    forward after a skip.
    """

    def __init__(self, state: SessionStateMachine, sink: PacketSink) -> None:
        """Initialize scheduler.

        Args:
            state: Session state machine shared with capture
            sink: Receives each due payload, shaped exactly like live traffic
        """
        self._state = state
        self._sink = sink
        self._queue: deque[Packet] = deque()
        self._recording: Recording | None = None
        self._offset_millis = 0
        self._elapsed_millis = 0

    @property
    def recording(self) -> Recording | None:
        """Recording loaded for the current playback, if any."""
        return self._recording

    @property
    def remaining(self) -> int:
        return len(self._queue)

    @property
    def is_exhausted(self) -> bool:
        """True once playback is running but every packet has been delivered."""
        return self._state.in_playback and not self._queue

    @property
    def offset_millis(self) -> int:
        return self._offset_millis

    @property
    def elapsed_millis(self) -> int:
        return self._elapsed_millis

    def peek(self) -> Packet | None:
        return self._queue[0] if self._queue else None

    def start_playback(self, recording: Recording) -> bool:
        """Load a recording and begin playback from its first packet.

        Args:
            recording: Recording to replay

        Returns:
            True if playback started, False if a session is already in progress
        """
        if not self._state.begin_playback():
            return False

        self._recording = recording
        self._queue = deque(recording.packets)
        self._offset_millis = 0
        self._elapsed_millis = 0
        logger.info(
            "Playback started (%d packets, %d ms)",
            recording.packet_count, recording.duration_millis,
        )
        return True

    def tick(self, elapsed_millis: int) -> int:
        """Deliver every packet due at the given elapsed playback time.

        Callers pass non-decreasing values; nothing is delivered while
        paused and due packets remain queued.

        Args:
            elapsed_millis: Milliseconds of playback since start

        Returns:
            Number of packets delivered
        """
        if self._state.state != SessionState.PLAYBACK_ACTIVE:
            return 0

        self._elapsed_millis = elapsed_millis
        due_before = elapsed_millis + self._offset_millis
        delivered = 0
        while self._queue and self._queue[0].delay_millis <= due_before:
            packet = self._queue.popleft()
            self._sink(packet.payload)
            delivered += 1

        if delivered:
            logger.debug("Delivered %d packets at +%d ms", delivered, elapsed_millis)
        return delivered

    def skip_ahead(self, elapsed_millis: int | None = None) -> bool:
        """Collapse the wait before the next packet to zero.

        The offset is measured against the elapsed time at the moment of
        the skip, so the next ``tick`` at that time releases the front
        packet and later packets keep their relative spacing. When the
        front packet is already due the schedule is left alone; the offset
        never moves backwards.

        Args:
            elapsed_millis: Current elapsed playback time; defaults to the last tick

        Returns:
            True if the schedule was shifted
        """
        if not self._state.is_playback_active or not self._queue:
            return False

        current = self._elapsed_millis if elapsed_millis is None else elapsed_millis
        offset = self._queue[0].delay_millis - current
        if offset <= self._offset_millis:
            logger.debug("Front packet already due at +%d ms, nothing to skip", current)
            return False
        self._offset_millis = offset
        logger.debug("Skipped ahead, offset now %d ms", self._offset_millis)
        return True

    def toggle_playback(self) -> SessionState | None:
        """Pause or resume without touching the queue or offset."""
        return self._state.toggle_playback()

    def stop_playback(self) -> bool:
        """Stop playback and drop the remaining queue.

        Returns:
            True if playback was running, False if there was nothing to stop
        """
        if not self._state.in_playback:
            return False

        self._queue.clear()
        self._offset_millis = 0
        self._elapsed_millis = 0
        self._recording = None
        stopped = self._state.end_playback()
        logger.info("Playback stopped")
        return stopped
