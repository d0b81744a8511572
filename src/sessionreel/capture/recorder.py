"""Capture recorder: turns live inbound traffic into recordings."""

from __future__ import annotations

import logging
from collections.abc import Callable

from sessionreel.models.enums import BoundaryKind
from sessionreel.models.recording import Packet, Recording
from sessionreel.session.state import SessionStateMachine
from sessionreel.storage.store import RecordingStore
from sessionreel.utils.timestamps import epoch_millis, monotonic_millis

logger = logging.getLogger(__name__)

BoundaryClassifier = Callable[[bytes], BoundaryKind]


class CaptureRecorder:
    """Appends inbound messages to the session in progress.

    A caller-supplied classifier marks session boundaries: a start
    message opens a session and resets the elapsed-time clock, an end
    message finalizes the session and hands it to the store. Traffic
    observed during playback is ignored so replayed messages are never
    captured again.
    """

    def __init__(
        self,
        state: SessionStateMachine,
        store: RecordingStore,
        classifier: BoundaryClassifier,
        record_boundary_messages: bool = False,
        clock: Callable[[], int] = monotonic_millis,
        wall_clock: Callable[[], int] = epoch_millis,
    ) -> None:
        """Initialize recorder.

        Args:
            state: Session state machine shared with playback
            store: Store that receives finished recordings
            classifier: Maps a payload to its session boundary kind
            record_boundary_messages: Also keep start/end marker messages
            clock: Monotonic millisecond clock for packet delays
            wall_clock: Epoch millisecond clock for the recording start time
        """
        self._state = state
        self._store = store
        self._classify = classifier
        self._record_boundary_messages = record_boundary_messages
        self._clock = clock
        self._wall_clock = wall_clock

        self._packets: list[Packet] = []
        self._started_at = 0
        self._start_epoch_millis = 0
        self.last_identifier: str | None = None

    @property
    def pending_packets(self) -> tuple[Packet, ...]:
        return tuple(self._packets)

    @property
    def elapsed_millis(self) -> int:
        if not self._state.is_recording:
            return 0
        return self._clock() - self._started_at

    def on_inbound_message(self, payload: bytes) -> None:
        """Handle one message received from the network layer.

        Args:
            payload: Raw message bytes
        """
        if self._state.in_playback:
            return

        kind = self._classify(payload)

        if kind == BoundaryKind.SESSION_START and not self._state.is_recording:
            if not self._state.begin_recording():
                return
            self._started_at = self._clock()
            self._start_epoch_millis = self._wall_clock()
            self._packets = []
            logger.info("Recording started at %d", self._start_epoch_millis)

        if not self._state.is_recording:
            return

        if kind == BoundaryKind.NONE or self._record_boundary_messages:
            packet = Packet(delay_millis=self._clock() - self._started_at, payload=bytes(payload))
            self._packets.append(packet)
            logger.debug("Captured %d bytes at +%d ms", len(packet.payload), packet.delay_millis)

        if kind == BoundaryKind.SESSION_END:
            self._finalize(save=True)

    def stop_recording(self, save: bool = True) -> str | None:
        """Explicitly end the session in progress.

        Args:
            save: Persist the captured packets; False discards them

        Returns:
            Identifier of the saved recording, or None if nothing was saved
        """
        if not self._state.is_recording:
            return None
        return self._finalize(save=save)

    def _finalize(self, save: bool) -> str | None:
        identifier = None
        if save:
            recording = Recording(
                start_time_epoch_millis=self._start_epoch_millis,
                duration_millis=self._clock() - self._started_at,
                packets=tuple(self._packets),
            )
            # A failed save propagates with the session still open so the caller can retry
            identifier = self._store.save(recording)
            self.last_identifier = identifier
        else:
            logger.info("Recording discarded (%d packets)", len(self._packets))

        self._packets = []
        self._state.end_recording()
        logger.info("Recording stopped")
        return identifier
