"""Session engine: the single owned instance the network layer talks to."""

from __future__ import annotations

import logging
from collections.abc import Callable

from sessionreel.capture.recorder import BoundaryClassifier, CaptureRecorder
from sessionreel.config import SessionReelConfig
from sessionreel.models.enums import SessionState
from sessionreel.models.recording import Recording
from sessionreel.playback.clock import PlaybackClock
from sessionreel.playback.lookup import PayloadPredicate, find_first
from sessionreel.playback.scheduler import PacketSink, PlaybackScheduler
from sessionreel.session.state import SessionStateMachine
from sessionreel.storage.store import RecordingStore
from sessionreel.utils.timestamps import epoch_millis, monotonic_millis

logger = logging.getLogger(__name__)


class SessionEngine:
    """Wires capture, storage and playback around one shared session state.

    The host feeds every received message to ``on_inbound_message``,
    routes outbound sends through ``guard_outbound``, and calls ``pump``
    from its frame or timer callback while playback runs.
    """

    def __init__(
        self,
        store: RecordingStore,
        classifier: BoundaryClassifier,
        sink: PacketSink,
        *,
        record_boundary_messages: bool = False,
        clock: Callable[[], int] | None = None,
        wall_clock: Callable[[], int] | None = None,
    ) -> None:
        clock = clock or monotonic_millis
        self._state = SessionStateMachine()
        self._store = store
        self._recorder = CaptureRecorder(
            self._state,
            store,
            classifier,
            record_boundary_messages=record_boundary_messages,
            clock=clock,
            wall_clock=wall_clock or epoch_millis,
        )
        self._scheduler = PlaybackScheduler(self._state, sink)
        self._clock = PlaybackClock(clock)

    @classmethod
    def from_config(
        cls,
        config: SessionReelConfig,
        classifier: BoundaryClassifier,
        sink: PacketSink,
    ) -> SessionEngine:
        return cls(
            RecordingStore(config.storage_dir),
            classifier,
            sink,
            record_boundary_messages=config.record_boundary_messages,
        )

    # ─── Status ────────────────────────────────────────────────────────

    @property
    def state(self) -> SessionState:
        return self._state.state

    @property
    def is_recording(self) -> bool:
        return self._state.is_recording

    @property
    def is_playback_active(self) -> bool:
        return self._state.is_playback_active

    @property
    def is_playback_paused(self) -> bool:
        return self._state.is_playback_paused

    @property
    def is_playback_exhausted(self) -> bool:
        return self._scheduler.is_exhausted

    @property
    def allows_outbound(self) -> bool:
        return self._state.allows_outbound

    @property
    def playback_elapsed_millis(self) -> int:
        return self._clock.elapsed_millis()

    @property
    def loaded_recording(self) -> Recording | None:
        return self._scheduler.recording

    @property
    def store(self) -> RecordingStore:
        return self._store

    @property
    def recorder(self) -> CaptureRecorder:
        return self._recorder

    @property
    def scheduler(self) -> PlaybackScheduler:
        return self._scheduler

    # ─── Network boundary ──────────────────────────────────────────────

    def on_inbound_message(self, payload: bytes) -> None:
        """Sole ingestion point for received messages."""
        self._recorder.on_inbound_message(payload)

    def guard_outbound(self, send: Callable[[bytes], object]) -> Callable[[bytes], bool]:
        """Wrap a sender so nothing leaves the host during playback.

        Args:
            send: The network layer's raw send function

        Returns:
            Sender returning True if the payload was sent, False if discarded
        """

        def guarded(payload: bytes) -> bool:
            if not self._state.allows_outbound:
                logger.debug("Discarded %d byte outbound send during playback", len(payload))
                return False
            send(payload)
            return True

        return guarded

    # ─── Capture control ───────────────────────────────────────────────

    def stop_recording(self, save: bool = True) -> str | None:
        return self._recorder.stop_recording(save=save)

    # ─── Playback control ──────────────────────────────────────────────

    def start_playback(self, identifier: str) -> bool:
        """Load a stored recording and start replaying it.

        Load failures propagate and leave the session state unchanged.

        Returns:
            True if playback started, False if a session is already in progress
        """
        if self._state.state != SessionState.IDLE:
            logger.warning(
                "Cannot start playback of %s: %s already in progress",
                identifier, self._state.state,
            )
            return False
        recording = self._store.load(identifier)
        return self.start_playback_recording(recording)

    def start_playback_recording(self, recording: Recording) -> bool:
        if not self._scheduler.start_playback(recording):
            return False
        self._clock.start()
        return True

    def stop_playback(self) -> bool:
        stopped = self._scheduler.stop_playback()
        self._clock.reset()
        return stopped

    def toggle_playback(self) -> SessionState | None:
        new_state = self._scheduler.toggle_playback()
        if new_state == SessionState.PLAYBACK_PAUSED:
            self._clock.pause()
        elif new_state == SessionState.PLAYBACK_ACTIVE:
            self._clock.resume()
        return new_state

    def skip_ahead(self) -> bool:
        return self._scheduler.skip_ahead(self._clock.elapsed_millis())

    def pump(self) -> int:
        """Tick the scheduler with the engine's own playback clock."""
        return self._scheduler.tick(self._clock.elapsed_millis())

    def tick(self, elapsed_millis: int) -> int:
        """Tick the scheduler with a caller-supplied elapsed time."""
        return self._scheduler.tick(elapsed_millis)

    # ─── Lookup ────────────────────────────────────────────────────────

    def find_in_loaded(self, predicate: PayloadPredicate) -> bytes | None:
        """Find the first matching payload in the recording being played back."""
        recording = self._scheduler.recording
        if recording is None:
            return None
        return find_first(recording, predicate)
