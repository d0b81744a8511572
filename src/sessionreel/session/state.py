"""Session state machine shared by capture and playback."""

from __future__ import annotations

import logging
import threading

from sessionreel.models.enums import SessionState

logger = logging.getLogger(__name__)

_PLAYBACK_STATES = frozenset({SessionState.PLAYBACK_ACTIVE, SessionState.PLAYBACK_PAUSED})


class SessionStateMachine:
    """Tracks exactly one SessionState and validates transitions.

    Every transition runs under one lock, so starting a recording and
    starting playback can never both succeed from the same idle state.
    Rejected transitions are benign: they log a warning, leave the state
    untouched and return False.
    """

    def __init__(self) -> None:
        self._state = SessionState.IDLE
        self._lock = threading.Lock()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_recording(self) -> bool:
        return self._state == SessionState.RECORDING

    @property
    def is_playback_active(self) -> bool:
        return self._state == SessionState.PLAYBACK_ACTIVE

    @property
    def is_playback_paused(self) -> bool:
        return self._state == SessionState.PLAYBACK_PAUSED

    @property
    def in_playback(self) -> bool:
        return self._state in _PLAYBACK_STATES

    @property
    def allows_outbound(self) -> bool:
        """Whether the network layer may send; False for the whole playback."""
        return self._state not in _PLAYBACK_STATES

    def begin_recording(self) -> bool:
        return self._transition({SessionState.IDLE}, SessionState.RECORDING, "start recording")

    def end_recording(self) -> bool:
        return self._transition({SessionState.RECORDING}, SessionState.IDLE, "stop recording")

    def begin_playback(self) -> bool:
        return self._transition({SessionState.IDLE}, SessionState.PLAYBACK_ACTIVE, "start playback")

    def end_playback(self) -> bool:
        return self._transition(_PLAYBACK_STATES, SessionState.IDLE, "stop playback")

    def toggle_playback(self) -> SessionState | None:
        """Flip between active and paused playback.

        Returns:
            The new state, or None if no playback is in progress
        """
        with self._lock:
            if self._state == SessionState.PLAYBACK_ACTIVE:
                self._state = SessionState.PLAYBACK_PAUSED
            elif self._state == SessionState.PLAYBACK_PAUSED:
                self._state = SessionState.PLAYBACK_ACTIVE
            else:
                logger.warning("Cannot toggle playback: state is %s", self._state)
                return None
            logger.info("Playback %s", "paused" if self.is_playback_paused else "resumed")
            return self._state

    def _transition(
        self,
        allowed_from: set[SessionState] | frozenset[SessionState],
        target: SessionState,
        action: str,
    ) -> bool:
        with self._lock:
            if self._state not in allowed_from:
                if self._state != target:
                    logger.warning("Cannot %s: %s already in progress", action, self._state)
                return False
            logger.debug("Session state %s -> %s", self._state, target)
            self._state = target
            return True
