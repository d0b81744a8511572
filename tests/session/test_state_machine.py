"""Tests for the session state machine."""

import threading

from sessionreel.models.enums import SessionState
from sessionreel.session.state import SessionStateMachine


class TestSessionStateMachine:
    def test_starts_idle(self):
        machine = SessionStateMachine()
        assert machine.state == SessionState.IDLE
        assert machine.allows_outbound

    def test_recording_round_trip(self):
        machine = SessionStateMachine()
        assert machine.begin_recording() is True
        assert machine.is_recording
        assert machine.end_recording() is True
        assert machine.state == SessionState.IDLE

    def test_playback_toggle_and_stop(self):
        machine = SessionStateMachine()
        assert machine.begin_playback() is True
        assert machine.toggle_playback() == SessionState.PLAYBACK_PAUSED
        assert machine.is_playback_paused
        assert machine.toggle_playback() == SessionState.PLAYBACK_ACTIVE
        assert machine.toggle_playback() == SessionState.PLAYBACK_PAUSED
        assert machine.end_playback() is True
        assert machine.state == SessionState.IDLE

    def test_start_playback_while_recording_rejected(self, caplog):
        machine = SessionStateMachine()
        machine.begin_recording()
        assert machine.begin_playback() is False
        assert machine.state == SessionState.RECORDING
        assert "already in progress" in caplog.text

    def test_start_recording_during_playback_rejected(self):
        machine = SessionStateMachine()
        machine.begin_playback()
        assert machine.begin_recording() is False
        assert machine.is_playback_active

    def test_toggle_when_idle_is_noop(self):
        machine = SessionStateMachine()
        assert machine.toggle_playback() is None
        assert machine.state == SessionState.IDLE

    def test_stops_are_idempotent(self):
        machine = SessionStateMachine()
        assert machine.end_playback() is False
        assert machine.end_recording() is False
        assert machine.state == SessionState.IDLE

    def test_outbound_blocked_during_playback(self):
        machine = SessionStateMachine()
        machine.begin_recording()
        assert machine.allows_outbound
        machine.end_recording()
        machine.begin_playback()
        assert not machine.allows_outbound
        machine.toggle_playback()
        assert not machine.allows_outbound
        machine.end_playback()
        assert machine.allows_outbound

    def test_recording_and_playback_start_are_mutually_exclusive(self):
        machine = SessionStateMachine()
        barrier = threading.Barrier(2)
        results: dict[str, bool] = {}

        def attempt(name, start):
            barrier.wait()
            results[name] = start()

        threads = [
            threading.Thread(target=attempt, args=("record", machine.begin_recording)),
            threading.Thread(target=attempt, args=("play", machine.begin_playback)),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(results.values()) == [False, True]
