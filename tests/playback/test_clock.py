"""Tests for the pausable playback clock."""

from sessionreel.playback.clock import PlaybackClock


def test_not_running_until_started(clock):
    playback_clock = PlaybackClock(clock)
    clock.advance(100)
    assert not playback_clock.running
    assert playback_clock.elapsed_millis() == 0


def test_elapsed_since_start(clock):
    playback_clock = PlaybackClock(clock)
    playback_clock.start()
    clock.advance(250)
    assert playback_clock.running
    assert playback_clock.elapsed_millis() == 250


def test_pause_freezes_elapsed(clock):
    playback_clock = PlaybackClock(clock)
    playback_clock.start()
    clock.advance(100)
    playback_clock.pause()
    clock.advance(5_000)
    assert playback_clock.elapsed_millis() == 100

    playback_clock.resume()
    clock.advance(20)
    assert playback_clock.elapsed_millis() == 120


def test_pause_and_resume_are_idempotent(clock):
    playback_clock = PlaybackClock(clock)
    playback_clock.start()
    clock.advance(10)
    playback_clock.pause()
    playback_clock.pause()
    clock.advance(10)
    playback_clock.resume()
    playback_clock.resume()
    clock.advance(10)
    assert playback_clock.elapsed_millis() == 20


def test_start_and_reset_return_to_zero(clock):
    playback_clock = PlaybackClock(clock)
    playback_clock.start()
    clock.advance(70)
    playback_clock.start()
    assert playback_clock.elapsed_millis() == 0
    clock.advance(5)
    playback_clock.reset()
    assert not playback_clock.running
    assert playback_clock.elapsed_millis() == 0
