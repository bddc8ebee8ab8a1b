"""Tests for the periodic background sweeper."""

import threading

import pytest

from request_guard.adapters.rate_limit.sweeper import PeriodicSweeper


def test_invokes_callback_repeatedly() -> None:
    calls = []
    done = threading.Event()

    def _callback() -> None:
        calls.append(1)
        if len(calls) >= 3:
            done.set()

    sweeper = PeriodicSweeper(_callback, 0.01)
    sweeper.start()
    try:
        assert done.wait(timeout=2.0)
    finally:
        sweeper.stop()

    assert not sweeper.running


def test_callback_errors_do_not_kill_the_loop() -> None:
    calls = []
    done = threading.Event()

    def _callback() -> None:
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("boom")
        done.set()

    sweeper = PeriodicSweeper(_callback, 0.01)
    sweeper.start()
    try:
        assert done.wait(timeout=2.0)
    finally:
        sweeper.stop()

    assert len(calls) >= 2


def test_stop_before_start_is_safe() -> None:
    sweeper = PeriodicSweeper(lambda: None, 1.0)
    sweeper.stop()
    assert not sweeper.running


@pytest.mark.parametrize("interval", [0, -1.0, float("nan")])
def test_rejects_non_positive_interval(interval: float) -> None:
    with pytest.raises(ValueError):
        PeriodicSweeper(lambda: None, interval)
