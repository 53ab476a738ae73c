import threading
import time

from restkit.io_timer import IoTimer, TimerGuard, create_guard


def test_timer_expires_and_calls_close():
    fired = threading.Event()
    timer = IoTimer.create("t", 10, fired.set)
    assert fired.wait(5)
    assert timer.is_expired()
    assert not timer.is_active()


def test_cancelled_timer_does_not_fire():
    calls = []
    timer = IoTimer.create("t", 50, lambda: calls.append(1))
    assert timer.is_active()
    timer.cancel()
    time.sleep(0.15)
    assert calls == []
    assert not timer.is_expired()
    assert not timer.is_active()


def test_close_exception_is_contained():
    done = threading.Event()

    def close():
        done.set()
        raise RuntimeError("boom")

    timer = IoTimer.create("t", 5, close)
    assert done.wait(5)
    time.sleep(0.05)
    assert timer.is_expired()


def test_unstarted_timer_is_inactive():
    timer = IoTimer("t", lambda: None)
    assert not timer.is_active()
    assert not timer.is_expired()


def test_guard_without_close_has_no_timer():
    guard = create_guard("g", 100, None)
    assert guard.timer is None
    guard.cancel()
    assert guard.timer is None


def test_guard_with_zero_timeout_has_no_timer():
    assert create_guard("g", 0, lambda: None).timer is None


def test_guard_cancels_on_exit():
    calls = []
    with create_guard("g", 5000, lambda: calls.append(1)) as guard:
        assert guard.timer.is_active()
    assert not guard.timer.is_active()
    assert not guard.timer.is_expired()
    assert calls == []


def test_guard_wraps_given_timer():
    timer = IoTimer.create("t", 5000, lambda: None)
    guard = TimerGuard(timer)
    guard.cancel()
    assert guard.timer is timer
    assert not timer.is_active()