"""
Name: Cancellation Token Tests

Responsibilities:
  - Validate manual cancellation, deadlines and parent linking
  - Validate interruptible sleep
"""

import threading
import time

import pytest

from role_assignment.crosscutting.exceptions import (
    OperationCancelledError,
    OperationTimedOutError,
)
from role_assignment.domain.cancellation import CancellationToken


pytestmark = pytest.mark.unit


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_none_token_is_never_cancelled():
    token = CancellationToken.none()

    token.raise_if_cancelled()

    assert token.is_cancelled is False
    assert token.remaining_seconds() is None


def test_cancel_raises_cancelled_not_timed_out():
    token = CancellationToken()
    token.cancel()

    with pytest.raises(OperationCancelledError) as exc_info:
        token.raise_if_cancelled()
    assert not isinstance(exc_info.value, OperationTimedOutError)


def test_deadline_expiry_raises_timed_out():
    clock = FakeClock()
    token = CancellationToken(timeout_seconds=5, clock=clock)

    token.raise_if_cancelled()
    assert token.remaining_seconds() == pytest.approx(5.0)

    clock.now += 5
    assert token.timed_out is True
    with pytest.raises(OperationTimedOutError):
        token.raise_if_cancelled()


@pytest.mark.parametrize("timeout", [0, -1])
def test_non_positive_timeout_is_rejected(timeout):
    with pytest.raises(ValueError):
        CancellationToken(timeout_seconds=timeout)


def test_cancelling_parent_cancels_linked_child():
    parent = CancellationToken()
    child = parent.linked(timeout_seconds=60)

    parent.cancel()

    assert child.is_cancelled is True
    with pytest.raises(OperationCancelledError):
        child.raise_if_cancelled()


def test_cancelling_child_leaves_parent_running():
    parent = CancellationToken()
    child = parent.linked()

    child.cancel()

    assert parent.is_cancelled is False


def test_linked_token_uses_nearest_deadline():
    clock = FakeClock()
    parent = CancellationToken(timeout_seconds=2, clock=clock)
    child = parent.linked(timeout_seconds=300)

    assert child.remaining_seconds() == pytest.approx(2.0)

    clock.now += 3
    with pytest.raises(OperationTimedOutError):
        child.raise_if_cancelled()


def test_sleep_returns_after_delay():
    token = CancellationToken()

    started = time.monotonic()
    token.sleep(0.01)

    assert time.monotonic() - started >= 0.01


def test_sleep_is_interrupted_by_cancel():
    token = CancellationToken()
    threading.Timer(0.05, token.cancel).start()

    started = time.monotonic()
    with pytest.raises(OperationCancelledError):
        token.sleep(5)

    assert time.monotonic() - started < 2


def test_sleep_is_cut_short_by_deadline():
    token = CancellationToken(timeout_seconds=0.05)

    started = time.monotonic()
    with pytest.raises(OperationTimedOutError):
        token.sleep(5)

    assert time.monotonic() - started < 2
