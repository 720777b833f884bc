"""
Name: Cancellation Token

Responsibilities:
  - Signal cooperative cancellation of a running role-assignment workflow
  - Carry an optional deadline (workflow-level timeout)
  - Provide an interruptible sleep for retry backoff

Collaborators:
  - application.usecases.assign_standard_roles: checks the token at every
    blocking point (existing-roles lookup, supervisor check, persistence
    calls, backoff delay)

Notes:
  - A token may be linked to a parent: cancelling the parent cancels it.
  - Deadline expiry is reported as OperationTimedOutError, a subclass of
    OperationCancelledError, so callers can treat both the same way.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional

from ..crosscutting.exceptions import OperationCancelledError, OperationTimedOutError


class CancellationToken:
    """R: Thread-safe cancellation flag with optional deadline."""

    def __init__(
        self,
        *,
        timeout_seconds: float | None = None,
        parent: Optional["CancellationToken"] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if timeout_seconds is not None and timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")
        self._event = threading.Event()
        self._parent = parent
        self._clock = clock
        self._deadline = (
            clock() + timeout_seconds if timeout_seconds is not None else None
        )

    @classmethod
    def none(cls) -> "CancellationToken":
        """R: Token that is never cancelled by itself (no deadline)."""
        return cls()

    def linked(self, timeout_seconds: float | None = None) -> "CancellationToken":
        """R: Child token cancelled with this one, optionally with its own deadline."""
        return CancellationToken(
            timeout_seconds=timeout_seconds, parent=self, clock=self._clock
        )

    def cancel(self) -> None:
        self._event.set()

    @property
    def timed_out(self) -> bool:
        if self._deadline is not None and self._clock() >= self._deadline:
            return True
        return self._parent.timed_out if self._parent is not None else False

    @property
    def is_cancelled(self) -> bool:
        if self._event.is_set() or self.timed_out:
            return True
        return self._parent.is_cancelled if self._parent is not None else False

    def remaining_seconds(self) -> float | None:
        """R: Seconds until the nearest deadline in the chain (None if unbounded)."""
        candidates: list[float] = []
        token: Optional[CancellationToken] = self
        while token is not None:
            if token._deadline is not None:
                candidates.append(token._deadline - self._clock())
            token = token._parent
        if not candidates:
            return None
        return max(min(candidates), 0.0)

    def raise_if_cancelled(self) -> None:
        if self.timed_out:
            raise OperationTimedOutError("Role assignment deadline exceeded")
        if self.is_cancelled:
            raise OperationCancelledError("Operation was cancelled")

    def sleep(self, seconds: float) -> None:
        """
        R: Block up to `seconds`, waking early on cancel or deadline.

        Raises:
            OperationCancelledError / OperationTimedOutError when interrupted.
        """
        self.raise_if_cancelled()
        wait_for = max(seconds, 0.0)
        remaining = self.remaining_seconds()
        if remaining is not None and remaining < wait_for:
            wait_for = remaining
        if wait_for > 0:
            self._wait_chain(wait_for)
        self.raise_if_cancelled()

    def _wait_chain(self, seconds: float) -> None:
        # Parent cancellation must also interrupt the wait: poll in short slices.
        end = self._clock() + seconds
        while True:
            left = end - self._clock()
            if left <= 0 or self.is_cancelled:
                return
            self._event.wait(min(left, 0.05))
