"""Caller-supplied cancellation signal for blocking orchestration waits."""

from __future__ import annotations

import threading


class CancellationToken:
    """Thread-safe cancellation flag whose waits wake up on cancel."""

    def __init__(self) -> None:
        self._cancel_event = threading.Event()

    @property
    def cancelled(self) -> bool:
        """Return whether cancellation was requested.

        Returns:
            bool: True once `request_cancel` has been called.

        Raises:
            RuntimeError: This property does not raise runtime errors.
        """

        return self._cancel_event.is_set()

    def request_cancel(self) -> None:
        """Request cancellation and wake every pending wait.

        Returns:
            None: Sets the cancellation flag as side effect.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        self._cancel_event.set()

    def cancellation_wait(self, seconds: float) -> bool:
        """Block up to `seconds`, returning early on cancellation.

        Args:
            seconds: Maximum wait in seconds; negative values do not block.

        Returns:
            bool: True when cancellation was requested before or during the wait.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return self._cancel_event.wait(timeout=max(0.0, seconds))
