"""Project-native typed exceptions for remote flow orchestration failures."""

from __future__ import annotations

from typing import Any

from .flow_run_states import RunState


class FlowAdapterError(Exception):
    """Base exception for remote flow-service failures.

    Attributes:
        status_code: Optional upstream HTTP status code.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class LaunchError(FlowAdapterError, ConnectionError):
    """Remote run could not be started (transport failure or remote rejection)."""


class StatusFetchError(FlowAdapterError, ConnectionError):
    """Remote run state could not be read."""


class RunFailedError(FlowAdapterError, RuntimeError):
    """Remote run reached a non-success terminal state.

    Attributes:
        state: Terminal failure state observed upstream.
        run_id: Remote run identifier.
        payload: Raw status payload that carried the failure state.
    """

    def __init__(self, state: RunState, run_id: str, payload: dict[str, Any] | None = None):
        super().__init__(f"Flow run {run_id} failed with state: {state.value}")
        self.state = state
        self.run_id = run_id
        self.payload = payload or {}


class PollTimeoutError(FlowAdapterError, TimeoutError):
    """Polling deadline elapsed while the run was still non-terminal.

    Attributes:
        run_id: Remote run identifier.
        timeout_ms: Configured polling budget.
        elapsed_ms: Elapsed wall-clock time when the deadline was detected.
    """

    def __init__(self, run_id: str, timeout_ms: int, elapsed_ms: int):
        super().__init__(f"Polling timeout exceeded for run {run_id}: elapsed={elapsed_ms}ms, timeout={timeout_ms}ms")
        self.run_id = run_id
        self.timeout_ms = timeout_ms
        self.elapsed_ms = elapsed_ms


class PollCancelledError(FlowAdapterError, RuntimeError):
    """Polling aborted by caller cancellation before a terminal state."""

    def __init__(self, run_id: str):
        super().__init__(f"Polling cancelled for run {run_id}")
        self.run_id = run_id
