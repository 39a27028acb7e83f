"""Canonical remote flow run-state semantics for poller routing."""

from __future__ import annotations

from enum import Enum
from typing import Final


class RunState(str, Enum):
    """Closed set of run states understood by the completion poller."""

    PENDING = "PENDING"
    RUNNING = "RUNNING"
    DONE = "DONE"
    FAILED = "FAILED"
    TERMINATED = "TERMINATED"
    OTHER = "OTHER"


RUN_STATE_SUCCESS: Final[RunState] = RunState.DONE

RUN_STATE_FAILURE_STATES: Final[frozenset[RunState]] = frozenset(
    {
        RunState.FAILED,
        RunState.TERMINATED,
    }
)

RUN_STATE_TERMINAL_STATES: Final[frozenset[RunState]] = frozenset({RUN_STATE_SUCCESS}) | RUN_STATE_FAILURE_STATES

_RUN_STATE_BY_UPSTREAM_VALUE: Final[dict[str, RunState]] = {
    run_state.value: run_state for run_state in RunState if run_state is not RunState.OTHER
}


def run_state_from_upstream(raw_state: object | None) -> RunState:
    """Map one upstream state value into the closed run-state enumeration.

    Matching is exact and case-sensitive, so `"done"` maps to `OTHER` and never
    ends a poll as success.

    Args:
        raw_state: State value as reported by the remote service.

    Returns:
        RunState: Matching state, or `OTHER` for missing and unrecognized values.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if not isinstance(raw_state, str):
        return RunState.OTHER
    return _RUN_STATE_BY_UPSTREAM_VALUE.get(raw_state, RunState.OTHER)


def run_state_is_terminal(state: RunState) -> bool:
    """Return whether no further transitions follow the given state.

    Args:
        state: Normalized run state.

    Returns:
        bool: True for `DONE`, `FAILED` and `TERMINATED`.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return state in RUN_STATE_TERMINAL_STATES
