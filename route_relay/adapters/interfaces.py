"""Typed interfaces for remote flow-service adapter responsibilities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from typing import Protocol

from .flow_run_states import RunState


@dataclass(frozen=True)
class PipelineInput:
    """One named input value passed to a remote flow run.

    Attributes:
        input_name: Input slot name declared by the remote flow.
        value: Serialized input value.
    """

    input_name: str
    value: str


@dataclass(frozen=True)
class RunRequest:
    """Immutable request contract for starting one remote flow run.

    Attributes:
        auth_token: Bearer token for the remote flow service.
        user_id: Remote user identifier owning the saved flow.
        saved_item_id: Remote saved flow identifier to execute.
        project_id: Optional remote project identifier.
        pipeline_inputs: Ordered flow inputs.
    """

    auth_token: str
    user_id: str
    saved_item_id: str
    project_id: str | None = None
    pipeline_inputs: tuple[PipelineInput, ...] = ()


@dataclass(frozen=True)
class RunHandle:
    """Launcher result contract for one started remote run.

    Attributes:
        run_id: Opaque remote run identifier.
        payload: Raw launcher response payload.
    """

    run_id: str
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RunStatus:
    """Observed state of one remote run at fetch time.

    Attributes:
        state: Normalized run state.
        raw_state: State string exactly as reported upstream.
        payload: Raw status response payload.
    """

    state: RunState
    raw_state: str | None
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PollConfig:
    """Completion polling bounds.

    Attributes:
        interval_ms: Fixed delay between status fetches.
        timeout_ms: Wall-clock budget for the whole poll.
    """

    interval_ms: int = 2000
    timeout_ms: int = 300000

    def __post_init__(self) -> None:
        if self.interval_ms <= 0:
            raise ValueError("interval_ms must be > 0")
        if self.timeout_ms < 0:
            raise ValueError("timeout_ms must be >= 0")


class JobLauncherPort(Protocol):
    """Port definition for starting remote flow runs."""

    def adapter_launch_run(self, request: RunRequest) -> RunHandle:
        """Start one remote run and return its handle.

        Args:
            request: Run request contract.

        Returns:
            RunHandle: Handle carrying the remote run id.

        Raises:
            LaunchError: Raised when the remote start call cannot be completed.
        """


class RunStatusFetcherPort(Protocol):
    """Port definition for reading remote flow run state."""

    def adapter_fetch_run_status(
        self,
        run_id: str,
        auth_token: str,
        user_id: str | None = None,
        project_id: str | None = None,
    ) -> RunStatus:
        """Fetch current state of one remote run.

        Args:
            run_id: Remote run identifier.
            auth_token: Bearer token for the remote flow service.
            user_id: Optional remote user identifier.
            project_id: Optional remote project identifier.

        Returns:
            RunStatus: Current observed run status.

        Raises:
            StatusFetchError: Raised when the status read fails.
        """
