"""Typed interfaces for job-layer orchestration responsibilities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from route_relay.adapters import PollConfig, RunHandle, RunRequest, RunStatus

from .cancellation import CancellationToken


@dataclass(frozen=True)
class OrchestrationResult:
    """Terminal artifact of one launch-then-poll orchestration call.

    Attributes:
        start_details: Handle returned by the launcher.
        final_result: Terminal `DONE` status returned by the poller.
        stage_timeline: Structured stage timeline entries captured during the call.
    """

    start_details: RunHandle
    final_result: RunStatus
    stage_timeline: list[dict[str, object]] = field(default_factory=list)


class FlowOrchestratorPort(Protocol):
    """Port definition for running one remote flow to completion."""

    def job_run(
        self,
        request: RunRequest,
        config: PollConfig | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> OrchestrationResult:
        """Launch one remote run and wait for its terminal state.

        Args:
            request: Run request contract.
            config: Optional polling bounds.
            cancel_token: Optional caller cancellation signal.

        Returns:
            OrchestrationResult: Launch handle plus terminal status.

        Raises:
            LaunchError: Raised when the run could not be started.
            StatusFetchError: Raised when a status read fails.
            RunFailedError: Raised when the run ends in a failure state.
            PollTimeoutError: Raised when the polling deadline elapses.
            PollCancelledError: Raised when the caller cancels the wait.
        """
