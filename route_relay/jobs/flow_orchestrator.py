"""Job-layer orchestration facade composing run launch and completion polling."""

from __future__ import annotations

import structlog

from route_relay.adapters import (
    FlowAdapterError,
    JobLauncherPort,
    PollConfig,
    RunRequest,
)
from route_relay.domain import domain_build_stage_event

from .cancellation import CancellationToken
from .completion_poller import CompletionPoller
from .interfaces import FlowOrchestratorPort, OrchestrationResult

logger = structlog.get_logger(__name__)


class FlowRunOrchestrator(FlowOrchestratorPort):
    """Concrete facade: one launch, then poll that run until it is terminal.

    Holds no per-call state, so one instance serves concurrent calls.
    """

    def __init__(
        self,
        launcher: JobLauncherPort,
        poller: CompletionPoller,
        default_poll_config: PollConfig | None = None,
    ):
        """Initialize orchestration facade dependencies.

        Args:
            launcher: Adapter used for the single start call.
            poller: Completion poller bound to a status fetcher.
            default_poll_config: Poll bounds used when a call supplies none.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies are invalid.
        """

        if launcher is None:
            raise ValueError("launcher must not be None")
        if poller is None:
            raise ValueError("poller must not be None")

        self._launcher = launcher
        self._poller = poller
        self._default_poll_config = default_poll_config or PollConfig()

    def job_run(
        self,
        request: RunRequest,
        config: PollConfig | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> OrchestrationResult:
        """Launch one remote run and wait for its terminal state.

        Failures propagate unchanged; no cancel request is sent upstream, so a
        run whose polling failed keeps running remotely.

        Args:
            request: Run request contract.
            config: Optional polling bounds overriding the default.
            cancel_token: Optional caller cancellation signal.

        Returns:
            OrchestrationResult: Launch handle, terminal status and stage timeline.

        Raises:
            LaunchError: Raised when the run could not be started.
            StatusFetchError: Raised when a status read fails.
            RunFailedError: Raised when the run ends in a failure state.
            PollTimeoutError: Raised when the polling deadline elapses.
            PollCancelledError: Raised when the caller cancels the wait.
        """

        poll_config = config or self._default_poll_config
        timeline: list[dict[str, object]] = []
        run_id: str | None = None

        timeline.append(domain_build_stage_event(stage="launch", status="started"))
        try:
            run_handle = self._launcher.adapter_launch_run(request)
            run_id = run_handle.run_id
            timeline.append(domain_build_stage_event(stage="launch", status="completed", run_id=run_id))
            logger.info("flow_run_started", run_id=run_id, saved_item_id=request.saved_item_id)

            timeline.append(
                domain_build_stage_event(
                    stage="poll",
                    status="started",
                    run_id=run_id,
                    details={"interval_ms": poll_config.interval_ms, "timeout_ms": poll_config.timeout_ms},
                )
            )
            final_status = self._poller.job_poll_until_done(
                run_id=run_id,
                auth_token=request.auth_token,
                user_id=request.user_id,
                project_id=request.project_id,
                config=poll_config,
                cancel_token=cancel_token,
            )
        except FlowAdapterError as error:
            logger.error(
                "flow_run_failed",
                run_id=run_id,
                error_type=type(error).__name__,
                error_message=str(error),
            )
            raise

        timeline.append(
            domain_build_stage_event(
                stage="poll",
                status="completed",
                run_id=run_id,
                details={"state": final_status.state.value},
            )
        )
        timeline.append(domain_build_stage_event(stage="run", status="success", run_id=run_id))
        return OrchestrationResult(start_details=run_handle, final_result=final_status, stage_timeline=timeline)
