"""Fixed-interval completion poller for remote flow runs.

The poller is a small state machine over observed run states. Every status
fetch after the first is preceded by a deadline check, so a poll always ends
in success, an explicit failure, a timeout, or a cancellation.
"""

from __future__ import annotations

import time
from typing import Callable

import structlog

from route_relay.adapters import (
    PollCancelledError,
    PollConfig,
    PollTimeoutError,
    RunFailedError,
    RunStatus,
    RunStatusFetcherPort,
)
from route_relay.adapters.flow_run_states import RUN_STATE_FAILURE_STATES, RUN_STATE_SUCCESS
from route_relay.domain import domain_elapsed_milliseconds

from .cancellation import CancellationToken

logger = structlog.get_logger(__name__)


class CompletionPoller:
    """Poll one remote run until it reaches a terminal state or the deadline elapses."""

    def __init__(
        self,
        status_fetcher: RunStatusFetcherPort,
        monotonic_clock: Callable[[], float] | None = None,
        sleeper: Callable[[float], None] | None = None,
    ):
        """Initialize completion poller.

        Args:
            status_fetcher: Adapter used for every status read.
            monotonic_clock: Optional clock returning monotonic seconds.
            sleeper: Optional blocking sleep used when no cancellation token is supplied.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when status_fetcher is None.
        """

        if status_fetcher is None:
            raise ValueError("status_fetcher must not be None")

        self._status_fetcher = status_fetcher
        self._monotonic_clock = monotonic_clock or time.monotonic
        self._sleeper = sleeper

    def job_poll_until_done(
        self,
        run_id: str,
        auth_token: str,
        user_id: str | None = None,
        project_id: str | None = None,
        config: PollConfig | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> RunStatus:
        """Poll run status on a fixed interval until `DONE`.

        The first fetch is always issued. Each later fetch is skipped with a
        timeout when elapsed time has reached `config.timeout_ms`, so a zero
        timeout performs exactly one fetch.

        Args:
            run_id: Remote run identifier used for every fetch.
            auth_token: Bearer token for the remote flow service.
            user_id: Optional remote user identifier.
            project_id: Optional remote project identifier.
            config: Optional polling bounds, defaulting to `PollConfig()`.
            cancel_token: Optional caller cancellation signal.

        Returns:
            RunStatus: Status whose state is `DONE`.

        Raises:
            ValueError: Raised when run_id is blank.
            StatusFetchError: Raised when a status read fails.
            RunFailedError: Raised when the run reaches `FAILED` or `TERMINATED`.
            PollTimeoutError: Raised when the deadline elapses before a terminal state.
            PollCancelledError: Raised when the caller cancels the poll.
        """

        normalized_run_id = run_id.strip()
        if not normalized_run_id:
            raise ValueError("run_id must not be blank")

        poll_config = config or PollConfig()
        started_at = self._monotonic_clock()
        fetch_count = 0

        while True:
            if cancel_token is not None and cancel_token.cancelled:
                raise PollCancelledError(run_id=normalized_run_id)

            elapsed_ms = domain_elapsed_milliseconds(started_at, self._monotonic_clock())
            if fetch_count > 0 and elapsed_ms >= poll_config.timeout_ms:
                raise self._job_timeout_error(normalized_run_id, poll_config, elapsed_ms, fetch_count)

            run_status = self._status_fetcher.adapter_fetch_run_status(
                run_id=normalized_run_id,
                auth_token=auth_token,
                user_id=user_id,
                project_id=project_id,
            )
            fetch_count += 1
            logger.debug(
                "flow_poll_observed",
                run_id=normalized_run_id,
                state=run_status.state.value,
                raw_state=run_status.raw_state,
                poll_attempt=fetch_count,
            )

            if run_status.state is RUN_STATE_SUCCESS:
                logger.info("flow_poll_completed", run_id=normalized_run_id, poll_attempts=fetch_count)
                return run_status

            if run_status.state in RUN_STATE_FAILURE_STATES:
                logger.warning(
                    "flow_poll_run_failed",
                    run_id=normalized_run_id,
                    state=run_status.state.value,
                    poll_attempts=fetch_count,
                )
                raise RunFailedError(state=run_status.state, run_id=normalized_run_id, payload=run_status.payload)

            elapsed_ms = domain_elapsed_milliseconds(started_at, self._monotonic_clock())
            remaining_ms = poll_config.timeout_ms - elapsed_ms
            if remaining_ms <= 0:
                raise self._job_timeout_error(normalized_run_id, poll_config, elapsed_ms, fetch_count)

            self._job_wait(
                seconds=min(poll_config.interval_ms, remaining_ms) / 1000.0,
                run_id=normalized_run_id,
                cancel_token=cancel_token,
            )

    def _job_wait(self, seconds: float, run_id: str, cancel_token: CancellationToken | None) -> None:
        """Block between polls, waking early on cancellation.

        Args:
            seconds: Delay before the next fetch.
            run_id: Remote run identifier for error context.
            cancel_token: Optional caller cancellation signal.

        Returns:
            None: Blocks as side effect.

        Raises:
            PollCancelledError: Raised when cancellation is requested during the wait.
        """

        if cancel_token is not None:
            if cancel_token.cancellation_wait(seconds):
                raise PollCancelledError(run_id=run_id)
            return

        sleeper = self._sleeper or time.sleep
        sleeper(seconds)

    def _job_timeout_error(
        self,
        run_id: str,
        poll_config: PollConfig,
        elapsed_ms: int,
        fetch_count: int,
    ) -> PollTimeoutError:
        logger.warning(
            "flow_poll_timed_out",
            run_id=run_id,
            elapsed_ms=elapsed_ms,
            timeout_ms=poll_config.timeout_ms,
            poll_attempts=fetch_count,
        )
        return PollTimeoutError(run_id=run_id, timeout_ms=poll_config.timeout_ms, elapsed_ms=elapsed_ms)
