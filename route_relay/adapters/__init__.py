"""Adapter layer package for remote flow-service integration boundaries."""

from .flow_errors import (
	FlowAdapterError,
	LaunchError,
	PollCancelledError,
	PollTimeoutError,
	RunFailedError,
	StatusFetchError,
)
from .flow_run_states import RunState, run_state_from_upstream, run_state_is_terminal
from .flow_web_service import FlowWebServiceAdapter
from .interfaces import (
	JobLauncherPort,
	PipelineInput,
	PollConfig,
	RunHandle,
	RunRequest,
	RunStatus,
	RunStatusFetcherPort,
)

__all__ = [
	"FlowAdapterError",
	"FlowWebServiceAdapter",
	"JobLauncherPort",
	"LaunchError",
	"PipelineInput",
	"PollCancelledError",
	"PollConfig",
	"PollTimeoutError",
	"RunFailedError",
	"RunHandle",
	"RunRequest",
	"RunState",
	"RunStatus",
	"RunStatusFetcherPort",
	"StatusFetchError",
	"run_state_from_upstream",
	"run_state_is_terminal",
]
