"""Job layer package for remote flow orchestration boundaries."""

from .cancellation import CancellationToken
from .completion_poller import CompletionPoller
from .flow_orchestrator import FlowRunOrchestrator
from .interfaces import FlowOrchestratorPort, OrchestrationResult

__all__ = [
	"CancellationToken",
	"CompletionPoller",
	"FlowOrchestratorPort",
	"FlowRunOrchestrator",
	"OrchestrationResult",
]
