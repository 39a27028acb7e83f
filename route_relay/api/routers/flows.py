"""Flow API router composition for direct flow-start requests."""

from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from route_relay.adapters import PipelineInput
from route_relay.config import AppSettings
from route_relay.jobs import FlowOrchestratorPort

from ..flow_dispatch import api_error_response, api_run_flow


class PipelineInputBody(BaseModel):
    """One pipeline input as accepted over HTTP."""

    input_name: str = Field(min_length=1)
    value: str


class FlowStartBody(BaseModel):
    """Flow-start request body."""

    flowType: str = Field(min_length=1)
    pipelineInputs: list[PipelineInputBody] = Field(default_factory=list)


def api_create_flow_router(settings: AppSettings, flow_orchestrator: FlowOrchestratorPort) -> APIRouter:
    """Create flow router exposing the flow-start endpoint.

    Args:
        settings: Runtime settings holding flow credentials and mapping.
        flow_orchestrator: Orchestration facade.

    Returns:
        APIRouter: Router exposing `/api/flow-start`.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if flow_orchestrator is None:
        raise ValueError("flow_orchestrator must not be None")

    router = APIRouter(prefix="/api", tags=["flows"])

    @router.post("/flow-start", response_model=None)
    def api_flow_start(body: FlowStartBody) -> dict[str, object] | JSONResponse:
        """Start one configured flow and wait for its completion.

        Args:
            body: Flow type plus ordered pipeline inputs.

        Returns:
            dict[str, object] | JSONResponse: Orchestration payload or error response.

        Raises:
            RuntimeError: Raised when execution fails unexpectedly.
        """

        if not body.flowType.strip():
            return api_error_response(status.HTTP_400_BAD_REQUEST, "INVALID_FLOW_TYPE", "flowType must not be blank")

        pipeline_inputs = [
            PipelineInput(input_name=item.input_name, value=item.value) for item in body.pipelineInputs
        ]
        return api_run_flow(settings, flow_orchestrator, body.flowType, pipeline_inputs)

    return router
