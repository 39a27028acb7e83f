"""Shared flow dispatch helpers for API routes.

Routes turn request data into a `RunRequest`, run one orchestration, and map
the orchestration error taxonomy onto HTTP responses.
"""

from __future__ import annotations

from fastapi import status
from fastapi.responses import JSONResponse

from route_relay.adapters import (
    LaunchError,
    PipelineInput,
    PollCancelledError,
    PollConfig,
    PollTimeoutError,
    RunFailedError,
    RunRequest,
    StatusFetchError,
)
from route_relay.config import AppSettings
from route_relay.jobs import FlowOrchestratorPort, OrchestrationResult


class UnknownFlowTypeError(ValueError):
    """Requested flow type has no configured saved item id."""


def api_build_run_request(
    settings: AppSettings,
    flow_type: str,
    pipeline_inputs: list[PipelineInput],
) -> RunRequest:
    """Build run request for a configured flow type.

    Args:
        settings: Runtime settings holding credentials and flow mapping.
        flow_type: Flow type label sent by the caller.
        pipeline_inputs: Ordered flow inputs.

    Returns:
        RunRequest: Immutable run request.

    Raises:
        UnknownFlowTypeError: Raised when flow type is not configured.
    """

    normalized_flow_type = flow_type.strip()
    saved_item_id = settings.flow_saved_item_ids.get(normalized_flow_type)
    if saved_item_id is None:
        raise UnknownFlowTypeError(f"unsupported flowType={normalized_flow_type}")

    return RunRequest(
        auth_token=settings.flow_api_token,
        user_id=settings.flow_user_id,
        saved_item_id=saved_item_id,
        project_id=settings.flow_project_id,
        pipeline_inputs=tuple(pipeline_inputs),
    )


def api_build_poll_config(settings: AppSettings) -> PollConfig:
    """Return poll bounds configured for API-triggered runs."""

    return PollConfig(interval_ms=settings.flow_poll_interval_ms, timeout_ms=settings.flow_poll_timeout_ms)


def api_serialize_orchestration_result(result: OrchestrationResult) -> dict[str, object]:
    """Serialize orchestration result to JSON response payload.

    Args:
        result: Terminal orchestration result.

    Returns:
        dict[str, object]: Raw start and final payloads plus stage timeline.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return {
        "runId": result.start_details.run_id,
        "state": result.final_result.state.value,
        "startDetails": result.start_details.payload,
        "finalResult": result.final_result.payload,
        "stageTimeline": result.stage_timeline,
    }


def api_run_flow(
    settings: AppSettings,
    flow_orchestrator: FlowOrchestratorPort,
    flow_type: str,
    pipeline_inputs: list[PipelineInput],
) -> dict[str, object] | JSONResponse:
    """Run one orchestration and return its payload or an error response.

    Args:
        settings: Runtime settings.
        flow_orchestrator: Orchestration facade.
        flow_type: Flow type label.
        pipeline_inputs: Ordered flow inputs.

    Returns:
        dict[str, object] | JSONResponse: Serialized result, or mapped error response.

    Raises:
        RuntimeError: Raised when execution fails unexpectedly.
    """

    try:
        run_request = api_build_run_request(settings, flow_type, pipeline_inputs)
    except UnknownFlowTypeError as error:
        return api_error_response(status.HTTP_400_BAD_REQUEST, "UNKNOWN_FLOW_TYPE", str(error))

    try:
        orchestration_result = flow_orchestrator.job_run(run_request, config=api_build_poll_config(settings))
    except LaunchError as error:
        return api_error_response(status.HTTP_502_BAD_GATEWAY, "FLOW_LAUNCH_ERROR", str(error))
    except StatusFetchError as error:
        return api_error_response(status.HTTP_502_BAD_GATEWAY, "FLOW_STATUS_FETCH_ERROR", str(error))
    except RunFailedError as error:
        return api_error_response(
            status.HTTP_502_BAD_GATEWAY,
            "FLOW_RUN_FAILED",
            str(error),
            extra={"runId": error.run_id, "state": error.state.value},
        )
    except PollTimeoutError as error:
        return api_error_response(
            status.HTTP_504_GATEWAY_TIMEOUT,
            "FLOW_POLL_TIMEOUT",
            str(error),
            extra={"runId": error.run_id},
        )
    except PollCancelledError as error:
        return api_error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "FLOW_POLL_CANCELLED", str(error))

    return api_serialize_orchestration_result(orchestration_result)


def api_error_response(
    status_code: int,
    code: str,
    message: str,
    extra: dict[str, object] | None = None,
) -> JSONResponse:
    """Build deterministic error response payload."""

    payload: dict[str, object] = {"status": "error", "code": code, "message": message}
    if extra:
        payload.update(extra)
    return JSONResponse(content=payload, status_code=status_code)
