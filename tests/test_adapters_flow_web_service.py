"""Regression tests for flow web service adapter launch and status-read behavior."""

from __future__ import annotations

import json

import httpx
import pytest

from route_relay.adapters import (
    FlowWebServiceAdapter,
    LaunchError,
    PipelineInput,
    RunRequest,
    RunState,
    StatusFetchError,
)


def _build_adapter(handler) -> tuple[FlowWebServiceAdapter, httpx.Client]:
    """Create adapter bound to a mock transport.

    Args:
        handler: Mock transport request handler.

    Returns:
        tuple[FlowWebServiceAdapter, httpx.Client]: Adapter and its client.

    Raises:
        ValueError: Raised by adapter when configuration is invalid.
    """

    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    adapter = FlowWebServiceAdapter(http_client=http_client, base_url="https://flows.example.test/api/v1/")
    return adapter, http_client


def _build_request() -> RunRequest:
    return RunRequest(
        auth_token="secret-token",
        user_id="user-1",
        saved_item_id="saved-1",
        project_id="project-1",
        pipeline_inputs=(PipelineInput(input_name="input", value='{"path": "/pets"}'),),
    )


def test_adapters_flow_launch_issues_one_post_and_returns_run_id() -> None:
    """Send exactly one start call and return the run id from the response.

    Returns:
        None: Assertions validate request shape and handle contents.

    Raises:
        AssertionError: Raised when launch behavior is incorrect.
    """

    captured_requests: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        captured_requests.append(request)
        return httpx.Response(200, json={"run_id": "run-42", "url": "https://flows.example.test/run/run-42"})

    adapter, _ = _build_adapter(_handler)

    handle = adapter.adapter_launch_run(_build_request())

    assert handle.run_id == "run-42"
    assert handle.payload["url"] == "https://flows.example.test/run/run-42"
    assert len(captured_requests) == 1
    sent_request = captured_requests[0]
    assert sent_request.method == "POST"
    assert str(sent_request.url) == "https://flows.example.test/api/v1/start_pipeline"
    assert sent_request.headers["Authorization"] == "Bearer secret-token"
    assert json.loads(sent_request.content) == {
        "user_id": "user-1",
        "saved_item_id": "saved-1",
        "project_id": "project-1",
        "pipeline_inputs": [{"input_name": "input", "value": '{"path": "/pets"}'}],
    }


def test_adapters_flow_launch_non_success_status_raises_launch_error() -> None:
    """Raise LaunchError carrying upstream status for HTTP rejections.

    Returns:
        None: Assertions validate error mapping.

    Raises:
        AssertionError: Raised when rejection is not mapped.
    """

    adapter, _ = _build_adapter(lambda request: httpx.Response(401, json={"error": "unauthorized"}))

    with pytest.raises(LaunchError, match="HTTP 401") as error_info:
        adapter.adapter_launch_run(_build_request())

    assert error_info.value.status_code == 401


def test_adapters_flow_launch_malformed_body_raises_launch_error() -> None:
    """Raise LaunchError for non-JSON launch responses.

    Returns:
        None: Assertions validate malformed-body handling.

    Raises:
        AssertionError: Raised when malformed body is accepted.
    """

    adapter, _ = _build_adapter(lambda request: httpx.Response(200, content=b"<html>oops</html>"))

    with pytest.raises(LaunchError, match="not valid JSON"):
        adapter.adapter_launch_run(_build_request())


def test_adapters_flow_launch_missing_run_id_raises_launch_error() -> None:
    """Raise LaunchError when launch response lacks a run id.

    Returns:
        None: Assertions validate response contract enforcement.

    Raises:
        AssertionError: Raised when missing run id is accepted.
    """

    adapter, _ = _build_adapter(lambda request: httpx.Response(200, json={"status": "queued"}))

    with pytest.raises(LaunchError, match="missing run_id"):
        adapter.adapter_launch_run(_build_request())


def test_adapters_flow_launch_transport_failure_raises_launch_error() -> None:
    """Map transport-level connection failures to LaunchError.

    Returns:
        None: Assertions validate transport error mapping.

    Raises:
        AssertionError: Raised when transport failures leak unmapped.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    adapter, _ = _build_adapter(_handler)

    with pytest.raises(LaunchError, match="request failed") as error_info:
        adapter.adapter_launch_run(_build_request())

    assert isinstance(error_info.value, ConnectionError)


def test_adapters_flow_fetch_status_sends_run_parameters_and_maps_state() -> None:
    """Send run/user/project query parameters and normalize reported state.

    Returns:
        None: Assertions validate request parameters and state mapping.

    Raises:
        AssertionError: Raised when fetch behavior is incorrect.
    """

    captured_requests: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        captured_requests.append(request)
        return httpx.Response(200, json={"state": "running", "outputs": {}})

    adapter, _ = _build_adapter(_handler)

    run_status = adapter.adapter_fetch_run_status(
        run_id="run-42",
        auth_token="secret-token",
        user_id="user-1",
        project_id="project-1",
    )

    assert run_status.state is RunState.RUNNING
    assert run_status.raw_state == "running"
    sent_request = captured_requests[0]
    assert sent_request.method == "GET"
    assert sent_request.url.path == "/api/v1/get_pl_run"
    assert dict(sent_request.url.params) == {"run_id": "run-42", "user_id": "user-1", "project_id": "project-1"}
    assert sent_request.headers["Authorization"] == "Bearer secret-token"


def test_adapters_flow_fetch_status_omits_blank_optional_parameters() -> None:
    """Omit user and project parameters when not provided.

    Returns:
        None: Assertions validate optional parameter handling.

    Raises:
        AssertionError: Raised when blank optional values are sent.
    """

    captured_requests: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        captured_requests.append(request)
        return httpx.Response(200, json={"state": "QUEUED_FOR_LATER"})

    adapter, _ = _build_adapter(_handler)

    run_status = adapter.adapter_fetch_run_status(run_id="run-42", auth_token="secret-token", project_id=" ")

    assert run_status.state is RunState.OTHER
    assert run_status.raw_state == "QUEUED_FOR_LATER"
    assert dict(captured_requests[0].url.params) == {"run_id": "run-42"}


def test_adapters_flow_fetch_status_http_error_raises_status_fetch_error() -> None:
    """Raise StatusFetchError for non-success status responses.

    Returns:
        None: Assertions validate status error mapping.

    Raises:
        AssertionError: Raised when HTTP failure is not mapped.
    """

    adapter, _ = _build_adapter(lambda request: httpx.Response(503, text="busy"))

    with pytest.raises(StatusFetchError, match="HTTP 503") as error_info:
        adapter.adapter_fetch_run_status(run_id="run-42", auth_token="secret-token")

    assert error_info.value.status_code == 503


def test_adapters_flow_fetch_status_timeout_raises_status_fetch_error() -> None:
    """Map transport timeouts during status reads to StatusFetchError.

    Returns:
        None: Assertions validate timeout mapping.

    Raises:
        AssertionError: Raised when timeout is not mapped.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    adapter, _ = _build_adapter(_handler)

    with pytest.raises(StatusFetchError, match="timed out"):
        adapter.adapter_fetch_run_status(run_id="run-42", auth_token="secret-token")


def test_adapters_flow_fetch_status_rejects_non_object_body() -> None:
    """Raise StatusFetchError when status body is JSON but not an object.

    Returns:
        None: Assertions validate response contract enforcement.

    Raises:
        AssertionError: Raised when list bodies are accepted.
    """

    adapter, _ = _build_adapter(lambda request: httpx.Response(200, json=["DONE"]))

    with pytest.raises(StatusFetchError, match="must be a JSON object"):
        adapter.adapter_fetch_run_status(run_id="run-42", auth_token="secret-token")


def test_adapters_flow_rejects_invalid_configuration() -> None:
    """Reject blank base URL and non-positive request timeout.

    Returns:
        None: Assertions validate constructor guards.

    Raises:
        AssertionError: Raised when invalid configuration is accepted.
    """

    http_client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200)))

    with pytest.raises(ValueError, match="base_url"):
        FlowWebServiceAdapter(http_client=http_client, base_url="  ")
    with pytest.raises(ValueError, match="request_timeout_seconds"):
        FlowWebServiceAdapter(http_client=http_client, request_timeout_seconds=0)
