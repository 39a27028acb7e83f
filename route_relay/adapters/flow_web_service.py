"""Remote flow web service adapter for run launch and run status reads."""

from __future__ import annotations

from typing import Any, Final

import httpx
import structlog

from .flow_errors import FlowAdapterError, LaunchError, StatusFetchError
from .flow_run_states import run_state_from_upstream
from .interfaces import JobLauncherPort, RunHandle, RunRequest, RunStatus, RunStatusFetcherPort

logger = structlog.get_logger(__name__)


class FlowWebServiceAdapter(JobLauncherPort, RunStatusFetcherPort):
    """Adapter implementation for the remote `start_pipeline` and `get_pl_run` endpoints."""

    _USER_AGENT: Final[str] = "openapi-route-relay/1.0 (Python/httpx)"
    _START_PIPELINE_PATH: Final[str] = "start_pipeline"
    _GET_RUN_PATH: Final[str] = "get_pl_run"

    def __init__(
        self,
        http_client: httpx.Client,
        base_url: str = "https://api.gumloop.com/api/v1",
        request_timeout_seconds: float = 30.0,
    ):
        """Initialize flow web service adapter.

        Args:
            http_client: Pooled HTTP client shared by all calls of this adapter.
            base_url: Base endpoint URL for the remote flow API.
            request_timeout_seconds: Per-request HTTP timeout in seconds.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when required config values are invalid.
        """

        normalized_base_url = base_url.strip()

        if http_client is None:
            raise ValueError("http_client must not be None")
        if not normalized_base_url:
            raise ValueError("base_url must not be blank")
        if request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")

        self._http_client = http_client
        self._base_url = normalized_base_url.rstrip("/")
        self._request_timeout_seconds = request_timeout_seconds

    def adapter_launch_run(self, request: RunRequest) -> RunHandle:
        """Start one remote flow run with a single POST call.

        Args:
            request: Run request contract.

        Returns:
            RunHandle: Remote run id plus raw launcher payload.

        Raises:
            LaunchError: Raised for transport failures, non-success status, or malformed responses.
        """

        request_url = f"{self._base_url}/{self._START_PIPELINE_PATH}"
        request_body = {
            "user_id": request.user_id,
            "saved_item_id": request.saved_item_id,
            "project_id": request.project_id,
            "pipeline_inputs": [
                {"input_name": pipeline_input.input_name, "value": pipeline_input.value}
                for pipeline_input in request.pipeline_inputs
            ],
        }
        logger.info(
            "flow_launch_started",
            saved_item_id=request.saved_item_id,
            input_count=len(request.pipeline_inputs),
        )
        response = self._adapter_http_send(
            method="POST",
            url=request_url,
            auth_token=request.auth_token,
            error_type=LaunchError,
            context_label="start_pipeline",
            json_body=request_body,
        )
        payload = self._adapter_decode_json_object(
            response=response,
            error_type=LaunchError,
            context_label="start_pipeline",
        )

        run_id = payload.get("run_id")
        if not isinstance(run_id, str) or not run_id.strip():
            raise LaunchError("Flow launch response missing run_id", status_code=response.status_code)

        logger.info("flow_launch_completed", run_id=run_id)
        return RunHandle(run_id=run_id.strip(), payload=payload)

    def adapter_fetch_run_status(
        self,
        run_id: str,
        auth_token: str,
        user_id: str | None = None,
        project_id: str | None = None,
    ) -> RunStatus:
        """Read current remote run state with a single GET call.

        Args:
            run_id: Remote run identifier.
            auth_token: Bearer token for the remote flow service.
            user_id: Optional remote user identifier.
            project_id: Optional remote project identifier.

        Returns:
            RunStatus: Normalized state plus raw status payload.

        Raises:
            ValueError: Raised when run_id is blank.
            StatusFetchError: Raised for transport failures, non-success status, or malformed responses.
        """

        normalized_run_id = run_id.strip()
        if not normalized_run_id:
            raise ValueError("run_id must not be blank")

        query_parameters = {"run_id": normalized_run_id}
        if user_id and user_id.strip():
            query_parameters["user_id"] = user_id.strip()
        if project_id and project_id.strip():
            query_parameters["project_id"] = project_id.strip()

        response = self._adapter_http_send(
            method="GET",
            url=f"{self._base_url}/{self._GET_RUN_PATH}",
            auth_token=auth_token,
            error_type=StatusFetchError,
            context_label="get_pl_run",
            query_parameters=query_parameters,
        )
        payload = self._adapter_decode_json_object(
            response=response,
            error_type=StatusFetchError,
            context_label="get_pl_run",
        )

        raw_state = payload.get("state")
        return RunStatus(
            state=run_state_from_upstream(raw_state),
            raw_state=raw_state if isinstance(raw_state, str) else None,
            payload=payload,
        )

    def _adapter_http_send(
        self,
        method: str,
        url: str,
        auth_token: str,
        error_type: type[FlowAdapterError],
        context_label: str,
        json_body: dict[str, Any] | None = None,
        query_parameters: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Execute one HTTP request and map transport failures to the given error type.

        Args:
            method: HTTP method.
            url: Endpoint URL.
            auth_token: Bearer token.
            error_type: Adapter error class raised on failure.
            context_label: Context label for error messages.
            json_body: Optional JSON request body.
            query_parameters: Optional query string parameters.

        Returns:
            httpx.Response: Successful HTTP response.

        Raises:
            FlowAdapterError: Raised as `error_type` for network and non-success HTTP status.
        """

        headers = {
            "Authorization": f"Bearer {auth_token}",
            "User-Agent": self._USER_AGENT,
        }
        try:
            response = self._http_client.request(
                method,
                url,
                headers=headers,
                json=json_body,
                params=query_parameters,
                timeout=self._request_timeout_seconds,
            )
        except httpx.TimeoutException as error:
            raise error_type(f"Flow {context_label} request timed out") from error
        except httpx.HTTPError as error:
            raise error_type(f"Flow {context_label} request failed") from error

        if response.is_error:
            raise error_type(
                f"Flow {context_label} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return response

    def _adapter_decode_json_object(
        self,
        response: httpx.Response,
        error_type: type[FlowAdapterError],
        context_label: str,
    ) -> dict[str, Any]:
        """Decode response body as a JSON object and raise deterministic errors.

        Args:
            response: Successful HTTP response.
            error_type: Adapter error class raised on failure.
            context_label: Context label for error messages.

        Returns:
            dict[str, Any]: Decoded JSON object.

        Raises:
            FlowAdapterError: Raised as `error_type` when body is not a JSON object.
        """

        try:
            payload = response.json()
        except ValueError as error:
            raise error_type(
                f"Flow {context_label} response is not valid JSON",
                status_code=response.status_code,
            ) from error

        if not isinstance(payload, dict):
            raise error_type(
                f"Flow {context_label} response must be a JSON object",
                status_code=response.status_code,
            )
        return payload
