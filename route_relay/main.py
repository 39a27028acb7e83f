"""Main module entrypoint for local runtime execution.

This module validates startup configuration and either launches the FastAPI
service or runs one flow orchestration from the shell.
"""

import argparse
import json

import uvicorn

from route_relay.adapters import FlowAdapterError, PipelineInput
from route_relay.api.flow_dispatch import (
    UnknownFlowTypeError,
    api_build_poll_config,
    api_build_run_request,
    api_serialize_orchestration_result,
)
from route_relay.bootstrap import (
    bootstrap_create_application,
    bootstrap_create_flow_orchestrator,
    bootstrap_create_http_client,
)
from route_relay.config import config_load_settings
from route_relay.logging_config import logging_configure


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with code 1 when a `flow-run` orchestration fails.
    """

    argument_parser = argparse.ArgumentParser(description="OpenAPI route relay runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "flow-run"),
        help="Runtime command: `api` starts server, `flow-run` runs one flow to completion and prints the result",
        type=str,
    )
    argument_parser.add_argument(
        "--flow-type",
        dest="flow_type",
        type=str,
        help="Configured flow type for `flow-run`",
    )
    argument_parser.add_argument(
        "--input",
        dest="inputs",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Pipeline input for `flow-run`; repeat for multiple inputs",
    )
    parsed_arguments = argument_parser.parse_args()

    if parsed_arguments.command == "flow-run":
        if not parsed_arguments.flow_type:
            argument_parser.error("--flow-type is required for `flow-run`")
        try:
            pipeline_inputs = main_parse_pipeline_inputs(parsed_arguments.inputs)
        except ValueError as error:
            argument_parser.error(str(error))
        main_run_flow(flow_type=parsed_arguments.flow_type, pipeline_inputs=pipeline_inputs)
        return

    settings = config_load_settings()
    application = bootstrap_create_application()
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


def main_parse_pipeline_inputs(raw_inputs: list[str]) -> list[PipelineInput]:
    """Parse `NAME=VALUE` arguments into ordered pipeline inputs.

    Args:
        raw_inputs: Raw command-line input arguments.

    Returns:
        list[PipelineInput]: Parsed inputs in argument order.

    Raises:
        ValueError: Raised when an argument has no `=` or a blank name.
    """

    pipeline_inputs: list[PipelineInput] = []
    for raw_input in raw_inputs:
        input_name, separator, value = raw_input.partition("=")
        if not separator or not input_name.strip():
            raise ValueError(f"invalid --input value: {raw_input!r}, expected NAME=VALUE")
        pipeline_inputs.append(PipelineInput(input_name=input_name.strip(), value=value))
    return pipeline_inputs


def main_run_flow(flow_type: str, pipeline_inputs: list[PipelineInput]) -> None:
    """Run one orchestration and print its JSON result to stdout.

    Args:
        flow_type: Configured flow type.
        pipeline_inputs: Ordered flow inputs.

    Returns:
        None: Prints result as side effect.

    Raises:
        SystemExit: Raised with code 1 when orchestration fails.
    """

    settings = config_load_settings()
    logging_configure(level=settings.log_level)
    http_client = bootstrap_create_http_client()
    try:
        orchestrator = bootstrap_create_flow_orchestrator(settings, http_client)
        run_request = api_build_run_request(settings, flow_type, pipeline_inputs)
        result = orchestrator.job_run(run_request, config=api_build_poll_config(settings))
    except (UnknownFlowTypeError, FlowAdapterError) as error:
        print(json.dumps({"status": "error", "error_type": type(error).__name__, "message": str(error)}))
        raise SystemExit(1) from error
    finally:
        http_client.close()

    print(json.dumps(api_serialize_orchestration_result(result), indent=2))


if __name__ == "__main__":
    main()
