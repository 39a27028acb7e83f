"""Run timeline events recorded by the orchestration facade."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def domain_build_stage_event(
    stage: str,
    status: str,
    run_id: str | None = None,
    details: dict[str, Any] | None = None,
) -> dict[str, object]:
    """Build one timeline event for a remote flow run.

    Events recorded before the launcher returns have no run id yet, so the
    `run_id` key is present but null for them.

    Args:
        stage: Orchestration stage (`launch`, `poll`, `run`).
        status: Stage outcome (`started`, `completed`, `success`).
        run_id: Remote run identifier once known.
        details: Optional stage-specific values.

    Returns:
        dict[str, object]: Event with `stage`, `status`, `run_id`, `recorded_at_utc`
        and, when given, `details`.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    stage_event: dict[str, object] = {
        "stage": stage,
        "status": status,
        "run_id": run_id,
        "recorded_at_utc": datetime.now(timezone.utc).isoformat(),
    }
    if details:
        stage_event["details"] = dict(details)
    return stage_event


def domain_elapsed_milliseconds(started_at: float, now: float) -> int:
    """Return non-negative whole milliseconds between two monotonic readings."""

    return max(0, int((now - started_at) * 1000))
