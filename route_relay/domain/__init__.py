"""Domain helpers used across application layer boundaries."""

from .timeline import domain_build_stage_event, domain_elapsed_milliseconds

__all__ = ["domain_build_stage_event", "domain_elapsed_milliseconds"]
