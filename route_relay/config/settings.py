"""Typed runtime settings with dotenv support and startup validation."""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for API runtime, route cache and remote flow access.

    Environment variable names map directly to field names in uppercase.
    Example: `flow_api_token` reads from `FLOW_API_TOKEN`.

    Attributes:
        environment_name: Runtime environment label.
        application_host: Host interface for web server binding.
        application_port: Web server port.
        log_level: Minimum structured log level.
        cors_allow_origins: Origins allowed by the CORS middleware.
        cache_backend: Route cache backend (`redis` or `memory`).
        redis_url: Redis connection URL for the route cache.
        flow_api_base_url: Base URL of the remote flow API.
        flow_api_token: Bearer token for the remote flow API.
        flow_user_id: Remote user identifier owning the saved flows.
        flow_project_id: Optional remote project identifier.
        flow_saved_item_ids: Mapping of flow type to remote saved flow identifier.
        flow_route_flow_type: Flow type dispatched for cached route lookups.
        flow_poll_interval_ms: Fixed delay between run status polls.
        flow_poll_timeout_ms: Wall-clock budget for one completion poll.
        flow_request_timeout_seconds: Per-request HTTP timeout for remote flow calls.
        openapi_fetch_timeout_seconds: HTTP timeout for OpenAPI URL downloads.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment_name: str = Field(default="development")
    application_host: str = Field(default="0.0.0.0")
    application_port: int = Field(default=3000, ge=1, le=65535)
    log_level: str = Field(default="INFO")
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])
    cache_backend: str = Field(default="redis")
    redis_url: str = Field(default="redis://localhost:6379")
    flow_api_base_url: str = Field(default="https://api.gumloop.com/api/v1")
    flow_api_token: str = Field(min_length=1)
    flow_user_id: str = Field(min_length=1)
    flow_project_id: str | None = Field(default=None)
    flow_saved_item_ids: dict[str, str] = Field(default_factory=dict)
    flow_route_flow_type: str = Field(default="single-tool-raw", min_length=1)
    flow_poll_interval_ms: int = Field(default=2000, gt=0)
    flow_poll_timeout_ms: int = Field(default=300000, ge=0)
    flow_request_timeout_seconds: float = Field(default=30.0, gt=0)
    openapi_fetch_timeout_seconds: float = Field(default=30.0, gt=0)

    @field_validator("flow_api_token", "flow_user_id", "flow_api_base_url", "redis_url")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("flow_project_id")
    @classmethod
    def _validate_optional_string(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped_value = value.strip()
        return stripped_value or None

    @field_validator("cache_backend")
    @classmethod
    def _validate_cache_backend(cls, value: str) -> str:
        normalized_value = value.strip().lower()
        if normalized_value not in {"redis", "memory"}:
            raise ValueError("cache_backend must be one of: redis, memory")
        return normalized_value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if normalized_value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError("log_level must be a standard logging level name")
        return normalized_value

    @field_validator("flow_saved_item_ids")
    @classmethod
    def _validate_saved_item_ids(cls, value: dict[str, str]) -> dict[str, str]:
        normalized_value: dict[str, str] = {}
        for flow_type, saved_item_id in value.items():
            normalized_flow_type = flow_type.strip()
            normalized_saved_item_id = saved_item_id.strip()
            if not normalized_flow_type or not normalized_saved_item_id:
                raise ValueError("flow_saved_item_ids keys and values must not be blank")
            normalized_value[normalized_flow_type] = normalized_saved_item_id
        return normalized_value


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when required settings are missing or invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
