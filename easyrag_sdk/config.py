"""EasyRAG SDK client configuration."""

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://api.easyrag.com"
DEFAULT_TIMEOUT = 30.0

API_KEY_ENV = "EASYRAG_API_KEY"
BASE_URL_ENV = "EASYRAG_BASE_URL"
TIMEOUT_ENV = "EASYRAG_TIMEOUT"


def safe_float(val: Any, default: float) -> float:
    """Safely parse a value to a float."""
    if val is None or val == "":
        return default
    try:
        return float(val)
    except (TypeError, ValueError):
        return default


def get_env_float(key: str, default: float) -> float:
    """Get an environment variable as a float."""
    return safe_float(os.getenv(key), default)


class ClientConfig(BaseModel):
    """Immutable connection settings owned by a single client."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    api_key: str = Field(min_length=1, alias="apiKey")
    base_url: str = Field(default=DEFAULT_BASE_URL, alias="baseUrl")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("base_url must not be empty")
        return value

    @classmethod
    def from_env(
        cls,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> "ClientConfig":
        """
        Build a config from EASYRAG_* environment variables.

        Explicit arguments take precedence over the environment. An empty or
        unparsable EASYRAG_TIMEOUT falls back to the default.
        """
        api_key = api_key or os.getenv(API_KEY_ENV)
        if not api_key:
            raise ConfigurationError(
                f"API key is required: pass api_key or set {API_KEY_ENV}"
            )
        return _build(
            api_key=api_key,
            base_url=base_url or os.getenv(BASE_URL_ENV) or DEFAULT_BASE_URL,
            timeout=timeout if timeout is not None else get_env_float(TIMEOUT_ENV, DEFAULT_TIMEOUT),
        )


def _build(**values: Any) -> ClientConfig:
    try:
        return ClientConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid client configuration: {e}") from e


def resolve_config(
    config: "str | ClientConfig | Mapping[str, Any] | None" = None,
    *,
    api_key: str | None = None,
    base_url: str | None = None,
    timeout: float | None = None,
) -> ClientConfig:
    """
    Normalize the accepted construction forms into one ClientConfig.

    Args:
        config: A bare credential (API key or frontend token), a ClientConfig,
            a mapping with api_key/apiKey, base_url/baseUrl and timeout keys,
            or None to read the environment.
        api_key: Overrides the credential.
        base_url: Overrides the endpoint.
        timeout: Overrides the request timeout, in seconds.

    Raises:
        ConfigurationError: If no credential is available or a value is invalid.
    """
    overrides = {
        key: value
        for key, value in (("api_key", api_key), ("base_url", base_url), ("timeout", timeout))
        if value is not None
    }

    if config is None:
        return ClientConfig.from_env(**overrides)

    if isinstance(config, ClientConfig):
        return _build(**{**config.model_dump(), **overrides}) if overrides else config

    if isinstance(config, str):
        return _build(**{"api_key": config, **overrides})

    if isinstance(config, Mapping):
        values = {
            "api_key": config.get("api_key", config.get("apiKey")),
            "base_url": config.get("base_url", config.get("baseUrl")),
            "timeout": config.get("timeout"),
        }
        # Empty or zero values fall back to the defaults
        values = {key: value for key, value in values.items() if value}
        values.update(overrides)
        if not values.get("api_key"):
            raise ConfigurationError("API key is required in client configuration")
        return _build(**values)

    raise ConfigurationError(
        f"Unsupported configuration type: {type(config).__name__}"
    )
