"""Responder settings using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SerializerSettings(BaseModel):
    """Serializer identifiers, looked up in the serializer registry."""

    error: str = "error"
    success: str = "success"


class ResponderSettings(BaseSettings):
    """Responder configuration.

    These are the packaged defaults merged under the ``responder`` namespace
    of the configuration repository at boot. Every field can be overridden
    through a ``RESPONDER_`` environment variable, and nested values through
    ``RESPONDER_SERIALIZERS__ERROR`` style names.
    """

    model_config = SettingsConfigDict(
        env_prefix="RESPONDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Response pipeline (decorator identifiers, or ResponseFactory classes set in code)
    decorators: list[str | type] = ["status_code", "success_flag"]
    serializers: SerializerSettings = SerializerSettings()

    # Transformation
    recursion_limit: int = 5
    load_relations_parameter: str = "with"
    filter_fields_parameter: str = "only"
    error_messages: dict[str, str] = {}

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    # Observability
    metrics_prefix: str = "responder"

    @field_validator("recursion_limit")
    @classmethod
    def recursion_limit_range(cls, v: int) -> int:
        if v < 1 or v > 50:
            raise ValueError("recursion_limit must be between 1 and 50")
        return v

    @field_validator("load_relations_parameter", "filter_fields_parameter")
    @classmethod
    def parameter_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("query parameter name must not be blank")
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper

    def namespace(self) -> dict:
        """Return the settings that live in the ``responder`` config namespace."""
        return self.model_dump(
            include={
                "decorators",
                "serializers",
                "recursion_limit",
                "load_relations_parameter",
                "filter_fields_parameter",
                "error_messages",
            }
        )


@lru_cache
def get_settings() -> ResponderSettings:
    """Get cached settings instance."""
    return ResponderSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
