"""Configuration models for versioned-settings.

This module contains the Pydantic models describing how a provider is set up:
which backend stores the settings, which application version is current and
how logging is rendered.
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from versioned_settings.version import Version


class LoggingConfig(BaseModel):
    """Structlog-based logging configuration."""

    level: str = "INFO"
    json_logs: bool | None = None  # None = auto-detect from the output stream
    extra_fields: dict[str, str] = Field(default_factory=dict)


class BackendConfig(BaseModel):
    """Storage backend selection."""

    kind: Literal["memory", "yaml", "sqlite"] = "yaml"
    path: str | None = None  # None = default location from PathResolver


class SettingsConfig(BaseModel):
    """Configuration of a versioned settings provider."""

    # Version tracking
    config_version: str = "1.0.0"  # Configuration schema version

    # Application identity
    application_name: str = ""  # Installed distribution whose version tags settings
    current_version: str | None = None  # Explicit version, overrides application_name lookup

    # Migration policy
    delete_old_versions_on_upgrade: bool = False

    backend: BackendConfig = Field(default_factory=BackendConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("current_version", mode="before")
    @classmethod
    def validate_current_version(cls, v: object) -> str | None:
        """Validate the explicit application version format.

        YAML reads an unquoted ``2.0`` as a float, so any scalar is accepted
        and normalized to the four-component form.
        """
        if v is None:
            return v
        return str(Version.parse(str(v)))
