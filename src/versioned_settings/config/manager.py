"""Provider configuration loading and saving."""

import logging
import shutil
from typing import Any

import yaml
from pydantic import ValidationError

from versioned_settings.config.models import SettingsConfig
from versioned_settings.system.path_resolver import PathResolver

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading, saving and validation."""

    CURRENT_VERSION = "1.0.0"

    def __init__(self, path_resolver: PathResolver | None = None):
        """Initialize ConfigManager.

        Args:
            path_resolver: Optional PathResolver instance. If None, creates a new one.
        """
        self.path_resolver = path_resolver or PathResolver()
        self.config_path = self.path_resolver.get_config_path()

    def load(self) -> SettingsConfig:
        """Load and validate the configuration, creating it from defaults if missing.

        Returns:
            SettingsConfig: Loaded and validated configuration

        Raises:
            ValueError: If the file content is not a valid configuration
        """
        self._ensure_config_exists()

        raw_config = self._read_yaml()
        if not isinstance(raw_config, dict):
            raise ValueError(f"Configuration file {self.config_path} root is not a mapping")

        config_version = raw_config.get("config_version", self.CURRENT_VERSION)
        if config_version != self.CURRENT_VERSION:
            raise ValueError(f"Unknown config version: {config_version}")

        return self._create_config_object(raw_config)

    def save(self, config: SettingsConfig) -> None:
        """Save configuration to file with backup.

        Args:
            config: Configuration to save

        Raises:
            PermissionError: If config file cannot be written
        """
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config_path.exists():
            backup_path = self.config_path.with_suffix(".yaml.backup")
            try:
                shutil.copy2(self.config_path, backup_path)
            except PermissionError:
                logger.warning("Could not create backup at %s", backup_path)

        config_yaml = yaml.safe_dump(config.model_dump(), default_flow_style=False, sort_keys=False)
        self.config_path.write_text(config_yaml)
        logger.info("Configuration saved successfully to %s", self.config_path)

    def reload(self) -> SettingsConfig:
        """Reload configuration from disk."""
        return self.load()

    def _ensure_config_exists(self) -> None:
        """Ensure config file exists, create from defaults if needed."""
        if not self.config_path.exists():
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            config_yaml = yaml.safe_dump(
                SettingsConfig().model_dump(), default_flow_style=False, sort_keys=False
            )
            self.config_path.write_text(config_yaml)
            logger.info("Created default configuration at %s", self.config_path)

    def _read_yaml(self) -> Any:  # noqa: ANN401
        """Read YAML config file."""
        config_text = self.config_path.read_text()
        return yaml.safe_load(config_text) or {}

    def _create_config_object(self, raw_config: dict[str, Any]) -> SettingsConfig:
        """Create SettingsConfig object from dictionary.

        Args:
            raw_config: Configuration dictionary

        Returns:
            SettingsConfig: Typed configuration object
        """
        expected_fields = set(SettingsConfig.model_fields.keys())
        filtered_config = {k: v for k, v in raw_config.items() if k in expected_fields}

        unexpected_fields = set(raw_config.keys()) - expected_fields
        if unexpected_fields:
            logger.warning("Filtered out unexpected config fields: %s", sorted(unexpected_fields))

        try:
            return SettingsConfig(**filtered_config)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in e.errors()
            ]
            raise ValueError(f"Configuration validation failed: {', '.join(errors)}") from e
