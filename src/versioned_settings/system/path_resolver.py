import os
from pathlib import Path


class PathResolver:
    """Central authority for file path resolution in versioned-settings.

    Uses environment variables for configuration with sensible defaults.
    """

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize PathResolver with environment-based configuration.

        Args:
            config_path: Explicit configuration file, takes precedence over the environment
        """
        default_data_dir = Path.home() / ".local" / "share" / "versioned-settings"
        self.data_dir = Path(os.getenv("VERSIONED_SETTINGS_DATA", str(default_data_dir)))
        self.config_path = Path(config_path) if config_path is not None else None

    def get_config_path(self) -> Path:
        """Get the path to the provider configuration file.

        Uses the explicit path if given, then VERSIONED_SETTINGS_CONFIG, then the default.
        """
        if self.config_path is not None:
            return self.config_path

        config_path = os.getenv("VERSIONED_SETTINGS_CONFIG")
        if config_path:
            return Path(config_path)

        return self.data_dir / "config" / "versioned-settings.yaml"

    def get_data_dir(self) -> Path:
        """Get the data directory path."""
        return self.data_dir

    def get_yaml_store_path(self) -> Path:
        """Get the default path of the YAML settings store."""
        return self.data_dir / "settings.yaml"

    def get_sqlite_store_path(self) -> Path:
        """Get the default path of the SQLite settings store."""
        return self.data_dir / "database" / "settings.db"
