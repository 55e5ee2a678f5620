"""Versioned-settings configuration package.

This package provides configuration management with:
- Pydantic models for backend, migration and logging settings
- YAML parsing and serialization
- Smart defaults management
"""

from .manager import ConfigManager
from .models import BackendConfig, LoggingConfig, SettingsConfig

__all__ = [
    "BackendConfig",
    "ConfigManager",
    "LoggingConfig",
    "SettingsConfig",
]
