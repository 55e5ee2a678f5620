"""Versioned, pluggable persistence for application settings.

Settings are stored tagged with the version of the application that wrote
them. When the application version changes, the previous version's values
can be migrated forward with ``VersionedSettingsProvider.upgrade``.
"""

from versioned_settings.backends import (
    InMemoryBackend,
    SettingsBackend,
    SqliteBackend,
    YamlFileBackend,
)
from versioned_settings.properties import SettingsProperty, SettingsPropertyValue
from versioned_settings.provider import UpgradeResult, VersionedSettingsProvider
from versioned_settings.version import MINIMUM_VERSION, Version, resolve_application_version

__all__ = [
    "MINIMUM_VERSION",
    "InMemoryBackend",
    "SettingsBackend",
    "SettingsProperty",
    "SettingsPropertyValue",
    "SqliteBackend",
    "UpgradeResult",
    "Version",
    "VersionedSettingsProvider",
    "YamlFileBackend",
    "resolve_application_version",
]
