"""Storage backends for versioned settings.

Main components:
- SettingsBackend: Abstract interface every backend implements
- InMemoryBackend: Dictionary storage for tests and single-process use
- YamlFileBackend: Single YAML document on disk
- SqliteBackend: SQLite database through SQLAlchemy
"""

from versioned_settings.backends.base import SettingsBackend
from versioned_settings.backends.memory import InMemoryBackend
from versioned_settings.backends.sqlite import SqliteBackend
from versioned_settings.backends.yaml_file import YamlFileBackend

__all__ = [
    "InMemoryBackend",
    "SettingsBackend",
    "SqliteBackend",
    "YamlFileBackend",
]
