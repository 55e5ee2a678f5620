"""Dependency injection container for versioned-settings."""

from pathlib import Path

from dependency_injector import containers, providers

from versioned_settings.backends import (
    InMemoryBackend,
    SettingsBackend,
    SqliteBackend,
    YamlFileBackend,
)
from versioned_settings.config import ConfigManager, SettingsConfig
from versioned_settings.provider import VersionedSettingsProvider
from versioned_settings.system.path_resolver import PathResolver


def load_config(path_resolver: PathResolver) -> SettingsConfig:
    """Load the provider configuration through ConfigManager."""
    return ConfigManager(path_resolver).load()


def create_backend(config: SettingsConfig, path_resolver: PathResolver) -> SettingsBackend:
    """Create the storage backend selected by the configuration.

    Relative backend paths are resolved against the data directory.
    """
    kind = config.backend.kind
    if kind == "memory":
        return InMemoryBackend()

    if kind == "yaml":
        default_path = path_resolver.get_yaml_store_path()
    elif kind == "sqlite":
        default_path = path_resolver.get_sqlite_store_path()
    else:
        raise ValueError(f"Unknown settings backend: {kind}")

    path = Path(config.backend.path) if config.backend.path else default_path
    if not path.is_absolute():
        path = path_resolver.get_data_dir() / path

    if kind == "yaml":
        return YamlFileBackend(path)
    return SqliteBackend(path)


def create_provider(
    config: SettingsConfig, backend: SettingsBackend
) -> VersionedSettingsProvider:
    """Create the settings provider described by the configuration."""
    return VersionedSettingsProvider(
        backend,
        current_version=config.current_version,
        application_name=config.application_name,
        delete_old_versions_on_upgrade=config.delete_old_versions_on_upgrade,
    )


class Container(containers.DeclarativeContainer):
    """Application dependency injection container.

    Hosts override ``path_resolver`` or ``config`` to point the provider at
    their own storage; everything else is derived from them.
    """

    path_resolver = providers.Singleton(PathResolver)

    config = providers.Singleton(
        load_config,
        path_resolver=path_resolver,
    )

    backend = providers.Singleton(
        create_backend,
        config=config,
        path_resolver=path_resolver,
    )

    settings_provider = providers.Singleton(
        create_provider,
        config=config,
        backend=backend,
    )
