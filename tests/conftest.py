from pathlib import Path
from typing import Any

import pytest

from versioned_settings.backends import InMemoryBackend
from versioned_settings.properties import SettingsProperty
from versioned_settings.provider import VersionedSettingsProvider
from versioned_settings.system.path_resolver import PathResolver
from versioned_settings.version import Version


class RecordingBackend(InMemoryBackend):
    """In-memory backend that records every backend call it receives."""

    def __init__(self, initial: dict[Version, dict[str, str]] | None = None):
        super().__init__(initial)
        self.calls: list[tuple[Any, ...]] = []

    def open(self):
        self.calls.append(("open",))
        return super().open()

    def close(self, handle):
        self.calls.append(("close",))
        super().close(handle)

    def abort(self, handle):
        self.calls.append(("abort",))

    def get_value(self, handle, name, version):
        self.calls.append(("get_value", name, version))
        return super().get_value(handle, name, version)

    def set_value(self, handle, name, version, value):
        self.calls.append(("set_value", name, version, value))
        super().set_value(handle, name, version, value)

    def list_versions(self, handle):
        self.calls.append(("list_versions",))
        return super().list_versions(handle)

    def delete_for_version(self, handle, version):
        self.calls.append(("delete_for_version", version))
        super().delete_for_version(handle, version)

    def calls_named(self, *names: str) -> list[tuple[Any, ...]]:
        """Return recorded calls whose operation name is one of ``names``."""
        return [call for call in self.calls if call[0] in names]


@pytest.fixture(scope="session")
def repo_root() -> Path:
    """Get the absolute path to the repository root."""
    return Path(__file__).parent.parent.resolve()


@pytest.fixture
def path_resolver(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> PathResolver:
    """Provide a PathResolver whose data and config live under tmp_path.

    The environment variables are cleared so a developer's own configuration
    never leaks into tests.
    """
    monkeypatch.delenv("VERSIONED_SETTINGS_CONFIG", raising=False)
    monkeypatch.setenv("VERSIONED_SETTINGS_DATA", str(tmp_path / "data"))
    return PathResolver(config_path=tmp_path / "config" / "versioned-settings.yaml")


@pytest.fixture
def memory_backend() -> InMemoryBackend:
    """Provide an empty in-memory backend."""
    return InMemoryBackend()


@pytest.fixture
def recording_backend() -> RecordingBackend:
    """Provide an empty in-memory backend that records calls."""
    return RecordingBackend()


@pytest.fixture
def theme_property() -> SettingsProperty:
    """Provide a property with a default value."""
    return SettingsProperty(name="Theme", default_value="light")


@pytest.fixture
def app_properties() -> list[SettingsProperty]:
    """Provide a typical set of application properties."""
    return [
        SettingsProperty(name="Theme", default_value="light"),
        SettingsProperty(name="FontSize", default_value="12"),
        SettingsProperty(name="RecentFiles"),
    ]


@pytest.fixture
def provider_factory():
    """Build providers over a backend for a given current version."""

    def factory(backend, current_version="2.0", **kwargs) -> VersionedSettingsProvider:
        return VersionedSettingsProvider(backend, current_version, **kwargs)

    return factory


@pytest.fixture
def make_recording_backend():
    """Build recording backends preloaded with data."""
    return RecordingBackend
