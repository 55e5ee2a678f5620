"""In-memory settings backend."""

from versioned_settings.backends.base import SettingsBackend
from versioned_settings.version import Version


class InMemoryBackend(SettingsBackend):
    """Backend that keeps settings in a dictionary for the life of the instance.

    Every handle shares the same storage. Useful for tests and for hosts that
    only need versioning semantics within one process.
    """

    supports_version_listing = True
    supports_version_deletion = True

    def __init__(self, initial: dict[Version, dict[str, str]] | None = None):
        """Initialize the backend.

        Args:
            initial: Optional starting data, keyed by version then setting name
        """
        self._data: dict[Version, dict[str, str]] = {}
        for version, values in (initial or {}).items():
            self._data[Version.coerce(version)] = dict(values)
        self.open_count = 0
        self.close_count = 0

    def open(self) -> dict[Version, dict[str, str]]:
        self.open_count += 1
        return self._data

    def close(self, handle: dict[Version, dict[str, str]]) -> None:
        self.close_count += 1

    def get_value(
        self, handle: dict[Version, dict[str, str]], name: str, version: Version
    ) -> str | None:
        return handle.get(version, {}).get(name)

    def set_value(
        self, handle: dict[Version, dict[str, str]], name: str, version: Version, value: str
    ) -> None:
        handle.setdefault(version, {})[name] = value

    def list_versions(self, handle: dict[Version, dict[str, str]]) -> set[Version]:
        return {version for version, values in handle.items() if values}

    def delete_for_version(self, handle: dict[Version, dict[str, str]], version: Version) -> None:
        handle.pop(version, None)

    def snapshot(self) -> dict[Version, dict[str, str]]:
        """Return a deep copy of the stored data."""
        return {version: dict(values) for version, values in self._data.items() if values}
