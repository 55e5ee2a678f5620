"""Storage backend interface for versioned settings.

A backend stores (name, version, value) triples. The provider only ever talks
to storage through the operations defined here, so any medium (file, database,
registry, remote blob) can be plugged in by implementing this class.
"""

from abc import ABC, abstractmethod
from typing import Any

from versioned_settings.version import Version


class SettingsBackend(ABC):
    """Abstract base class for settings storage backends.

    Handles returned by ``open`` are opaque to the provider. Each public
    provider operation opens exactly one handle and releases it before
    returning, with ``close`` on success and ``abort`` on failure.

    Version listing and deletion are optional. Backends that implement them
    must set ``supports_version_listing`` / ``supports_version_deletion``.
    """

    supports_version_listing: bool = False
    supports_version_deletion: bool = False

    @abstractmethod
    def open(self) -> Any:  # noqa: ANN401
        """Open the data store.

        Returns:
            Backend-specific handle passed to every other call
        """
        pass

    def close(self, handle: Any) -> None:  # noqa: ANN401
        """Release a handle after a successful operation.

        Args:
            handle: Handle returned by ``open``
        """
        pass

    def abort(self, handle: Any) -> None:  # noqa: ANN401
        """Release a handle after an operation raised.

        Transactional backends override this to discard pending changes.

        Args:
            handle: Handle returned by ``open``
        """
        self.close(handle)

    @abstractmethod
    def get_value(self, handle: Any, name: str, version: Version) -> str | None:  # noqa: ANN401
        """Read one setting.

        Args:
            handle: Open store handle
            name: Setting name
            version: Version the value was stored under

        Returns:
            Stored value, or None if nothing is stored for (name, version)
        """
        pass

    @abstractmethod
    def set_value(self, handle: Any, name: str, version: Version, value: str) -> None:
        """Write one setting, replacing any existing value for (name, version).

        Args:
            handle: Open store handle
            name: Setting name
            version: Version to store the value under
            value: Serialized value
        """
        pass

    def list_versions(self, handle: Any) -> set[Version]:  # noqa: ANN401
        """List every distinct version with at least one stored value.

        Args:
            handle: Open store handle

        Returns:
            Set of recorded versions, in no particular order

        Raises:
            NotImplementedError: If the backend can't enumerate versions
        """
        raise NotImplementedError(f"{type(self).__name__} does not support listing versions")

    def delete_for_version(self, handle: Any, version: Version) -> None:  # noqa: ANN401
        """Delete every setting stored under a version.

        Args:
            handle: Open store handle
            version: Version to wipe

        Raises:
            NotImplementedError: If the backend can't delete by version
        """
        raise NotImplementedError(f"{type(self).__name__} does not support deleting versions")
