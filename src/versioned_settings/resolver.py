"""Resolution of the current and previous settings versions."""

import logging
from typing import Any

from versioned_settings.backends.base import SettingsBackend
from versioned_settings.version import Version, resolve_application_version

logger = logging.getLogger(__name__)


class VersionResolver:
    """Knows the running application's version and finds older recorded versions."""

    def __init__(self, current_version: Version | str):
        """Initialize the resolver.

        Args:
            current_version: Version of the running application
        """
        self._current_version = Version.coerce(current_version)

    @classmethod
    def for_application(cls, distribution_name: str) -> "VersionResolver":
        """Build a resolver from an installed distribution's version."""
        return cls(resolve_application_version(distribution_name))

    @property
    def current_version(self) -> Version:
        return self._current_version

    def older_versions(self, backend: SettingsBackend, handle: Any) -> list[Version]:
        """List recorded versions strictly older than the current one, oldest first.

        Args:
            backend: Backend the handle belongs to
            handle: Open store handle

        Returns:
            list[Version]: Older versions in ascending order
        """
        return sorted(v for v in backend.list_versions(handle) if v < self._current_version)

    def previous_version(self, backend: SettingsBackend, handle: Any) -> Version | None:
        """Find the most recent recorded version strictly older than the current one.

        Args:
            backend: Backend the handle belongs to
            handle: Open store handle

        Returns:
            Version | None: The previous version, or None if there isn't one
        """
        if not backend.supports_version_listing:
            logger.debug("%s can't list versions, no previous version", type(backend).__name__)
            return None

        older = self.older_versions(backend, handle)
        return older[-1] if older else None
