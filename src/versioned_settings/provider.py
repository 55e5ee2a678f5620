"""Versioned settings provider.

The provider is what a host application talks to. It loads and saves setting
values for the running application's version and migrates values forward
when that version changes:

- ``get_property_values`` / ``set_property_values``: normal load and save
- ``reset``: wipe everything stored for the current version
- ``get_previous_version``: inspect a value from the most recent older version
- ``upgrade``: copy the previous version's values into the current version

Every operation opens one backend handle and releases it before returning.
"""

import contextlib
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from versioned_settings.access import SettingsAccess
from versioned_settings.backends.base import SettingsBackend
from versioned_settings.properties import SettingsProperty, SettingsPropertyValue
from versioned_settings.resolver import VersionResolver
from versioned_settings.version import Version

logger = logging.getLogger(__name__)


@dataclass
class UpgradeResult:
    """Outcome of an upgrade call."""

    previous_version: Version | None
    current_version: Version
    migrated: list[str] = field(default_factory=list)
    purged: list[Version] = field(default_factory=list)

    @property
    def performed(self) -> bool:
        return self.previous_version is not None


class VersionedSettingsProvider:
    """Loads, saves and migrates application settings tagged by version."""

    def __init__(
        self,
        backend: SettingsBackend,
        current_version: Version | str | None = None,
        *,
        name: str = "",
        application_name: str = "",
        delete_old_versions_on_upgrade: bool = False,
    ):
        """Initialize the provider.

        Args:
            backend: Storage backend
            current_version: Version of the running application. None resolves it
                from the installed distribution named by ``application_name``.
            name: Provider name, defaults to the class name
            application_name: Distribution name of the host application
            delete_old_versions_on_upgrade: Purge older versions after a successful upgrade
        """
        self.backend = backend
        self.name = name or type(self).__name__
        self.application_name = application_name
        self.delete_old_versions_on_upgrade = delete_old_versions_on_upgrade

        if current_version is None:
            self.resolver = VersionResolver.for_application(application_name)
        else:
            self.resolver = VersionResolver(current_version)
        self.access = SettingsAccess(backend)

    @property
    def current_version(self) -> Version:
        return self.resolver.current_version

    @contextlib.contextmanager
    def _open_store(self) -> Iterator[Any]:
        """Open a backend handle and release it on every exit path.

        On failure the handle is aborted and the original exception re-raised.
        A failure while aborting is logged rather than masking the original.
        """
        handle = self.backend.open()
        try:
            yield handle
        except BaseException:
            try:
                self.backend.abort(handle)
            except Exception:
                logger.exception("Failed to release settings store after an error")
            raise
        else:
            self.backend.close(handle)

    def get_property_values(
        self, properties: Iterable[SettingsProperty]
    ) -> dict[str, SettingsPropertyValue]:
        """Load the current version's values for a set of properties.

        Returns:
            dict: Setting name to value, none of them dirty
        """
        with self._open_store() as handle:
            return self.access.read_batch(handle, properties, self.current_version)

    def set_property_values(self, values: Iterable[SettingsPropertyValue]) -> int:
        """Save dirty values for the current version.

        Returns:
            int: Number of values written
        """
        with self._open_store() as handle:
            return self.access.write_batch(handle, values, self.current_version)

    def reset(self) -> None:
        """Delete every setting stored for the current version."""
        with self._open_store() as handle:
            self._delete_current(handle)

    def get_previous_version(self, property: SettingsProperty) -> SettingsPropertyValue:
        """Read a property's value from the most recent older version.

        Returns:
            SettingsPropertyValue: The older value, or an absent value when no
                older version is recorded
        """
        with self._open_store() as handle:
            previous_version = self.resolver.previous_version(self.backend, handle)
            if previous_version is None:
                return SettingsPropertyValue.absent(property)
            return self.access.read_value(handle, property, previous_version)

    def upgrade(
        self,
        properties: Iterable[SettingsProperty],
        delete_old_versions: bool | None = None,
    ) -> UpgradeResult:
        """Migrate the previous version's values into the current version.

        Current-version data is wiped first so the result is exactly the
        previous version's values, not a merge. Without a previous version
        this does nothing, so it is safe to call on every startup.

        Args:
            properties: Properties to migrate
            delete_old_versions: Purge every version older than the current one
                afterwards. None uses ``delete_old_versions_on_upgrade``.

        Returns:
            UpgradeResult: What was migrated and purged

        Raises:
            NotImplementedError: If purging is requested and the backend can't
                delete versions
        """
        if delete_old_versions is None:
            delete_old_versions = self.delete_old_versions_on_upgrade
        current_version = self.current_version

        with self._open_store() as handle:
            previous_version = self.resolver.previous_version(self.backend, handle)
            result = UpgradeResult(
                previous_version=previous_version, current_version=current_version
            )
            if previous_version is None:
                logger.debug("No settings older than %s, nothing to upgrade", current_version)
                return result

            if delete_old_versions and not self.backend.supports_version_deletion:
                raise NotImplementedError(
                    f"{type(self.backend).__name__} can't purge old settings versions"
                )

            self._delete_current(handle)

            for property in properties:
                previous_value = self.access.read_value(handle, property, previous_version)
                if previous_value.is_present:
                    self.access.write_value(handle, previous_value, current_version)
                    result.migrated.append(property.name)

            if delete_old_versions:
                for version in self.resolver.older_versions(self.backend, handle):
                    self.backend.delete_for_version(handle, version)
                    result.purged.append(version)

        logger.info(
            "Upgraded settings from %s to %s (%d migrated, %d versions purged)",
            previous_version,
            current_version,
            len(result.migrated),
            len(result.purged),
        )
        return result

    def list_versions(self) -> list[Version]:
        """List every recorded version, oldest first."""
        with self._open_store() as handle:
            return sorted(self.backend.list_versions(handle))

    def _delete_current(self, handle: Any) -> None:  # noqa: ANN401
        if not self.backend.supports_version_deletion:
            logger.debug("%s can't delete versions, skipping reset", type(self.backend).__name__)
            return
        self.backend.delete_for_version(handle, self.current_version)
