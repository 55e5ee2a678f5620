"""Batch reads and writes of setting values for a single version."""

import logging
from collections.abc import Iterable
from typing import Any

from versioned_settings.backends.base import SettingsBackend
from versioned_settings.properties import SettingsProperty, SettingsPropertyValue
from versioned_settings.version import Version

logger = logging.getLogger(__name__)


class SettingsAccess:
    """Reads and writes setting values through a backend handle."""

    def __init__(self, backend: SettingsBackend):
        self.backend = backend

    def read_value(
        self,
        handle: Any,  # noqa: ANN401
        property: SettingsProperty,
        version: Version,
    ) -> SettingsPropertyValue:
        """Read one property at a version.

        A missing value is not an error: the result simply has no serialized
        value. The result is never dirty since it was just loaded.
        """
        stored = self.backend.get_value(handle, property.name, version)
        return SettingsPropertyValue(property, serialized_value=stored, is_dirty=False)

    def read_batch(
        self,
        handle: Any,  # noqa: ANN401
        properties: Iterable[SettingsProperty],
        version: Version,
    ) -> dict[str, SettingsPropertyValue]:
        """Read several properties at a version, in iteration order.

        Returns:
            dict: Setting name to loaded value
        """
        return {
            property.name: self.read_value(handle, property, version) for property in properties
        }

    def write_value(
        self,
        handle: Any,  # noqa: ANN401
        value: SettingsPropertyValue,
        version: Version,
    ) -> None:
        """Store one value at a version. The value must have a serialized form."""
        if value.serialized_value is None:
            raise ValueError(f"Setting {value.name!r} has no serialized value to write")
        self.backend.set_value(handle, value.name, version, value.serialized_value)

    def write_batch(
        self,
        handle: Any,  # noqa: ANN401
        values: Iterable[SettingsPropertyValue],
        version: Version,
    ) -> int:
        """Store every dirty value that has a serialized form.

        Clean values and values without a serialized form are skipped, so an
        absent setting is never materialized as an empty string.

        Returns:
            int: Number of values written
        """
        written = 0
        for value in values:
            if not value.is_dirty or value.serialized_value is None:
                continue
            self.write_value(handle, value, version)
            written += 1

        logger.debug("Wrote %d settings for version %s", written, version)
        return written
