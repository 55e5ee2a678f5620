"""YAML file settings backend.

All versions live in a single YAML document:

    versions:
      "1.0.0.0":
        Theme: dark
      "2.0.0.0":
        Theme: light

The file is read when a handle is opened and written back when the handle is
closed, only if something changed.
"""

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from versioned_settings.backends.base import SettingsBackend
from versioned_settings.version import Version

logger = logging.getLogger(__name__)


@dataclass
class YamlDocument:
    """Open handle for a YAML settings file."""

    path: Path
    versions: dict[Version, dict[str, str]] = field(default_factory=dict)
    modified: bool = False


class YamlFileBackend(SettingsBackend):
    """Backend storing all settings in one YAML file."""

    supports_version_listing = True
    supports_version_deletion = True

    def __init__(self, path: Path, keep_backup: bool = True):
        """Initialize the backend.

        Args:
            path: Location of the YAML settings file (created on first write)
            keep_backup: Copy the previous file to ``<path>.backup`` before overwriting
        """
        self.path = Path(path)
        self.keep_backup = keep_backup

    def open(self) -> YamlDocument:
        """Load the settings file into a new handle.

        Raises:
            ValueError: If the file exists but isn't a valid settings document
        """
        document = YamlDocument(path=self.path)
        if not self.path.exists():
            return document

        raw = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"Settings file {self.path} root is not a mapping")

        versions = raw.get("versions") or {}
        if not isinstance(versions, dict):
            raise ValueError(f"Settings file {self.path} has an invalid 'versions' section")

        for version_key, values in versions.items():
            version = Version.parse(str(version_key))
            values = values or {}
            if not isinstance(values, dict):
                raise ValueError(
                    f"Settings file {self.path} has an invalid entry for version {version_key}"
                )
            document.versions[version] = {
                str(name): str(value) for name, value in values.items() if value is not None
            }
        return document

    def close(self, handle: YamlDocument) -> None:
        """Write the document back if it changed."""
        if handle.modified:
            self._write(handle)
            handle.modified = False

    def abort(self, handle: YamlDocument) -> None:
        """Discard pending changes."""
        if handle.modified:
            logger.debug("Discarding unsaved changes to %s", handle.path)
        handle.modified = False

    def get_value(self, handle: YamlDocument, name: str, version: Version) -> str | None:
        return handle.versions.get(version, {}).get(name)

    def set_value(self, handle: YamlDocument, name: str, version: Version, value: str) -> None:
        handle.versions.setdefault(version, {})[name] = value
        handle.modified = True

    def list_versions(self, handle: YamlDocument) -> set[Version]:
        return {version for version, values in handle.versions.items() if values}

    def delete_for_version(self, handle: YamlDocument, version: Version) -> None:
        if handle.versions.pop(version, None) is not None:
            handle.modified = True

    def _write(self, handle: YamlDocument) -> None:
        """Atomically replace the settings file with the handle's contents."""
        handle.path.parent.mkdir(parents=True, exist_ok=True)

        if self.keep_backup and handle.path.exists():
            backup_path = handle.path.with_suffix(handle.path.suffix + ".backup")
            try:
                shutil.copy2(handle.path, backup_path)
            except PermissionError:
                logger.warning("Could not create backup at %s", backup_path)

        document: dict[str, Any] = {
            "versions": {
                str(version): dict(values)
                for version, values in sorted(handle.versions.items())
                if values
            }
        }
        tmp_path = handle.path.with_suffix(handle.path.suffix + ".tmp")
        tmp_path.write_text(
            yaml.safe_dump(document, default_flow_style=False, sort_keys=False),
            encoding="utf-8",
        )
        os.replace(tmp_path, handle.path)
        logger.debug("Settings written to %s", handle.path)
