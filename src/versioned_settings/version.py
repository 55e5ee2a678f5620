"""Application version identifiers used to tag stored settings."""

import logging
import re
from dataclasses import dataclass
from importlib import metadata

logger = logging.getLogger(__name__)

_RELEASE_PREFIX = re.compile(r"^\s*v?(\d+(?:\.\d+){0,3})")


@dataclass(frozen=True, order=True)
class Version:
    """Four-component numeric version (major.minor.build.revision).

    Equality and ordering compare the components in turn, so versions form a
    total order. Components left out when parsing count as zero, which makes
    ``1.0`` and ``1.0.0.0`` the same version.
    """

    major: int = 0
    minor: int = 0
    build: int = 0
    revision: int = 0

    def __post_init__(self) -> None:
        """Reject components that aren't non-negative integers."""
        for component in (self.major, self.minor, self.build, self.revision):
            if not isinstance(component, int) or isinstance(component, bool):
                raise ValueError(f"Version components must be integers, got {component!r}")
            if component < 0:
                raise ValueError(f"Version components must be non-negative, got {self.as_tuple()}")

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Parse a dotted version string with one to four numeric components.

        Args:
            text: Version string (e.g., "2.0" or "1.4.0.12")

        Returns:
            Version: Parsed version

        Raises:
            ValueError: If the string is not a dotted list of 1-4 integers
        """
        parts = text.strip().split(".")
        if not 1 <= len(parts) <= 4 or not all(part.isdigit() for part in parts):
            raise ValueError(f"Invalid version string: {text!r}")
        return cls(*(int(part) for part in parts))

    @classmethod
    def coerce(cls, value: "Version | str | tuple[int, ...]") -> "Version":
        """Build a Version from a Version, a dotted string or a tuple of ints."""
        if isinstance(value, Version):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, tuple) and 1 <= len(value) <= 4:
            return cls(*value)
        raise ValueError(f"Cannot interpret {value!r} as a version")

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.major, self.minor, self.build, self.revision)

    def __str__(self) -> str:
        return ".".join(str(component) for component in self.as_tuple())


MINIMUM_VERSION = Version(0, 0, 0, 0)


def resolve_application_version(distribution_name: str) -> Version:
    """Determine the running application's version from its installed metadata.

    Only the numeric release prefix is used, so "2.1.0rc1" resolves to 2.1.0.0.
    When the application identity can't be determined the minimum version is
    returned instead of raising, so callers always get a usable value.

    Args:
        distribution_name: Name of the installed distribution (e.g., "my-app")

    Returns:
        Version: The application version, or MINIMUM_VERSION
    """
    if not distribution_name:
        logger.warning("No application name configured, using version %s", MINIMUM_VERSION)
        return MINIMUM_VERSION

    try:
        raw_version = metadata.version(distribution_name)
    except metadata.PackageNotFoundError:
        logger.warning(
            "Distribution %s is not installed, using version %s",
            distribution_name,
            MINIMUM_VERSION,
        )
        return MINIMUM_VERSION

    match = _RELEASE_PREFIX.match(raw_version)
    if not match:
        logger.warning(
            "Unrecognised version %r for %s, using version %s",
            raw_version,
            distribution_name,
            MINIMUM_VERSION,
        )
        return MINIMUM_VERSION

    return Version.parse(match.group(1))
