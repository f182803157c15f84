"""Host and companion-plugin version checks for the navigation feature.

The navigation UI needs either a recent enough companion editor plugin or a
host platform release that bundles the same components. Either one is enough.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from packaging.version import InvalidVersion, Version

logger = logging.getLogger(__name__)

COMPANION_MINIMUM_VERSION = "9.0.0"
HOST_MINIMUM_VERSION = "5.6"
SOURCE_BUILD_SUFFIX = "-src"

VersionReader = Callable[[], Optional[str]]


def _parse_version(value: Optional[str]) -> Optional[Version]:
    if not value:
        return None
    try:
        return Version(value.strip())
    except InvalidVersion:
        logger.debug("Ignoring unparsable version string %r", value)
        return None


def version_at_least(value: Optional[str], minimum: str) -> bool:
    """Return True when *value* parses and is ``>=`` *minimum*."""
    current = _parse_version(value)
    target = _parse_version(minimum)
    if current is None or target is None:
        return False
    return current >= target


def strip_source_suffix(host_version: str) -> str:
    # Development checkouts report e.g. "5.6.0-src", which does not compare.
    return host_version.replace(SOURCE_BUILD_SUFFIX, "")


def is_host_compatible(host_version: Optional[str], companion_plugin_version: Optional[str]) -> bool:
    """Decide whether the host can run the navigation feature.

    True if the companion plugin is present at ``9.0.0`` or later, or if the
    host itself (``-src`` suffix removed) is at ``5.6`` or later.
    """
    if companion_plugin_version is not None and version_at_least(
        companion_plugin_version, COMPANION_MINIMUM_VERSION
    ):
        return True

    if host_version is None:
        return False
    return version_at_least(strip_source_suffix(host_version), HOST_MINIMUM_VERSION)


# --- CompatibilityProbe ---
# Purpose: Read live version data and answer is_host_compatible() fail-closed.
# Inputs: Callables returning the host version and the companion plugin version.
# Outputs: bool; retrieval errors count as "version unknown".
class CompatibilityProbe:
    def __init__(
        self,
        host_version_reader: VersionReader,
        companion_version_reader: Optional[VersionReader] = None,
    ) -> None:
        self._read_host_version = host_version_reader
        self._read_companion_version = companion_version_reader

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "CompatibilityProbe":
        """Build a probe from ``HOST_VERSION`` and ``COMPANION_PLUGIN_*`` settings."""

        def host_version() -> Optional[str]:
            return config.get("HOST_VERSION")

        def companion_version() -> Optional[str]:
            if not config.get("COMPANION_PLUGIN_ACTIVE"):
                return None
            return config.get("COMPANION_PLUGIN_VERSION")

        return cls(host_version, companion_version)

    def _safe_read(self, reader: Optional[VersionReader], label: str) -> Optional[str]:
        if reader is None:
            return None
        try:
            return reader()
        except Exception as exc:
            logger.warning("Could not read %s version; treating as unavailable: %s", label, exc)
            return None

    def is_host_compatible(self) -> bool:
        companion_version = self._safe_read(self._read_companion_version, "companion plugin")
        if companion_version is not None and version_at_least(companion_version, COMPANION_MINIMUM_VERSION):
            return True
        host_version = self._safe_read(self._read_host_version, "host")
        return is_host_compatible(host_version, None)


class StaticProbe:
    """Probe with a fixed answer, for hosts that decide compatibility elsewhere."""

    def __init__(self, compatible: bool) -> None:
        self.compatible = compatible

    def is_host_compatible(self) -> bool:
        return self.compatible


__all__ = [
    "COMPANION_MINIMUM_VERSION",
    "HOST_MINIMUM_VERSION",
    "CompatibilityProbe",
    "StaticProbe",
    "is_host_compatible",
    "strip_source_suffix",
    "version_at_least",
]
