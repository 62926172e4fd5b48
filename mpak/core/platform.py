"""Host platform detection for platform-scoped bundle downloads."""

from __future__ import annotations

import platform as _platform
import sys

from mpak.models.platform import Architecture, OperatingSystem, Platform

_OS_MAP: dict[str, OperatingSystem] = {
    "darwin": OperatingSystem.DARWIN,
    "linux": OperatingSystem.LINUX,
    "win32": OperatingSystem.WIN32,
    "cygwin": OperatingSystem.WIN32,
}

_ARCH_MAP: dict[str, Architecture] = {
    "x86_64": Architecture.X64,
    "amd64": Architecture.X64,
    "x64": Architecture.X64,
    "arm64": Architecture.ARM64,
    "aarch64": Architecture.ARM64,
}


def map_platform(system: str, machine: str) -> Platform:
    """Map raw OS / CPU identifiers to a :class:`Platform`.

    Unrecognized values fall back to ``any`` on their axis.
    """
    os_name = system.lower()
    if os_name.startswith("linux"):
        os_name = "linux"
    return Platform(
        os=_OS_MAP.get(os_name, OperatingSystem.ANY),
        arch=_ARCH_MAP.get(machine.lower(), Architecture.ANY),
    )


def detect_platform() -> Platform:
    """Detect the platform of the running interpreter."""
    return map_platform(sys.platform, _platform.machine())
