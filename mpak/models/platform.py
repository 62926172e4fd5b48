"""Platform descriptor used to pick a platform-specific bundle artifact."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class OperatingSystem(str, Enum):
    """Operating systems the registry publishes artifacts for."""

    DARWIN = "darwin"
    LINUX = "linux"
    WIN32 = "win32"
    ANY = "any"


class Architecture(str, Enum):
    """CPU families the registry publishes artifacts for."""

    X64 = "x64"
    ARM64 = "arm64"
    ANY = "any"


class Platform(BaseModel):
    """An (os, arch) pair; ``any`` is the wildcard on either axis."""

    model_config = ConfigDict(frozen=True, use_enum_values=True, validate_default=True)

    os: OperatingSystem = OperatingSystem.ANY
    arch: Architecture = Architecture.ANY
