"""Platform detection and download URL construction."""

from __future__ import annotations

import platform as _platform
from typing import NamedTuple

DOWNLOAD_BASE_URL = "https://dl.k8s.io/release"

_ARCH_ALIASES = {
    "x86_64": "amd64",
    "x64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
}


class PlatformKey(NamedTuple):
    """Normalized architecture and OS family of a binary."""

    arch: str
    os_family: str


def normalize_arch(machine: str) -> str:
    """Map a machine name to the architecture token used in download URLs."""
    machine = machine.lower()
    return _ARCH_ALIASES.get(machine, machine)


def os_family(system: str) -> str:
    """Map an OS name to ``linux``, ``darwin`` or ``windows``."""
    system = system.lower()
    if system in ("linux", "darwin"):
        return system
    return "windows"


def current_platform() -> PlatformKey:
    """Detect the current platform and architecture."""
    return PlatformKey(
        arch=normalize_arch(_platform.machine()),
        os_family=os_family(_platform.system()),
    )


def executable_suffix(platform: PlatformKey) -> str:
    """Return the file suffix executables carry on ``platform``."""
    return ".exe" if platform.os_family == "windows" else ""


def download_url(
    tool: str,
    version: str,
    platform: PlatformKey,
    base_url: str = DOWNLOAD_BASE_URL,
) -> str:
    """Return the URL of ``tool`` at ``version`` built for ``platform``."""
    base_url = base_url.rstrip("/")
    if platform.os_family == "linux":
        return f"{base_url}/{version}/bin/linux/{platform.arch}/{tool}"
    if platform.os_family == "darwin":
        return f"{base_url}/{version}/bin/darwin/{platform.arch}/{tool}"
    return f"{base_url}/{version}/bin/windows/{platform.arch}/{tool}.exe"
