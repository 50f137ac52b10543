"""kubebins - Versioned kubectl binaries on demand.

Resolves a requested kubectl version ("latest", "1.27" or "v1.27.15") to a
full release, then makes sure a binary for the current platform and
architecture is in the local tool cache, downloading it when it is missing.
"""

from __future__ import annotations

__version__ = "0.1.0"

from . import cache, cli, config, diagnostics, download, errors, platform, utils, versions

# Re-export commonly used functions
from .cache import ToolCache
from .cli import main, setup_tool
from .config import KubebinsConfig
from .diagnostics import describe
from .download import ToolAcquirer, download_file
from .errors import (
    DownloadFailedError,
    InvalidSpecifierError,
    KubebinsError,
    NotFoundError,
    PatchResolutionFailedError,
)
from .platform import PlatformKey, current_platform, download_url, executable_suffix
from .versions import VersionResolver

__all__ = [
    "DownloadFailedError",
    "InvalidSpecifierError",
    "KubebinsConfig",
    "KubebinsError",
    "NotFoundError",
    "PatchResolutionFailedError",
    "PlatformKey",
    "ToolAcquirer",
    "ToolCache",
    "VersionResolver",
    "cache",
    "cli",
    "config",
    "current_platform",
    "describe",
    "diagnostics",
    "download",
    "download_file",
    "download_url",
    "errors",
    "executable_suffix",
    "main",
    "platform",
    "setup_tool",
    "utils",
    "versions",
]
