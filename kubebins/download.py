"""Download functions for kubebins."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Callable

import requests

from .cache import ToolCache
from .diagnostics import describe
from .errors import DownloadFailedError, NotFoundError
from .platform import (
    DOWNLOAD_BASE_URL,
    PlatformKey,
    current_platform,
    download_url,
    executable_suffix,
)
from .utils import log

if TYPE_CHECKING:
    from .config import KubebinsConfig

EXECUTABLE_MODE = 0o775


def download_file(url: str, destination: str, timeout: int = 30) -> str:
    """Download a file from a URL to a destination path."""
    log(f"Downloading from {url}", "info", "📥")
    response = requests.get(url, stream=True, timeout=timeout)
    response.raise_for_status()

    with open(destination, "wb") as f:
        for chunk in response.iter_content(chunk_size=8192):
            f.write(chunk)

    return destination


class ToolAcquirer:
    """Return a local executable for a resolved version, downloading on a miss."""

    def __init__(
        self,
        cache: ToolCache,
        tool_name: str = "kubectl",
        base_url: str = DOWNLOAD_BASE_URL,
        platform: PlatformKey | None = None,
        download: Callable[[str, str], str] = download_file,
    ) -> None:
        """Initialize the ToolAcquirer."""
        self.cache = cache
        self.tool_name = tool_name
        self.base_url = base_url
        self.platform = platform
        self.download = download

    @classmethod
    def from_config(cls, config: KubebinsConfig) -> ToolAcquirer:
        """Create an acquirer for the tool and cache configured in ``config``."""
        return cls(
            cache=ToolCache(config.cache_dir),
            tool_name=config.tool_name,
            base_url=config.download_base_url,
            download=lambda url, dest: download_file(url, dest, config.timeout),
        )

    def acquire(self, version: str) -> Path:
        """Return the path of the executable for ``version``."""
        platform = self.platform or current_platform()
        binary_name = self.tool_name + executable_suffix(platform)

        cached_dir = self.cache.find(self.tool_name, version, platform.arch)
        if cached_dir is None:
            url = download_url(self.tool_name, version, platform, self.base_url)
            with tempfile.TemporaryDirectory() as tmp_dir:
                temp_path = Path(tmp_dir) / binary_name
                self._download(url, temp_path, version, platform.arch)
                cached_dir = self.cache.cache_file(
                    temp_path,
                    binary_name,
                    self.tool_name,
                    version,
                    platform.arch,
                )

        binary_path = cached_dir / binary_name
        binary_path.chmod(EXECUTABLE_MODE)
        return binary_path

    def _download(self, url: str, destination: Path, version: str, arch: str) -> None:
        try:
            self.download(url, str(destination))
        except requests.HTTPError as e:
            if e.response is not None and e.response.status_code == 404:  # noqa: PLR2004
                raise NotFoundError(version, arch) from e
            raise self._download_failed(e) from e
        except (requests.RequestException, OSError) as e:
            raise self._download_failed(e) from e

    def _download_failed(self, error: Exception) -> DownloadFailedError:
        log("Download error:", "debug")
        log(describe(error), "debug")
        msg = f"Download{self.tool_name.capitalize()}Failed"
        return DownloadFailedError(msg)
