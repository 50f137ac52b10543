"""Configuration for pytest fixtures used in kubebins tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
import requests

from kubebins import utils
from kubebins.cache import ToolCache
from kubebins.config import KubebinsConfig
from kubebins.platform import PlatformKey

LINUX_AMD64 = PlatformKey(arch="amd64", os_family="linux")


@pytest.fixture(autouse=True)
def _quiet_logging() -> None:
    """Reset the debug switch between tests."""
    utils.setup_logging(verbose=False)


@pytest.fixture
def cache(tmp_path: Path) -> ToolCache:
    """A tool cache rooted in a temporary directory."""
    return ToolCache(tmp_path / "toolcache")


@pytest.fixture
def config(tmp_path: Path) -> KubebinsConfig:
    """A configuration whose cache lives in a temporary directory."""
    return KubebinsConfig(cache_dir=tmp_path / "toolcache")


def http_error(status_code: int) -> requests.HTTPError:
    """Build the error ``raise_for_status`` raises for ``status_code``."""
    response = requests.Response()
    response.status_code = status_code
    response.url = "https://dl.k8s.io/release/v1.2.3/bin/linux/amd64/kubectl"
    return requests.HTTPError(f"{status_code} Client Error", response=response)


@pytest.fixture
def fake_download() -> Callable:
    r"""Create a downloader that records URLs instead of using the network.

    Usage:
        download = fake_download(content=b"#!/bin/sh\necho kubectl")
        download = fake_download(error=http_error(404))
    """

    def _create(
        content: bytes = b"#!/bin/sh\necho kubectl\n",
        error: Exception | None = None,
    ) -> Callable[[str, str], str]:
        calls: list[str] = []

        def _download(url: str, destination: str) -> str:
            calls.append(url)
            if error is not None:
                raise error
            Path(destination).write_bytes(content)
            return destination

        _download.calls = calls  # type: ignore[attr-defined]
        return _download

    return _create
