"""Tests for kubebins.versions."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests
from _pytest.capture import CaptureFixture

from kubebins import utils
from kubebins.config import KubebinsConfig
from kubebins.errors import InvalidSpecifierError, PatchResolutionFailedError
from kubebins.versions import VersionResolver

STABLE_URL = "https://dl.k8s.io/release/stable.txt"


def _resolver(fetch: MagicMock, fallback: str = "v1.15.0") -> VersionResolver:
    return VersionResolver(fallback_version=fallback, fetch=fetch)


@pytest.mark.parametrize(
    ("specifier", "expected"),
    [
        ("1.27.15", "v1.27.15"),
        ("v1.27.15", "v1.27.15"),
        ("  v1.28.0\n", "v1.28.0"),
        ("0.0.0", "v0.0.0"),
        ("10.200.3000", "v10.200.3000"),
    ],
)
def test_full_version_needs_no_lookup(specifier: str, expected: str) -> None:
    """A specifier with a patch is normalized without any network call."""
    fetch = MagicMock()
    assert _resolver(fetch).resolve(specifier) == expected
    fetch.assert_not_called()


@pytest.mark.parametrize(
    ("specifier", "key"),
    [
        ("1.27", "1.27"),
        ("v1.27", "1.27"),
        (" 1.30 ", "1.30"),
    ],
)
def test_missing_patch_is_looked_up(specifier: str, key: str) -> None:
    """A ``major.minor`` specifier fetches that line's stable patch once."""
    fetch = MagicMock(return_value="v1.27.16\n")
    assert _resolver(fetch).resolve(specifier) == "v1.27.16"
    fetch.assert_called_once_with(f"https://cdn.dl.k8s.io/release/stable-{key}.txt")


def test_patch_response_is_returned_verbatim() -> None:
    """The patch pointer is trusted as-is after trimming."""
    fetch = MagicMock(return_value="  1.27.16-rc.0  ")
    assert _resolver(fetch).resolve("1.27") == "1.27.16-rc.0"


def test_empty_patch_response_fails() -> None:
    """An empty patch pointer is an error, never a guessed patch."""
    fetch = MagicMock(return_value="   \n")
    with pytest.raises(PatchResolutionFailedError, match="1.27") as excinfo:
        _resolver(fetch).resolve("1.27")
    assert excinfo.value.major_minor == "1.27"


def test_failed_patch_lookup_fails(capsys: CaptureFixture[str]) -> None:
    """A network error during the patch lookup propagates as a resolution error."""
    error = requests.ConnectionError("connection refused")
    fetch = MagicMock(side_effect=error)
    with pytest.raises(PatchResolutionFailedError) as excinfo:
        _resolver(fetch).resolve("v1.29")
    assert excinfo.value.__cause__ is error
    assert "GetLatestPatchVersionFailed" in capsys.readouterr().out


@pytest.mark.parametrize("specifier", ["latest", "LATEST", "Latest", " latest\n"])
def test_latest_uses_stable_pointer(specifier: str) -> None:
    """``latest`` reads the stable pointer, in any casing."""
    fetch = MagicMock(return_value="v1.31.2\n")
    assert _resolver(fetch).resolve(specifier) == "v1.31.2"
    fetch.assert_called_once_with(STABLE_URL)


@pytest.mark.parametrize(
    "error",
    [
        requests.ConnectionError("connection refused"),
        requests.Timeout("timed out"),
        requests.HTTPError("503 Server Error"),
        RuntimeError("anything else"),
    ],
)
def test_latest_falls_back_on_error(error: Exception, capsys: CaptureFixture[str]) -> None:
    """A failing stable pointer yields the fallback version instead of raising."""
    fetch = MagicMock(side_effect=error)
    assert _resolver(fetch).resolve("latest") == "v1.15.0"
    assert "GetStableVersionFailed" in capsys.readouterr().out


def test_latest_falls_back_on_empty_response() -> None:
    """An empty stable pointer yields the fallback version."""
    fetch = MagicMock(return_value="")
    assert _resolver(fetch, fallback="v1.20.0").resolve("latest") == "v1.20.0"


def test_latest_failure_logs_diagnostics_when_verbose(capsys: CaptureFixture[str]) -> None:
    """The cause of a fallback is written to the debug channel."""
    utils.setup_logging(verbose=True)
    fetch = MagicMock(side_effect=requests.ConnectionError("connection refused"))
    _resolver(fetch).resolve("latest")
    out = capsys.readouterr().out
    assert "Download error:" in out
    assert "Error type: ConnectionError" in out
    assert "Error message: connection refused" in out


def test_latest_failure_hides_diagnostics_by_default(capsys: CaptureFixture[str]) -> None:
    """Without verbose output only the warning is shown."""
    fetch = MagicMock(side_effect=requests.ConnectionError("connection refused"))
    _resolver(fetch).resolve("latest")
    out = capsys.readouterr().out
    assert "GetStableVersionFailed" in out
    assert "Error type" not in out


@pytest.mark.parametrize(
    "specifier",
    ["abc", "1", "1.2.3.4", "", "v", "1.", "1.2.", "v1.2.x", "vv1.2", "1.2-rc.1", "１.２"],
)
def test_invalid_specifier(specifier: str) -> None:
    """Malformed specifiers are rejected and named in the error."""
    fetch = MagicMock()
    with pytest.raises(InvalidSpecifierError) as excinfo:
        _resolver(fetch).resolve(specifier)
    assert f'"{specifier}"' in str(excinfo.value)
    assert "major.minor" in str(excinfo.value)
    assert "major.minor.patch" in str(excinfo.value)
    fetch.assert_not_called()


def test_from_config() -> None:
    """The configured URLs, fallback and timeout are used."""
    config = KubebinsConfig(
        fallback_version="v1.25.0",
        stable_version_url="https://mirror.example.com/stable.txt",
        patch_version_url="https://mirror.example.com/stable-{version}.txt",
        timeout=5,
    )
    resolver = VersionResolver.from_config(config)
    assert resolver.fallback_version == "v1.25.0"

    with patch("kubebins.versions.fetch_text", return_value="v1.26.9") as fetch_text:
        assert resolver.resolve("1.26") == "v1.26.9"
    fetch_text.assert_called_once_with(
        "https://mirror.example.com/stable-1.26.txt",
        timeout=5,
    )
