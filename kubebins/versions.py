"""Resolve version specifiers such as ``latest`` or ``1.27`` to a full release."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Callable

from .config import FALLBACK_VERSION, PATCH_VERSION_URL, STABLE_VERSION_URL
from .diagnostics import describe
from .errors import InvalidSpecifierError, PatchResolutionFailedError
from .utils import fetch_text, log

if TYPE_CHECKING:
    from .config import KubebinsConfig

VERSION_PATTERN = re.compile(r"v?(\d+)\.(\d+)(?:\.(\d+))?", re.ASCII)


class VersionResolver:
    """Turn a version specifier into a ``vMAJOR.MINOR.PATCH`` string.

    ``latest`` follows the stable release pointer and falls back to
    ``fallback_version`` when it cannot be read. ``major.minor`` asks the
    patch pointer of that release line and fails if it cannot be read, since
    there is no safe default patch. ``major.minor.patch`` is used as given.
    """

    def __init__(
        self,
        fallback_version: str = FALLBACK_VERSION,
        stable_version_url: str = STABLE_VERSION_URL,
        patch_version_url: str = PATCH_VERSION_URL,
        fetch: Callable[[str], str] = fetch_text,
    ) -> None:
        """Initialize the VersionResolver."""
        self.fallback_version = fallback_version
        self.stable_version_url = stable_version_url
        self.patch_version_url = patch_version_url
        self.fetch = fetch

    @classmethod
    def from_config(cls, config: KubebinsConfig) -> VersionResolver:
        """Create a resolver using the URLs and fallback of ``config``."""
        return cls(
            fallback_version=config.fallback_version,
            stable_version_url=config.stable_version_url,
            patch_version_url=config.patch_version_url,
            fetch=lambda url: fetch_text(url, timeout=config.timeout),
        )

    def resolve(self, specifier: str) -> str:
        """Return the full release ``specifier`` refers to."""
        if specifier.strip().lower() == "latest":
            return self.stable_version()

        cleaned = specifier.strip()
        match = VERSION_PATTERN.fullmatch(cleaned)
        if not match:
            raise InvalidSpecifierError(specifier)

        major, minor, patch = match.groups()
        if patch is not None:
            return cleaned if cleaned.startswith("v") else f"v{cleaned}"

        return self.latest_patch_version(major, minor)

    def stable_version(self) -> str:
        """Return the current stable release, or the fallback if unavailable."""
        try:
            version = self.fetch(self.stable_version_url).strip()
        except Exception as e:  # noqa: BLE001
            log("Download error:", "debug")
            log(describe(e), "debug")
            log("GetStableVersionFailed", "warning")
            return self.fallback_version

        if not version:
            log(f"Empty stable version from {self.stable_version_url}", "debug")
            return self.fallback_version
        return version

    def latest_patch_version(self, major: str, minor: str) -> str:
        """Return the newest stable patch release of ``major.minor``."""
        major_minor = f"{major}.{minor}"
        url = self.patch_version_url.format(version=major_minor)
        try:
            version = self.fetch(url).strip()
            if not version:
                msg = f"No patch version found for {major_minor}"
                raise ValueError(msg)  # noqa: TRY301
        except Exception as e:
            log("Download error:", "debug")
            log(describe(e), "debug")
            log("GetLatestPatchVersionFailed", "warning")
            raise PatchResolutionFailedError(major_minor) from e
        return version
