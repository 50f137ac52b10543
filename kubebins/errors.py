"""Exceptions raised by kubebins."""

from __future__ import annotations


class KubebinsError(Exception):
    """Base exception for all kubebins errors."""


class InvalidSpecifierError(KubebinsError):
    """The requested version is neither ``latest`` nor ``major.minor[.patch]``."""

    def __init__(self, specifier: str) -> None:
        """Initialize the InvalidSpecifierError."""
        self.specifier = specifier
        super().__init__(
            f'Invalid version format: "{specifier}". Version must be in "major.minor"'
            ' or "major.minor.patch" format (e.g., "1.27" or "v1.27.15").',
        )


class PatchResolutionFailedError(KubebinsError):
    """No stable patch release could be found for a ``major.minor`` line."""

    def __init__(self, major_minor: str) -> None:
        """Initialize the PatchResolutionFailedError."""
        self.major_minor = major_minor
        super().__init__(f"Failed to get latest patch version for {major_minor}")


class NotFoundError(KubebinsError):
    """The download host has no binary for this version and architecture."""

    def __init__(self, version: str, arch: str) -> None:
        """Initialize the NotFoundError."""
        self.version = version
        self.arch = arch
        super().__init__(f"Binary '{version}' for '{arch}' arch not found.")


class DownloadFailedError(KubebinsError):
    """Downloading the binary failed for any reason other than a 404."""

    def __init__(self, message: str = "DownloadFailed") -> None:
        """Initialize the DownloadFailedError."""
        super().__init__(message)
