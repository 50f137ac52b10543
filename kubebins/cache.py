"""On-disk cache of downloaded tool binaries.

Entries live in ``<root>/<tool>/<version>/<arch>/``. An entry only counts once
it holds a ``.complete`` marker. Entries are staged, marker included, in a
temporary directory and renamed into place, so an entry is complete the moment
it appears and an existing entry is never overwritten.
"""

from __future__ import annotations

import contextlib
import shutil
import tempfile
from pathlib import Path

from .platform import current_platform
from .utils import log

COMPLETE_MARKER = ".complete"


class ToolCache:
    """Store tool binaries keyed by tool name, version and architecture."""

    def __init__(self, root: Path) -> None:
        """Initialize the ToolCache."""
        self.root = Path(root)

    def entry_dir(self, tool: str, version: str, arch: str) -> Path:
        """Return the directory of the entry for ``tool``, ``version`` and ``arch``."""
        return self.root / tool / version / arch

    def find(self, tool: str, version: str, arch: str | None = None) -> Path | None:
        """Return the cached directory for ``tool`` at ``version``, if complete."""
        arch = arch or current_platform().arch
        entry = self.entry_dir(tool, version, arch)
        if (entry / COMPLETE_MARKER).is_file():
            log(f"Found {tool} {version} ({arch}) in cache at {entry}", "debug")
            return entry
        return None

    def cache_file(
        self,
        source: Path,
        dest_name: str,
        tool: str,
        version: str,
        arch: str | None = None,
    ) -> Path:
        """Copy ``source`` into the cache as ``dest_name`` and return its directory."""
        arch = arch or current_platform().arch
        existing = self.find(tool, version, arch)
        if existing is not None:
            return existing

        entry = self.entry_dir(tool, version, arch)
        entry.parent.mkdir(parents=True, exist_ok=True)
        staging = Path(tempfile.mkdtemp(prefix=f".{arch}-", dir=entry.parent))
        try:
            shutil.copy2(source, staging / dest_name)
            (staging / COMPLETE_MARKER).touch()
            # Published entries always carry the marker, so a directory
            # without one was left behind by an interrupted store.
            if entry.exists() and not (entry / COMPLETE_MARKER).exists():
                self._discard(entry)
            staging.rename(entry)
        except OSError:
            shutil.rmtree(staging, ignore_errors=True)
            winner = self.find(tool, version, arch)
            if winner is None:
                raise
            log(f"Cache entry {entry} was created concurrently", "debug")
            return winner

        log(f"Cached {tool} {version} ({arch}) at {entry}", "debug")
        return entry

    def _discard(self, entry: Path) -> None:
        log(f"Removing incomplete cache entry {entry}", "debug")
        trash = Path(tempfile.mkdtemp(prefix=".trash-", dir=entry.parent))
        try:
            # Another process may have discarded it already.
            with contextlib.suppress(FileNotFoundError):
                entry.rename(trash / entry.name)
        finally:
            shutil.rmtree(trash, ignore_errors=True)
