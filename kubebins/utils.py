"""Utility functions for kubebins."""

from __future__ import annotations

import logging

import requests
from rich.console import Console
from rich.markup import escape

# Initialize rich console
console = Console()
logger = logging.getLogger(__name__)

_STYLES = {
    "info": ("🔍", "blue"),
    "success": ("✅", "green"),
    "warning": ("⚠️", "yellow"),
    "error": ("❌", "bold red"),
    "debug": ("🐛", "dim"),
}
_verbose = False


def setup_logging(verbose: bool = False) -> None:  # noqa: FBT001, FBT002
    """Configure whether debug messages are shown."""
    global _verbose  # noqa: PLW0603
    _verbose = verbose
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level)
    # basicConfig is a no-op once the root logger has handlers
    logger.setLevel(level)


def log(
    message: str,
    level: str = "default",
    icon: str = "",
    *,
    print_exception: bool = False,
) -> None:
    """Print a message to the console with the style of its level.

    ``debug`` messages are only printed after ``setup_logging(verbose=True)``;
    they are always forwarded to the standard ``logging`` module.
    """
    if level == "debug":
        logger.debug(message)
        if not _verbose:
            return
    message = escape(message)
    if level in _STYLES:
        default_icon, style = _STYLES[level]
        text = f"{icon or default_icon} [{style}]{message}[/{style}]"
    else:
        text = f"{icon} {message}" if icon else message
    console.print(text, highlight=False, soft_wrap=True)
    if print_exception:
        console.print_exception()


def fetch_text(url: str, timeout: int = 30) -> str:
    """Fetch a small text document, such as a version pointer."""
    log(f"Fetching {url}", "debug")
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    return response.text
