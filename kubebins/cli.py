"""Command-line interface for kubebins."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from . import __version__
from .config import KubebinsConfig
from .download import ToolAcquirer
from .errors import KubebinsError
from .utils import console, log, setup_logging
from .versions import VersionResolver


def setup_tool(specifier: str, config: KubebinsConfig) -> tuple[Path, str]:
    """Resolve ``specifier`` and make sure its binary is cached.

    Returns the path of the executable and the resolved version.
    """
    version = VersionResolver.from_config(config).resolve(specifier)
    binary_path = ToolAcquirer.from_config(config).acquire(version)
    return binary_path, version


def write_outputs(tool_name: str, binary_path: Path, version: str) -> None:
    """Hand the executable path and version back to the host environment."""
    output_file = os.environ.get("GITHUB_OUTPUT")
    if output_file:
        with open(output_file, "a") as f:
            f.write(f"{tool_name}-path={binary_path}\n")
            f.write(f"{tool_name}-version={version}\n")
    else:
        for line in (f"{tool_name}-path={binary_path}", f"{tool_name}-version={version}"):
            console.print(line, highlight=False, soft_wrap=True)

    path_file = os.environ.get("GITHUB_PATH")
    if path_file:
        with open(path_file, "a") as f:
            f.write(f"{binary_path.parent}\n")


def install(args: argparse.Namespace, config: KubebinsConfig) -> None:
    """Install the requested version and report where it lives."""
    specifier = args.version or os.environ.get("INPUT_VERSION", "")
    if not specifier.strip():
        msg = "Input required and not supplied: version"
        raise KubebinsError(msg)

    binary_path, version = setup_tool(specifier, config)
    log(
        f"{config.tool_name} tool version: '{version}' has been cached at {binary_path}",
        "success",
    )
    write_outputs(config.tool_name, binary_path, version)


def resolve(args: argparse.Namespace, config: KubebinsConfig) -> None:
    """Print the version a specifier resolves to."""
    version = VersionResolver.from_config(config).resolve(args.version)
    console.print(version, highlight=False, soft_wrap=True)


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        description="kubebins - Resolve, download and cache kubectl binaries",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--cache-dir",
        type=str,
        help="Tool cache directory",
    )
    parser.add_argument(
        "--config-file",
        type=str,
        help="Path to configuration file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # install command
    install_parser = subparsers.add_parser(
        "install",
        help="Download a version into the cache (if needed) and print its path",
    )
    install_parser.add_argument(
        "version",
        nargs="?",
        help="'latest', 'major.minor' or 'major.minor.patch' (defaults to $INPUT_VERSION)",
    )
    install_parser.set_defaults(func=install)

    # resolve command
    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Print the full version a specifier resolves to",
    )
    resolve_parser.add_argument(
        "version",
        help="'latest', 'major.minor' or 'major.minor.patch'",
    )
    resolve_parser.set_defaults(func=resolve)

    # version command
    version_parser = subparsers.add_parser("version", help="Print version information")
    version_parser.set_defaults(
        func=lambda _, __: console.print(f"[yellow]kubebins[/] [bold]v{__version__}[/]"),
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main function to parse arguments and execute commands."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Setup logging
    setup_logging(args.verbose)

    try:
        # Create config
        config = KubebinsConfig.load_from_file(args.config_file)

        # Override cache directory if specified
        if args.cache_dir:
            config.cache_dir = Path(args.cache_dir)

        # Execute command or show help
        if hasattr(args, "func"):
            args.func(args, config)
        else:
            parser.print_help()

    except KubebinsError as e:
        log(str(e), "error")
        sys.exit(1)
    except Exception as e:
        log(f"Error: {e!s}", "error", print_exception=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
