"""Configuration management for kubebins."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml

from .platform import DOWNLOAD_BASE_URL
from .utils import log

STABLE_VERSION_URL = "https://dl.k8s.io/release/stable.txt"
PATCH_VERSION_URL = "https://cdn.dl.k8s.io/release/stable-{version}.txt"
FALLBACK_VERSION = "v1.15.0"


def default_cache_dir() -> Path:
    """Return the cache directory from the environment, or the user cache."""
    for variable in ("KUBEBINS_CACHE_DIR", "RUNNER_TOOL_CACHE"):
        value = os.environ.get(variable)
        if value:
            return Path(os.path.expanduser(value))
    return Path(os.path.expanduser("~/.cache/kubebins"))


@dataclass
class KubebinsConfig:
    """Configuration for kubebins."""

    tool_name: str = "kubectl"
    cache_dir: Path = field(default_factory=default_cache_dir)
    fallback_version: str = FALLBACK_VERSION
    stable_version_url: str = STABLE_VERSION_URL
    patch_version_url: str = PATCH_VERSION_URL
    download_base_url: str = DOWNLOAD_BASE_URL
    timeout: int = 30

    def validate(self) -> None:
        """Validate the configuration."""
        if "{version}" not in self.patch_version_url:
            log(
                f"patch_version_url has no '{{version}}' placeholder: {self.patch_version_url}",
                "warning",
            )
        if not self.fallback_version.startswith("v"):
            log(
                f"fallback_version should start with 'v': {self.fallback_version}",
                "warning",
            )

    @classmethod
    def load_from_file(cls, config_path: str | Path | None = None) -> KubebinsConfig:
        """Load configuration from YAML file."""
        if not config_path:
            return cls()

        try:
            with open(config_path) as file:
                config_data = yaml.safe_load(file) or {}

            known = {f.name for f in fields(cls)}
            for key in sorted(set(config_data) - known):
                log(f"Ignoring unknown configuration key: {key}", "warning")
            config_data = {k: v for k, v in config_data.items() if k in known}

            # Expand paths
            if isinstance(config_data.get("cache_dir"), str):
                config_data["cache_dir"] = Path(
                    os.path.expanduser(config_data["cache_dir"]),
                )

            config = cls(**config_data)
            config.validate()
            return config  # noqa: TRY300

        except FileNotFoundError:
            log(f"Configuration file not found: {config_path}", "warning")
            return cls()
        except yaml.YAMLError:
            log(
                f"Invalid YAML in configuration file: {config_path}",
                "error",
                print_exception=True,
            )
            return cls()
        except Exception as e:  # noqa: BLE001
            log(f"Error loading configuration: {e}", "error", print_exception=True)
            return cls()
