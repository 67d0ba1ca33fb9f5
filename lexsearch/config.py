"""Configuration loading for the search engine."""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from .highlighting import DEFAULT_SNIPPET_SIZE


@dataclass
class SearchSettings:
    """Resolved settings for building a search engine."""

    content_dir: Path = Path("Content")
    cache_dir: Path | None = Path(".lexsearch-cache")
    synonyms_path: Path | None = None
    snippet_size: int = DEFAULT_SNIPPET_SIZE
    result_limit: int = 10

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchSettings":
        """Build settings from a config mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {k: v for k, v in data.items() if k in known}

        for key in ("content_dir", "cache_dir", "synonyms_path"):
            if key in values and values[key] is not None:
                values[key] = Path(values[key]).expanduser()
        for key in ("snippet_size", "result_limit"):
            if key in values:
                try:
                    values[key] = int(values[key])
                except (TypeError, ValueError):
                    raise ValueError(f"Setting {key} must be an integer") from None
                if values[key] < 1:
                    raise ValueError(f"Setting {key} must be positive")

        return cls(**values)


class Config:
    """Configuration file handling."""

    @staticmethod
    def from_file(path: Path) -> dict[str, Any]:
        """Load configuration from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}") from e
        except OSError as e:
            raise ValueError(f"Error reading config file: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        return data

    @staticmethod
    def get_config_paths() -> list[Path]:
        """Get the default configuration file paths to check."""
        paths = []

        # User config
        xdg_config_home = Path(
            os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
        )
        paths.append(xdg_config_home / "lexsearch" / "config.yaml")

        # Project config
        paths.append(Path("lexsearch.yaml"))

        return paths

    @staticmethod
    def merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
        """Merge multiple configuration dictionaries."""
        result: dict[str, Any] = {}
        for config in configs:
            result = _deep_merge(result, config)
        return result


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from files and environment variables.

    Args:
        path: Explicit config file, applied after the default locations

    Raises:
        ValueError: If the explicit config file is invalid
    """
    config: dict[str, Any] = {}

    # Last one wins for conflicting keys
    for default_path in Config.get_config_paths():
        if default_path.exists():
            try:
                config = Config.merge_configs(config, Config.from_file(default_path))
            except ValueError:
                continue

    if path is not None:
        config = Config.merge_configs(config, Config.from_file(path))

    env_overrides = {}
    if content_dir := os.environ.get("LEXSEARCH_CONTENT_DIR"):
        env_overrides["content_dir"] = content_dir
    if cache_dir := os.environ.get("LEXSEARCH_CACHE_DIR"):
        env_overrides["cache_dir"] = cache_dir
    if synonyms := os.environ.get("LEXSEARCH_SYNONYMS"):
        env_overrides["synonyms_path"] = synonyms

    return Config.merge_configs(config, env_overrides)


def load_settings(path: Path | None = None, **overrides: Any) -> SearchSettings:
    """Resolve settings from config files, environment and explicit overrides.

    Overrides whose value is None are ignored.
    """
    config = load_config(path)
    config.update({k: v for k, v in overrides.items() if v is not None})
    return SearchSettings.from_dict(config)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
