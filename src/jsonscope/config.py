"""
Configuration for jsonscope.

All tunable parameters in one place. Loaded from:
1. Defaults (this file)
2. Config file (~/.config/jsonscope/config.toml) if exists
3. Environment variables (JSCOPE_*) override file
4. CLI flags override everything
"""

from __future__ import annotations

import contextlib
import os
import tomllib  # stdlib in 3.11+
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class SearchConfig:
    """Defaults for SearchOptions fields the caller leaves unset."""
    case_sensitive: bool = False
    search_in_keys: bool = True
    search_in_values: bool = True
    search_in_paths: bool = False
    fuzzy_threshold: float = 0.6  # fraction of needle chars found in order
    limit: int = 1000  # max results before traversal stops
    max_depth: int | None = None  # None = unbounded


@dataclass
class OutputConfig:
    """CLI rendering settings."""
    limit: int = 20000  # max output characters, 0 disables
    indent: int = 2
    highlight_open: str = "[["
    highlight_close: str = "]]"
    preview_chars: int = 60


@dataclass
class IOConfig:
    """File I/O settings."""
    max_file_size: int = 50 * 1024 * 1024  # refuse to load documents above this


@dataclass
class Config:
    """Root config with all settings."""
    search: SearchConfig = field(default_factory=SearchConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    io: IOConfig = field(default_factory=IOConfig)


def get_config_path() -> Path:
    """Get config file path, respecting XDG."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "jsonscope" / "config.toml"
    return Path.home() / ".config" / "jsonscope" / "config.toml"


def load_config() -> Config:
    """Load config from file if exists, else return defaults."""
    config = Config()
    path = get_config_path()

    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
            config = _apply_toml(config, data)
        except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError):
            config = Config()  # fall back to defaults on a broken file

    # env var overrides
    config = _apply_env(config)

    return config


_BOOL = "bool"
_OPTIONAL_INT = "optional_int"

_TOML_FIELDS: dict[str, dict[str, type | str]] = {
    "search": {
        "case_sensitive": _BOOL,
        "search_in_keys": _BOOL,
        "search_in_values": _BOOL,
        "search_in_paths": _BOOL,
        "fuzzy_threshold": float,
        "limit": int,
        "max_depth": _OPTIONAL_INT,
    },
    "output": {
        "limit": int,
        "indent": int,
        "highlight_open": str,
        "highlight_close": str,
        "preview_chars": int,
    },
    "io": {
        "max_file_size": int,
    },
}


def _convert(raw: object, conv: type | str) -> object:
    if conv == _BOOL:
        if isinstance(raw, str):
            return raw.lower() in ("true", "1", "yes")
        return bool(raw)
    if conv == _OPTIONAL_INT:
        if raw is None or (isinstance(raw, str) and raw.lower() in ("", "none")):
            return None
        return int(raw)  # type: ignore[arg-type]
    return conv(raw)  # type: ignore[operator]


def _apply_toml(config: Config, data: dict) -> Config:
    """Apply toml data to config."""
    for section, fields in _TOML_FIELDS.items():
        if section not in data:
            continue
        values = data[section]
        target = getattr(config, section)
        for attr, conv in fields.items():
            if attr in values:
                setattr(target, attr, _convert(values[attr], conv))

    return config


def _apply_env(config: Config) -> Config:
    """Apply environment variable overrides."""
    env_map: dict[str, tuple[str, str, type | str]] = {
        "JSCOPE_CASE_SENSITIVE": ("search", "case_sensitive", _BOOL),
        "JSCOPE_SEARCH_KEYS": ("search", "search_in_keys", _BOOL),
        "JSCOPE_SEARCH_VALUES": ("search", "search_in_values", _BOOL),
        "JSCOPE_SEARCH_PATHS": ("search", "search_in_paths", _BOOL),
        "JSCOPE_FUZZY_THRESHOLD": ("search", "fuzzy_threshold", float),
        "JSCOPE_RESULT_LIMIT": ("search", "limit", int),
        "JSCOPE_MAX_DEPTH": ("search", "max_depth", _OPTIONAL_INT),
        "JSCOPE_OUTPUT_LIMIT": ("output", "limit", int),
        "JSCOPE_INDENT": ("output", "indent", int),
        "JSCOPE_PREVIEW_CHARS": ("output", "preview_chars", int),
        "JSCOPE_MAX_FILE_SIZE": ("io", "max_file_size", int),
    }

    for env_key, (section, attr, conv) in env_map.items():
        val = os.environ.get(env_key)
        if val is not None:
            with contextlib.suppress(ValueError, AttributeError):
                setattr(getattr(config, section), attr, _convert(val, conv))

    return config


# Module-level config instance, loaded once on first use
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() reloads it."""
    global _config
    _config = None
