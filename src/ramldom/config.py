"""
Configuration for ramldom.

All tunable parameters in one place. Loaded from:
1. Defaults (this file)
2. Config file (~/.config/ramldom/config.toml) if exists
3. Environment variables (RAMLDOM_*) override file
4. CLI flags override everything
"""

from __future__ import annotations

import contextlib
import os
import tomllib  # stdlib in 3.11+
from dataclasses import dataclass, field
from pathlib import Path

from .logging import get_logger

logger = get_logger(__name__)


@dataclass
class IndentConfig:
    """How raw leading whitespace maps to depth."""
    unit: int = 2  # spaces per depth level; a tab is always one level


@dataclass
class LoggingConfig:
    """Log output settings."""
    level: str = "WARNING"
    format: str = "console"  # "console" or "json"


@dataclass
class Config:
    """Root config with all settings."""
    indent: IndentConfig = field(default_factory=IndentConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_path() -> Path:
    """Get config file path, respecting XDG."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "ramldom" / "config.toml"
    return Path.home() / ".config" / "ramldom" / "config.toml"


def load_config() -> Config:
    """Load config from file if exists, else return defaults."""
    config = Config()
    path = get_config_path()

    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
            config = _apply_toml(config, data)
        except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError) as e:
            logger.warning("config_load_failed", path=str(path), error=str(e))
            config = Config()

    # env var overrides
    config = _apply_env(config)

    return config


def _apply_toml(config: Config, data: dict) -> Config:
    """Apply toml data to config."""
    if "indent" in data:
        i = data["indent"]
        if "unit" in i:
            config.indent.unit = _positive(int(i["unit"]), IndentConfig.unit)

    if "logging" in data:
        lg = data["logging"]
        if "level" in lg:
            config.logging.level = str(lg["level"]).upper()
        if "format" in lg:
            config.logging.format = str(lg["format"]).lower()

    return config


def _apply_env(config: Config) -> Config:
    """Apply environment variable overrides."""
    env_map: dict[str, tuple[str, str, type]] = {
        "RAMLDOM_INDENT_UNIT": ("indent", "unit", int),
        "RAMLDOM_LOG_LEVEL": ("logging", "level", str),
        "RAMLDOM_LOG_FORMAT": ("logging", "format", str),
    }

    for env_key, (section, attr, conv) in env_map.items():
        val = os.environ.get(env_key)
        if val is not None:
            with contextlib.suppress(ValueError, AttributeError):
                converted = conv(val)
                if attr == "unit":
                    converted = _positive(converted, IndentConfig.unit)
                elif attr == "level":
                    converted = converted.upper()
                elif attr == "format":
                    converted = converted.lower()
                setattr(getattr(config, section), attr, converted)

    return config


def _positive(value: int, default: int) -> int:
    if value < 1:
        logger.warning("config_value_rejected", value=value, default=default)
        return default
    return value


# Module-level config instance, loaded once on first use
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the loaded config so the next get_config() reloads it."""
    global _config
    _config = None
