"""Configuration management module for gridline."""

from __future__ import annotations

import logging
import os
import warnings
from pathlib import Path

logger = logging.getLogger(__name__)

try:
    import tomllib
except ModuleNotFoundError:  # Python < 3.11
    import tomli as tomllib

CONFIG_PATH = Path(
    os.getenv("GRIDLINE_CONFIG", str(Path.home() / ".config" / "gridline" / "config.toml"))
).expanduser()

DEFAULT_DOWNSAMPLER = "mean"
DEFAULT_UPSAMPLER = "fillna"
DEFAULT_MAX_POINTS = 5_000_000  # Safety limit to prevent accidental huge grids

ENV_DOWNSAMPLER = "GRIDLINE_DOWNSAMPLER"
ENV_UPSAMPLER = "GRIDLINE_UPSAMPLER"
ENV_MAX_POINTS = "GRIDLINE_MAX_POINTS"


def _read_config_file(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except Exception as exc:
        warnings.warn(f"Failed to parse gridline config at {path}: {exc}", stacklevel=2)
        return {}


def load_config(path: Path | None = None) -> dict:
    """Return parsed config content from CONFIG_PATH (or an explicit path)."""
    return _read_config_file(path or CONFIG_PATH)


def _resample_section(path: Path | None = None) -> dict:
    section = load_config(path).get("resample", {})
    return section if isinstance(section, dict) else {}


def _resolve_str(env_name: str, key: str, default: str, path: Path | None) -> str:
    env_value = os.getenv(env_name)
    if env_value and env_value.strip():
        return env_value.strip()

    config_value = _resample_section(path).get(key)
    if isinstance(config_value, str) and config_value.strip():
        return config_value.strip()

    return default


def get_default_downsampler(path: Path | None = None) -> str:
    """Return the downsampler used when a caller does not name one."""
    return _resolve_str(ENV_DOWNSAMPLER, "downsampler", DEFAULT_DOWNSAMPLER, path)


def get_default_upsampler(path: Path | None = None) -> str:
    """Return the upsampler used when a caller does not name one."""
    return _resolve_str(ENV_UPSAMPLER, "upsampler", DEFAULT_UPSAMPLER, path)


def get_max_points(path: Path | None = None) -> int:
    """Return the maximum number of grid points a single resample may produce.

    Resolution order: GRIDLINE_MAX_POINTS env var > [resample].max_points in
    the config file > DEFAULT_MAX_POINTS. Invalid values are ignored with a
    warning.
    """
    env_value = os.getenv(ENV_MAX_POINTS)
    if env_value:
        try:
            value = int(env_value)
        except ValueError:
            warnings.warn(
                f"Ignoring {ENV_MAX_POINTS}={env_value!r}: not an integer", stacklevel=2
            )
        else:
            if value > 0:
                return value
            warnings.warn(f"Ignoring {ENV_MAX_POINTS}={env_value!r}: must be > 0", stacklevel=2)

    config_value = _resample_section(path).get("max_points")
    if isinstance(config_value, int) and not isinstance(config_value, bool) and config_value > 0:
        return config_value
    if config_value is not None:
        logger.warning(f"Ignoring invalid max_points in gridline config: {config_value!r}")

    return DEFAULT_MAX_POINTS


__all__ = [
    "CONFIG_PATH",
    "DEFAULT_DOWNSAMPLER",
    "DEFAULT_UPSAMPLER",
    "DEFAULT_MAX_POINTS",
    "load_config",
    "get_default_downsampler",
    "get_default_upsampler",
    "get_max_points",
]
