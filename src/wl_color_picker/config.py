"""Configuration management for wl-color-picker.

Configuration priority (highest to lowest):
1. CLI overrides (passed to load_config)
2. Environment variables (WL_COLOR_PICKER_*, plus the legacy WL_PICKER_API)
3. Config file (~/.config/wl-color-picker/config.yaml)
4. Built-in defaults
"""

import math
import os
import re
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml
from platformdirs import user_config_dir

ENV_PREFIX = "WL_COLOR_PICKER"
LEGACY_API_ENV = "WL_PICKER_API"
CONFIG_DIR = Path(user_config_dir("wl-color-picker"))
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.yaml"

DESTINATIONS = ("stdout", "clipboard")
DELAY_PATTERN = re.compile(r"[0-9]*\.?[0-9]+")
# Longest wait time.sleep and friends accept on this platform
MAX_DELAY = threading.TIMEOUT_MAX


class ConfigError(ValueError):
    """Raised when the resolved configuration is unusable."""
    pass


@dataclass(frozen=True)
class Config:
    """Color picker configuration, built once per invocation."""

    # Behavior
    destinations: tuple[str, ...] = ("stdout",)
    picker: bool = False
    notify: bool = False
    delay: float = 1.0

    # Color name lookup
    name_lookup: bool = False
    name_api_url: str = "https://www.thecolorapi.com/id"
    name_lookup_timeout: float = 5.0

    # Binary paths
    slurp: str = "slurp"
    grim: str = "grim"
    wl_copy: str = "wl-copy"
    zenity: str = "zenity"
    gm_path: str = "/usr/bin/gm"
    magick: str = "magick"
    convert: str = "convert"

    capture_timeout: float = 10.0


BOOL_KEYS = {"picker", "notify", "name_lookup"}
FLOAT_KEYS = {"name_lookup_timeout", "capture_timeout"}
STRING_KEYS = {
    "name_api_url",
    "slurp",
    "grim",
    "wl_copy",
    "zenity",
    "gm_path",
    "magick",
    "convert",
}


def _env(name: str) -> Optional[str]:
    return os.environ.get(f"{ENV_PREFIX}_{name}")


def _config_path_from_env() -> Optional[Path]:
    value = _env("CONFIG") or _env("CONFIG_PATH")
    if value:
        return Path(value).expanduser()
    return None


def _load_config_file(path: Path, strict: bool = False) -> dict:
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except Exception as exc:
        if strict:
            raise ValueError(f"Failed to parse config file {path}: {exc}")
        return {}

    if not isinstance(data, dict):
        if strict:
            raise ValueError(f"Config file {path} must be a mapping")
        return {}

    return data


def parse_delay(value: Any) -> float:
    """Parse a capture delay given as text or as a number.

    Text must look like ``1``, ``0.5`` or ``.5``; negative values, signs and
    exponents are rejected. So are infinite, NaN and overly long delays.

    Raises:
        ConfigError: If the value is not a valid delay
    """
    if isinstance(value, bool):
        raise ConfigError("delay must be a valid number")
    if not isinstance(value, (int, float)) and (value is None or not DELAY_PATTERN.fullmatch(str(value))):
        raise ConfigError("delay must be a valid number")
    try:
        delay = float(value)
    except OverflowError:
        raise ConfigError("delay must be a valid number")

    if not math.isfinite(delay) or delay < 0 or delay > MAX_DELAY:
        raise ConfigError("delay must be a valid number")
    return delay


def split_destinations(value: Any) -> tuple[str, ...]:
    """Split a comma-separated destination list, keeping order.

    A single trailing empty entry is dropped (``stdout,``). Tokens are not
    validated here; unknown ones are rejected when the color is written out.
    """
    if isinstance(value, (list, tuple)):
        return tuple(str(item) for item in value)
    if value is None:
        return ()
    parts = str(value).split(",")
    if parts and parts[-1] == "":
        parts.pop()
    return tuple(parts)


def config_defaults() -> dict:
    return {
        "dest": "stdout",
        "picker": False,
        "notify": False,
        "delay": 1.0,
        "name_lookup": False,
        "name_api_url": "https://www.thecolorapi.com/id",
        "name_lookup_timeout": 5.0,
        "slurp": "slurp",
        "grim": "grim",
        "wl_copy": "wl-copy",
        "zenity": "zenity",
        "gm_path": "/usr/bin/gm",
        "magick": "magick",
        "convert": "convert",
        "capture_timeout": 10.0,
    }


def _truthy(value: str) -> bool:
    return value.lower() in ("true", "1", "yes", "on")


def _load_env_overrides() -> dict:
    config: dict[str, Any] = {}

    if os.environ.get(LEGACY_API_ENV) == "1":
        config["name_lookup"] = True

    for key in config_defaults():
        value = _env(key.upper())
        if value is None:
            continue
        if key in BOOL_KEYS:
            config[key] = _truthy(value)
        elif key in FLOAT_KEYS:
            try:
                config[key] = float(value)
            except ValueError:
                continue
        else:
            # dest and delay are validated when the Config is built
            config[key] = value

    return config


def resolve_config_path(config_path: Optional[Path] = None) -> Path:
    return config_path or _config_path_from_env() or DEFAULT_CONFIG_PATH


def _build_config(config_dict: dict) -> Config:
    destinations = split_destinations(config_dict.pop("dest", "stdout"))
    if not destinations:
        raise ConfigError("No output destination given")

    delay = parse_delay(config_dict.pop("delay", 1.0))

    known = {key: config_dict[key] for key in BOOL_KEYS | FLOAT_KEYS | STRING_KEYS if key in config_dict}
    for key in BOOL_KEYS & known.keys():
        value = known[key]
        known[key] = _truthy(value) if isinstance(value, str) else bool(value)
    for key in FLOAT_KEYS & known.keys():
        try:
            known[key] = float(known[key])
        except (TypeError, ValueError):
            raise ConfigError(f"{key} must be a number")

    return Config(destinations=destinations, delay=delay, **known)


def load_config(
    config_path: Optional[Path] = None,
    overrides: Optional[dict] = None,
    strict: bool = False,
) -> Config:
    """Load configuration from all sources.

    Raises:
        ConfigError: If the merged values cannot form a valid Config
    """
    resolved_path = resolve_config_path(config_path)

    config_dict = config_defaults()
    file_config = _load_config_file(resolved_path, strict=strict)
    config_dict.update(file_config)
    config_dict.update(_load_env_overrides())

    if overrides:
        for key, value in overrides.items():
            if value is not None:
                config_dict[key] = value

    return _build_config(config_dict)


def config_schema() -> dict:
    return {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "object",
        "properties": {
            "dest": {"type": "string"},
            "picker": {"type": "boolean"},
            "notify": {"type": "boolean"},
            "delay": {"type": "number", "minimum": 0},
            "name_lookup": {"type": "boolean"},
            "name_api_url": {"type": "string"},
            "name_lookup_timeout": {"type": "number", "minimum": 0},
            "slurp": {"type": "string"},
            "grim": {"type": "string"},
            "wl_copy": {"type": "string"},
            "zenity": {"type": "string"},
            "gm_path": {"type": "string"},
            "magick": {"type": "string"},
            "convert": {"type": "string"},
            "capture_timeout": {"type": "number", "minimum": 0},
        },
        "additionalProperties": False,
    }


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_config_dict(data: Any) -> list[str]:
    errors: list[str] = []
    if not isinstance(data, dict):
        return ["Config must be a mapping/object"]

    props = config_schema().get("properties", {})

    for key in data.keys():
        if key not in props:
            errors.append(f"Unknown config key: {key}")

    for key, value in data.items():
        if key not in props:
            continue
        expected = props[key].get("type")
        if expected == "string" and not isinstance(value, str):
            errors.append(f"{key} must be a string")
        elif expected == "boolean" and not isinstance(value, bool):
            errors.append(f"{key} must be a boolean")
        elif expected == "number":
            if not _is_number(value):
                errors.append(f"{key} must be a number")
            elif isinstance(value, float) and not math.isfinite(value):
                errors.append(f"{key} must be a finite number")
            elif value < 0:
                errors.append(f"{key} must be >= 0")

        if key == "dest" and isinstance(value, str):
            tokens = split_destinations(value)
            if not tokens:
                errors.append("dest must name at least one destination")
            for token in tokens:
                if token not in DESTINATIONS:
                    errors.append(f"dest entries must be one of: {', '.join(DESTINATIONS)} (got {token!r})")

    return errors


def validate_config_file(config_path: Optional[Path] = None) -> list[str]:
    path = resolve_config_path(config_path)
    if not path.exists():
        return []
    data = _load_config_file(path, strict=True)
    return validate_config_dict(data)


def config_to_dict(config: Config) -> dict:
    return {
        "dest": ",".join(config.destinations),
        "picker": config.picker,
        "notify": config.notify,
        "delay": config.delay,
        "name_lookup": config.name_lookup,
        "name_api_url": config.name_api_url,
        "name_lookup_timeout": config.name_lookup_timeout,
        "slurp": config.slurp,
        "grim": config.grim,
        "wl_copy": config.wl_copy,
        "zenity": config.zenity,
        "gm_path": config.gm_path,
        "magick": config.magick,
        "convert": config.convert,
        "capture_timeout": config.capture_timeout,
    }
