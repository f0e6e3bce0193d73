from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from backlight_ctl.system.sysfs import SYSFS_BACKLIGHT

log = logging.getLogger(__name__)

WRITERS = ("sysfs", "logind")

DEFAULTS: dict[str, Any] = {
    "sysfs_root": str(SYSFS_BACKLIGHT),
    "minimum_brightness": 1,
    "devices": None,
    "writer": "sysfs",
}


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    sysfs_root: Path
    minimum_brightness: int
    devices: tuple[str, ...] | None
    writer: str

    @classmethod
    def from_config(cls, cfg: dict[str, Any]) -> Settings:
        devices = cfg.get("devices")
        return cls(
            sysfs_root=Path(cfg["sysfs_root"]),
            minimum_brightness=int(cfg["minimum_brightness"]),
            devices=None if devices is None else tuple(str(d) for d in devices),
            writer=str(cfg["writer"]),
        )


def load(path: str | Path, required: bool = True) -> dict[str, Any]:
    """Read, normalize and validate a YAML config file.

    A missing file yields the defaults unless ``required`` is set.
    """

    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError:
        if required:
            raise ConfigError(f"Config file not found: {p}") from None
        log.debug("no config at %s, using defaults", p)
        text = ""
    except OSError as e:
        raise ConfigError(f"Could not read config {p}: {e.strerror or e}") from e
    else:
        log.debug("loading config from %s", p)

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {p}: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Top-level config must be a mapping")
    normalize(data)
    validate(data)
    return data


def normalize(cfg: dict[str, Any]) -> None:
    for key, value in DEFAULTS.items():
        cfg.setdefault(key, value)

    for key in ("sysfs_root", "writer"):
        if isinstance(cfg[key], str):
            cfg[key] = cfg[key].strip()

    if isinstance(cfg["devices"], list):
        cfg["devices"] = [str(d).strip() for d in cfg["devices"]]


def validate(cfg: dict[str, Any]) -> None:
    unknown = set(cfg) - set(DEFAULTS)
    if unknown:
        raise ConfigError(f"Unknown config key(s): {', '.join(sorted(unknown))}")

    if not isinstance(cfg["sysfs_root"], str) or not cfg["sysfs_root"]:
        raise ConfigError("sysfs_root must be a non-empty path")

    floor = cfg["minimum_brightness"]
    if isinstance(floor, bool) or not isinstance(floor, int) or floor < 0:
        raise ConfigError(f"minimum_brightness must be an integer >= 0: {floor!r}")

    devices = cfg["devices"]
    if devices is not None and (not isinstance(devices, list) or not devices):
        raise ConfigError("devices must be a non-empty list of device names")

    if cfg["writer"] not in WRITERS:
        raise ConfigError(f"writer must be one of {', '.join(WRITERS)}: {cfg['writer']!r}")
