from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

log = logging.getLogger(__name__)

SYSFS_BACKLIGHT = Path("/sys/class/backlight")

_INT_RE = re.compile(r"[0-9]+")


class BacklightError(RuntimeError):
    pass


def _read_int(path: Path) -> int:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise BacklightError(f"could not read {path}: {e.strerror or e}") from e
    text = raw.strip()
    if not _INT_RE.fullmatch(text):
        raise BacklightError(f"could not parse value in {path}: {raw!r}")
    return int(text)


@dataclass(frozen=True)
class Backlight:
    sysfs_dir: Path

    @property
    def name(self) -> str:
        return self.sysfs_dir.name

    @property
    def _brightness(self) -> Path:
        return self.sysfs_dir / "brightness"

    @property
    def _max_brightness(self) -> Path:
        return self.sysfs_dir / "max_brightness"

    def brightness(self) -> int:
        return _read_int(self._brightness)

    def max_brightness(self) -> int:
        return _read_int(self._max_brightness)

    def set_brightness(self, value: int) -> None:
        try:
            self._brightness.write_text(str(int(value)), encoding="utf-8")
        except OSError as e:
            raise BacklightError(f"could not write {self._brightness}: {e.strerror or e}") from e


def discover(
    root: Path = SYSFS_BACKLIGHT,
    names: Iterable[str] | None = None,
    factory: type[Backlight] = Backlight,
) -> list[Backlight]:
    """Return one backlight per device directory under ``root``, sorted by name.

    If ``names`` is given only those devices are returned, in the order found
    under ``root``; naming a device that does not exist is an error.
    """

    try:
        dirs = sorted((p for p in root.iterdir() if p.is_dir()), key=lambda p: p.name)
    except OSError as e:
        raise BacklightError(f"could not list {root}: {e.strerror or e}") from e

    if names is not None:
        wanted = set(names)
        missing = wanted - {p.name for p in dirs}
        if missing:
            raise BacklightError(
                f"no such backlight device under {root}: {', '.join(sorted(missing))}"
            )
        dirs = [p for p in dirs if p.name in wanted]

    log.debug("found %d backlight device(s) under %s: %s", len(dirs), root, [p.name for p in dirs])
    return [factory(p) for p in dirs]
