from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from backlight_ctl.spec import BrightnessSpec, apply
from backlight_ctl.system.sysfs import Backlight

log = logging.getLogger(__name__)


@dataclass
class Controller:
    backlights: Sequence[Backlight]
    minimum: int = 1

    def adjust(self, spec: BrightnessSpec) -> Iterator[tuple[str, int]]:
        """Apply ``spec`` to each device in turn and yield ``(name, brightness)``.

        Each device is read, computed and written before the next one is
        touched. The write is skipped when the computed value equals the
        current one, so a plain get needs no write access. A floor above the
        device maximum is lowered to that maximum for the device. The first
        error propagates.
        """

        for bl in self.backlights:
            current = bl.brightness()
            maximum = bl.max_brightness()
            floor = self.minimum
            if floor > maximum:
                log.warning(
                    "%s: minimum brightness %d exceeds max_brightness %d, using %d",
                    bl.name,
                    floor,
                    maximum,
                    maximum,
                )
                floor = maximum
            nxt = apply(spec, current, floor, maximum)
            log.debug(
                "%s: current=%d max=%d min=%d spec=%s -> %d",
                bl.name,
                current,
                maximum,
                floor,
                spec,
                nxt,
            )
            if nxt != current:
                bl.set_brightness(nxt)
            else:
                log.debug("%s: unchanged, skipping write", bl.name)
            yield bl.name, nxt
