from __future__ import annotations

import enum
import re
from dataclasses import dataclass


class SpecError(ValueError):
    pass


class SpecKind(enum.Enum):
    ABSOLUTE = "absolute"
    RELATIVE = "relative"
    PERCENTAGE = "percentage"
    RELATIVE_PERCENTAGE = "relative_percentage"


# Sign and trailing "%" partition the grammar, so at most one pattern matches.
_PATTERNS: tuple[tuple[re.Pattern[str], SpecKind], ...] = (
    (re.compile(r"[0-9]+"), SpecKind.ABSOLUTE),
    (re.compile(r"[+-][0-9]+"), SpecKind.RELATIVE),
    (re.compile(r"([0-9]+)%"), SpecKind.PERCENTAGE),
    (re.compile(r"([+-][0-9]+)%"), SpecKind.RELATIVE_PERCENTAGE),
)


@dataclass(frozen=True)
class BrightnessSpec:
    """How to derive the next brightness from the current one.

    The default instance is ``Relative(0)``, which leaves brightness unchanged
    apart from clamping.
    """

    kind: SpecKind = SpecKind.RELATIVE
    value: int = 0

    @classmethod
    def absolute(cls, value: int) -> BrightnessSpec:
        return cls(SpecKind.ABSOLUTE, value)

    @classmethod
    def relative(cls, value: int) -> BrightnessSpec:
        return cls(SpecKind.RELATIVE, value)

    @classmethod
    def percentage(cls, value: int) -> BrightnessSpec:
        return cls(SpecKind.PERCENTAGE, value)

    @classmethod
    def relative_percentage(cls, value: int) -> BrightnessSpec:
        return cls(SpecKind.RELATIVE_PERCENTAGE, value)

    def __str__(self) -> str:
        sign = "+" if self.value >= 0 else "-"
        digits = str(abs(self.value))
        if self.kind is SpecKind.ABSOLUTE:
            return digits
        if self.kind is SpecKind.RELATIVE:
            return sign + digits
        if self.kind is SpecKind.PERCENTAGE:
            return f"{digits}%"
        return f"{sign}{digits}%"


def parse(text: str) -> BrightnessSpec:
    """Parse ``[+|-]VALUE[%]`` into a BrightnessSpec.

    The whole string must match; no whitespace is accepted.
    """

    for pattern, kind in _PATTERNS:
        m = pattern.fullmatch(text)
        if m is None:
            continue
        digits = m.group(1) if m.groups() else m.group(0)
        return BrightnessSpec(kind, int(digits))
    raise SpecError(f"invalid brightness value: {text!r} (expected [+|-]VALUE[%])")


def clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def _div_trunc(a: int, b: int) -> int:
    # Integer division rounding toward zero; b is always positive here.
    q = abs(a) // b
    return q if a >= 0 else -q


def apply(spec: BrightnessSpec, current: int, minimum: int, maximum: int) -> int:
    """Return the brightness ``spec`` yields for a device, clamped into range."""

    v = spec.value
    if spec.kind is SpecKind.ABSOLUTE:
        raw = v
    elif spec.kind is SpecKind.RELATIVE:
        raw = current + v
    elif spec.kind is SpecKind.PERCENTAGE:
        raw = minimum + _div_trunc(v * (maximum - minimum), 100)
    else:
        scaled = _div_trunc(current * (100 + v), 100)
        if v > 0:
            raw = max(current + 1, scaled)
        elif v < 0:
            raw = min(current - 1, scaled)
        else:
            raw = current
    return clamp(raw, minimum, maximum)
