"""Refresh period flag value, in whole seconds."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Optional

NANOSECOND = 1
MICROSECOND = 1000 * NANOSECOND
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

_MAX_DURATION = (1 << 63) - 1

_UNITS = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "\u00b5s": MICROSECOND,
    "\u03bcs": MICROSECOND,
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
}


def _leading_digits(text: str) -> tuple[str, str]:
    end = 0
    while end < len(text) and text[end].isdigit() and text[end].isascii():
        end += 1
    return text[:end], text[end:]


def parse_duration(text: str) -> int:
    """Parse a duration such as ``"1h30m"`` or ``"1.5s"`` into nanoseconds."""
    invalid = ValueError(f"time: invalid duration {text}")
    rest = text
    negative = False
    if rest and rest[0] in "+-":
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return 0
    if rest == "":
        raise invalid

    total = 0
    while rest:
        if not (rest[0] == "." or (rest[0].isdigit() and rest[0].isascii())):
            raise invalid
        whole, rest = _leading_digits(rest)
        value = int(whole) if whole else 0
        fraction, scale = 0, 1
        has_fraction = False
        if rest.startswith("."):
            digits, rest = _leading_digits(rest[1:])
            has_fraction = bool(digits)
            if digits:
                fraction, scale = int(digits), 10 ** len(digits)
        if not whole and not has_fraction:
            raise invalid

        end = 0
        while end < len(rest) and not (rest[end] == "." or (rest[end].isdigit() and rest[end].isascii())):
            end += 1
        if end == 0:
            raise ValueError(f"time: missing unit in duration {text}")
        unit_name, rest = rest[:end], rest[end:]
        unit = _UNITS.get(unit_name)
        if unit is None:
            raise ValueError(f"time: unknown unit {unit_name} in duration {text}")

        value = value * unit + fraction * unit // scale
        total += value
        if total > _MAX_DURATION:
            raise invalid
    return -total if negative else total


def _split_fraction(value: int, precision: int) -> tuple[str, int]:
    whole, frac = divmod(value, 10 ** precision)
    digits = f"{frac:0{precision}d}".rstrip("0")
    return ("." + digits if digits else ""), whole


def format_duration(nanoseconds: int) -> str:
    """Render nanoseconds the way ``"1h2m3.5s"`` or ``"500ms"`` are written."""
    if nanoseconds == 0:
        return "0s"
    sign = "-" if nanoseconds < 0 else ""
    value = abs(nanoseconds)
    if value < SECOND:
        if value < MICROSECOND:
            return f"{sign}{value}ns"
        if value < MILLISECOND:
            frac, whole = _split_fraction(value, 3)
            return f"{sign}{whole}{frac}\u00b5s"
        frac, whole = _split_fraction(value, 6)
        return f"{sign}{whole}{frac}ms"

    frac, seconds = _split_fraction(value, 9)
    text = f"{seconds % 60}{frac}s"
    minutes = seconds // 60
    if minutes:
        text = f"{minutes % 60}m{text}"
        hours = minutes // 60
        if hours:
            text = f"{hours}h{text}"
    return sign + text


@dataclass
class Period:
    """A period of whole seconds, optionally bounded below by *above*."""

    duration: int = 0
    above: Optional[int] = None

    @property
    def seconds(self) -> float:
        return self.duration / SECOND

    def set(self, text: str) -> None:
        """Parse and validate *text*; raises ValueError when unacceptable."""
        value = parse_duration(text)
        if value < SECOND:
            raise ValueError(f"Less than a second: {format_duration(value)}")
        if value % SECOND:
            raise ValueError(f"Not a multiple of a second: {format_duration(value)}")
        if self.above is not None and value < self.above:
            raise ValueError(
                f"Should be above {format_duration(self.above)}: {format_duration(value)}"
            )
        self.duration = value

    def __str__(self) -> str:
        text = format_duration(self.duration)
        if text.endswith("m0s"):
            text = text[:-2]
        if text.endswith("h0m"):
            text = text[:-2]
        return text

    def to_json(self) -> str:
        """JSON encoding: the string form, quoted."""
        return json.dumps(str(self))