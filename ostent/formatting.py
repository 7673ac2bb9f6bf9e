"""Human-readable renderings of sizes, percentages and times."""

from __future__ import annotations

import math

_UNITLESS_SIZES = ("", "k", "M", "G", "T", "P", "E")
_BYTE_SIZES = ("B", "K", "M", "G", "T", "P", "E")
_BIT_SIZES = ("b", "k", "m", "g", "t", "p", "e")


def format_uptime(seconds: float) -> str:
    """Render uptime seconds as ``"N days, HH:MM"`` with a space-padded hour."""
    total = int(seconds)
    text = ""
    if total > 24 * 3600:
        days = total // (24 * 3600)
        text += f"{days} day{'s' if days > 1 else ''}, "
    hours = (total // 3600) % 24
    minutes = (total // 60) % 60
    return text + f"{hours:2d}:{minutes:02d}"


def _scaled(n: int, base: float) -> tuple[int, float, float, str]:
    exponent = math.floor(math.log(float(n)) / math.log(base))
    power = math.pow(base, exponent)
    value = float(n) / power
    pattern = "%.1f" if value < 10 else "%.0f"
    return exponent, power, value, pattern


def human_unitless(n: int) -> str:
    """Render *n* with a decimal (1000-based) suffix."""
    if float(n) < 1000:
        return f"{n}{_UNITLESS_SIZES[0]}"
    exponent, _, value, pattern = _scaled(n, 1000.0)
    return (pattern % value) + _UNITLESS_SIZES[exponent]


def _format_octet(n: int, bits: bool) -> tuple[str, str, float, float]:
    sizes = _BIT_SIZES if bits else _BYTE_SIZES
    if float(n) < 1024:
        return f"{n}{sizes[0]}", "%.0f", float(n), 1.0
    exponent, power, value, pattern = _scaled(n, 1024.0)
    return (pattern % value) + sizes[exponent], pattern, value, power


def human_bits(n: int) -> str:
    """Render a bit count with a binary (1024-based) suffix."""
    return _format_octet(n, True)[0]


def human_b(n: int) -> str:
    """Render a byte count with a binary (1024-based) suffix."""
    return _format_octet(n, False)[0]


def human_bandback(n: int) -> tuple[str, int]:
    """Render a byte count and return the rendering with the value it stands for."""
    text, pattern, value, power = _format_octet(n, False)
    shown = float(pattern % value)
    return text, int(shown * power)


def percent(used: int, total: int) -> int:
    """Percentage rounded up, except that it never rounds up to 100."""
    if total == 0:
        return 0
    used *= 100
    pct = used // total
    if pct != 99 and used % total != 0:
        pct += 1
    return pct


def format_percent(used: int, total: int) -> str:
    """The percentage as a string, without a ``%`` sign."""
    return str(percent(used, total))


def format_time(milliseconds: int) -> str:
    """Render CPU time in milliseconds as ``HH:MM:SS`` or ``   MM:SS``."""
    seconds_total = milliseconds // 1000
    seconds = seconds_total % 60
    minutes_total = seconds_total // 60
    minutes = minutes_total % 60
    hours = (minutes_total // 60) % 24
    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"   {minutes:02d}:{seconds:02d}"