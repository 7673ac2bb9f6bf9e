"""System monitoring helpers: interface counters, formatting, flag values and a command line."""

__version__ = "0.2.0"

__all__ = [
    "access",
    "background",
    "banner",
    "bind",
    "cli",
    "collect",
    "commands",
    "formatting",
    "ifaddrs",
    "period",
]