"""Listen address flag value: ``host:port`` with a default port."""

from __future__ import annotations

import re
import socket

_MISSING_PORT = "missing port in address"
_TOO_MANY_COLONS = "too many colons in address"
_NUMERIC_PORT = re.compile(r"[+-]?\d+")


def split_host_port(hostport: str) -> tuple[str, str]:
    """Split ``host:port``, ``[host]:port`` or ``[ipv6]:port`` into host and port.

    Raises ValueError on a malformed address.
    """
    colon = hostport.rfind(":")
    if colon < 0:
        raise ValueError(f"{_MISSING_PORT} {hostport}")

    if hostport.startswith("["):
        end = hostport.find("]")
        if end < 0:
            raise ValueError(f"missing ']' in address {hostport}")
        after = end + 1
        if after == len(hostport):
            raise ValueError(f"{_MISSING_PORT} {hostport}")
        if after != colon:
            if hostport[after] == ":":
                raise ValueError(f"{_TOO_MANY_COLONS} {hostport}")
            raise ValueError(f"{_MISSING_PORT} {hostport}")
        host = hostport[1:end]
        open_from, close_from = 1, after
    else:
        host = hostport[:colon]
        if ":" in host:
            raise ValueError(f"{_TOO_MANY_COLONS} {hostport}")
        open_from, close_from = 0, 0

    if "[" in hostport[open_from:]:
        raise ValueError(f"unexpected '[' in address {hostport}")
    if "]" in hostport[close_from:]:
        raise ValueError(f"unexpected ']' in address {hostport}")
    return host, hostport[colon + 1:]


def lookup_port(port: str) -> int:
    """Resolve a TCP port given as a number or a service name."""
    if _NUMERIC_PORT.fullmatch(port):
        number = int(port)
        if not 0 <= number <= 0xFFFF:
            raise ValueError(f"invalid port tcp/{port}")
        return number
    try:
        return socket.getservbyname(port, "tcp")
    except (OSError, UnicodeError, ValueError):
        raise ValueError(f"unknown port tcp/{port}") from None


class Bind:
    """A bind address that falls back to a default port."""

    def __init__(self, default_port: int) -> None:
        self.default_port = str(default_port)
        self.host = ""
        self.port = ""
        self._text = ""
        self.set("")

    def set(self, value: str) -> None:
        """Parse *value* into host and port; raises ValueError when invalid."""
        host, port = self.host, self.port
        if value == "":
            port = self.default_port
        else:
            if ":" not in value:
                value = ":" + value
            host, port = split_host_port(value)
            if host == "*":
                host = ""
            elif port == "127":
                host, port = "127.0.0.1", self.default_port
            try:
                lookup_port(port)
            except ValueError:
                if host != "":
                    raise
                host, port = port, self.default_port
        self.host, self.port = host, port
        self._text = f"{host}:{port}"

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"Bind({self._text!r})"