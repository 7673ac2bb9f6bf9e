"""Per-interface network counters merged with each interface's IPv4 address."""

from __future__ import annotations

import socket
from dataclasses import dataclass

import psutil


@dataclass
class IfData:
    """Counters and IPv4 address of one network interface."""

    name: str
    ip: str = ""
    in_bytes: int = 0
    out_bytes: int = 0
    in_packets: int = 0
    out_packets: int = 0
    in_errors: int = 0
    out_errors: int = 0

    def is_idle(self) -> bool:
        """True when every counter is zero."""
        return not any(
            (
                self.in_bytes,
                self.out_bytes,
                self.in_packets,
                self.out_packets,
                self.in_errors,
                self.out_errors,
            )
        )


def getifaddrs() -> list[IfData]:
    """List interfaces with counters, each with its IPv4 address if it has one."""
    ips: dict[str, str] = {}
    for name, addresses in psutil.net_if_addrs().items():
        for address in addresses:
            if address.family == socket.AF_INET:
                ips[name] = address.address

    return [
        IfData(
            name=name,
            ip=ips.get(name, ""),
            in_bytes=counters.bytes_recv,
            out_bytes=counters.bytes_sent,
            in_packets=counters.packets_recv,
            out_packets=counters.packets_sent,
            in_errors=counters.errin,
            out_errors=counters.errout,
        )
        for name, counters in psutil.net_io_counters(pernic=True).items()
    ]