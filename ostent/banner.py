"""Start-up banner listing the addresses the server answers on."""

from __future__ import annotations

import ipaddress
import socket
from typing import Callable, Iterable, Optional

import psutil

from .bind import split_host_port
from .collect import Machine

_WIDTH = 32
_FIELD = 28
_RULE = "+------------------------------+\n"
_SEPARATOR = "|------------------------------|\n"


def _address_ip(address: object) -> str:
    if isinstance(address, (ipaddress.IPv4Network, ipaddress.IPv6Network)):
        return str(address.network_address)
    if isinstance(address, (ipaddress.IPv4Interface, ipaddress.IPv6Interface)):
        return str(address.ip)
    return str(address).split("/")[0]


def _line(url: str) -> str:
    return f"| {url.ljust(_FIELD)} |\n"


def banner_text(
    listen_addr: str,
    hostname: str,
    suffix: str,
    addrs: Optional[Iterable[object]],
    emit: Callable[[str], None],
) -> None:
    """Emit the banner line by line; each line ends with a newline."""
    limit = _WIDTH - 6 - len(suffix)
    if len(hostname) >= limit:
        hostname = hostname[: limit - 4] + "..."
    emit(f"   {'-' * (len(hostname) + 1 + len(suffix))}\n")
    emit(f" / {hostname} {suffix} \\\n")
    emit(_RULE)

    try:
        host, port = split_host_port(listen_addr)
    except ValueError:
        host, port = None, ""

    if host == "::" and addrs is not None:
        first = True
        for address in addrs:
            ip = _address_ip(address)
            if ":" in ip:
                continue
            if not first:
                emit(_SEPARATOR)
            first = False
            emit(_line(f"http://{ip}:{port}"))
    else:
        emit(_line(f"http://{listen_addr}"))
    emit(_RULE)


def banner(listen_addr: str, suffix: str, emit: Callable[[str], None]) -> None:
    """Emit the banner for this host and its interface addresses."""
    try:
        hostname = Machine().get_hostname()
    except OSError:
        hostname = ""
    addrs: Optional[list[str]]
    try:
        addrs = [
            address.address
            for addresses in psutil.net_if_addrs().values()
            for address in addresses
            if address.family in (socket.AF_INET, socket.AF_INET6)
        ]
    except OSError as err:
        emit(f"{err}\n")
        addrs = None
    banner_text(listen_addr, hostname, suffix, addrs, emit)