"""Collection of per-interface metrics and host identity."""

from __future__ import annotations

import re
import socket
import sys
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from .ifaddrs import IfData, getifaddrs

_LOOPBACK = re.compile(r"lo[0-9]*")

_VIRTUAL_ANYWHERE = (
    re.compile(r"bridge[0-9]+"),
    re.compile(r"vboxnet[0-9]+"),
)

_VIRTUAL_DARWIN = (
    re.compile(r"fw[0-9]+"),
    re.compile(r"gif[0-9]+"),
    re.compile(r"stf[0-9]+"),
    re.compile(r"awdl[0-9]+"),
    re.compile(r"p2p[0-9]+"),
)


def is_loopback(name: str) -> bool:
    """True for a loopback interface name such as ``lo`` or ``lo0``."""
    return _LOOPBACK.fullmatch(name) is not None


def hardware_interface(name: str, system: Optional[str] = None) -> bool:
    """False for a known virtual or software network interface name.

    *system* is a platform name such as ``"darwin"`` or ``"linux"``;
    it defaults to the running platform.
    """
    if any(rx.fullmatch(name) for rx in _VIRTUAL_ANYWHERE):
        return False
    platform = (system if system is not None else sys.platform).lower()
    if platform == "darwin" and any(rx.fullmatch(name) for rx in _VIRTUAL_DARWIN):
        return False
    return True


@dataclass
class FoundIP:
    """Tracks the IP of the first non-loopback interface seen."""

    ip: str = ""

    def next(self, ifdata: IfData) -> bool:
        """Consider *ifdata*; return False once there is no need to look further."""
        if self.ip != "":
            return False
        if not is_loopback(ifdata.name):
            self.ip = ifdata.ip
            return False
        return True


@dataclass
class Machine:
    """Collects metrics of the machine it runs on."""

    source: Callable[[], Iterable[IfData]] = field(default=getifaddrs)
    system: Optional[str] = None

    def apply_per_interface(self, apply: Callable[[IfData], bool]) -> None:
        """Call *apply* for each hardware interface until it returns False."""
        for ifdata in self.source():
            if not hardware_interface(ifdata.name, self.system):
                continue
            if not apply(ifdata):
                break

    def get_hostname(self) -> str:
        """The host name up to its first dot."""
        return socket.gethostname().split(".")[0]

    def interfaces(self, update: Callable[[IfData], None]) -> str:
        """Pass every non-idle interface to *update*; return the first non-loopback IP."""
        found = FoundIP()

        def visit(ifdata: IfData) -> bool:
            found.next(ifdata)
            if not ifdata.is_idle():
                update(ifdata)
            return True

        self.apply_per_interface(visit)
        return found.ip