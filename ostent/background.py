"""Background jobs and the set of live client connections fed by them."""

from __future__ import annotations

import math
import threading
import time
from typing import Any, Callable, Protocol

from .period import Period


class Receiver(Protocol):
    """What a live connection offers to the background loop."""

    def tick(self) -> None: ...

    def tack(self) -> None: ...

    def push(self, update: Any) -> None: ...

    def reload(self) -> None: ...

    def expired(self) -> bool: ...

    def close_chans(self) -> None: ...


def seconds_until_next_second(now: float) -> float:
    """Seconds from *now* (epoch seconds) to the start of the next whole second."""
    return math.floor(now) + 1 - now


def sleep_til_next_second() -> None:
    """Sleep until precisely the next whole second."""
    time.sleep(seconds_until_next_second(time.time()))


class BackgroundJobs:
    """Jobs started together, each in its own daemon thread."""

    def __init__(self) -> None:
        self._jobs: list[Callable[[Period], None]] = []
        self._lock = threading.Lock()

    def add(self, job: Callable[[Period], None]) -> None:
        """Queue *job* to be started by run."""
        with self._lock:
            self._jobs.append(job)

    def run(self, default_period: Period) -> list[threading.Thread]:
        """Start every job with *default_period*; return the started threads."""
        with self._lock:
            threads = [
                threading.Thread(target=job, args=(default_period,), daemon=True)
                for job in self._jobs
            ]
            for thread in threads:
                thread.start()
        return threads


class Connections:
    """The set of registered receivers."""

    def __init__(self) -> None:
        self._receivers: dict[Receiver, None] = {}
        self._lock = threading.Lock()

    def register(self, receiver: Receiver) -> None:
        with self._lock:
            self._receivers[receiver] = None

    def unregister(self, receiver: Receiver) -> None:
        """Close the receiver's channels, then forget it."""
        receiver.close_chans()
        with self._lock:
            self._receivers.pop(receiver, None)

    def tick(self) -> None:
        with self._lock:
            for receiver in self._receivers:
                receiver.tick()

    def expired(self) -> list[Receiver]:
        """Receivers whose refresh period has run out."""
        with self._lock:
            return [receiver for receiver in self._receivers if receiver.expired()]

    def tack(self) -> None:
        with self._lock:
            for receiver in self._receivers:
                receiver.tack()

    def reload(self) -> bool:
        """Ask every receiver to reload; False if there were none."""
        with self._lock:
            for receiver in self._receivers:
                receiver.reload()
            return bool(self._receivers)

    def push(self, update: Any) -> None:
        with self._lock:
            for receiver in self._receivers:
                receiver.push(update)

    def __len__(self) -> int:
        with self._lock:
            return len(self._receivers)