"""Command-line entry point: parse flags and commands, then listen."""

from __future__ import annotations

import argparse
import logging
import os
import signal
import socket
import sys
import threading
from typing import Callable, Optional, Sequence

from .banner import banner
from .bind import Bind, lookup_port
from .commands import CommandError, CommandRegistry, default_registry, new_logger

DEFAULT_PORT = 8050

_HANDLER_NAME = "ostent-std"

_STOP_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGINT", "SIGQUIT", "SIGTERM") if hasattr(signal, name)
)


def init_std_log() -> logging.Handler:
    """Send root logging to stderr with a pid prefix and microsecond-ish timestamps."""
    root = logging.getLogger()
    for handler in root.handlers:
        if handler.get_name() == _HANDLER_NAME:
            return handler
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter(
            f"[{os.getpid()}][ostent] %(asctime)s.%(msecs)03d %(message)s",
            datefmt="%Y/%m/%d %H:%M:%S",
        )
    )
    root.addHandler(handler)
    root.setLevel(logging.INFO)
    return handler


class Webserver:
    """The address to listen on and the listening itself."""

    def __init__(self, default_port: int) -> None:
        self.bind = Bind(default_port)
        self.logger = new_logger(f"[{os.getpid()}][ostent webserver] ", sys.stderr)

    def listen(self) -> socket.socket:
        """Open a listening TCP socket on the bind address."""
        host = self.bind.host
        try:
            port = lookup_port(self.bind.port)
            if host == "" and socket.has_dualstack_ipv6():
                return socket.create_server(("", port), family=socket.AF_INET6, dualstack_ipv6=True)
            family = socket.AF_INET6 if ":" in host else socket.AF_INET
            return socket.create_server((host, port), family=family)
        except (OSError, ValueError) as err:
            self.logger.error(str(err))
            raise


def _bind_value(default_port: str) -> Callable[[str], Bind]:
    def parse(text: str) -> Bind:
        bind = Bind(int(default_port))
        try:
            bind.set(text)
        except ValueError as err:
            raise argparse.ArgumentTypeError(str(err)) from None
        return bind

    return parse


def build_parser(webserver: Webserver) -> CommandRegistry:
    """The command registry with the server's ``-b``/``-bind`` flags added."""
    registry = default_registry()

    def bind_flags(parser: argparse.ArgumentParser):
        parse = _bind_value(webserver.bind.default_port)
        parser.add_argument("-b", dest="bind", type=parse, default=webserver.bind, help="short for bind")
        parser.add_argument(
            "-bind", "--bind", dest="bind", type=parse, default=webserver.bind, help="Bind address"
        )

        def apply(namespace: argparse.Namespace) -> None:
            webserver.bind = namespace.bind
            return None

        return apply

    registry.add_command_line(bind_flags)
    return registry


def _listen_address(listener: socket.socket) -> str:
    host, port = listener.getsockname()[:2]
    if listener.family == socket.AF_INET6:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def _serve(webserver: Webserver) -> int:
    try:
        listener = webserver.listen()
    except (OSError, ValueError):
        return 1
    with listener:
        banner(_listen_address(listener), "ostent", sys.stderr.write)
        stopped = threading.Event()
        previous = {sig: signal.signal(sig, lambda *_: stopped.set()) for sig in _STOP_SIGNALS}
        try:
            while not stopped.wait(0.5):
                pass
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the flags and commands in *argv*; listen unless they ask to stop."""
    webserver = Webserver(DEFAULT_PORT)
    registry = build_parser(webserver)
    try:
        stop, atexit = registry.arg_commands(sys.argv[1:] if argv is None else list(argv))
    except CommandError as err:
        print(err, file=sys.stderr)
        return 1
    try:
        if stop:
            return 0
        return _serve(webserver)
    finally:
        atexit()


if __name__ == "__main__":
    sys.exit(main())