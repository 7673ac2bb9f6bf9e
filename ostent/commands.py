"""Sub-commands and command-line flag handlers of the ostent executable."""

from __future__ import annotations

import argparse
import functools
import json
import logging
import sys
import threading
from typing import Any, Callable, Optional, Sequence, TextIO

VERSION = "0.2.0"

_NEXT = "next_arguments"

Handler = Callable[[], None]
Atexit = Callable[[], None]
CommandLineResult = Optional[tuple[Optional[Atexit], bool]]
CommandLineHandler = Callable[[argparse.Namespace], CommandLineResult]
MakeCommand = Callable[[argparse.ArgumentParser], Callable[[argparse.Namespace], None]]


class CommandError(Exception):
    """A command or flag could not be parsed or run."""


def new_logger(prefix: str, stream: Optional[TextIO] = None, with_time: bool = True) -> logging.Logger:
    """A logger writing ``prefix [date time ]message`` lines to *stream* (stderr by default)."""
    logger = logging.Logger(prefix.strip() or "ostent", logging.DEBUG)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    pattern = prefix.replace("%", "%%")
    if with_time:
        pattern += "%(asctime)s "
    pattern += "%(message)s"
    handler.setFormatter(logging.Formatter(pattern, datefmt="%Y/%m/%d %H:%M:%S"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def _default_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if value is None:
        return ""
    return str(value)


class _FlagSet(argparse.ArgumentParser):
    """Flags of one command; arguments after the flags are kept for the next command."""

    def __init__(self, name: str) -> None:
        self._flags: list[argparse.Action] = []
        super().__init__(prog=name, add_help=False, allow_abbrev=False)
        super().add_argument(_NEXT, nargs=argparse.REMAINDER, help=argparse.SUPPRESS)

    def add_argument(self, *args: Any, **kwargs: Any) -> argparse.Action:
        action = super().add_argument(*args, **kwargs)
        if action.option_strings and action.help is not argparse.SUPPRESS:
            self._flags.append(action)
        return action

    def error(self, message: str) -> None:  # type: ignore[override]
        raise CommandError(f"{self.prog}: {message}")

    def describe(self, indent: str) -> list[str]:
        """One ``-name=default: usage`` line per flag name, sorted by name."""
        entries: dict[str, tuple[str, str]] = {}
        for action in self._flags:
            default = _default_text(action.default)
            for option in action.option_strings:
                entries.setdefault(option.lstrip("-"), (default, action.help or ""))
        return [f"{indent}-{name}={default}: {usage}" for name, (default, usage) in sorted(entries.items())]


class CommandRegistry:
    """Named sub-commands plus handlers of the top-level flags."""

    def __init__(
        self,
        program: str = "ostent",
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ) -> None:
        self.program = program
        self._stdout = stdout
        self._stderr = stderr
        self._makes: dict[str, MakeCommand] = {}
        self._command_line: list[CommandLineHandler] = []
        self._lock = threading.Lock()
        self.parser = _FlagSet(program)
        self.parser.add_argument(
            "-h", "-help", "--help", dest="help", action="store_true", help=argparse.SUPPRESS
        )

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    def add_command(self, name: str, make: MakeCommand) -> None:
        """Register *make*: it adds the command's flags and returns the function to run."""
        with self._lock:
            self._makes[name] = make

    def add_command_line(
        self, handler: Callable[[argparse.ArgumentParser], Optional[CommandLineHandler]]
    ) -> None:
        """Let *handler* add top-level flags; keep what it returns to run after parsing."""
        with self._lock:
            result = handler(self.parser)
            if result is not None:
                self._command_line.append(result)

    def parse_commands(self, args: Sequence[str]) -> list[Handler]:
        """Parse a chain of commands with their flags into functions to run."""
        with self._lock:
            makes = dict(self._makes)
        handlers: list[Handler] = []
        rest = list(args)
        while rest and rest[0] != "":
            name = rest[0]
            make = makes.get(name)
            if make is None:
                raise CommandError(f"{name}: No such command")
            flagset = _FlagSet(name)
            run = make(flagset)
            namespace = flagset.parse_args(rest[1:])
            handlers.append(functools.partial(run, namespace))
            rest = list(getattr(namespace, _NEXT))
        return handlers

    def arg_commands(self, args: Sequence[str]) -> tuple[bool, Atexit]:
        """Parse *args*, run flag handlers then commands.

        Returns whether to stop instead of serving, and the function to call at exit.
        """
        namespace = self.parser.parse_args(list(args))
        finish: list[Atexit] = []

        def atexit() -> None:
            for exit_handler in finish:
                exit_handler()

        if namespace.help:
            self.stderr.write(self._usage())
            return True, atexit

        handlers = self.parse_commands(getattr(namespace, _NEXT))

        with self._lock:
            command_line = list(self._command_line)
        stop = False
        for handler in command_line:
            try:
                result = handler(namespace)
            except CommandError:
                stop = True
                continue
            if result is None:
                continue
            exit_handler, terminate = result
            if terminate:
                stop = True
            elif exit_handler is not None:
                finish.append(exit_handler)
        if stop:
            return True, atexit

        if not handlers:
            return False, atexit
        for run in handlers:
            run()
        return True, atexit

    def help_text(
        self,
        listing: Optional[str] = None,
        is_command: bool = False,
        program: Optional[str] = None,
    ) -> str:
        """Describe every command, or only *listing*, with their flags."""
        with self._lock:
            makes = dict(self._makes)
        if listing:
            make = makes.get(listing)
            if make is None:
                raise CommandError(f"{listing}: No such command")
            lines = ["Usage of command:", f"   {listing}", *self._flag_lines(listing, make)]
        else:
            name_of_program = program or self.program
            lines = ["Commands available:" if is_command else f"Commands of {name_of_program}:"]
            for name in sorted(makes):
                lines.append(f"   {name}")
                lines.extend(self._flag_lines(name, makes[name]))
        return "\n".join(lines) + "\n"

    @staticmethod
    def _flag_lines(name: str, make: MakeCommand) -> list[str]:
        flagset = _FlagSet(name)
        make(flagset)
        return flagset.describe("     ")

    def _usage(self) -> str:
        lines = [f"Usage of {self.program}:", *self.parser.describe("  ")]
        return "\n".join(lines) + "\n" + self.help_text(None, False, self.program)


def _print_version(stream: Optional[TextIO]) -> None:
    new_logger("", stream if stream is not None else sys.stdout, with_time=False).info(VERSION)


def default_registry(stdout: Optional[TextIO] = None) -> CommandRegistry:
    """A registry with the ``commands`` and ``version`` commands and the ``-v`` flag."""
    registry = CommandRegistry(stdout=stdout)

    def make_commands(parser: argparse.ArgumentParser) -> Callable[[argparse.Namespace], None]:
        parser.add_argument("-h", dest="listing", default="", help="A command")

        def run(namespace: argparse.Namespace) -> None:
            registry.stdout.write(registry.help_text(namespace.listing or None, True, registry.program))

        return run

    def make_version(parser: argparse.ArgumentParser) -> Callable[[argparse.Namespace], None]:
        def run(namespace: argparse.Namespace) -> None:
            _print_version(registry.stdout)

        return run

    def version_flag(parser: argparse.ArgumentParser) -> CommandLineHandler:
        parser.add_argument("-v", dest="v", action="store_true", help="version")

        def handle(namespace: argparse.Namespace) -> CommandLineResult:
            if namespace.v:
                _print_version(registry.stdout)
                return None, True
            return None, False

        return handle

    registry.add_command("commands", make_commands)
    registry.add_command("version", make_version)
    registry.add_command_line(version_flag)
    return registry