import logging
import os

import pytest

from ostent.cli import Webserver, build_parser, init_std_log, main
from ostent.commands import CommandError


def test_webserver_default_bind():
    assert str(Webserver(8050).bind) == ":8050"


@pytest.mark.parametrize(
    "args, expected",
    [
        (["-b", "127.0.0.1:8001"], "127.0.0.1:8001"),
        (["-bind", "127.0.0.1"], "127.0.0.1:8050"),
        (["-bind=*:8001"], ":8001"),
        (["--bind", "8001"], ":8001"),
        ([], ":8050"),
    ],
)
def test_bind_flags(args, expected):
    webserver = Webserver(8050)
    registry = build_parser(webserver)
    stop, _ = registry.arg_commands(args)
    assert stop is False
    assert str(webserver.bind) == expected


def test_bind_flag_invalid():
    registry = build_parser(Webserver(8050))
    with pytest.raises(CommandError, match="too many colons in address a:b:"):
        registry.arg_commands(["-b", "a:b:"])


def test_usage_lists_bind_flags(capsys):
    registry = build_parser(Webserver(8050))
    stop, _ = registry.arg_commands(["-h"])
    err = capsys.readouterr().err
    assert stop is True
    assert "  -bind=:8050: Bind address\n" in err
    assert "  -b=:8050: short for bind\n" in err
    assert "  -v=false: version\n" in err


def test_main_version(capsys):
    assert main(["version"]) == 0
    assert capsys.readouterr().out == "0.2.0\n"


def test_main_version_flag(capsys):
    assert main(["-v"]) == 0
    assert capsys.readouterr().out == "0.2.0\n"


def test_main_commands(capsys):
    assert main(["commands"]) == 0
    assert capsys.readouterr().out.startswith("Commands available:\n")


def test_main_unknown_command(capsys):
    assert main(["nosuch"]) == 1
    assert "nosuch: No such command" in capsys.readouterr().err


def test_main_bad_bind(capsys):
    assert main(["-b", "a:b:"]) == 1
    assert "too many colons" in capsys.readouterr().err


def test_listen_on_loopback():
    webserver = Webserver(8050)
    webserver.bind.set("127.0.0.1:0")
    with webserver.listen() as sock:
        host, port = sock.getsockname()[:2]
    assert host == "127.0.0.1"
    assert port > 0


def test_init_std_log_prefix_and_reuse():
    root = logging.getLogger()
    level = root.level
    handler = init_std_log()
    try:
        assert init_std_log() is handler
        assert handler in root.handlers
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "hello", None, None)
        text = handler.format(record)
        assert text.startswith(f"[{os.getpid()}][ostent] ")
        assert text.endswith(" hello")
    finally:
        root.removeHandler(handler)
        root.setLevel(level)