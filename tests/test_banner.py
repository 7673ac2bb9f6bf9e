import ipaddress

import pytest

from ostent.banner import banner, banner_text

LOCALADDRS = [
    ipaddress.ip_network("127.0.0.1/32"),
    ipaddress.ip_network("127.0.0.2/32"),
    ipaddress.ip_network("fe80::/10"),
]


@pytest.mark.parametrize(
    "hostname,listen,addrs,expected",
    [
        (
            "testhostname24charswidth",
            "127.0.0.1",
            None,
            "   --------------------------\n"
            " / testhostname24ch... ostent \\\n"
            "+------------------------------+\n"
            "| http://127.0.0.1             |\n"
            "+------------------------------+\n",
        ),
        (
            "abc",
            "[::]:7050",
            LOCALADDRS,
            "   ----------\n"
            " / abc ostent \\\n"
            "+------------------------------+\n"
            "| http://127.0.0.1:7050        |\n"
            "|------------------------------|\n"
            "| http://127.0.0.2:7050        |\n"
            "+------------------------------+\n",
        ),
    ],
)
def test_banner_text(hostname, listen, addrs, expected):
    lines = []
    banner_text(listen, hostname, "ostent", addrs, lines.append)
    assert all(line.endswith("\n") for line in lines)
    assert "".join(lines) == expected


def test_banner_text_accepts_plain_strings():
    lines = []
    banner_text("[::]:80", "h", "x", ["10.0.0.1", "::1", "10.0.0.2/24"], lines.append)
    assert lines[3:6] == [
        "| http://10.0.0.1:80           |\n",
        "|------------------------------|\n",
        "| http://10.0.0.2:80           |\n",
    ]


def test_banner_text_wildcard_without_addrs_uses_listen_addr():
    lines = []
    banner_text("[::]:7050", "abc", "ostent", None, lines.append)
    assert lines[3] == "| http://[::]:7050             |\n"


def test_banner_for_this_host():
    lines = []
    banner("127.0.0.1:8050", "ostent", lines.append)
    assert all(line.endswith("\n") for line in lines)
    assert lines[-1] == "+------------------------------+\n"
    assert lines[-2] == "| http://127.0.0.1:8050        |\n"
    assert lines[-3] == "+------------------------------+\n"
    assert lines[-4].endswith(" ostent \\\n")