"""Access logging in common-log style and the page shown after a handler failure."""

from __future__ import annotations

import http
import sys
import threading
from datetime import datetime
from typing import Any, Mapping, Optional, TextIO

from .bind import split_host_port

PANIC_STATUS_CODE = int(http.HTTPStatus.INTERNAL_SERVER_ERROR)

_GOOD_STATUSES = frozenset(
    {
        int(http.HTTPStatus.SWITCHING_PROTOCOLS),
        int(http.HTTPStatus.OK),
        int(http.HTTPStatus.NOT_MODIFIED),
    }
)

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_SIMPLE_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}

_PANIC_TEMPLATE = """
<html>
<head><title>{title}</title></head>
<body bgcolor="white">
<center><h1>{description}</h1></center>
<hr><pre>{stack}</pre>
</body>
</html>
"""


def remote_host(remote_addr: str) -> str:
    """The host part of a ``host:port`` remote address, or the address itself."""
    try:
        host, _ = split_host_port(remote_addr)
    except ValueError:
        return remote_addr
    return host


def status_good(status: int) -> bool:
    """True for the statuses counted as a successful request: 101, 200 and 304."""
    return status in _GOOD_STATUSES


def status_line(status: int) -> str:
    """The status code followed by its standard reason phrase."""
    try:
        phrase = http.HTTPStatus(status).phrase
    except ValueError:
        phrase = ""
    return f"{status} {phrase}"


def _quote(text: str) -> str:
    parts = ['"']
    for ch in text:
        if ch in _SIMPLE_ESCAPES:
            parts.append(_SIMPLE_ESCAPES[ch])
        elif ch.isprintable():
            parts.append(ch)
        else:
            code = ord(ch)
            if code < 0x80:
                parts.append(f"\\x{code:02x}")
            elif code < 0x10000:
                parts.append(f"\\u{code:04x}")
            else:
                parts.append(f"\\U{code:08x}")
    parts.append('"')
    return "".join(parts)


def _dash_if_empty(value: Any) -> str:
    text = "" if value is None else str(value)
    return "-" if text == "" else text


def _timestamp(when: Optional[datetime]) -> str:
    moment = datetime.now().astimezone() if when is None else when
    if moment.tzinfo is None:
        moment = moment.astimezone()
    month = _MONTHS[moment.month - 1]
    return f"{moment.day:02d}/{month}/{moment.year:04d}:{moment:%H:%M:%S} {moment:%z}"


def format_access_entry(fields: Mapping[str, Any], when: Optional[datetime] = None) -> str:
    """Render one access-log line, newline included.

    *fields* holds host, method, uri, proto, code, size, referer,
    useragent, duration and, optionally, comment.
    """
    comment = fields.get("comment")
    comment_text = f"\t{comment}" if comment else ""
    request = f"{fields.get('method', '')} {fields.get('uri', '')} {fields.get('proto', '')}"
    return (
        f"{fields.get('host', '')} - - [{_timestamp(when)}] {_quote(request)} "
        f"{int(fields.get('code', 0))} {int(fields.get('size', 0))} "
        f"{_quote(_dash_if_empty(fields.get('referer')))} "
        f"{_quote(_dash_if_empty(fields.get('useragent')))}"
        f"\t;{fields.get('duration', '')}{comment_text}\n"
    )


def _escape_html(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&#34;")
        .replace("'", "&#39;")
        .replace("\0", "\ufffd")
    )


def render_panic_page(description: str, stack: str = "") -> str:
    """The HTML page sent with a 500 status after a handler failure."""
    return _PANIC_TEMPLATE.format(
        title=_escape_html(status_line(PANIC_STATUS_CODE)),
        description=_escape_html(description),
        stack=_escape_html(stack),
    )


class AccessLog:
    """Writes access-log lines, quieting repeated successes in release builds."""

    def __init__(self, tagged_bin: bool = False, stream: Optional[TextIO] = None) -> None:
        self.tagged_bin = tagged_bin
        self.stream = stream if stream is not None else sys.stderr
        self._hosts: set[str] = set()
        self._lock = threading.Lock()
        self._write_lock = threading.Lock()

    def seen(self, host: str) -> bool:
        """True if *host* was seen before; records it otherwise."""
        with self._lock:
            if host in self._hosts:
                return True
            self._hosts.add(host)
            return False

    def log_request(
        self, fields: Mapping[str, Any], when: Optional[datetime] = None
    ) -> Optional[str]:
        """Log one request; return the line written, or None when it was quieted."""
        entry = dict(fields)
        if self.tagged_bin and status_good(int(entry.get("code", 0))):
            host = str(entry.get("host", ""))
            if self.seen(host):
                return None
            entry["comment"] = f";last info-logged successful request from {host}"
        line = format_access_entry(entry, when)
        with self._write_lock:
            self.stream.write(line)
            self.stream.flush()
        return line