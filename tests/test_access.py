import io
from datetime import datetime, timezone

import pytest

from ostent.access import (
    PANIC_STATUS_CODE,
    AccessLog,
    format_access_entry,
    remote_host,
    render_panic_page,
    status_good,
    status_line,
)

WHEN = datetime(2015, 3, 7, 9, 5, 1, tzinfo=timezone.utc)


def _fields(**overrides):
    fields = {
        "host": "192.0.2.10",
        "method": "GET",
        "uri": "/index",
        "proto": "HTTP/1.1",
        "code": 200,
        "size": 512,
        "referer": "",
        "useragent": "agent",
        "duration": "0.0010s",
    }
    fields.update(overrides)
    return fields


@pytest.mark.parametrize(
    "addr, host",
    [("192.0.2.10:8080", "192.0.2.10"), ("[::1]:80", "::1"), ("nohost", "nohost")],
)
def test_remote_host(addr, host):
    assert remote_host(addr) == host


@pytest.mark.parametrize("status, good", [(101, True), (200, True), (304, True), (404, False), (500, False)])
def test_status_good(status, good):
    assert status_good(status) is good


def test_status_line_panic_code():
    assert status_line(PANIC_STATUS_CODE) == "500 Internal Server Error"


def test_status_line_starts_with_code():
    assert status_line(404).startswith("404 ")


def test_format_entry_shape():
    line = format_access_entry(_fields(), WHEN)
    assert line.startswith("192.0.2.10 - - [07/Mar/2015:09:05:01 +0000] ")
    assert '"GET /index HTTP/1.1"' in line
    assert " 200 512 " in line
    assert line.endswith("\t;0.0010s\n")


def test_format_entry_empty_referer_is_dash():
    line = format_access_entry(_fields(referer="", useragent=""), WHEN)
    assert '"-" "-"' in line


def test_format_entry_quotes_special_characters():
    line = format_access_entry(_fields(useragent='a"b'), WHEN)
    assert '"a\\"b"' in line


def test_format_entry_comment_appended():
    line = format_access_entry(_fields(comment="note"), WHEN)
    assert line.endswith(";0.0010s\tnote\n")


def test_seen_records_host():
    log = AccessLog(False, io.StringIO())
    assert log.seen("h") is False
    assert log.seen("h") is True
    assert log.seen("other") is False


def test_log_request_untagged_always_writes():
    stream = io.StringIO()
    log = AccessLog(False, stream)
    first = log.log_request(_fields(), WHEN)
    second = log.log_request(_fields(), WHEN)
    assert first == second == format_access_entry(_fields(), WHEN)
    assert stream.getvalue() == first + second


def test_log_request_tagged_quiets_repeat_success():
    stream = io.StringIO()
    log = AccessLog(True, stream)
    first = log.log_request(_fields(), WHEN)
    assert first is not None
    assert "last info-logged successful request from 192.0.2.10" in first
    assert log.log_request(_fields(), WHEN) is None
    assert stream.getvalue() == first


def test_log_request_tagged_logs_failures():
    stream = io.StringIO()
    log = AccessLog(True, stream)
    log.log_request(_fields(), WHEN)
    failed = log.log_request(_fields(code=404), WHEN)
    assert failed is not None
    assert "last info-logged" not in failed
    assert " 404 " in failed


def test_log_request_does_not_mutate_fields():
    fields = _fields()
    AccessLog(True, io.StringIO()).log_request(fields, WHEN)
    assert "comment" not in fields


def test_render_panic_page_escapes():
    page = render_panic_page("<b>boom</b>", "trace & more")
    assert "<title>500 Internal Server Error</title>" in page
    assert "<center><h1>&lt;b&gt;boom&lt;/b&gt;</h1></center>" in page
    assert "<pre>trace &amp; more</pre>" in page