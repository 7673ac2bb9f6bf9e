import pytest

from ostent.formatting import (
    format_percent,
    format_time,
    format_uptime,
    human_b,
    human_bandback,
    human_bits,
    human_unitless,
    percent,
)


@pytest.mark.parametrize(
    "value, text, back",
    [
        (1023, "1023B", 1023),
        (1024, "1.0K", 1024),
        (117649480 * 1024, "112G", 120259084288),
    ],
)
def test_human_b(value, text, back):
    result = human_b(value)
    assert not result.startswith(" ")
    assert result == text
    btext, bvalue = human_bandback(value)
    assert not btext.startswith(" ")
    assert btext == text
    assert bvalue == back


@pytest.mark.parametrize("value, text", [(1023, "1023b"), (1024, "1.0k")])
def test_human_bits(value, text):
    result = human_bits(value)
    assert not result.startswith(" ")
    assert result == text


@pytest.mark.parametrize(
    "value, text",
    [(999, "999"), (1000, "1.0k"), (1001, "1.0k"), (1050, "1.1k")],
)
def test_human_unitless(value, text):
    result = human_unitless(value)
    assert not result.startswith(" ")
    assert result == text


@pytest.mark.parametrize(
    "used, total, expected, text",
    [
        (1, 0, 0, "0"),
        (201, 1000, 21, "21"),
        (800, 1000, 80, "80"),
        (890, 1000, 89, "89"),
        (891, 1000, 90, "90"),
        (899, 1000, 90, "90"),
        (900, 1000, 90, "90"),
        (901, 1000, 91, "91"),
        (990, 1000, 99, "99"),
        (991, 1000, 99, "99"),
        (995, 1000, 99, "99"),
        (996, 1000, 99, "99"),
        (999, 1000, 99, "99"),
        (1000, 1000, 100, "100"),
    ],
)
def test_percent(used, total, expected, text):
    assert percent(used, total) == expected
    assert format_percent(used, total) == text


@pytest.mark.parametrize(
    "value, text",
    [(1000 * 62, "   01:02"), (1000 * 60 * 60, "01:00:00")],
)
def test_format_time(value, text):
    assert format_time(value) == text


@pytest.mark.parametrize(
    "seconds, text",
    [
        (1080720, "12 days, 12:12"),
        (1069920, "12 days,  9:12"),
        (43920, "12:12"),
        (33120, " 9:12"),
    ],
)
def test_format_uptime(seconds, text):
    assert format_uptime(seconds) == text


def test_human_bandback_never_exceeds_rendering_precision():
    for value in [1, 1023, 1024, 5000, 10 ** 6, 10 ** 9]:
        text, back = human_bandback(value)
        assert human_b(back) == text