"""Tests for timer formatting helpers."""

import pytest

from session_timer.timer.formatting import (
    formatted_countdown,
    formatted_duration,
    formatted_timer,
)


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0, "00:00:00"),
        (3723, "01:02:03"),
        (59.5, "00:01:00"),
        (59.4, "00:00:59"),
        (-12, "00:00:00"),
        (100 * 3600, "100:00:00"),
    ],
)
def test_formatted_timer(seconds, expected):
    assert formatted_timer(seconds) == expected


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (1, "00:01"),
        (300, "05:00"),
        (3599, "59:59"),
        (3600, "01:00:00"),
        (5400, "01:30:00"),
        (-3, "00:00"),
    ],
)
def test_formatted_countdown(seconds, expected):
    assert formatted_countdown(seconds) == expected


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (3900, "1h 5m"),
        (3600, "1h 0m"),
        (250, "4m 10s"),
        (42, "42s"),
        (0, "0s"),
        (59.6, "1m 0s"),
        (1501, "25m 1s"),
    ],
)
def test_formatted_duration(seconds, expected):
    assert formatted_duration(seconds) == expected
