from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from BackEnd.core.clock import (
    fmt_hms,
    format_duration,
    local_to_ms,
    next_local_midnight,
    period_start,
)


def test_format_duration_zero() -> None:
    assert format_duration(0) == "0m"


def test_format_duration_drops_seconds() -> None:
    assert format_duration(59) == "0m"
    assert format_duration(600) == "10m"
    assert format_duration(3661) == "1h 1m"


def test_format_duration_spans_days() -> None:
    assert format_duration(3 * 86400 + 120) == "72h 2m"


def test_format_duration_negative_is_zero() -> None:
    assert format_duration(-30) == "0m"


def test_fmt_hms() -> None:
    assert fmt_hms(0) == "00:00:00"
    assert fmt_hms(3725) == "01:02:05"


def test_period_start_day_is_local_midnight() -> None:
    now = local_to_ms(datetime(2024, 3, 14, 15, 30, 0))
    assert period_start(now, "day") == local_to_ms(datetime(2024, 3, 14))


def test_period_start_week_is_rolling_seven_days() -> None:
    now = local_to_ms(datetime(2024, 3, 14, 15, 30, 0))
    assert period_start(now, "week") == now - 7 * 24 * 3600 * 1000


def test_period_start_month_is_first_of_month() -> None:
    now = local_to_ms(datetime(2024, 3, 14, 15, 30, 0))
    assert period_start(now, "month") == local_to_ms(datetime(2024, 3, 1))


def test_period_start_rejects_unknown_period() -> None:
    with pytest.raises(ValueError):
        period_start(0, "year")


def test_next_local_midnight() -> None:
    start = datetime(2024, 3, 14, 23, 0, 0)
    assert next_local_midnight(local_to_ms(start)) == local_to_ms(datetime(2024, 3, 14) + timedelta(days=1))
