from __future__ import annotations

from datetime import date, datetime

import pytest

from BackEnd.core.clock import local_to_ms
from BackEnd.repos import session_repo
from BackEnd.repos.session_repo import SITTING, STANDING
from BackEnd.services import stats_service

NOW = local_to_ms(datetime(2024, 6, 14, 10, 0, 0))
HOUR = 3600 * 1000


def _session(state: str, start: datetime, end: datetime | None) -> dict:
    return {
        "state": state,
        "start_time": local_to_ms(start),
        "end_time": local_to_ms(end) if end is not None else None,
    }


def test_calculate_stats_counts_ongoing_session_until_now() -> None:
    sessions = [
        {"state": STANDING, "start_time": NOW - 3 * HOUR, "end_time": NOW - 2 * HOUR},
        {"state": SITTING, "start_time": NOW - 2 * HOUR, "end_time": None},
    ]

    assert stats_service.calculate_stats(sessions, NOW) == {
        "total_standing": 3600,
        "total_sitting": 7200,
    }


def test_calculate_stats_never_negative() -> None:
    sessions = [{"state": STANDING, "start_time": NOW, "end_time": NOW - HOUR}]

    assert stats_service.calculate_stats(sessions, NOW)["total_standing"] == 0


def test_day_period_clips_session_spanning_midnight() -> None:
    sessions = [
        _session(STANDING, datetime(2024, 6, 13, 22, 0), datetime(2024, 6, 14, 2, 0)),
        _session(SITTING, datetime(2024, 6, 14, 2, 0), None),
    ]

    day = stats_service.get_sessions_for_period(sessions, "day", NOW)

    assert day[0]["start_time"] == local_to_ms(datetime(2024, 6, 14))
    assert day[1]["end_time"] is None
    assert stats_service.calculate_stats(day, NOW) == {
        "total_standing": 2 * 3600,
        "total_sitting": 8 * 3600,
    }


def test_sessions_outside_window_are_dropped() -> None:
    sessions = [
        _session(SITTING, datetime(2024, 6, 1, 9, 0), datetime(2024, 6, 1, 10, 0)),
        _session(STANDING, datetime(2024, 6, 13, 9, 0), datetime(2024, 6, 13, 10, 0)),
    ]

    assert stats_service.get_sessions_for_period(sessions, "day", NOW) == []
    week = stats_service.get_sessions_for_period(sessions, "week", NOW)
    assert [s["state"] for s in week] == [STANDING]
    month = stats_service.get_sessions_for_period(sessions, "month", NOW)
    assert len(month) == 2


def test_ongoing_session_started_before_window_is_clipped() -> None:
    sessions = [_session(STANDING, datetime(2024, 6, 10, 8, 0), None)]

    day = stats_service.get_sessions_for_period(sessions, "day", NOW)

    assert stats_service.calculate_stats(day, NOW)["total_standing"] == 10 * 3600


def test_unknown_period_rejected() -> None:
    with pytest.raises(ValueError):
        stats_service.get_sessions_for_period([], "year", NOW)


def test_get_period_stats_counts_current_session_once() -> None:
    session_repo.toggle(STANDING, NOW - 2 * HOUR)
    session_repo.toggle(SITTING, NOW - HOUR)

    stats = stats_service.get_period_stats("day", NOW)

    assert stats == {"total_standing": 3600, "total_sitting": 3600}
    assert session_repo.get_current_session_elapsed_time(NOW) == 3600


def test_daily_breakdown_splits_at_midnight() -> None:
    sessions = [
        _session(STANDING, datetime(2024, 6, 12, 23, 0), datetime(2024, 6, 13, 1, 0)),
        _session(SITTING, datetime(2024, 6, 14, 9, 0), None),
    ]

    rows = stats_service.daily_breakdown(sessions, "week", NOW)
    by_day = {d: (standing, sitting) for d, standing, sitting in rows}

    assert rows[0][0] == date(2024, 6, 7)
    assert rows[-1][0] == date(2024, 6, 14)
    assert by_day[date(2024, 6, 12)] == (3600, 0)
    assert by_day[date(2024, 6, 13)] == (3600, 0)
    assert by_day[date(2024, 6, 14)] == (0, 3600)
    assert by_day[date(2024, 6, 10)] == (0, 0)


def test_get_period_stats_uses_loaded_sessions() -> None:
    sessions = [_session(STANDING, datetime(2024, 6, 14, 9, 0), None)]

    assert stats_service.get_period_stats("day", NOW, sessions) == {
        "total_standing": 3600,
        "total_sitting": 0,
    }
    assert session_repo.get_sessions() == []
