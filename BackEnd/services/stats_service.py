"""
Standing/sitting totals over day, week and month windows.

get_period_stats() is the one place totals come from: the ongoing
session is clipped into the window like any other session, so callers
must not add the current elapsed time on top.
"""

from datetime import timedelta
from BackEnd.core.clock import PERIODS, now_ms, period_start, next_local_midnight, ms_to_local
from BackEnd.repos import session_repo
from BackEnd.repos.session_repo import STANDING, SITTING


def _check_period(period):
	if period not in PERIODS:
		raise ValueError(f"Unknown period: {period!r}")

def clip_session(session, window_start, window_end):
	"""
	Return a copy of `session` truncated to [window_start, window_end],
	or None if it does not overlap the window. An ongoing session keeps
	end_time None.
	"""
	end = session["end_time"]
	if session["start_time"] > window_end:
		return None
	if end is not None and end <= window_start:
		return None
	start = max(session["start_time"], window_start)
	if end is not None:
		end = max(start, min(end, window_end))
	return {"state": session["state"], "start_time": start, "end_time": end}

def get_sessions_for_period(sessions, period, now=None):
	"""Sessions overlapping the `period` window ending at `now`, clipped to it."""
	_check_period(period)
	if now is None:
		now = now_ms()
	window_start = period_start(now, period)
	clipped = []
	for s in sessions:
		c = clip_session(s, window_start, now)
		if c is not None:
			clipped.append(c)
	return clipped

def calculate_stats(sessions, now=None):
	"""Sum seconds per state; ongoing sessions count up to `now`."""
	if now is None:
		now = now_ms()
	totals = {STANDING: 0, SITTING: 0}
	for s in sessions:
		end = s["end_time"] if s["end_time"] is not None else now
		totals[s["state"]] += max(0, end - s["start_time"])
	return {
		"total_standing": totals[STANDING] // 1000,
		"total_sitting": totals[SITTING] // 1000,
	}

def get_period_stats(period="day", now=None, sessions=None):
	"""
	Totals for `period`, current session included once.

	Reads the log unless an already loaded `sessions` list is passed.
	"""
	if now is None:
		now = now_ms()
	if sessions is None:
		sessions = session_repo.get_sessions()
	sessions = get_sessions_for_period(sessions, period, now)
	return calculate_stats(sessions, now)

def daily_breakdown(sessions, period, now=None):
	"""
	Per local calendar day of the window, (date, standing_sec, sitting_sec).

	Sessions that cross midnight are split between the days they cover.
	Days are listed oldest first, including days with no data.
	"""
	if now is None:
		now = now_ms()
	clipped = get_sessions_for_period(sessions, period, now)
	first_day = ms_to_local(period_start(now, period)).date()
	last_day = ms_to_local(now).date()
	days = []
	d = first_day
	while d <= last_day:
		days.append(d)
		d += timedelta(days=1)
	totals = {day: {STANDING: 0, SITTING: 0} for day in days}

	for s in clipped:
		start = s["start_time"]
		end = s["end_time"] if s["end_time"] is not None else now
		while start < end:
			boundary = min(end, next_local_midnight(start))
			day = ms_to_local(start).date()
			if day in totals:
				totals[day][s["state"]] += boundary - start
			start = boundary

	return [(day, totals[day][STANDING] // 1000, totals[day][SITTING] // 1000) for day in days]
