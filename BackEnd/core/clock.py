import time
from datetime import datetime, timedelta, timezone

PERIODS = ("day", "week", "month")

def utc_now_iso():
	"""Return current UTC time as ISO8601 string (no microseconds)."""
	return datetime.now(timezone.utc).replace(microsecond=0).isoformat()

def now_ms():
	"""Return current epoch time in milliseconds."""
	return int(time.time() * 1000)

def ms_to_local(ms):
	"""Convert epoch milliseconds to a naive local datetime."""
	return datetime.fromtimestamp(ms / 1000)

def local_to_ms(dt):
	"""Convert a naive local datetime to epoch milliseconds."""
	return int(dt.timestamp() * 1000)

def fmt_hms(seconds: int) -> str:
	"""Format seconds as HH:MM:SS."""
	seconds = max(0, int(seconds))
	h = seconds // 3600
	m = (seconds % 3600) // 60
	s = seconds % 60
	return f"{h:02}:{m:02}:{s:02}"

def format_duration(seconds: int) -> str:
	"""Format seconds as '1h 5m', or '5m' under an hour. Seconds are dropped."""
	seconds = max(0, int(seconds))
	h = seconds // 3600
	m = (seconds % 3600) // 60
	if h > 0:
		return f"{h}h {m}m"
	return f"{m}m"

def period_start(now: int, period: str) -> int:
	"""
	Return the start of the stats window for `period`, in epoch ms.

	day   -> local midnight today
	week  -> rolling 7 days ending at `now`
	month -> local midnight on the 1st of the current month
	"""
	if period == "day":
		local = ms_to_local(now)
		return local_to_ms(local.replace(hour=0, minute=0, second=0, microsecond=0))
	if period == "week":
		return now - int(timedelta(days=7).total_seconds() * 1000)
	if period == "month":
		local = ms_to_local(now)
		return local_to_ms(local.replace(day=1, hour=0, minute=0, second=0, microsecond=0))
	raise ValueError(f"Unknown period: {period!r}")

def next_local_midnight(ms):
	"""Return epoch ms of the local midnight following `ms`."""
	local = ms_to_local(ms)
	midnight = local.replace(hour=0, minute=0, second=0, microsecond=0) + timedelta(days=1)
	return local_to_ms(midnight)
