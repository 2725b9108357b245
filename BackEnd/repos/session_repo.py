"""
Persisted log of standing/sitting sessions.

The whole log lives under one key of the kv store as a JSON array of
{"state", "startTime", "endTime"} records (epoch ms, endTime null while
the session is ongoing). In memory a session is a dict:
{"state": str, "start_time": int, "end_time": int | None}.

At most one session is ongoing at any time; it is always the last one.
"""

import json
import logging
from BackEnd.core.clock import now_ms
from BackEnd.repos import kv_store
from BackEnd.repos.kv_store import PersistenceError

STANDING = "standing"
SITTING = "sitting"
DESK_STATES = (STANDING, SITTING)

SESSIONS_KEY = "standing-desk-sessions"

logger = logging.getLogger(__name__)


def opposite_state(state):
	"""Return the other posture."""
	if state == STANDING:
		return SITTING
	if state == SITTING:
		return STANDING
	raise ValueError(f"Unknown desk state: {state!r}")

def _check_state(state):
	if state not in DESK_STATES:
		raise ValueError(f"Unknown desk state: {state!r}")

def session_duration_seconds(session, now=None):
	"""Seconds covered by `session`; ongoing sessions run until `now`. Never negative."""
	end = session["end_time"]
	if end is None:
		end = now_ms() if now is None else now
	return max(0, end - session["start_time"]) // 1000

# --- serialization ---

def serialize_sessions(sessions):
	"""Encode a session list for the kv store."""
	return json.dumps([
		{"state": s["state"], "startTime": s["start_time"], "endTime": s["end_time"]}
		for s in sessions
	])

def _is_timestamp(value):
	return isinstance(value, int) and not isinstance(value, bool)

def deserialize_sessions(raw):
	"""
	Decode the stored session log.

	Any malformed content fails the whole read with PersistenceError; a
	corrupted log is never returned partially.
	"""
	try:
		records = json.loads(raw)
	except (TypeError, ValueError) as e:
		raise PersistenceError(f"Session log is not valid JSON: {e}") from e
	if not isinstance(records, list):
		raise PersistenceError("Session log must be a JSON array")

	sessions = []
	for i, rec in enumerate(records):
		if not isinstance(rec, dict):
			raise PersistenceError(f"Session #{i} is not an object")
		state = rec.get("state")
		start = rec.get("startTime")
		end = rec.get("endTime")
		if state not in DESK_STATES:
			raise PersistenceError(f"Session #{i} has unknown state {state!r}")
		if not _is_timestamp(start):
			raise PersistenceError(f"Session #{i} has invalid startTime {start!r}")
		if end is not None and not _is_timestamp(end):
			raise PersistenceError(f"Session #{i} has invalid endTime {end!r}")
		sessions.append({"state": state, "start_time": start, "end_time": end})

	ongoing = [s for s in sessions if s["end_time"] is None]
	if len(ongoing) > 1:
		raise PersistenceError(f"Session log has {len(ongoing)} ongoing sessions")
	if ongoing and sessions[-1]["end_time"] is not None:
		raise PersistenceError("Ongoing session is not the last one in the log")
	for i, (prev, nxt) in enumerate(zip(sessions, sessions[1:]), start=1):
		if nxt["start_time"] < prev["start_time"]:
			raise PersistenceError(f"Session #{i} starts before the session preceding it")
		if prev["end_time"] > nxt["start_time"]:
			raise PersistenceError(f"Session #{i} overlaps the session preceding it")
	return sessions

def _load():
	raw = kv_store.get_item(SESSIONS_KEY)
	if raw is None:
		return []
	return deserialize_sessions(raw)

def _save(sessions):
	kv_store.set_item(SESSIONS_KEY, serialize_sessions(sessions))

def find_ongoing(sessions):
	"""Return the ongoing session in an already loaded log, or None."""
	for s in reversed(sessions):
		if s["end_time"] is None:
			return s
	return None

def _close(session, timestamp):
	"""Set end_time, clamped so the duration is never negative."""
	if timestamp < session["start_time"]:
		logger.warning(
			"End time %d precedes start time %d; clamping %s session to zero length",
			timestamp, session["start_time"], session["state"]
		)
		timestamp = session["start_time"]
	session["end_time"] = timestamp
	return session

def _append(sessions, new_state, timestamp):
	if sessions:
		last_end = sessions[-1]["end_time"]
		if last_end is not None and timestamp < last_end:
			logger.warning("Start time %d precedes previous end %d; moving it up", timestamp, last_end)
			timestamp = last_end
	session = {"state": new_state, "start_time": timestamp, "end_time": None}
	sessions.append(session)
	return session

# --- public API ---

def get_sessions():
	"""Return all sessions ordered by start_time ascending."""
	# Order is checked on load
	return _load()

def get_current_session():
	"""Return the ongoing session dict, or None."""
	return find_ongoing(_load())

def get_current_state():
	"""Return {"state": 'standing' | 'sitting' | None}."""
	current = get_current_session()
	return {"state": current["state"] if current else None}

def set_state(new_state, timestamp):
	"""
	Open a new ongoing session with `new_state` starting at `timestamp`.

	Callers are expected to close the ongoing session first (or use
	toggle()). If one is still open it is closed at `timestamp` so the log
	never holds two ongoing sessions.
	"""
	_check_state(new_state)
	sessions = _load()
	ongoing = find_ongoing(sessions)
	if ongoing is not None:
		logger.warning("set_state called with an ongoing %s session; closing it first", ongoing["state"])
		_close(ongoing, timestamp)
	session = _append(sessions, new_state, timestamp)
	_save(sessions)
	logger.info("Started %s session at %d", new_state, session["start_time"])
	return dict(session)

def end_current_session(timestamp=None):
	"""Close the ongoing session at `timestamp` (default now). No-op if nothing is ongoing."""
	sessions = _load()
	ongoing = find_ongoing(sessions)
	if ongoing is None:
		return None
	_close(ongoing, now_ms() if timestamp is None else timestamp)
	_save(sessions)
	logger.info("Ended %s session after %ds", ongoing["state"], session_duration_seconds(ongoing))
	return dict(ongoing)

def toggle(new_state, now=None):
	"""
	Close the ongoing session and open `new_state` in a single write.

	The new session starts exactly where the closed one ends.
	"""
	_check_state(new_state)
	if now is None:
		now = now_ms()
	sessions = _load()
	ongoing = find_ongoing(sessions)
	if ongoing is not None:
		_close(ongoing, now)
		now = ongoing["end_time"]
	session = _append(sessions, new_state, now)
	_save(sessions)
	logger.info("Switched to %s at %d", new_state, session["start_time"])
	return dict(session)

def get_current_session_elapsed_time(now=None):
	"""Seconds since the ongoing session started, or 0 if not tracking."""
	current = get_current_session()
	if current is None:
		return 0
	return session_duration_seconds(current, now)

def clear_sessions():
	"""Remove the whole session log. Used by the reset script only."""
	removed = kv_store.remove_item(SESSIONS_KEY)
	if removed:
		logger.info("Session log cleared")
	return removed
