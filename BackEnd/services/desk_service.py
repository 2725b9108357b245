import logging
import os
from PySide6.QtCore import QObject, Signal, QTimer
from BackEnd.core.clock import now_ms
from BackEnd.repos import session_repo
from BackEnd.repos.kv_store import PersistenceError
from BackEnd.services import stats_service

DEFAULT_REFRESH_MS = 10_000

logger = logging.getLogger(__name__)


def refresh_interval_ms():
	"""Polling interval from DESK_TRACKER_REFRESH_MS, default 10s."""
	raw = os.environ.get("DESK_TRACKER_REFRESH_MS")
	try:
		value = int(raw) if raw else DEFAULT_REFRESH_MS
	except ValueError:
		logger.warning("Ignoring invalid DESK_TRACKER_REFRESH_MS=%r", raw)
		value = DEFAULT_REFRESH_MS
	return max(1000, value)


class DeskService(QObject):
	"""Polls the session log for the UI and runs toggle/end on user action."""

	tick = Signal(int)  # elapsed seconds of the ongoing session
	state_changed = Signal(str)  # 'standing', 'sitting' or 'idle'
	stats_changed = Signal(dict)  # {'total_standing': s, 'total_sitting': s}
	error = Signal(str)  # user-visible message

	def __init__(self, period="day", interval_ms=None):
		super().__init__()
		self.state = None
		self.elapsed_sec = 0
		self.period = period
		self.stats = {"total_standing": 0, "total_sitting": 0}
		self.sessions = []
		self.refreshed_at = None
		self._timer = QTimer()
		self._timer.setInterval(interval_ms or refresh_interval_ms())
		self._timer.timeout.connect(self.refresh)

	def start(self):
		self.refresh()
		self._timer.start()

	def stop(self):
		self._timer.stop()

	def set_period(self, period):
		if period == self.period:
			return
		self.period = period
		self.refresh()

	def refresh(self):
		"""Read the log once and derive state, elapsed time and stats from it. Elapsed time always comes from timestamps."""
		now = now_ms()
		try:
			sessions = session_repo.get_sessions()
		except PersistenceError as e:
			self._report(e)
			return False
		current = session_repo.find_ongoing(sessions)
		state = current["state"] if current else None
		elapsed = session_repo.session_duration_seconds(current, now) if current else 0
		stats = stats_service.get_period_stats(self.period, now, sessions)
		self.sessions = sessions
		self.refreshed_at = now
		if state != self.state:
			self.state = state
			self.state_changed.emit(state or 'idle')
		self.elapsed_sec = elapsed
		self.tick.emit(elapsed)
		self.stats = stats
		self.stats_changed.emit(stats)
		return True

	def toggle(self, new_state=None):
		"""Switch posture. Without an argument, switch to the opposite of the current one."""
		if new_state is None:
			if self.state is None:
				raise ValueError("Not tracking; pass the state to start with")
			new_state = session_repo.opposite_state(self.state)
		try:
			session_repo.toggle(new_state, now_ms())
		except PersistenceError as e:
			self._report(e)
			return False
		self.refresh()
		return True

	def end(self):
		"""End the ongoing session, if any."""
		try:
			session_repo.end_current_session(now_ms())
		except PersistenceError as e:
			self._report(e)
			return False
		self.refresh()
		return True

	def _report(self, exc):
		logger.exception("Session log unavailable")
		self.error.emit(f"Error: {exc}")
