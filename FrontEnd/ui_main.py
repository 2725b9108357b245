import logging
from pathlib import Path
from PySide6.QtWidgets import (
	QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
	QTableWidget, QTableWidgetItem, QSizePolicy, QComboBox, QSystemTrayIcon, QMenu
)
from PySide6.QtGui import QIcon, QPixmap, QPainter, QColor, QAction
from PySide6.QtCore import Qt
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure
from BackEnd.services.desk_service import DeskService
from BackEnd.services import stats_service
from BackEnd.repos import session_repo
from BackEnd.repos.session_repo import STANDING, SITTING
from BackEnd.core.clock import fmt_hms, format_duration, ms_to_local
from FrontEnd.components.stats_footer import StatsFooter
from FrontEnd.components.status_text import menu_title, status_line
from FrontEnd.styles.design_tokens import COLORS, STATE_LABELS

QSS_PATH = Path(__file__).parent / "styles" / "desktracker.qss"
PERIOD_TITLES = {"day": "Today", "week": "Last 7 Days", "month": "This Month"}

logger = logging.getLogger(__name__)


def _state_icon(state):
	"""Round dot in the posture colour, drawn at runtime so no asset files are needed."""
	color = {STANDING: COLORS['standing'], SITTING: COLORS['sitting']}.get(state, COLORS['idle'])
	pixmap = QPixmap(32, 32)
	pixmap.fill(Qt.transparent)
	painter = QPainter(pixmap)
	painter.setRenderHint(QPainter.Antialiasing)
	painter.setBrush(QColor(color))
	painter.setPen(Qt.PenStyle.NoPen)
	painter.drawEllipse(4, 4, 24, 24)
	painter.end()
	return QIcon(pixmap)


class MainWindow(QMainWindow):
	def __init__(self):
		super().__init__()
		self.setWindowTitle("Desk Tracker")
		self.resize(900, 700)

		with open(QSS_PATH, 'r', encoding='utf-8') as f:
			self.setStyleSheet(f.read())

		self.desk_service = DeskService()

		container = QWidget()
		layout = QVBoxLayout()
		layout.setContentsMargins(32, 32, 32, 32)
		layout.setSpacing(16)
		layout.addWidget(self._build_status_card())
		layout.addLayout(self._build_period_row())
		self.stats_footer = StatsFooter(PERIOD_TITLES[self.desk_service.period])
		layout.addWidget(self.stats_footer)
		layout.addWidget(self._build_history())
		container.setLayout(layout)
		self.setCentralWidget(container)

		self._build_tray()

		self.desk_service.tick.connect(self._on_tick)
		self.desk_service.state_changed.connect(self._on_state)
		self.desk_service.stats_changed.connect(self._on_stats)
		self.desk_service.error.connect(self._on_error)

		self._set_buttons(None)
		self.desk_service.start()

	def closeEvent(self, event):
		# The ongoing session stays open on close; elapsed time is derived
		# from its start timestamp on next launch.
		self.desk_service.stop()
		if getattr(self, 'tray', None) is not None:
			self.tray.hide()
		super().closeEvent(event)

	# --- layout ---

	def _build_status_card(self):
		card = QWidget()
		card.setObjectName("StatusCard")
		card_layout = QVBoxLayout()
		card_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
		card.setLayout(card_layout)

		self.state_label = QLabel(STATE_LABELS[None])
		self.state_label.setObjectName("StateLabel")
		self.state_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
		self.timer_label = QLabel("00:00:00")
		self.timer_label.setObjectName("TimerLabel")
		self.timer_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
		card_layout.addWidget(self.state_label)
		card_layout.addWidget(self.timer_label)

		btn_layout = QHBoxLayout()
		btn_layout.setSpacing(24)
		self.stand_btn = QPushButton("Start Standing")
		self.stand_btn.setObjectName("StandBtn")
		self.sit_btn = QPushButton("Start Sitting")
		self.sit_btn.setObjectName("SitBtn")
		self.end_btn = QPushButton("End Session")
		self.end_btn.setObjectName("EndBtn")
		for btn in (self.stand_btn, self.sit_btn, self.end_btn):
			btn.setMinimumHeight(56)
			btn_layout.addWidget(btn)
		card_layout.addSpacing(16)
		card_layout.addLayout(btn_layout)

		self.stand_btn.clicked.connect(lambda: self._toggle(STANDING))
		self.sit_btn.clicked.connect(lambda: self._toggle(SITTING))
		self.end_btn.clicked.connect(self._end)
		return card

	def _build_period_row(self):
		row = QHBoxLayout()
		row.addStretch()
		row.addWidget(QLabel("Show stats for:"))
		self.period_combo = QComboBox()
		self.period_combo.addItems(["Day", "Week", "Month"])
		self.period_combo.setCurrentIndex(0)
		self.period_combo.setMinimumWidth(140)
		self.period_combo.currentTextChanged.connect(self._on_period_changed)
		row.addWidget(self.period_combo)
		return row

	def _build_history(self):
		w = QWidget()
		layout = QVBoxLayout()
		layout.setContentsMargins(0, 0, 0, 0)

		self.figure = Figure(figsize=(5, 2.5))
		self.canvas = FigureCanvas(self.figure)
		layout.addWidget(self.canvas)

		self.history_table = QTableWidget()
		self.history_table.setColumnCount(5)
		self.history_table.setHorizontalHeaderLabels(["Date", "Start", "End", "State", "Duration"])
		self.history_table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
		self.history_table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
		self.history_table.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
		layout.addWidget(self.history_table)
		w.setLayout(layout)
		return w

	def _build_tray(self):
		self.tray = None
		if not QSystemTrayIcon.isSystemTrayAvailable():
			logger.info("System tray not available; running window-only")
			return
		self.tray = QSystemTrayIcon(_state_icon(None), self)
		self.tray_menu = QMenu()
		self.tray_status = QAction(STATE_LABELS[None], self.tray_menu)
		self.tray_status.setEnabled(False)
		self.tray_stand = QAction("Start Standing", self.tray_menu)
		self.tray_sit = QAction("Start Sitting", self.tray_menu)
		self.tray_show = QAction("Show Window", self.tray_menu)
		self.tray_stand.triggered.connect(lambda: self._toggle(STANDING))
		self.tray_sit.triggered.connect(lambda: self._toggle(SITTING))
		self.tray_show.triggered.connect(self.showNormal)
		self.tray_menu.addAction(self.tray_status)
		self.tray_menu.addSeparator()
		self.tray_menu.addAction(self.tray_stand)
		self.tray_menu.addAction(self.tray_sit)
		self.tray_menu.addSeparator()
		self.tray_menu.addAction(self.tray_show)
		self.tray.setContextMenu(self.tray_menu)
		self.tray.setToolTip(menu_title(None, 0))
		self.tray.show()

	# --- actions ---

	def _toggle(self, new_state):
		if self.desk_service.toggle(new_state):
			self._notify(f"Started {STATE_LABELS[new_state]}")

	def _end(self):
		self.desk_service.end()

	def _notify(self, text):
		if self.tray is not None:
			self.tray.showMessage("Desk Tracker", text, QSystemTrayIcon.MessageIcon.Information, 2000)
		self.statusBar().showMessage(text, 3000)

	# --- signal handlers ---

	def _on_tick(self, elapsed):
		state = self.desk_service.state
		self.timer_label.setText(fmt_hms(elapsed))
		title = menu_title(state, elapsed)
		self.setWindowTitle(f"Desk Tracker  {title}")
		if self.tray is not None:
			self.tray.setToolTip(title)
			self.tray_status.setText(status_line(state, elapsed))

	def _on_state(self, state):
		state = None if state == 'idle' else state
		self.state_label.setText(STATE_LABELS[state])
		if state is None:
			self.timer_label.setText("00:00:00")
		self._set_buttons(state)
		if self.tray is not None:
			self.tray.setIcon(_state_icon(state))

	def _on_stats(self, stats):
		self.stats_footer.set_stats(stats)
		self._update_bar_chart()
		self._refresh_history()

	def _on_error(self, message):
		self._notify(message)

	def _on_period_changed(self, text):
		period = text.lower()
		self.stats_footer.set_title(PERIOD_TITLES[period])
		self.desk_service.set_period(period)

	def _set_buttons(self, state):
		if state is None:
			self.stand_btn.setText("Start Standing")
			self.sit_btn.setText("Start Sitting")
			self.stand_btn.setVisible(True)
			self.sit_btn.setVisible(True)
			self.end_btn.setEnabled(False)
		else:
			# Only offer the opposite posture while tracking
			self.stand_btn.setText("Switch to Standing")
			self.sit_btn.setText("Switch to Sitting")
			self.stand_btn.setVisible(state == SITTING)
			self.sit_btn.setVisible(state == STANDING)
			self.end_btn.setEnabled(True)
		if self.tray is not None:
			self.tray_stand.setText(self.stand_btn.text())
			self.tray_sit.setText(self.sit_btn.text())
			self.tray_stand.setVisible(self.stand_btn.isVisibleTo(self))
			self.tray_sit.setVisible(self.sit_btn.isVisibleTo(self))

	# --- history ---

	def _update_bar_chart(self):
		period = self.desk_service.period
		# Same snapshot DeskService computed the stats from
		rows = stats_service.daily_breakdown(
			self.desk_service.sessions, period, self.desk_service.refreshed_at
		)

		if period == "month":
			x = [str(d.day) for d, _, _ in rows]
			xlabel = "Day of Month"
		else:
			x = [d.strftime("%a %d") for d, _, _ in rows]
			xlabel = "Day"
		standing = [s / 3600 for _, s, _ in rows]
		sitting = [s / 3600 for _, _, s in rows]

		self.figure.clear()
		self.figure.patch.set_alpha(0.0)
		ax = self.figure.add_subplot(111)
		ax.set_facecolor(COLORS['chart_bg'])
		ax.bar(x, standing, color=COLORS['standing'], edgecolor=COLORS['standing_edge'], label="Standing")
		ax.bar(x, sitting, bottom=standing, color=COLORS['sitting'], edgecolor=COLORS['sitting_edge'], label="Sitting")
		ax.set_ylabel("Hours", fontsize=12, fontweight='600', color=COLORS['text_strong'])
		ax.set_xlabel(xlabel, fontsize=12, fontweight='600', color=COLORS['text_strong'])
		ax.set_ylim(bottom=0)
		ax.grid(True, axis='y', alpha=0.25, linestyle='--', linewidth=0.8)
		ax.set_axisbelow(True)
		ax.legend(loc='upper left', fontsize=9, frameon=False)
		for spine in ['top', 'right']:
			ax.spines[spine].set_visible(False)
		if len(x) > 15:
			ax.tick_params(axis='x', rotation=45)
		self.figure.tight_layout()
		self.canvas.draw()

	def _refresh_history(self):
		now = self.desk_service.refreshed_at
		sessions = stats_service.get_sessions_for_period(
			self.desk_service.sessions, self.desk_service.period, now
		)
		sessions.reverse()
		self.history_table.setRowCount(len(sessions))
		for row, sess in enumerate(sessions):
			start = ms_to_local(sess["start_time"])
			end = ms_to_local(sess["end_time"]) if sess["end_time"] is not None else None
			self.history_table.setItem(row, 0, QTableWidgetItem(start.date().isoformat()))
			self.history_table.setItem(row, 1, QTableWidgetItem(start.strftime("%H:%M")))
			self.history_table.setItem(row, 2, QTableWidgetItem(end.strftime("%H:%M") if end else "ongoing"))
			self.history_table.setItem(row, 3, QTableWidgetItem(STATE_LABELS[sess["state"]]))
			dur = session_repo.session_duration_seconds(sess, now)
			self.history_table.setItem(row, 4, QTableWidgetItem(format_duration(dur)))
