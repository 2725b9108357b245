from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel
from BackEnd.core.clock import format_duration
from FrontEnd.styles.design_tokens import COLORS, FONTS

class StatsFooter(QWidget):
	"""Standing / Sitting / Total line under the status card."""

	def __init__(self, title="Today"):
		super().__init__()
		layout = QHBoxLayout()
		self.title = QLabel(title)
		self.title.setObjectName("StatsTitle")
		self.title.setStyleSheet(f"font-size: {FONTS['text_strong']}px; font-weight: 600;")
		self.standing = QLabel()
		self.sitting = QLabel()
		self.total = QLabel()
		self.standing.setStyleSheet(f"color: {COLORS['standing_edge']};")
		self.sitting.setStyleSheet(f"color: {COLORS['sitting_edge']};")
		layout.addWidget(self.title)
		layout.addStretch()
		for lbl in (self.standing, self.sitting, self.total):
			layout.addWidget(lbl)
		self.setLayout(layout)
		self.setStyleSheet(f"background: {COLORS['footer_bg']}; border-radius: 16px; padding: 8px 24px; color: {COLORS['footer_text']}; font-family: {FONTS['family']}; font-size: {FONTS['text']}px; font-weight: {FONTS['text_weight']};")
		self.set_stats({"total_standing": 0, "total_sitting": 0})

	def set_title(self, text):
		self.title.setText(text)

	def set_stats(self, stats):
		standing = stats.get("total_standing", 0)
		sitting = stats.get("total_sitting", 0)
		self.standing.setText(f"Standing {format_duration(standing)}")
		self.sitting.setText(f"Sitting {format_duration(sitting)}")
		self.total.setText(f"Total {format_duration(standing + sitting)}")
