from BackEnd.core.clock import format_duration
from FrontEnd.styles.design_tokens import STATE_SYMBOLS, STATE_LABELS

def menu_title(state, elapsed):
	"""Compact status shown in the tray tooltip, e.g. '↑ 1h 5m'."""
	if state is None:
		return f"{STATE_SYMBOLS[None]} {STATE_LABELS[None]}"
	return f"{STATE_SYMBOLS[state]} {format_duration(elapsed)}"

def status_line(state, elapsed):
	"""First tray menu entry: posture plus elapsed time, or a hint to start."""
	if state is None:
		return "Start tracking"
	return f"{STATE_LABELS[state]} - Elapsed: {format_duration(elapsed)}"
