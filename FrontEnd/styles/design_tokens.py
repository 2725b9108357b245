# Design tokens for Desk Tracker UI

COLORS = {
	'text_strong': '#133A62',
	'chart_bg': '#F7FAFC',
	'standing': '#22C55E',
	'standing_edge': '#16A34A',
	'sitting': '#3B82F6',
	'sitting_edge': '#2563EB',
	'idle': '#94A3B8',
	'footer_bg': '#E7F0FF',
	'footer_text': '#133A62',
}

FONTS = {
	'family': 'Inter, Manrope, Arial, sans-serif',
	'text': 16,
	'text_weight': 500,
	'text_strong': 22,
}

STATE_SYMBOLS = {
	'standing': '↑',
	'sitting': '↓',
	None: '—',
}

STATE_LABELS = {
	'standing': 'Standing',
	'sitting': 'Sitting',
	None: 'Not Tracking',
}
