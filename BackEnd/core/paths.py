import os
from pathlib import Path

APP_NAME = "DeskTracker"

def user_data_dir(app_name=APP_NAME):
	"""Return per-user data dir (Windows/macOS/Linux). DESK_TRACKER_HOME overrides it."""
	override = os.environ.get("DESK_TRACKER_HOME")
	if override:
		path = Path(override)
	else:
		if os.name == "nt":
			base = os.environ.get("LOCALAPPDATA", os.path.expanduser("~\\AppData\\Local"))
		elif os.name == "posix":
			base = os.environ.get("XDG_DATA_HOME", os.path.expanduser("~/.local/share"))
		else:
			base = os.path.expanduser("~")
		path = Path(base) / app_name
	path.mkdir(parents=True, exist_ok=True)
	return path

def db_path():
	"""Return Path to desk.db inside user data dir."""
	return user_data_dir() / "desk.db"

def log_path():
	"""Return Path to desk_tracker.log inside user data dir."""
	return user_data_dir() / "desk_tracker.log"
