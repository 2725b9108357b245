"""Logging configuration for the desk tracker.

Call setup_logging() once at application startup (app.py or a script).
Modules get their logger with logging.getLogger(__name__).

Usage:
	from BackEnd.core.logging_config import setup_logging

	setup_logging()                          # console only
	setup_logging(log_file=paths.log_path()) # console + file
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def level_from_env(default: int = logging.INFO) -> int:
	"""Read DESK_TRACKER_LOG_LEVEL (e.g. 'DEBUG'); fall back to `default`."""
	name = os.environ.get("DESK_TRACKER_LOG_LEVEL", "").strip().upper()
	if not name:
		return default
	level = logging.getLevelName(name)
	return level if isinstance(level, int) else default


def setup_logging(
	level: Optional[int] = None,
	log_file: Optional[Union[str, Path]] = None,
	log_format: str = DEFAULT_FORMAT,
	date_format: str = DEFAULT_DATE_FORMAT,
) -> logging.Logger:
	"""Configure the root logger.

	Args:
		level: Logging level. None reads DESK_TRACKER_LOG_LEVEL (default INFO).
		log_file: Optional path to a log file. If provided, logs go to both
			console and file.
		log_format: Format string for all handlers.
		date_format: Date format string for all handlers.

	Returns:
		The configured root logger.
	"""
	if level is None:
		level = level_from_env()

	root_logger = logging.getLogger()
	root_logger.setLevel(level)

	# Clear any existing handlers to avoid duplicates
	root_logger.handlers.clear()

	formatter = logging.Formatter(log_format, datefmt=date_format)

	console_handler = logging.StreamHandler(sys.stdout)
	console_handler.setLevel(level)
	console_handler.setFormatter(formatter)
	root_logger.addHandler(console_handler)

	if log_file is not None:
		log_path = Path(log_file)
		log_path.parent.mkdir(parents=True, exist_ok=True)

		file_handler = logging.FileHandler(log_path, encoding="utf-8")
		file_handler.setLevel(level)
		file_handler.setFormatter(formatter)
		root_logger.addHandler(file_handler)

		root_logger.info("Logging to file: %s", log_path)

	return root_logger
