"""
String key/value persistence backed by a single SQLite table.

Every sqlite3 failure is re-raised as PersistenceError so callers only
deal with one error type for "store unreachable or broken".
"""

import logging
import sqlite3
from pathlib import Path
from BackEnd.core.paths import db_path
from BackEnd.core.clock import utc_now_iso

SCHEMA_PATH = Path(__file__).parent.parent.parent / "SQL" / "schema.sql"

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
	"""The store is unreachable or returned malformed data."""


def connect():
	"""Open SQLite connection and ensure schema is applied."""
	dbfile = None
	try:
		dbfile = db_path()
		conn = sqlite3.connect(dbfile)
		conn.row_factory = sqlite3.Row
		with open(SCHEMA_PATH, encoding="utf-8") as f:
			conn.executescript(f.read())
	except (sqlite3.Error, OSError) as e:
		raise PersistenceError(f"Cannot open store at {dbfile}: {e}") from e
	return conn

def get_item(key):
	"""Return the stored string for `key`, or None if the key was never set."""
	conn = connect()
	try:
		cur = conn.execute("SELECT value FROM kv WHERE key=?", (key,))
		row = cur.fetchone()
	except sqlite3.Error as e:
		raise PersistenceError(f"Cannot read {key!r}: {e}") from e
	finally:
		conn.close()
	return row["value"] if row else None

def set_item(key, value):
	"""Insert or replace the string stored under `key`."""
	if not isinstance(value, str):
		raise TypeError("kv_store only stores strings")
	conn = connect()
	try:
		with conn:
			conn.execute(
				"""
				INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)
				ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at
				""",
				(key, value, utc_now_iso())
			)
	except sqlite3.Error as e:
		raise PersistenceError(f"Cannot write {key!r}: {e}") from e
	finally:
		conn.close()
	logger.debug("Stored %d chars under %r", len(value), key)

def remove_item(key):
	"""Delete `key`. Returns True if something was removed."""
	conn = connect()
	try:
		with conn:
			cur = conn.execute("DELETE FROM kv WHERE key=?", (key,))
	except sqlite3.Error as e:
		raise PersistenceError(f"Cannot remove {key!r}: {e}") from e
	finally:
		conn.close()
	return cur.rowcount > 0
