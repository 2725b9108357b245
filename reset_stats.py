"""
Reset all desk tracker stats by clearing the session log.
This will delete all standing/sitting history and reset stats to 0.
"""

import logging
from BackEnd.core.paths import db_path
from BackEnd.core.logging_config import setup_logging
from BackEnd.repos import session_repo
from BackEnd.repos.kv_store import PersistenceError

logger = logging.getLogger(__name__)

def reset_all_stats():
    """Remove the session log after confirmation. Returns True if it was removed."""
    db_file = db_path()
    try:
        sessions = session_repo.get_sessions()
    except PersistenceError as e:
        # A corrupted log can still be cleared
        logger.warning("Session log is unreadable: %s", e)
        sessions = None

    if sessions == []:
        print("No sessions found. Stats are already at 0.")
        return False

    count = "an unreadable" if sessions is None else f"{len(sessions)} session(s) in the"
    print(f"Found {count} log at: {db_file}")
    confirm = input("Are you sure you want to reset all stats? This cannot be undone. (yes/no): ")
    if confirm.lower() not in ['yes', 'y']:
        print("Reset cancelled.")
        return False

    try:
        session_repo.clear_sessions()
    except PersistenceError as e:
        logger.error("Could not clear session log: %s", e)
        print(f"✗ Error clearing session log: {e}")
        return False
    print("✓ Session log cleared!")
    print("✓ All stats have been reset to 0")
    return True

if __name__ == "__main__":
    setup_logging()
    print("=" * 50)
    print("Desk Tracker - Reset All Stats")
    print("=" * 50)
    reset_all_stats()
    print("\nPress Enter to exit...")
    input()
