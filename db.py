import sqlite3
from datetime import datetime, timezone

from constants import DEFAULT_DB_PATH


class DatabaseManager:
    """
    Key/value blob store backed by a single SQLite table.

    Each value is written whole, so readers see either the previous blob or
    the new one.
    """

    def __init__(self, db_path=DEFAULT_DB_PATH):
        self.db_path = db_path
        self.create_tables()

    def get_connection(self):
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def create_tables(self):
        with self.get_connection() as conn:
            conn.execute('''
                CREATE TABLE IF NOT EXISTS blobs (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT
                )
            ''')

    def get_item(self, key):
        with self.get_connection() as conn:
            row = conn.execute("SELECT value FROM blobs WHERE key = ?", (key,)).fetchone()
            if row is None:
                return None
            return row[0]

    def set_item(self, key, value):
        now_iso = datetime.now(timezone.utc).isoformat()
        with self.get_connection() as conn:
            conn.execute(
                """
                INSERT INTO blobs (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value, now_iso),
            )

    def remove_item(self, key):
        with self.get_connection() as conn:
            conn.execute("DELETE FROM blobs WHERE key = ?", (key,))

    def keys(self):
        with self.get_connection() as conn:
            return [row[0] for row in conn.execute("SELECT key FROM blobs ORDER BY key")]
