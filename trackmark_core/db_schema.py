import logging
import sqlite3
from datetime import datetime, timezone


def connect_db(db_path):
    """ Gets the connection with the database and returns it """
    conn = sqlite3.connect(str(db_path))
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_db(conn):
    """ Creates the key-value table if not already exists """
    cur = conn.cursor()

    cur.execute("""
    CREATE TABLE IF NOT EXISTS kv_store (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at TEXT NOT NULL
    );
    """)

    conn.commit()
    logging.debug("✅ Database initialized.")


def get_value(conn, key: str) -> str | None:
    """ Returns the raw text stored under key or None """
    row = conn.execute("SELECT value FROM kv_store WHERE key = ? LIMIT 1", (key,)).fetchone()
    return row[0] if row else None


def set_value(conn, key: str, value: str) -> None:
    """ Inserts or overwrites the value stored under key """
    stamp = datetime.now(timezone.utc).isoformat(sep=' ', timespec='seconds')
    conn.execute('''INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at''',
                 (key, value, stamp))
    conn.commit()


def delete_value(conn, key: str) -> None:
    conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
    conn.commit()

