import atexit
import json
import logging
import sqlite3
import threading
from typing import Any, Dict, List

from .config import load_settings
from .exceptions import PersistenceError
from .schemas import Brief

logger = logging.getLogger(__name__)

JSON_COLUMNS = ("news", "techStack", "jobSignals", "techStackDetail", "keyInsights")

COLUMNS = (
    "companyName", "website", "userIntent", "summary", "news", "techStack",
    "pitchAngle", "subjectLine", "whatNotToPitch", "signalTag", "jobSignals",
    "techStackDetail", "keyInsights", "confidenceNotes", "companyLogo", "companyDomain",
)

SCHEMA = """
CREATE TABLE IF NOT EXISTS briefs (
    id TEXT PRIMARY KEY DEFAULT (lower(hex(randomblob(16)))),
    createdAt TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
    companyName TEXT NOT NULL,
    website TEXT,
    userIntent TEXT NOT NULL,
    summary TEXT NOT NULL,
    news TEXT NOT NULL DEFAULT '[]',
    techStack TEXT NOT NULL DEFAULT '[]',
    pitchAngle TEXT NOT NULL,
    subjectLine TEXT NOT NULL,
    whatNotToPitch TEXT NOT NULL,
    signalTag TEXT NOT NULL,
    jobSignals TEXT NOT NULL DEFAULT '[]',
    techStackDetail TEXT NOT NULL DEFAULT '[]',
    keyInsights TEXT NOT NULL DEFAULT '[]',
    confidenceNotes TEXT NOT NULL DEFAULT '',
    companyLogo TEXT NOT NULL DEFAULT '',
    companyDomain TEXT NOT NULL DEFAULT ''
)
"""


def init_db(connection: sqlite3.Connection) -> sqlite3.Connection:
    connection.row_factory = sqlite3.Row
    connection.execute(SCHEMA)
    connection.commit()
    return connection


conn = init_db(sqlite3.connect(load_settings().db_path, check_same_thread=False))
atexit.register(conn.close)
# One shared connection; a rollback must not undo another thread's insert
lock = threading.Lock()


def _to_brief(row: sqlite3.Row) -> Brief:
    record: Dict[str, Any] = dict(row)
    for column in JSON_COLUMNS:
        record[column] = json.loads(record[column] or "[]")
    return Brief.model_validate(record)


def save_brief(record: Dict[str, Any]) -> Brief:
    """Insert one brief and return the stored row."""
    values = [
        json.dumps(record.get(column, [])) if column in JSON_COLUMNS else record.get(column)
        for column in COLUMNS
    ]
    placeholders = ", ".join("?" for _ in COLUMNS)
    try:
        with lock, conn:
            cursor = conn.execute(
                f"INSERT INTO briefs ({', '.join(COLUMNS)}) VALUES ({placeholders})", values
            )
            row = conn.execute("SELECT * FROM briefs WHERE rowid = ?", (cursor.lastrowid,)).fetchone()
    except sqlite3.Error as e:
        logger.error(f"Database error: {e}")
        raise PersistenceError(str(e)) from e
    return _to_brief(row)


def list_briefs() -> List[Brief]:
    """All stored briefs, newest first."""
    try:
        with lock:
            rows = conn.execute("SELECT * FROM briefs ORDER BY createdAt DESC, rowid DESC").fetchall()
    except sqlite3.Error as e:
        raise PersistenceError(str(e)) from e
    return [_to_brief(row) for row in rows]
