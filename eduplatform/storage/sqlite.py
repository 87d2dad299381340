"""
SQLite store backend - persists the four logical tables in one file.

Each record is stored as a JSON document next to the columns used for
lookup, so the row layout mirrors the JSON shape the front end sees:
- accounts: one row per account (password material included, never returned)
- courses: one row per course, ordered by insertion
- enrollments: one row per (student_id, course_id)
- progress: completed lesson ids per (student_id, course_id)

Each mutation runs in a single transaction. There is no cross-process
locking; the last writer wins.
"""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Optional

from eduplatform.schemas import Course, Enrollment, StoredAccount

from .base import AccountStore, CourseStore, EnrollmentStore, ProgressStore


logger = logging.getLogger(__name__)

SCHEMA = """
    CREATE TABLE IF NOT EXISTS accounts (
        id TEXT PRIMARY KEY,
        email TEXT NOT NULL UNIQUE,
        data TEXT NOT NULL
    );

    CREATE TABLE IF NOT EXISTS session (
        slot INTEGER PRIMARY KEY CHECK (slot = 0),
        account_id TEXT
    );

    CREATE TABLE IF NOT EXISTS courses (
        id TEXT PRIMARY KEY,
        educator_id TEXT NOT NULL,
        data TEXT NOT NULL
    );

    CREATE TABLE IF NOT EXISTS enrollments (
        student_id TEXT NOT NULL,
        course_id TEXT NOT NULL,
        data TEXT NOT NULL,
        PRIMARY KEY (student_id, course_id)
    );

    CREATE TABLE IF NOT EXISTS progress (
        student_id TEXT NOT NULL,
        course_id TEXT NOT NULL,
        lesson_ids TEXT NOT NULL DEFAULT '[]',
        PRIMARY KEY (student_id, course_id)
    );

    CREATE INDEX IF NOT EXISTS idx_courses_educator
    ON courses(educator_id);
"""


class SQLiteBackend:
    """
    Shared database file for all SQLite stores.

    Each method creates a new connection, like the rest of the code base.
    """

    def __init__(self, db_path: str | Path):
        """
        Initialize the backend and create tables if needed.

        Args:
            db_path: Path to the database file (parent directories are created)
        """
        self.db_path = Path(db_path).expanduser()
        self._ensure_database()

    def _ensure_database(self):
        """Create database and tables if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript(SCHEMA)
            conn.commit()
        finally:
            conn.close()
        logger.debug(f"SQLite store ready at {self.db_path}")

    def get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn


class SQLiteAccountStore(AccountStore):

    def __init__(self, backend: SQLiteBackend):
        self.backend = backend

    def get(self, account_id: str) -> Optional[StoredAccount]:
        conn = self.backend.get_connection()
        try:
            row = conn.execute(
                "SELECT data FROM accounts WHERE id = ?", (account_id,)
            ).fetchone()
            return StoredAccount.model_validate_json(row["data"]) if row else None
        finally:
            conn.close()

    def get_by_email(self, email: str) -> Optional[StoredAccount]:
        conn = self.backend.get_connection()
        try:
            row = conn.execute(
                "SELECT data FROM accounts WHERE email = ?", (email,)
            ).fetchone()
            return StoredAccount.model_validate_json(row["data"]) if row else None
        finally:
            conn.close()

    def add(self, account: StoredAccount):
        conn = self.backend.get_connection()
        try:
            conn.execute(
                "INSERT INTO accounts (id, email, data) VALUES (?, ?, ?)",
                (account.id, account.email, account.model_dump_json())
            )
            conn.commit()
        finally:
            conn.close()

    def list_all(self) -> list[StoredAccount]:
        conn = self.backend.get_connection()
        try:
            cursor = conn.execute("SELECT data FROM accounts ORDER BY rowid")
            return [StoredAccount.model_validate_json(row["data"]) for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_session(self) -> Optional[str]:
        conn = self.backend.get_connection()
        try:
            row = conn.execute("SELECT account_id FROM session WHERE slot = 0").fetchone()
            return row["account_id"] if row else None
        finally:
            conn.close()

    def set_session(self, account_id: Optional[str]):
        conn = self.backend.get_connection()
        try:
            conn.execute(
                """INSERT INTO session (slot, account_id) VALUES (0, ?)
                   ON CONFLICT(slot) DO UPDATE SET account_id = excluded.account_id""",
                (account_id,)
            )
            conn.commit()
        finally:
            conn.close()


class SQLiteCourseStore(CourseStore):

    def __init__(self, backend: SQLiteBackend):
        self.backend = backend

    def get(self, course_id: str) -> Optional[Course]:
        conn = self.backend.get_connection()
        try:
            row = conn.execute(
                "SELECT data FROM courses WHERE id = ?", (course_id,)
            ).fetchone()
            return Course.model_validate_json(row["data"]) if row else None
        finally:
            conn.close()

    def list_all(self) -> list[Course]:
        conn = self.backend.get_connection()
        try:
            cursor = conn.execute("SELECT data FROM courses ORDER BY rowid")
            return [Course.model_validate_json(row["data"]) for row in cursor.fetchall()]
        finally:
            conn.close()

    def save(self, course: Course):
        conn = self.backend.get_connection()
        try:
            # upsert keeps the rowid, so list order stays creation order
            conn.execute(
                """INSERT INTO courses (id, educator_id, data) VALUES (?, ?, ?)
                   ON CONFLICT(id) DO UPDATE SET
                     educator_id = excluded.educator_id,
                     data = excluded.data""",
                (course.id, course.educator_id, course.model_dump_json())
            )
            conn.commit()
        finally:
            conn.close()

    def delete(self, course_id: str) -> bool:
        conn = self.backend.get_connection()
        try:
            cursor = conn.execute("DELETE FROM courses WHERE id = ?", (course_id,))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()


class SQLiteEnrollmentStore(EnrollmentStore):

    def __init__(self, backend: SQLiteBackend):
        self.backend = backend

    def get(self, student_id: str, course_id: str) -> Optional[Enrollment]:
        conn = self.backend.get_connection()
        try:
            row = conn.execute(
                """SELECT data FROM enrollments
                   WHERE student_id = ? AND course_id = ?""",
                (student_id, course_id)
            ).fetchone()
            return Enrollment.model_validate_json(row["data"]) if row else None
        finally:
            conn.close()

    def list_for_student(self, student_id: str) -> list[Enrollment]:
        conn = self.backend.get_connection()
        try:
            cursor = conn.execute(
                """SELECT data FROM enrollments
                   WHERE student_id = ? ORDER BY rowid""",
                (student_id,)
            )
            return [Enrollment.model_validate_json(row["data"]) for row in cursor.fetchall()]
        finally:
            conn.close()

    def save(self, enrollment: Enrollment):
        conn = self.backend.get_connection()
        try:
            conn.execute(
                """INSERT INTO enrollments (student_id, course_id, data) VALUES (?, ?, ?)
                   ON CONFLICT(student_id, course_id) DO UPDATE SET data = excluded.data""",
                (enrollment.student_id, enrollment.course_id, enrollment.model_dump_json())
            )
            conn.commit()
        finally:
            conn.close()


class SQLiteProgressStore(ProgressStore):

    def __init__(self, backend: SQLiteBackend):
        self.backend = backend

    def get_completed(self, student_id: str, course_id: str) -> list[str]:
        conn = self.backend.get_connection()
        try:
            row = conn.execute(
                """SELECT lesson_ids FROM progress
                   WHERE student_id = ? AND course_id = ?""",
                (student_id, course_id)
            ).fetchone()
            return json.loads(row["lesson_ids"]) if row else []
        finally:
            conn.close()

    def set_completed(self, student_id: str, course_id: str, lesson_ids: list[str]):
        conn = self.backend.get_connection()
        try:
            conn.execute(
                """INSERT INTO progress (student_id, course_id, lesson_ids) VALUES (?, ?, ?)
                   ON CONFLICT(student_id, course_id) DO UPDATE SET
                     lesson_ids = excluded.lesson_ids""",
                (student_id, course_id, json.dumps(list(lesson_ids)))
            )
            conn.commit()
        finally:
            conn.close()
