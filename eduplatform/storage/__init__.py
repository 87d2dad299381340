"""
EduPlatform Storage - store interfaces and backends.

This module provides:
- Store interfaces, one per entity
- In-memory backend (tests, throwaway sessions)
- SQLite backend (persistent, single file)
"""

from .base import (
    AccountStore,
    CourseStore,
    EnrollmentStore,
    ProgressStore,
)

from .memory import (
    MemoryAccountStore,
    MemoryCourseStore,
    MemoryEnrollmentStore,
    MemoryProgressStore,
)

from .sqlite import (
    SQLiteBackend,
    SQLiteAccountStore,
    SQLiteCourseStore,
    SQLiteEnrollmentStore,
    SQLiteProgressStore,
)

__all__ = [
    # Interfaces
    "AccountStore",
    "CourseStore",
    "EnrollmentStore",
    "ProgressStore",
    # Memory
    "MemoryAccountStore",
    "MemoryCourseStore",
    "MemoryEnrollmentStore",
    "MemoryProgressStore",
    # SQLite
    "SQLiteBackend",
    "SQLiteAccountStore",
    "SQLiteCourseStore",
    "SQLiteEnrollmentStore",
    "SQLiteProgressStore",
]
