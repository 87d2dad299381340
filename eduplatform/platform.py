"""
Platform - wires stores and core components together.

Usage:
    settings = load_settings()
    platform = open_platform(settings)
    user = platform.identity.login("sam@example.com", "secret")
"""

import logging
from dataclasses import dataclass

from eduplatform.classroom import (
    CourseRepository,
    Dashboard,
    EnrollmentLedger,
    IdentityStore,
    LessonProgressEngine,
)
from eduplatform.config import Settings
from eduplatform.storage import (
    AccountStore,
    CourseStore,
    EnrollmentStore,
    ProgressStore,
    MemoryAccountStore,
    MemoryCourseStore,
    MemoryEnrollmentStore,
    MemoryProgressStore,
    SQLiteBackend,
    SQLiteAccountStore,
    SQLiteCourseStore,
    SQLiteEnrollmentStore,
    SQLiteProgressStore,
)
from eduplatform.utils.seed_loader import apply_seed, load_seed


logger = logging.getLogger(__name__)


@dataclass
class Platform:
    identity: IdentityStore
    courses: CourseRepository
    ledger: EnrollmentLedger
    engine: LessonProgressEngine
    dashboard: Dashboard


def build_platform(
    accounts: AccountStore,
    courses: CourseStore,
    enrollments: EnrollmentStore,
    progress: ProgressStore,
) -> Platform:
    """Assemble the core over the given stores."""
    repository = CourseRepository(courses)
    ledger = EnrollmentLedger(enrollments, repository)
    return Platform(
        identity=IdentityStore(accounts),
        courses=repository,
        ledger=ledger,
        engine=LessonProgressEngine(repository, ledger, progress),
        dashboard=Dashboard(repository, ledger),
    )


def memory_platform() -> Platform:
    return build_platform(
        MemoryAccountStore(),
        MemoryCourseStore(),
        MemoryEnrollmentStore(),
        MemoryProgressStore(),
    )


def open_platform(settings: Settings) -> Platform:
    """
    Build a platform for the configured backend.

    When a seed file is configured and the store has no accounts yet, the
    seed is applied.
    """
    if settings.storage == "memory":
        platform = memory_platform()
    else:
        backend = SQLiteBackend(settings.db_path)
        platform = build_platform(
            SQLiteAccountStore(backend),
            SQLiteCourseStore(backend),
            SQLiteEnrollmentStore(backend),
            SQLiteProgressStore(backend),
        )
    logger.info(f"Opened {settings.storage} platform")

    if settings.seed_file and not platform.identity.accounts.list_all():
        apply_seed(platform, load_seed(settings.seed_file))
    return platform
