"""
EduPlatform Classroom - runtime components of the course platform.

This module provides:
- IdentityStore: accounts and the active session
- CourseRepository: course CRUD with ownership checks
- EnrollmentLedger: one enrollment per (student, course)
- LessonProgressEngine: lesson synthesis and completion tracking
- Ingestion: uploads to inline content and back
- Dashboard: student and educator views
"""

from .identity import (
    IdentityStore,
    hash_password,
)

from .courses import (
    CourseRepository,
    parse_lesson_count,
)

from .enrollment import (
    EnrollmentLedger,
)

from .progress import (
    LessonProgressEngine,
    CourseProgress,
    synthesize_lessons,
    compute_progress_percent,
    lesson_id_for,
)

from .ingestion import (
    MaterialDownload,
    encode_data_url,
    decode_data_url,
    open_material,
    ingest_material,
    ingest_materials,
    ingest_thumbnail,
    ingest_uploads,
)

from .dashboard import (
    Dashboard,
    StudentView,
    EnrolledCourse,
)

__all__ = [
    # Identity
    "IdentityStore",
    "hash_password",
    # Courses
    "CourseRepository",
    "parse_lesson_count",
    # Enrollment
    "EnrollmentLedger",
    # Progress
    "LessonProgressEngine",
    "CourseProgress",
    "synthesize_lessons",
    "compute_progress_percent",
    "lesson_id_for",
    # Ingestion
    "MaterialDownload",
    "encode_data_url",
    "decode_data_url",
    "open_material",
    "ingest_material",
    "ingest_materials",
    "ingest_thumbnail",
    "ingest_uploads",
    # Dashboard
    "Dashboard",
    "StudentView",
    "EnrolledCourse",
]
