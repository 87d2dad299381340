"""
EduPlatform Schemas - Pydantic models for the course platform.

This module exports all schema classes for:
- Account: users and roles
- Course: courses, materials, editable fields
- Enrollment: ledger rows and synthesized lessons
"""

# Account schemas
from .account import (
    Role,
    Account,
    StoredAccount,
)

# Course schemas
from .course import (
    Material,
    Course,
    CourseFields,
)

# Enrollment schemas
from .enrollment import (
    Enrollment,
    LessonKind,
    Lesson,
)

__all__ = [
    # Account
    'Role',
    'Account',
    'StoredAccount',
    # Course
    'Material',
    'Course',
    'CourseFields',
    # Enrollment
    'Enrollment',
    'LessonKind',
    'Lesson',
]
