"""
Enrollment and lesson schemas for EduPlatform.

Defines Pydantic models for:
- Enrollment records (the per-student ledger rows)
- Synthesized lessons
"""

from enum import Enum

from pydantic import BaseModel, Field


class Enrollment(BaseModel):
    student_id: str
    course_id: str
    progress_percent: int = Field(0, ge=0, le=100)
    completed_lesson_count: int = Field(0, ge=0)


class LessonKind(str, Enum):
    VIDEO = "video"
    DOCUMENT = "document"


class Lesson(BaseModel):
    """A derived unit of course content. Not persisted on its own."""
    id: str
    index: int = Field(..., ge=1)
    title: str
    kind: LessonKind
    completed: bool = False
