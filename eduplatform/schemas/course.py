"""
Course schemas for EduPlatform.

Defines Pydantic models for:
- Course materials (inline data URL content)
- Course records
- Editable course fields submitted by educators
"""

from typing import Optional, Union

from pydantic import BaseModel, Field


class Material(BaseModel):
    id: str
    name: str
    mime_type: str
    content: str              # data URL: data:<mime>;base64,<payload>
    size_bytes: int = Field(..., ge=0)


class Course(BaseModel):
    id: str
    title: str
    description: str
    educator_id: str
    educator_name: str
    duration: str = ""        # free text, e.g. "6 weeks"
    lesson_count: int = Field(0, ge=0)
    thumbnail: Optional[str] = None  # data URL
    materials: list[Material] = []


class CourseFields(BaseModel):
    """
    Fields an educator submits from the course form.

    Every field is optional so the same model serves create and partial
    update. ``lesson_count`` keeps the raw form value; the repository parses it.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[str] = None
    lesson_count: Optional[Union[int, float, str]] = None
    thumbnail: Optional[str] = None
