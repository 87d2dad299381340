"""
CourseRepository - create, edit, list and delete courses.

Courses belong to the educator who created them. Update and delete check
ownership. Deleting a course leaves enrollments and progress that point at
it in place.
"""

import logging
import math
import re
import uuid
from typing import Iterable, Optional

import pydantic

from eduplatform.errors import Forbidden, NotFound, ValidationError
from eduplatform.schemas import Course, CourseFields, Material
from eduplatform.storage import CourseStore


logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_lesson_count(raw) -> int:
    """
    Parse a lesson count from form input.

    Reads the leading integer of a string ("12", " 7 lessons", "3.5" -> 3),
    truncates finite numbers, and clamps the result to >= 0. Anything that does
    not start with a number becomes 0.
    """
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, (int, float)):
        if not math.isfinite(raw):
            return 0
        return max(0, int(raw))

    match = _LEADING_INT.match(str(raw))
    if not match:
        logger.warning(f"Lesson count {raw!r} is not a number, storing 0")
        return 0
    return max(0, int(match.group(1)))


def _require_text(value: Optional[str], field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"Course {field} is required")
    return value.strip()


class CourseRepository:
    """
    CRUD over course records.

    All writes go through the injected CourseStore; each mutation stores the
    whole course record in one call.
    """

    def __init__(self, store: CourseStore):
        self.store = store

    def _new_id(self) -> str:
        while True:
            course_id = uuid.uuid4().hex[:12]
            if not self.store.exists(course_id):
                return course_id

    def _get_owned(self, course_id: str, educator_id: str) -> Course:
        course = self.get_by_id(course_id)
        if course.educator_id != educator_id:
            raise Forbidden("You can only change courses you created")
        return course

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create(
        self,
        educator_id: str,
        educator_name: str,
        fields: CourseFields,
        materials: Iterable[Material] = (),
    ) -> Course:
        """
        Create a course owned by the given educator.

        Args:
            educator_id: Owner account id
            educator_name: Owner display name, copied onto the course
            fields: Form fields; title and description are required
            materials: Already-ingested materials, kept in the given order

        Returns:
            The stored Course
        """
        try:
            course = Course(
                id=self._new_id(),
                title=_require_text(fields.title, "title"),
                description=_require_text(fields.description, "description"),
                educator_id=educator_id,
                educator_name=educator_name,
                duration=(fields.duration or "").strip(),
                lesson_count=parse_lesson_count(fields.lesson_count),
                thumbnail=fields.thumbnail or None,
                materials=list(materials),
            )
        except pydantic.ValidationError as e:
            raise ValidationError(f"Invalid course: {e}") from e

        self.store.save(course)
        logger.info(f"Created course {course.id} ({course.lesson_count} lessons) for {educator_id}")
        return course

    def update(
        self,
        course_id: str,
        educator_id: str,
        fields: CourseFields,
        materials: Iterable[Material] = (),
    ) -> Course:
        """
        Merge supplied fields over an existing course.

        Fields left as None keep their stored value. New materials are
        appended after the existing ones.

        Raises:
            NotFound: unknown course
            Forbidden: educator does not own the course
            ValidationError: title or description set to blank
        """
        course = self._get_owned(course_id, educator_id)

        changes = fields.model_dump(exclude_none=True)
        if "title" in changes:
            changes["title"] = _require_text(changes["title"], "title")
        if "description" in changes:
            changes["description"] = _require_text(changes["description"], "description")
        if "duration" in changes:
            changes["duration"] = changes["duration"].strip()
        if "lesson_count" in changes:
            new_count = parse_lesson_count(changes["lesson_count"])
            if new_count < course.lesson_count:
                logger.debug(
                    f"Course {course_id} shrinks from {course.lesson_count} to {new_count} lessons; "
                    "completed ids past the new end are ignored"
                )
            changes["lesson_count"] = new_count

        merged = course.model_dump()
        merged.update(changes)
        merged["materials"] = course.materials + list(materials)
        try:
            updated = Course.model_validate(merged)
        except pydantic.ValidationError as e:
            raise ValidationError(f"Invalid course: {e}") from e

        self.store.save(updated)
        logger.info(f"Updated course {course_id}")
        return updated

    def delete(self, course_id: str, educator_id: str):
        """
        Delete a course.

        Enrollments and progress for the course are not touched; they become
        orphans that dashboards skip.
        """
        self._get_owned(course_id, educator_id)
        self.store.delete(course_id)
        logger.info(f"Deleted course {course_id}")

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_by_id(self, course_id: str) -> Course:
        course = self.store.get(course_id)
        if course is None:
            raise NotFound(f"Course not found: {course_id}")
        return course

    def list_all(self) -> list[Course]:
        return self.store.list_all()

    def list_by_educator(self, educator_id: str) -> list[Course]:
        return [c for c in self.store.list_all() if c.educator_id == educator_id]
