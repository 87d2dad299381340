"""
EnrollmentLedger - which students are enrolled in which courses.

One record per (student, course). The progress columns are a read model
maintained by the LessonProgressEngine; nothing else should call
update_progress.
"""

import logging
from typing import Optional

import pydantic

from eduplatform.errors import ValidationError
from eduplatform.schemas import Enrollment
from eduplatform.storage import EnrollmentStore

from .courses import CourseRepository


logger = logging.getLogger(__name__)


class EnrollmentLedger:

    def __init__(self, store: EnrollmentStore, courses: CourseRepository):
        """
        Args:
            store: Enrollment persistence
            courses: Used to reject enrollment in unknown courses
        """
        self.store = store
        self.courses = courses

    def enroll(self, student_id: str, course_id: str) -> Enrollment:
        """
        Enroll a student in a course.

        Enrolling again returns the existing record unchanged.

        Raises:
            NotFound: unknown course
        """
        existing = self.store.get(student_id, course_id)
        if existing:
            logger.debug(f"Student {student_id} already enrolled in {course_id}")
            return existing

        self.courses.get_by_id(course_id)
        enrollment = Enrollment(student_id=student_id, course_id=course_id)
        self.store.save(enrollment)
        logger.info(f"Enrolled student {student_id} in course {course_id}")
        return enrollment

    def get(self, student_id: str, course_id: str) -> Optional[Enrollment]:
        return self.store.get(student_id, course_id)

    def list_for_student(self, student_id: str) -> list[Enrollment]:
        return self.store.list_for_student(student_id)

    def is_enrolled(self, student_id: str, course_id: str) -> bool:
        return self.store.get(student_id, course_id) is not None

    def update_progress(
        self,
        student_id: str,
        course_id: str,
        progress_percent: int,
        completed_lesson_count: int,
    ) -> Optional[Enrollment]:
        """
        Overwrite the progress columns of an existing enrollment.

        Does nothing and returns None when the student is not enrolled.
        """
        existing = self.store.get(student_id, course_id)
        if existing is None:
            logger.debug(f"No enrollment for {student_id}/{course_id}; progress not recorded")
            return None

        try:
            updated = Enrollment(
                student_id=student_id,
                course_id=course_id,
                progress_percent=progress_percent,
                completed_lesson_count=completed_lesson_count,
            )
        except pydantic.ValidationError as e:
            raise ValidationError(f"Invalid progress: {e}") from e

        self.store.save(updated)
        return updated
