"""
Dashboard - read-only views the student and educator pages render.

Provides:
- Enrolled vs available courses for a student
- Per-student completion summary
- Enrollments whose course has been deleted
"""

import logging
from dataclasses import dataclass

from eduplatform.schemas import Course, Enrollment

from .courses import CourseRepository
from .enrollment import EnrollmentLedger


logger = logging.getLogger(__name__)


@dataclass
class EnrolledCourse:
    """Course paired with the student's enrollment row."""
    course: Course
    enrollment: Enrollment

    @property
    def is_complete(self) -> bool:
        return self.enrollment.progress_percent == 100


@dataclass
class StudentView:
    """Everything the student dashboard shows."""
    student_id: str
    enrolled: list[EnrolledCourse]
    available: list[Course]
    orphaned: list[Enrollment]  # enrollments for deleted courses

    @property
    def completed_count(self) -> int:
        return sum(1 for item in self.enrolled if item.is_complete)


class Dashboard:
    """
    Combines CourseRepository (content) with EnrollmentLedger (user state).
    """

    def __init__(self, courses: CourseRepository, ledger: EnrollmentLedger):
        self.courses = courses
        self.ledger = ledger

    def student_view(self, student_id: str) -> StudentView:
        """Split the catalog into enrolled and available courses."""
        catalog = {course.id: course for course in self.courses.list_all()}
        enrolled: list[EnrolledCourse] = []
        orphaned: list[Enrollment] = []

        for enrollment in self.ledger.list_for_student(student_id):
            course = catalog.get(enrollment.course_id)
            if course is None:
                orphaned.append(enrollment)
            else:
                enrolled.append(EnrolledCourse(course=course, enrollment=enrollment))

        if orphaned:
            logger.debug(f"Student {student_id} has {len(orphaned)} enrollment(s) for deleted courses")

        enrolled_ids = {item.course.id for item in enrolled}
        available = [c for c in catalog.values() if c.id not in enrolled_ids]
        return StudentView(
            student_id=student_id,
            enrolled=enrolled,
            available=available,
            orphaned=orphaned,
        )

    def educator_courses(self, educator_id: str) -> list[Course]:
        return self.courses.list_by_educator(educator_id)

    def get_progress_summary(self, student_id: str) -> dict:
        """
        Get a progress summary across the student's enrolled courses.

        Returns:
            Dictionary with enrolled/completed counts and mean progress
        """
        view = self.student_view(student_id)
        enrolled = len(view.enrolled)
        mean = (
            round(sum(item.enrollment.progress_percent for item in view.enrolled) / enrolled, 1)
            if enrolled > 0 else 0
        )
        return {
            "enrolled": enrolled,
            "completed": view.completed_count,
            "in_progress": sum(
                1 for item in view.enrolled if 0 < item.enrollment.progress_percent < 100
            ),
            "available": len(view.available),
            "mean_progress_percent": mean,
        }
