"""
LessonProgressEngine - per-lesson completion and course progress.

Lessons are not stored. They are synthesized from a course's lesson count
every time a course is opened, and completion is rehydrated from the
stored set of completed lesson ids for (student, course). Each toggle
recomputes the aggregate and writes it to the EnrollmentLedger.
"""

import logging
import threading
from typing import Optional

from eduplatform.schemas import Course, Enrollment, Lesson, LessonKind
from eduplatform.storage import ProgressStore

from .courses import CourseRepository
from .enrollment import EnrollmentLedger


logger = logging.getLogger(__name__)


def lesson_id_for(course_id: str, index: int) -> str:
    return f"{course_id}-lesson-{index}"


def synthesize_lessons(course_id: str, course_title: str, lesson_count: int) -> list[Lesson]:
    """
    Build the lesson list for a course.

    Ids depend only on (course_id, index) so stored completion stays valid
    across reloads. Odd indexes are videos, even indexes documents.
    """
    return [
        Lesson(
            id=lesson_id_for(course_id, i),
            index=i,
            title=f"Lesson {i}: {course_title} - Part {i}",
            kind=LessonKind.VIDEO if i % 2 == 1 else LessonKind.DOCUMENT,
        )
        for i in range(1, max(0, lesson_count) + 1)
    ]


def compute_progress_percent(completed: int, total: int) -> int:
    """Percent complete rounded half up, 0 for an empty course."""
    if total <= 0:
        return 0
    completed = min(max(completed, 0), total)
    return (200 * completed + total) // (2 * total)


class CourseProgress:
    """
    Completion state of one course for one student.

    Created by LessonProgressEngine.open_course. Toggle and recompute run
    under one lock, so no toggle sees a stale count.
    """

    def __init__(
        self,
        student_id: str,
        course: Course,
        progress_store: ProgressStore,
        ledger: EnrollmentLedger,
    ):
        self.student_id = student_id
        self.course = course
        self.progress_store = progress_store
        self.ledger = ledger
        self._lock = threading.Lock()
        self._lessons = synthesize_lessons(course.id, course.title, course.lesson_count)
        self._index = {lesson.id: pos for pos, lesson in enumerate(self._lessons)}
        self.completed_lesson_count = 0
        self.progress_percent = 0
        self._rehydrate()

    def _rehydrate(self):
        """Mark lessons whose ids are in the stored completed set."""
        stored = set(self.progress_store.get_completed(self.student_id, self.course.id))
        for lesson in self._lessons:
            lesson.completed = lesson.id in stored

        stale = stored - self._index.keys()
        if stale:
            logger.debug(
                f"Ignoring {len(stale)} completed ids no longer in course {self.course.id}"
            )
        with self._lock:
            self._recompute()

    def _recompute(self) -> Optional[Enrollment]:
        self.completed_lesson_count = sum(1 for lesson in self._lessons if lesson.completed)
        self.progress_percent = compute_progress_percent(
            self.completed_lesson_count, len(self._lessons)
        )
        return self.ledger.update_progress(
            self.student_id,
            self.course.id,
            self.progress_percent,
            self.completed_lesson_count,
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def lessons(self) -> list[Lesson]:
        """Copies of the current lessons."""
        return [lesson.model_copy() for lesson in self._lessons]

    @property
    def total_lessons(self) -> int:
        return len(self._lessons)

    @property
    def is_complete(self) -> bool:
        """True once every lesson of a non-empty course is completed."""
        return self.progress_percent == 100

    def completed_lesson_ids(self) -> list[str]:
        return [lesson.id for lesson in self._lessons if lesson.completed]

    def is_lesson_completed(self, lesson_id: str) -> bool:
        pos = self._index.get(lesson_id)
        return pos is not None and self._lessons[pos].completed

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def toggle_lesson(self, lesson_id: str) -> Optional[Lesson]:
        """
        Flip a lesson's completed flag and record the new progress.

        Returns:
            The toggled lesson, or None if the id is not part of the course
            (stale ids from an earlier lesson count are ignored)
        """
        with self._lock:
            pos = self._index.get(lesson_id)
            if pos is None:
                logger.debug(f"Toggle ignored, {lesson_id} not in course {self.course.id}")
                return None

            lesson = self._lessons[pos]
            lesson.completed = not lesson.completed
            self.progress_store.set_completed(
                self.student_id, self.course.id, self.completed_lesson_ids()
            )
            self._recompute()

        logger.info(
            f"Student {self.student_id} {'completed' if lesson.completed else 'unchecked'} "
            f"{lesson_id} ({self.progress_percent}%)"
        )
        return lesson.model_copy()

    def get_completion_stats(self) -> dict:
        """
        Summarize this student's progress through the course.

        Returns:
            Dict with total_lessons, completed, remaining,
            completion_percent and is_complete
        """
        return {
            "total_lessons": self.total_lessons,
            "completed": self.completed_lesson_count,
            "remaining": self.total_lessons - self.completed_lesson_count,
            "completion_percent": self.progress_percent,
            "is_complete": self.is_complete,
        }


class LessonProgressEngine:
    """Opens per-student course progress views."""

    def __init__(
        self,
        courses: CourseRepository,
        ledger: EnrollmentLedger,
        progress_store: ProgressStore,
    ):
        self.courses = courses
        self.ledger = ledger
        self.progress_store = progress_store

    def open_course(self, student_id: str, course_id: str) -> CourseProgress:
        """
        Synthesize and rehydrate a course for a student.

        Opening also pushes the recomputed progress to the ledger, so an
        enrollment reflects the current lesson count after an edit.

        Raises:
            NotFound: unknown course
        """
        course = self.courses.get_by_id(course_id)
        return CourseProgress(student_id, course, self.progress_store, self.ledger)
