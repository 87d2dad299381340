"""
In-memory store backend.

Records are copied on the way in and out so callers never share mutable
state with the store.
"""

from typing import Optional

from eduplatform.schemas import Course, Enrollment, StoredAccount

from .base import AccountStore, CourseStore, EnrollmentStore, ProgressStore


class MemoryAccountStore(AccountStore):

    def __init__(self):
        self._accounts: dict[str, StoredAccount] = {}
        self._session: Optional[str] = None

    def get(self, account_id: str) -> Optional[StoredAccount]:
        account = self._accounts.get(account_id)
        return account.model_copy(deep=True) if account else None

    def get_by_email(self, email: str) -> Optional[StoredAccount]:
        for account in self._accounts.values():
            if account.email == email:
                return account.model_copy(deep=True)
        return None

    def add(self, account: StoredAccount):
        self._accounts[account.id] = account.model_copy(deep=True)

    def list_all(self) -> list[StoredAccount]:
        return [a.model_copy(deep=True) for a in self._accounts.values()]

    def get_session(self) -> Optional[str]:
        return self._session

    def set_session(self, account_id: Optional[str]):
        self._session = account_id


class MemoryCourseStore(CourseStore):

    def __init__(self):
        self._courses: dict[str, Course] = {}

    def get(self, course_id: str) -> Optional[Course]:
        course = self._courses.get(course_id)
        return course.model_copy(deep=True) if course else None

    def list_all(self) -> list[Course]:
        return [c.model_copy(deep=True) for c in self._courses.values()]

    def save(self, course: Course):
        # dict assignment to an existing key keeps insertion order
        self._courses[course.id] = course.model_copy(deep=True)

    def delete(self, course_id: str) -> bool:
        return self._courses.pop(course_id, None) is not None


class MemoryEnrollmentStore(EnrollmentStore):

    def __init__(self):
        self._enrollments: dict[str, dict[str, Enrollment]] = {}

    def get(self, student_id: str, course_id: str) -> Optional[Enrollment]:
        enrollment = self._enrollments.get(student_id, {}).get(course_id)
        return enrollment.model_copy() if enrollment else None

    def list_for_student(self, student_id: str) -> list[Enrollment]:
        return [e.model_copy() for e in self._enrollments.get(student_id, {}).values()]

    def save(self, enrollment: Enrollment):
        rows = self._enrollments.setdefault(enrollment.student_id, {})
        rows[enrollment.course_id] = enrollment.model_copy()


class MemoryProgressStore(ProgressStore):

    def __init__(self):
        self._completed: dict[tuple[str, str], list[str]] = {}

    def get_completed(self, student_id: str, course_id: str) -> list[str]:
        return list(self._completed.get((student_id, course_id), []))

    def set_completed(self, student_id: str, course_id: str, lesson_ids: list[str]):
        self._completed[(student_id, course_id)] = list(lesson_ids)
