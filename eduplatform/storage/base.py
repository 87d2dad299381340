"""
Store interfaces - one per persisted entity.

The core only talks to these interfaces, so a backend can be an in-memory
map, a SQLite file, or anything else with the same methods.
"""

from abc import ABC, abstractmethod
from typing import Optional

from eduplatform.schemas import Course, Enrollment, StoredAccount


class AccountStore(ABC):
    """Registered accounts plus the single active session."""

    @abstractmethod
    def get(self, account_id: str) -> Optional[StoredAccount]:
        ...

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[StoredAccount]:
        ...

    @abstractmethod
    def add(self, account: StoredAccount):
        ...

    @abstractmethod
    def list_all(self) -> list[StoredAccount]:
        ...

    @abstractmethod
    def get_session(self) -> Optional[str]:
        """Return the id of the logged-in account, if any."""

    @abstractmethod
    def set_session(self, account_id: Optional[str]):
        ...


class CourseStore(ABC):
    """Course collection, kept in creation order."""

    @abstractmethod
    def get(self, course_id: str) -> Optional[Course]:
        ...

    @abstractmethod
    def list_all(self) -> list[Course]:
        ...

    @abstractmethod
    def save(self, course: Course):
        """Insert or replace a course. Replacing keeps its position."""

    @abstractmethod
    def delete(self, course_id: str) -> bool:
        ...

    def exists(self, course_id: str) -> bool:
        return self.get(course_id) is not None


class EnrollmentStore(ABC):
    """Enrollment rows keyed by (student_id, course_id)."""

    @abstractmethod
    def get(self, student_id: str, course_id: str) -> Optional[Enrollment]:
        ...

    @abstractmethod
    def list_for_student(self, student_id: str) -> list[Enrollment]:
        ...

    @abstractmethod
    def save(self, enrollment: Enrollment):
        """Insert or replace the row for the enrollment's key."""


class ProgressStore(ABC):
    """Completed lesson ids keyed by (student_id, course_id)."""

    @abstractmethod
    def get_completed(self, student_id: str, course_id: str) -> list[str]:
        ...

    @abstractmethod
    def set_completed(self, student_id: str, course_id: str, lesson_ids: list[str]):
        ...
