"""Tests for EnrollmentLedger."""

import pytest

from eduplatform.errors import NotFound, ValidationError


class TestEnroll:

    def test_enroll_starts_at_zero(self, platform, student, make_course):
        course = make_course()
        enrollment = platform.ledger.enroll(student.id, course.id)
        assert enrollment.progress_percent == 0
        assert enrollment.completed_lesson_count == 0
        assert platform.ledger.is_enrolled(student.id, course.id)

    def test_enroll_twice_keeps_one_record(self, platform, student, make_course):
        course = make_course()
        first = platform.ledger.enroll(student.id, course.id)
        second = platform.ledger.enroll(student.id, course.id)
        assert first == second
        records = platform.ledger.list_for_student(student.id)
        assert len(records) == 1
        assert records[0].progress_percent == 0

    def test_enroll_again_does_not_reset_progress(self, platform, student, make_course):
        course = make_course(lessons=2)
        platform.ledger.enroll(student.id, course.id)
        platform.engine.open_course(student.id, course.id).toggle_lesson(f"{course.id}-lesson-1")
        again = platform.ledger.enroll(student.id, course.id)
        assert again.progress_percent == 50

    def test_enroll_unknown_course(self, platform, student):
        with pytest.raises(NotFound):
            platform.ledger.enroll(student.id, "missing")

    def test_not_enrolled(self, platform, student, make_course):
        course = make_course()
        assert not platform.ledger.is_enrolled(student.id, course.id)
        assert platform.ledger.get(student.id, course.id) is None
        assert platform.ledger.list_for_student(student.id) == []


class TestUpdateProgress:

    def test_updates_existing(self, platform, student, make_course):
        course = make_course()
        platform.ledger.enroll(student.id, course.id)
        updated = platform.ledger.update_progress(student.id, course.id, 75, 3)
        assert updated.progress_percent == 75
        assert platform.ledger.get(student.id, course.id).completed_lesson_count == 3

    def test_noop_when_not_enrolled(self, platform, student, make_course):
        course = make_course()
        assert platform.ledger.update_progress(student.id, course.id, 50, 2) is None
        assert not platform.ledger.is_enrolled(student.id, course.id)

    def test_out_of_range_rejected(self, platform, student, make_course):
        course = make_course()
        platform.ledger.enroll(student.id, course.id)
        with pytest.raises(ValidationError):
            platform.ledger.update_progress(student.id, course.id, 150, 1)
