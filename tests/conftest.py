"""Shared fixtures: a fresh in-memory platform with one educator and one student."""

import pytest

from eduplatform.platform import memory_platform
from eduplatform.schemas import CourseFields, Role


@pytest.fixture
def platform():
    return memory_platform()


@pytest.fixture
def educator(platform):
    account = platform.identity.signup("ada@example.com", "lovelace", "Ada", Role.EDUCATOR)
    platform.identity.logout()
    return account


@pytest.fixture
def other_educator(platform):
    account = platform.identity.signup("grace@example.com", "hopper", "Grace", Role.EDUCATOR)
    platform.identity.logout()
    return account


@pytest.fixture
def student(platform):
    account = platform.identity.signup("sam@example.com", "secret", "Sam", Role.STUDENT)
    platform.identity.logout()
    return account


@pytest.fixture
def make_course(platform, educator):
    def _make(lessons=4, title="Intro to Python", **kwargs):
        fields = CourseFields(
            title=title,
            description=kwargs.pop("description", "Basics of Python"),
            duration=kwargs.pop("duration", "4 weeks"),
            lesson_count=lessons,
            **kwargs,
        )
        return platform.courses.create(educator.id, educator.name, fields)
    return _make
