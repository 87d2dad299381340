"""Tests for the YAML seed loader."""

import pytest

from eduplatform.config import Settings
from eduplatform.errors import ValidationError
from eduplatform.platform import open_platform
from eduplatform.utils import DEFAULT_SEED_FILE, apply_seed, load_seed


SEED = """
accounts:
  - {email: ada@example.com, password: pw, name: Ada, role: educator}
  - {email: sam@example.com, password: pw, name: Sam, role: student}
courses:
  - educator: ada@example.com
    title: Intro
    description: Basics
    lessons: "5"
  - educator: ada@example.com
    title: Broken count
    description: Still created
    lessons: abc
enrollments:
  - {student: sam@example.com, course: Intro}
"""


@pytest.fixture
def seed_file(tmp_path):
    path = tmp_path / "seed.yaml"
    path.write_text(SEED, encoding="utf-8")
    return path


class TestSeedLoader:

    def test_load_and_apply(self, platform, seed_file):
        counts = apply_seed(platform, load_seed(seed_file))
        assert counts == {"accounts": 2, "courses": 2, "enrollments": 1}
        assert platform.identity.get_current_user() is None

        courses = {c.title: c for c in platform.courses.list_all()}
        assert courses["Intro"].lesson_count == 5
        assert courses["Broken count"].lesson_count == 0

        sam = platform.identity.login("sam@example.com", "pw")
        assert platform.ledger.is_enrolled(sam.id, courses["Intro"].id)

    def test_existing_accounts_reused(self, platform, seed_file):
        seed = load_seed(seed_file)
        apply_seed(platform, seed)
        counts = apply_seed(platform, seed)
        assert counts["accounts"] == 0
        assert len(platform.identity.accounts.list_all()) == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_seed(tmp_path / "nope.yaml")

    def test_invalid_layout(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("accounts:\n  - {email: x}\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_seed(path)

    def test_course_needs_educator(self, platform, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(
            "accounts:\n  - {email: s@x.io, password: pw, name: S, role: student}\n"
            "courses:\n  - {educator: s@x.io, title: T, description: D}\n",
            encoding="utf-8",
        )
        with pytest.raises(ValidationError):
            apply_seed(platform, load_seed(path))

    def test_demo_seed_is_valid(self):
        seed = load_seed(DEFAULT_SEED_FILE)
        assert seed.courses
        assert all(c.educator in {a.email for a in seed.accounts} for c in seed.courses)

    def test_open_platform_seeds_empty_store(self, seed_file):
        platform = open_platform(Settings(storage="memory", seed_file=seed_file))
        assert len(platform.courses.list_all()) == 2
