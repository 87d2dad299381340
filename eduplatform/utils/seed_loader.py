"""
Seed loader utility for EduPlatform.

Loads a YAML catalog of accounts, courses and enrollments and applies it
through the normal platform operations, so every validation rule holds
for seeded data too.

Example:
    accounts:
      - {email: ada@example.com, password: secret, name: Ada, role: educator}
      - {email: sam@example.com, password: secret, name: Sam, role: student}
    courses:
      - educator: ada@example.com
        title: Intro to Python
        description: Variables, loops and functions
        duration: 4 weeks
        lessons: 6
    enrollments:
      - {student: sam@example.com, course: Intro to Python}
"""

import logging
from pathlib import Path
from typing import Any, Union

import pydantic
import yaml
from pydantic import BaseModel

from eduplatform.errors import ValidationError
from eduplatform.schemas import CourseFields, Role


logger = logging.getLogger(__name__)

# Default seed directory (relative to project root)
SEED_DIR = Path(__file__).parent.parent.parent / "seed"
DEFAULT_SEED_FILE = SEED_DIR / "demo.yaml"


class SeedAccount(BaseModel):
    email: str
    password: str
    name: str
    role: Role


class SeedCourse(BaseModel):
    educator: str            # educator email
    title: str
    description: str
    duration: str = ""
    lessons: Union[int, str] = 0


class SeedEnrollment(BaseModel):
    student: str             # student email
    course: str              # course title


class SeedFile(BaseModel):
    accounts: list[SeedAccount] = []
    courses: list[SeedCourse] = []
    enrollments: list[SeedEnrollment] = []


def load_seed(path: Path | None = None) -> SeedFile:
    """
    Load and validate a seed file.

    Raises:
        FileNotFoundError: If the seed file doesn't exist
        ValidationError: If the YAML does not match the seed layout
    """
    file_path = Path(path) if path else DEFAULT_SEED_FILE
    if not file_path.exists():
        raise FileNotFoundError(f"Seed file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    try:
        return SeedFile.model_validate(raw)
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid seed file {file_path}: {e}") from e


def apply_seed(platform: Any, seed: SeedFile) -> dict[str, int]:
    """
    Create the seed's accounts, courses and enrollments.

    Accounts whose email already exists are reused. The session is left
    logged out afterwards.

    Args:
        platform: A Platform (identity, courses, ledger)
        seed: Parsed seed file

    Returns:
        Counts of created accounts, courses and enrollments
    """
    counts = {"accounts": 0, "courses": 0, "enrollments": 0}
    accounts = {}

    for entry in seed.accounts:
        stored = platform.identity.accounts.get_by_email(entry.email.strip().lower())
        if stored:
            accounts[entry.email] = stored.public()
            continue
        accounts[entry.email] = platform.identity.signup(
            entry.email, entry.password, entry.name, entry.role
        )
        counts["accounts"] += 1
    platform.identity.logout()

    courses = {}
    for entry in seed.courses:
        educator = accounts.get(entry.educator)
        if educator is None or educator.role != Role.EDUCATOR:
            raise ValidationError(f"Seed course {entry.title!r} needs a seeded educator")
        courses[entry.title] = platform.courses.create(
            educator.id,
            educator.name,
            CourseFields(
                title=entry.title,
                description=entry.description,
                duration=entry.duration,
                lesson_count=entry.lessons,
            ),
        )
        counts["courses"] += 1

    for entry in seed.enrollments:
        student = accounts.get(entry.student)
        course = courses.get(entry.course)
        if student is None or course is None:
            raise ValidationError(f"Seed enrollment {entry.student} -> {entry.course} is unresolved")
        platform.ledger.enroll(student.id, course.id)
        counts["enrollments"] += 1

    logger.info(
        f"Seeded {counts['accounts']} accounts, {counts['courses']} courses, "
        f"{counts['enrollments']} enrollments"
    )
    return counts
