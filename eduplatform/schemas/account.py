"""
Account schemas for EduPlatform.

Defines the public account record and the stored form that also carries
password material.
"""

from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    STUDENT = "student"
    EDUCATOR = "educator"


class Account(BaseModel):
    id: str
    email: str = Field(..., min_length=3)
    name: str = Field(..., min_length=1)
    role: Role


class StoredAccount(Account):
    """Account as persisted. Never returned to callers."""
    password_salt: str
    password_hash: str

    def public(self) -> Account:
        return Account(**self.model_dump(include={"id", "email", "name", "role"}))
