"""
IdentityStore - registered accounts and the active session.

Passwords are kept as salted PBKDF2 hashes and are never part of an
Account handed back to callers.
"""

import hashlib
import hmac
import logging
import secrets
import uuid
from typing import Optional

from eduplatform.errors import AuthenticationError, ValidationError
from eduplatform.schemas import Account, Role, StoredAccount
from eduplatform.storage import AccountStore


logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 120_000


def hash_password(password: str, salt: str) -> str:
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), bytes.fromhex(salt), PBKDF2_ITERATIONS
    )
    return digest.hex()


class IdentityStore:
    """
    Sign up, log in and out, and answer who is logged in.

    The session is persisted in the account store, so a new IdentityStore
    over the same backend picks up the previous login.
    """

    def __init__(self, accounts: AccountStore):
        self.accounts = accounts

    def signup(self, email: str, password: str, name: str, role: Role | str) -> Account:
        """
        Register a new account and log it in.

        Raises:
            ValidationError: missing fields, unknown role, or email already taken
        """
        email = (email or "").strip().lower()
        name = (name or "").strip()
        if not email or not name or not password:
            raise ValidationError("Email, password and name are required")
        try:
            role = Role(role)
        except ValueError:
            raise ValidationError(f"Unknown role: {role}") from None

        if self.accounts.get_by_email(email):
            raise ValidationError("User already exists")

        salt = secrets.token_hex(16)
        stored = StoredAccount(
            id=uuid.uuid4().hex,
            email=email,
            name=name,
            role=role,
            password_salt=salt,
            password_hash=hash_password(password, salt),
        )
        self.accounts.add(stored)
        self.accounts.set_session(stored.id)
        logger.info(f"Registered {role.value} account {stored.id}")
        return stored.public()

    def login(self, email: str, password: str) -> Account:
        """Log in with email and password."""
        stored = self.accounts.get_by_email((email or "").strip().lower())
        if stored is None or not hmac.compare_digest(
            stored.password_hash, hash_password(password or "", stored.password_salt)
        ):
            raise AuthenticationError("Invalid email or password")

        self.accounts.set_session(stored.id)
        logger.info(f"Account {stored.id} logged in")
        return stored.public()

    def logout(self):
        """End the active session."""
        self.accounts.set_session(None)

    def get_current_user(self) -> Optional[Account]:
        """Get the logged-in account, or None."""
        account_id = self.accounts.get_session()
        if not account_id:
            return None
        stored = self.accounts.get(account_id)
        return stored.public() if stored else None

    def require_role(self, role: Role | str) -> Account:
        """
        Get the logged-in account if it has the given role.

        Raises:
            AuthenticationError: nobody is logged in or the role differs;
                the front end sends the user to the login page
        """
        user = self.get_current_user()
        if user is None or user.role != Role(role):
            raise AuthenticationError(f"Please log in as {Role(role).value} to continue")
        return user
