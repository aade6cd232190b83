"""Test user records built from the resolved environment profile."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from .config import EnvironmentProfile
from .logging_utils import ContextLogger

UserType = Literal["default_user", "nonexisting_user", "wrong_password_user", "register_new"]


@dataclass(frozen=True)
class TestUser:
    __test__ = False  # not a pytest test class

    type: str
    username: str
    email: str
    password: str = field(repr=False)
    first_name: str | None = None
    last_name: str | None = None
    address: str | None = None
    country: str | None = None
    state: str | None = None
    city: str | None = None
    zip_code: str | None = None
    mobile_number: str | None = None


def get_user(
    profile: EnvironmentProfile,
    user_type: UserType = "default_user",
    log: ContextLogger | None = None,
) -> TestUser:
    """Return the credentials for *user_type*.

    Only the default user is backed by data today; every other tag resolves
    to the same record.
    """
    if log is not None:
        log.info(f"Using default user from environment configuration {user_type}")
    user = profile.default_user
    return TestUser(
        type="default_user",
        username=user.username or "",
        email=user.email,
        password=user.password,
    )
