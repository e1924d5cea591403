"""Shared pytest fixtures and constants for all test domains."""

from tests.shared.fixtures.constants import (
    TEST_JWT_SECRET,
    TEST_USER_EMAIL,
    TEST_USER_EMAIL_2,
    TEST_USER_ID,
    TEST_USER_ID_2,
)

__all__ = [
    "TEST_JWT_SECRET",
    "TEST_USER_EMAIL",
    "TEST_USER_EMAIL_2",
    "TEST_USER_ID",
    "TEST_USER_ID_2",
]
