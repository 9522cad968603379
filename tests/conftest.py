"""Shared fixtures."""
import pytest

from factories import TEST_PASSWORD, TEST_SECRET, TEST_USERNAME
from venue_hours.services import AuthGate, IdentityStore


@pytest.fixture(scope="session")
def identity_store():
    """Hashing with bcrypt is slow, so build the principal once."""
    return IdentityStore.from_plain_password(TEST_USERNAME, TEST_PASSWORD)


@pytest.fixture
def auth_gate(identity_store):
    return AuthGate(identity_store, secret=TEST_SECRET)
