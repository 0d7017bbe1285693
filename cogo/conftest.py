"""Shared fixtures for cogo tests."""

import keyring
import pytest
from keyring.errors import PasswordDeleteError

from cogo.engine import Context, MockActionRunner


@pytest.fixture
def mock_runner():
    """MockActionRunner with an empty input queue."""
    return MockActionRunner()


@pytest.fixture
def ctx():
    return Context.background()


class FakeKeyring:
    """In-memory stand-in for the OS keychain backend."""

    def __init__(self, priority=1):
        self.passwords = {}
        self.priority = priority
        self.fail_with = None

    def get_password(self, service, account):
        if self.fail_with:
            raise self.fail_with
        return self.passwords.get((service, account))

    def set_password(self, service, account, password):
        if self.fail_with:
            raise self.fail_with
        self.passwords[(service, account)] = password

    def delete_password(self, service, account):
        if (service, account) not in self.passwords:
            raise PasswordDeleteError("not found")
        del self.passwords[(service, account)]

    def get_keyring(self):
        return self


@pytest.fixture
def fake_keyring(monkeypatch):
    """Route keyring calls to a FakeKeyring so tests never touch the real keychain."""
    fake = FakeKeyring()
    for name in ("get_password", "set_password", "delete_password", "get_keyring"):
        monkeypatch.setattr(keyring, name, getattr(fake, name))
    return fake
