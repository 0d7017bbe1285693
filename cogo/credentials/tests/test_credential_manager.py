"""Tests for the credential Manager and provider policy."""

import pytest

from cogo.credentials import (
    CredentialError,
    EnvProvider,
    FileProvider,
    FlagProvider,
    KeychainProvider,
    Manager,
    NotSupportedError,
    PromptCancelledError,
    PromptProvider,
    Provider,
    TokenNotFoundError,
    default_manager,
    default_providers,
    is_secure_provider,
    mask_token,
)
from cogo.engine import Signal


class StubProvider(Provider):
    """In-memory provider for exercising the Manager."""

    def __init__(self, name, token=None, available=True, writable=True, error=None):
        self._name = name
        self.token = token
        self._available = available
        self.writable = writable
        self.error = error

    @property
    def name(self):
        return self._name

    def get_token(self):
        if self.error is not None:
            raise self.error
        if not self.token:
            raise TokenNotFoundError()
        return self.token

    def set_token(self, token):
        if not self.writable:
            raise NotSupportedError()
        self.token = token

    def delete_token(self):
        if self.error is not None:
            raise self.error
        if not self.token:
            raise TokenNotFoundError()
        self.token = None

    def available(self):
        return self._available


class TestGetToken:
    def test_first_provider_with_token_wins(self):
        manager = Manager([
            StubProvider("flag"),
            StubProvider("environment", token="env-token-123456"),
            StubProvider("keychain", token="keychain-token-1"),
        ])

        token, source = manager.get_token()

        assert token == "env-token-123456"
        assert source.provider == "environment"
        assert source.location == "environment"
        assert source.secure is False

    def test_unavailable_providers_are_skipped(self):
        manager = Manager([
            StubProvider("keychain", token="hidden", available=False),
            StubProvider("file", token="file-token"),
        ])

        token, source = manager.get_token()

        assert token == "file-token"
        assert source.provider == "file"

    def test_broken_provider_does_not_stop_lookup(self):
        manager = Manager([
            StubProvider("keychain", error=CredentialError("locked")),
            StubProvider("file", token="file-token"),
        ])

        assert manager.get_token()[0] == "file-token"

    def test_cancelled_prompt_stops_lookup(self):
        """Should not treat a quit at the prompt as a missing token."""
        manager = Manager([
            StubProvider("prompt", error=PromptCancelledError(Signal.CANCEL)),
            StubProvider("file", token="file-token"),
        ])

        with pytest.raises(PromptCancelledError):
            manager.get_token()

    def test_no_token_anywhere_raises(self):
        manager = Manager([StubProvider("flag"), StubProvider("environment")])

        with pytest.raises(TokenNotFoundError):
            manager.get_token()

    def test_keychain_source_is_secure(self):
        token, source = Manager([StubProvider("keychain", token="abc")]).get_token()

        assert source.secure is True


class TestSetToken:
    def test_stores_in_first_writable_provider(self):
        read_only = StubProvider("environment", writable=False)
        keychain = StubProvider("keychain")
        manager = Manager([read_only, keychain])

        assert manager.set_token("new-token") == "keychain"
        assert keychain.token == "new-token"

    def test_named_provider(self):
        keychain = StubProvider("keychain")
        file = StubProvider("file")
        manager = Manager([keychain, file])

        assert manager.set_token("t", provider_name="file") == "file"
        assert file.token == "t"
        assert keychain.token is None

    def test_nothing_writable_raises(self):
        manager = Manager([StubProvider("environment", writable=False)])

        with pytest.raises(CredentialError, match="no writable provider"):
            manager.set_token("t")


class TestDeleteToken:
    def test_deletes_from_every_holder(self):
        keychain = StubProvider("keychain", token="a")
        file = StubProvider("file", token="b")
        empty = StubProvider("environment")

        deleted = Manager([keychain, empty, file]).delete_token()

        assert deleted == ["keychain", "file"]
        assert keychain.token is None
        assert file.token is None

    def test_nothing_to_delete(self):
        assert Manager([StubProvider("keychain")]).delete_token() == []

    def test_error_raised_only_when_nothing_deleted(self):
        broken = StubProvider("keychain", error=CredentialError("locked"))

        with pytest.raises(CredentialError, match="locked"):
            Manager([broken]).delete_token()

        file = StubProvider("file", token="b")
        assert Manager([broken, file]).delete_token() == ["file"]


class TestSecurityPolicy:
    @pytest.mark.parametrize("provider,secure", [
        (KeychainProvider(), True),
        (EnvProvider(), False),
        (FlagProvider("t"), False),
        (FileProvider(), False),
    ])
    def test_only_keychain_is_secure(self, provider, secure):
        assert is_secure_provider(provider) is secure


@pytest.mark.parametrize("token,masked", [
    ("dop_v1_abcdef123456", "dop_...3456"),
    ("123456789", "1234...6789"),
    ("12345678", "***"),
    ("", "***"),
])
def test_mask_token(token, masked):
    assert mask_token(token) == masked


class TestDefaultProviders:
    def test_standard_order(self, mock_runner):
        providers = default_providers("flag-token", runner=mock_runner)

        assert [p.name for p in providers] == ["flag", "environment", "keychain", "file", "prompt"]
        assert isinstance(providers[-1], PromptProvider)

    def test_prompt_can_be_left_out(self, mock_runner):
        providers = default_providers(runner=mock_runner, prompt=False)

        assert [p.name for p in providers] == ["flag", "environment", "keychain", "file"]

    def test_no_prompt_without_runner(self):
        assert "prompt" not in [p.name for p in default_providers()]


def test_default_manager_prefers_flag(mock_runner, monkeypatch):
    monkeypatch.setenv("DIGITALOCEAN_TOKEN", "dop_v1_envtoken")
    manager = default_manager("dop_v1_flagtoken", runner=mock_runner, prompt=False)

    token, source = manager.get_token()

    assert [p.name for p in manager.providers] == ["flag", "environment", "keychain", "file"]
    assert token == "dop_v1_flagtoken"
    assert source.provider == "flag"
    assert not source.secure
