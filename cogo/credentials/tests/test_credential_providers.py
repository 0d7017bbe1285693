"""Tests for the flag, environment, prompt and keychain providers."""

import pytest
from keyring.errors import KeyringError

from cogo.credentials import (
    CredentialError,
    EnvProvider,
    FlagProvider,
    KeychainProvider,
    NotSupportedError,
    PromptCancelledError,
    PromptProvider,
    TokenNotFoundError,
)
from cogo.engine import Signal


@pytest.fixture
def no_env_token(monkeypatch):
    monkeypatch.delenv("DIGITALOCEAN_TOKEN", raising=False)
    monkeypatch.delenv("COGO_DIGITALOCEAN_TOKEN", raising=False)


class TestFlagProvider:
    def test_returns_token(self):
        provider = FlagProvider("dop_v1_flag")

        assert provider.available()
        assert provider.get_token() == "dop_v1_flag"

    def test_empty_flag(self):
        provider = FlagProvider("")

        assert not provider.available()
        with pytest.raises(TokenNotFoundError):
            provider.get_token()

    def test_read_only(self):
        with pytest.raises(NotSupportedError):
            FlagProvider("x").set_token("y")
        with pytest.raises(NotSupportedError):
            FlagProvider("x").delete_token()


class TestEnvProvider:
    def test_primary_variable(self, no_env_token, monkeypatch):
        monkeypatch.setenv("DIGITALOCEAN_TOKEN", "primary")
        monkeypatch.setenv("COGO_DIGITALOCEAN_TOKEN", "secondary")
        provider = EnvProvider()

        assert provider.get_token() == "primary"
        assert provider.location == "$DIGITALOCEAN_TOKEN"

    def test_fallback_variable(self, no_env_token, monkeypatch):
        monkeypatch.setenv("COGO_DIGITALOCEAN_TOKEN", "secondary")
        provider = EnvProvider()

        assert provider.available()
        assert provider.get_token() == "secondary"
        assert provider.location == "$COGO_DIGITALOCEAN_TOKEN"

    def test_nothing_set(self, no_env_token):
        provider = EnvProvider()

        assert not provider.available()
        with pytest.raises(TokenNotFoundError):
            provider.get_token()

    def test_custom_variables(self, monkeypatch):
        monkeypatch.setenv("MY_DO_TOKEN", "custom")

        assert EnvProvider(["MY_DO_TOKEN"]).get_token() == "custom"

    def test_cannot_write(self, no_env_token):
        with pytest.raises(NotSupportedError):
            EnvProvider().set_token("x")


class TestPromptProvider:
    def test_asks_once_and_caches(self, mock_runner):
        mock_runner.input_queue = ["dop_v1_typed"]
        provider = PromptProvider(mock_runner)

        assert provider.get_token() == "dop_v1_typed"
        assert provider.get_token() == "dop_v1_typed"
        assert len([c for c in mock_runner.calls if c[0] == 'get_input']) == 1

    @pytest.mark.parametrize("signal", [Signal.CANCEL, Signal.CONTEXT_CANCELLED])
    def test_signal_is_reported_as_cancel(self, mock_runner, signal):
        """Should keep the signal so the caller can tell quitting from a missing token."""
        mock_runner.input_queue = [signal]

        with pytest.raises(PromptCancelledError) as exc_info:
            PromptProvider(mock_runner).get_token()

        assert exc_info.value.signal is signal

    def test_empty_answer_means_no_token(self, mock_runner):
        with pytest.raises(TokenNotFoundError):
            PromptProvider(mock_runner).get_token()


class TestKeychainProvider:
    def test_round_trip_uses_service_and_account(self, fake_keyring):
        provider = KeychainProvider()

        provider.set_token("dop_v1_secret")

        assert fake_keyring.passwords == {("cogo", "digitalocean-token"): "dop_v1_secret"}
        assert provider.get_token() == "dop_v1_secret"

    def test_missing_token(self, fake_keyring):
        with pytest.raises(TokenNotFoundError):
            KeychainProvider().get_token()

    def test_delete_missing_token(self, fake_keyring):
        with pytest.raises(TokenNotFoundError):
            KeychainProvider().delete_token()

    def test_delete(self, fake_keyring):
        provider = KeychainProvider()
        provider.set_token("x")

        provider.delete_token()

        assert fake_keyring.passwords == {}

    def test_backend_failure_is_credential_error(self, fake_keyring):
        fake_keyring.fail_with = KeyringError("locked")

        with pytest.raises(CredentialError, match="keychain read failed"):
            KeychainProvider().get_token()

    def test_available_depends_on_backend_priority(self, fake_keyring):
        assert KeychainProvider().available()

        fake_keyring.priority = 0
        assert not KeychainProvider().available()
