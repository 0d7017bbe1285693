"""OS keychain credential provider (macOS Keychain, Windows Credential Manager, Secret Service)."""

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from .provider import CredentialError, Provider, TokenNotFoundError

KEYCHAIN_SERVICE = "cogo"
KEYCHAIN_ACCOUNT = "digitalocean-token"


class KeychainProvider(Provider):
    """Stores the token in the operating system's keychain via ``keyring``."""

    def __init__(self, service: str = KEYCHAIN_SERVICE, account: str = KEYCHAIN_ACCOUNT):
        self.service = service
        self.account = account

    @property
    def name(self) -> str:
        return "keychain"

    @property
    def location(self) -> str:
        return f"OS keychain ({self.service}/{self.account})"

    def get_token(self) -> str:
        try:
            token = keyring.get_password(self.service, self.account)
        except KeyringError as e:
            raise CredentialError(f"keychain read failed: {e}") from e
        if not token:
            raise TokenNotFoundError()
        return token

    def set_token(self, token: str) -> None:
        try:
            keyring.set_password(self.service, self.account, token)
        except KeyringError as e:
            raise CredentialError(f"keychain write failed: {e}") from e

    def delete_token(self) -> None:
        try:
            keyring.delete_password(self.service, self.account)
        except PasswordDeleteError as e:
            raise TokenNotFoundError() from e
        except KeyringError as e:
            raise CredentialError(f"keychain delete failed: {e}") from e

    def available(self) -> bool:
        """False when keyring only has its fail/null backend (e.g. headless Linux)."""
        backend = keyring.get_keyring()
        return getattr(backend, 'priority', 0) > 0
