"""Credential providers and the manager that walks them in order."""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

# Storage that other processes and logs cannot casually read. Environment
# variables and command-line flags leak through process listings and CI logs.
SECURE_PROVIDERS = frozenset({'keychain'})


class CredentialError(Exception):
    """Base class for credential lookup and storage errors."""


class TokenNotFoundError(CredentialError):
    def __init__(self, message: str = "token not found"):
        super().__init__(message)


class NotSupportedError(CredentialError):
    def __init__(self, message: str = "operation not supported by this provider"):
        super().__init__(message)


class PromptCancelledError(CredentialError):
    """The user backed out of the interactive token prompt.

    Attributes:
        signal: The Signal the prompt returned (CANCEL or CONTEXT_CANCELLED)
    """

    def __init__(self, signal):
        super().__init__(f"token prompt cancelled ({signal.value})")
        self.signal = signal


class Provider(ABC):
    """One place an API token can be read from (and maybe written to)."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def get_token(self) -> str:
        """Return the stored token.

        Raises:
            TokenNotFoundError: If this provider has no token
        """
        pass

    def set_token(self, token: str) -> None:
        raise NotSupportedError()

    def delete_token(self) -> None:
        raise NotSupportedError()

    @abstractmethod
    def available(self) -> bool:
        """Whether this provider can be consulted at all right now."""
        pass


class Source(BaseModel):
    """Where a token was found."""

    model_config = ConfigDict(frozen=True)

    provider: str = Field(..., description="Provider name (e.g., 'keychain')")
    location: str = Field(..., description="Human-readable storage location")
    secure: bool = Field(..., description="Whether the storage is considered secure")


def is_secure_provider(provider: Provider) -> bool:
    return provider.name in SECURE_PROVIDERS


class Manager:
    """
    Consults providers in the order given and uses the first token found.

    The order is decided by whoever builds the manager; see
    ``cogo.credentials.default_providers`` for the standard chain.
    """

    def __init__(self, providers: Sequence[Provider]):
        self.providers: List[Provider] = list(providers)

    def get_token(self) -> Tuple[str, Source]:
        """
        Find a token.

        Returns:
            Tuple of (token, Source)

        Raises:
            TokenNotFoundError: If no provider has a token
            PromptCancelledError: If the user backed out of the token prompt
        """
        for provider in self.providers:
            if not provider.available():
                continue

            try:
                token = provider.get_token()
            except (TokenNotFoundError, NotSupportedError):
                continue
            except PromptCancelledError:
                raise
            except CredentialError as e:
                logger.warning("Credential provider %s failed: %s", provider.name, e)
                continue

            if token:
                location = getattr(provider, 'location', provider.name)
                return token, Source(
                    provider=provider.name,
                    location=location,
                    secure=is_secure_provider(provider),
                )

        raise TokenNotFoundError()

    def set_token(self, token: str, provider_name: Optional[str] = None) -> str:
        """
        Store ``token`` in the first writable provider (or the named one).

        Returns:
            Name of the provider that stored the token

        Raises:
            CredentialError: If no provider could store it
        """
        for provider in self.providers:
            if not provider.available():
                continue
            if provider_name and provider.name != provider_name:
                continue

            try:
                provider.set_token(token)
            except NotSupportedError:
                continue
            return provider.name

        raise CredentialError("no writable provider available")

    def delete_token(self) -> List[str]:
        """
        Remove the token from every provider that holds one.

        Returns:
            Names of providers the token was deleted from

        Raises:
            CredentialError: If nothing was deleted and some provider failed
        """
        deleted = []
        last_error: Optional[CredentialError] = None

        for provider in self.providers:
            if not provider.available():
                continue
            try:
                provider.delete_token()
            except (TokenNotFoundError, NotSupportedError):
                continue
            except CredentialError as e:
                last_error = e
                continue
            deleted.append(provider.name)

        if not deleted and last_error is not None:
            raise last_error
        return deleted


def mask_token(token: str) -> str:
    """Show only the first and last four characters of a token."""
    if len(token) <= 8:
        return "***"
    return f"{token[:4]}...{token[-4:]}"
