"""Credential lookup - flag, environment, keychain, file, prompt."""

from typing import List

from .env import EnvProvider
from .file import FileProvider
from .flag import FlagProvider
from .keychain import KeychainProvider
from .prompt import PromptProvider
from .provider import (
    SECURE_PROVIDERS,
    CredentialError,
    Manager,
    NotSupportedError,
    PromptCancelledError,
    Provider,
    Source,
    TokenNotFoundError,
    is_secure_provider,
    mask_token,
)


def default_providers(flag_token: str = "", runner=None, prompt: bool = True) -> List[Provider]:
    """
    Build the standard lookup order: flag, environment, keychain, file, prompt.

    Args:
        flag_token: Value of --token, if any
        runner: ActionRunner for warnings and the interactive prompt
        prompt: Include the interactive prompt as the last resort
    """
    providers: List[Provider] = [
        FlagProvider(flag_token),
        EnvProvider(),
        KeychainProvider(),
        FileProvider(runner=runner),
    ]
    if prompt and runner is not None:
        providers.append(PromptProvider(runner))
    return providers


def default_manager(flag_token: str = "", runner=None, prompt: bool = True) -> Manager:
    return Manager(default_providers(flag_token, runner=runner, prompt=prompt))


__all__ = [
    'SECURE_PROVIDERS',
    'CredentialError',
    'EnvProvider',
    'FileProvider',
    'FlagProvider',
    'KeychainProvider',
    'Manager',
    'NotSupportedError',
    'PromptCancelledError',
    'PromptProvider',
    'Provider',
    'Source',
    'TokenNotFoundError',
    'default_manager',
    'default_providers',
    'is_secure_provider',
    'mask_token',
]
