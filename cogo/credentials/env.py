"""Environment variable credential provider."""

import os
from typing import Sequence

from .provider import Provider, TokenNotFoundError

DEFAULT_ENV_VARS = ('DIGITALOCEAN_TOKEN', 'COGO_DIGITALOCEAN_TOKEN')


class EnvProvider(Provider):
    """Reads the token from the first non-empty environment variable. Read-only."""

    def __init__(self, env_vars: Sequence[str] = DEFAULT_ENV_VARS):
        self.env_vars = tuple(env_vars) or DEFAULT_ENV_VARS

    @property
    def name(self) -> str:
        return "environment"

    @property
    def location(self) -> str:
        for env_var in self.env_vars:
            if os.environ.get(env_var):
                return f"${env_var}"
        return "environment"

    def get_token(self) -> str:
        for env_var in self.env_vars:
            token = os.environ.get(env_var)
            if token:
                return token
        raise TokenNotFoundError()

    def available(self) -> bool:
        return any(os.environ.get(env_var) for env_var in self.env_vars)
