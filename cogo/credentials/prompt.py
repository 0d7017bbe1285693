"""Interactive prompt credential provider - the last resort in the chain."""

from typing import Optional

from cogo.engine.errors import Signal
from cogo.engine.validation import validate_required

from .provider import PromptCancelledError, Provider, TokenNotFoundError


class PromptProvider(Provider):
    """Asks the user for a token once per process and remembers the answer."""

    def __init__(self, runner):
        self.runner = runner
        self._token: Optional[str] = None

    @property
    def name(self) -> str:
        return "prompt"

    @property
    def location(self) -> str:
        return "interactive prompt"

    def get_token(self) -> str:
        if self._token is not None:
            return self._token

        answer = self.runner.get_input(
            "Enter your DigitalOcean API Token",
            validator=validate_required("token"),
            mask=True,
        )
        if isinstance(answer, Signal):
            raise PromptCancelledError(answer)
        if not answer:
            raise TokenNotFoundError("no token entered")

        self._token = answer
        return answer

    def available(self) -> bool:
        return True
