"""Command-line flag credential provider."""

from .provider import Provider, TokenNotFoundError


class FlagProvider(Provider):
    """Token passed explicitly on the command line (``--token``)."""

    def __init__(self, token: str = ""):
        self.token = token or ""

    @property
    def name(self) -> str:
        return "flag"

    @property
    def location(self) -> str:
        return "--token flag"

    def get_token(self) -> str:
        if not self.token:
            raise TokenNotFoundError()
        return self.token

    def available(self) -> bool:
        return bool(self.token)
