"""Empty-state helpers - friendly messages when there is nothing to choose from."""

from typing import Any, Optional

from .errors import Signal
from .runner import ActionRunner


def is_empty(value: Any) -> bool:
    """True for None and for empty strings, lists, tuples, sets and dicts."""
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


def empty_state_message(resource_name: str, context: str = "", suggested_action: str = "") -> str:
    """
    Build the standard "nothing found" message.

    Examples:
        >>> empty_state_message("droplets", "in your account", "Run 'cogo create'")
        "No droplets found in your account.\\n\\nRun 'cogo create'"
    """
    message = f"No {resource_name} found"
    if context:
        message += f" {context}"
    message += ".\n\n"
    if suggested_action:
        message += suggested_action
    return message


def error_message(summary: str, details: str = "", suggestion: str = "") -> str:
    """Build a multi-part error message: summary, then details and suggestion if given."""
    message = f"✗ Error: {summary}\n"
    if details:
        message += f"\n{details}\n"
    if suggestion:
        message += f"\n{suggestion}"
    return message


class EmptyStateHandler:
    """
    Shows a consistent explanation when a resource list comes back empty.

    Steps call ``check_and_display`` on the list they fetched and return the
    signal it gives back; the Navigator aborts without adding its own message.
    """

    def __init__(
        self,
        resource_name: str,
        context: str = "",
        suggested_action: str = "",
        suggested_command: str = "",
    ):
        self.resource_name = resource_name
        self.context = context
        self.suggested_action = suggested_action
        self.suggested_command = suggested_command

    def check(self, items: Any) -> Optional[Signal]:
        """Return EMPTY_STATE if ``items`` is empty, otherwise None."""
        if is_empty(items):
            return Signal.EMPTY_STATE
        return None

    def check_and_display(self, items: Any, runner: ActionRunner) -> Optional[Signal]:
        """Like ``check``, but explain the empty state to the user first."""
        if not is_empty(items):
            return None
        self.display(runner)
        return Signal.EMPTY_STATE

    def display(self, runner: ActionRunner) -> None:
        message = f"No {self.resource_name} found"
        if self.context:
            message += f" {self.context}"
        message += "."

        runner.display(message)
        runner.display("")

        if self.suggested_action:
            runner.display(self.suggested_action)
        elif self.suggested_command:
            runner.display(f"Run '{self.suggested_command}' to get started.")


def empty_droplets_handler() -> EmptyStateHandler:
    return EmptyStateHandler(
        resource_name="droplets",
        context="in your DigitalOcean account",
        suggested_command="cogo create",
    )


def empty_regions_handler() -> EmptyStateHandler:
    return EmptyStateHandler(
        resource_name="regions",
        context="in your DigitalOcean account",
        suggested_action="Contact DigitalOcean support if you believe this is an error.",
    )


def empty_sizes_handler() -> EmptyStateHandler:
    return EmptyStateHandler(
        resource_name="sizes",
        context="in your DigitalOcean account",
        suggested_action="Contact DigitalOcean support if you believe this is an error.",
    )


def empty_ssh_keys_handler() -> EmptyStateHandler:
    return EmptyStateHandler(
        resource_name="SSH keys",
        context="in your DigitalOcean account",
        suggested_action="Add an SSH key at: https://cloud.digitalocean.com/account/security",
    )
