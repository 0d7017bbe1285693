"""ActionRunner interface - all terminal input and output goes here."""

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Sequence, Union

from rich.console import Console
from rich.markup import escape

from .context import Context
from .errors import Signal, ValidationError

BACK_LABEL = "← Back"
QUIT_LABEL = "Quit"

InputValidator = Callable[[str], Any]


class ActionRunner(ABC):
    """Interface for talking to the user.

    Prompts never raise for control flow: going back, quitting and Ctrl+C
    come back as a ``Signal`` in place of the answer.
    """

    @abstractmethod
    def display(self, message: str, style: Optional[str] = None) -> None:
        """Display a message to the user.

        Args:
            message: Text to display (may contain newlines)
            style: Optional color/style name (e.g. 'cyan')
        """
        pass

    def success(self, message: str) -> None:
        self.display(message, style="green")

    def warning(self, message: str) -> None:
        self.display(message, style="yellow")

    def error(self, message: str) -> None:
        self.display(message, style="red")

    @abstractmethod
    def get_input(
        self,
        prompt: str,
        default: Optional[str] = None,
        ctx: Optional[Context] = None,
        validator: Optional[InputValidator] = None,
        mask: bool = False,
    ) -> Union[str, Signal]:
        """Get free text from the user.

        Args:
            prompt: Question to ask user
            default: Value used when the user just presses Enter
            ctx: Cancellation signal, checked before prompting
            validator: Raises ValidationError for unacceptable input; the user is asked again
            mask: Hide typed characters (tokens, passwords)

        Returns:
            User's input string (or default if empty), or a Signal
        """
        pass

    @abstractmethod
    def select(
        self,
        label: str,
        items: Sequence[str],
        ctx: Optional[Context] = None,
        allow_back: bool = False,
        default_index: int = 0,
    ) -> Union[int, Signal]:
        """Let the user pick one of ``items``.

        Returns:
            Index into ``items``, or a Signal (GO_BACK only when allow_back)
        """
        pass

    @abstractmethod
    def confirm(
        self,
        label: str,
        default: bool = False,
        ctx: Optional[Context] = None,
    ) -> Union[bool, Signal]:
        """Ask a yes/no question."""
        pass


class RealActionRunner(ActionRunner):
    """Real implementation - reads stdin and writes colored output."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)

    def display(self, message: str, style: Optional[str] = None) -> None:
        """Print message to stdout."""
        self.console.print(message, style=style, markup=False)

    def _read(self, prompt: str, mask: bool = False) -> Union[str, Signal]:
        try:
            return self.console.input(escape(prompt), password=mask).strip()
        except KeyboardInterrupt:
            # Leave the cursor on a clean line after ^C
            self.console.print()
            return Signal.CONTEXT_CANCELLED
        except EOFError:
            return Signal.CANCEL

    def get_input(self, prompt, default=None, ctx=None, validator=None, mask=False):
        """Read from stdin with optional default."""
        if ctx is not None and ctx.cancelled:
            return Signal.CONTEXT_CANCELLED

        self.console.print()
        if default:
            self.display("(Press Enter to use default, or type to override | Ctrl+C: quit)", style="cyan")
            full_prompt = f"{prompt} [{default}]: "
        else:
            self.display("(Type your text, press Enter to confirm | Ctrl+C: quit)", style="cyan")
            full_prompt = f"{prompt}: "

        while True:
            response = self._read(full_prompt, mask=mask)
            if isinstance(response, Signal):
                return response

            value = response or (default or "")
            if validator is not None:
                try:
                    validator(value)
                except ValidationError as e:
                    self.error(f"✗ {e}")
                    self.console.print()
                    continue
            return value

    def select(self, label, items, ctx=None, allow_back=False, default_index=0):
        """Show a numbered list and read the chosen number."""
        if ctx is not None and ctx.cancelled:
            return Signal.CONTEXT_CANCELLED

        self.console.print()
        self.display(label, style="bold")
        self.console.print()  # Blank line before options
        if allow_back:
            self.display(f"  b. {BACK_LABEL}")
        for i, item in enumerate(items, 1):
            self.display(f"  {i}. {item}")
        self.display(f"  q. {QUIT_LABEL}")
        self.console.print()  # Blank line after options

        hint = "number, b: back, q: quit" if allow_back else "number, q: quit"
        default_number = default_index + 1 if 0 <= default_index < len(items) else None

        while True:
            if default_number is not None:
                prompt = f"Select ({hint}) [{default_number}]: "
            else:
                prompt = f"Select ({hint}): "
            response = self._read(prompt)
            if isinstance(response, Signal):
                return response

            choice = response.lower()
            if not choice and default_number is not None:
                return default_number - 1
            if choice in ("q", "quit"):
                return Signal.CANCEL
            if allow_back and choice in ("b", "back"):
                return Signal.GO_BACK
            if choice.isdigit() and 1 <= int(choice) <= len(items):
                return int(choice) - 1

            self.error(f"✗ Enter a number between 1 and {len(items)}")

    def confirm(self, label, default=False, ctx=None):
        """Ask a yes/no question; Enter picks the default."""
        if ctx is not None and ctx.cancelled:
            return Signal.CONTEXT_CANCELLED

        self.display(label, style="yellow")
        default_display = "Y/n" if default else "y/N"

        while True:
            response = self._read(f"[{default_display}]: ")
            if isinstance(response, Signal):
                return response

            answer = response.lower()
            if not answer:
                return default
            if answer in ("y", "yes"):
                return True
            if answer in ("n", "no"):
                return False

            self.error("✗ Answer must be y/n")


class MockActionRunner(ActionRunner):
    """Mock for testing - records calls and replays scripted answers."""

    def __init__(self):
        self.calls: List[tuple] = []
        self.input_queue: List[Any] = []  # Pre-scripted user inputs for testing

    def _next_answer(self) -> Any:
        if self.input_queue:
            return self.input_queue.pop(0)
        return None

    def display(self, message: str, style: Optional[str] = None) -> None:
        """Capture display call for test verification."""
        self.calls.append(('display', message))

    def success(self, message: str) -> None:
        self.calls.append(('success', message))

    def warning(self, message: str) -> None:
        self.calls.append(('warning', message))

    def error(self, message: str) -> None:
        self.calls.append(('error', message))

    def get_input(self, prompt, default=None, ctx=None, validator=None, mask=False):
        """Return next value from input_queue."""
        self.calls.append(('get_input', prompt, default))
        if ctx is not None and ctx.cancelled:
            return Signal.CONTEXT_CANCELLED

        while True:
            response = self._next_answer()
            if isinstance(response, Signal):
                return response

            # Match RealActionRunner: apply default if response is empty
            value = response if response else (default or '')
            if validator is not None:
                try:
                    validator(value)
                except ValidationError as e:
                    self.error(f"✗ {e}")
                    if not self.input_queue:
                        # Nothing left to retry with; the caller sees the bad value
                        return value
                    continue
            return value

    def select(self, label, items, ctx=None, allow_back=False, default_index=0):
        """Return next scripted choice (0-based int, Signal, 'b', 'q' or 1-based digit string)."""
        self.calls.append(('select', label, tuple(items)))
        if ctx is not None and ctx.cancelled:
            return Signal.CONTEXT_CANCELLED

        response = self._next_answer()
        if response is None:
            return default_index
        if isinstance(response, Signal):
            return response
        if isinstance(response, int):
            return response

        choice = str(response).strip().lower()
        if choice == 'q':
            return Signal.CANCEL
        if choice == 'b' and allow_back:
            return Signal.GO_BACK
        if choice.isdigit():
            return int(choice) - 1
        # Match by label
        return list(items).index(response)

    def confirm(self, label, default=False, ctx=None):
        """Return next scripted yes/no answer."""
        self.calls.append(('confirm', label, default))
        if ctx is not None and ctx.cancelled:
            return Signal.CONTEXT_CANCELLED

        response = self._next_answer()
        if response is None or response == '':
            return default
        if isinstance(response, (bool, Signal)):
            return response
        return str(response).strip().lower() in ('y', 'yes', 'true', '1')
