"""Step contract - one interactive question in a flow."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Union

from .context import Context
from .errors import Signal, StepConfigurationError
from .result import Result
from .state import State

StepOutcome = Union[Result, Signal]


class Step(ABC):
    """
    Interface for a single wizard step.

    Steps hold no answers themselves. Anything they need from earlier steps
    they read from the State handed to ``execute``; anything they need from
    the outside world (a runner, an API client) is injected at construction.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier of the step, unique within its flow (used as history key)."""
        pass

    @property
    @abstractmethod
    def prompt(self) -> str:
        """Text shown to the user for this step."""
        pass

    @abstractmethod
    def execute(self, ctx: Context, state: State) -> StepOutcome:
        """Run the interactive exchange.

        Args:
            ctx: Cancellation signal for this run
            state: Answers recorded so far

        Returns:
            The step's Result, or a Signal (go back, cancel, ...)

        Raises:
            ValidationError: The answer is unusable and the step should be asked again
        """
        pass

    def validate(self, result: Result) -> None:
        """Check a result after ``execute`` returned it.

        Raises:
            ValidationError: If the result should be rejected
        """
        return None

    def default(self) -> Any:
        """Pre-fill value advertised to the UI, or None."""
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class SimpleStep(Step):
    """Step assembled from plain callables - handy for small flows and tests."""

    def __init__(
        self,
        name: str,
        prompt: str = "",
        execute_fn: Optional[Callable[[Context, State], StepOutcome]] = None,
        validate_fn: Optional[Callable[[Result], None]] = None,
        default_value: Any = None,
    ):
        self._name = name
        self._prompt = prompt
        self.execute_fn = execute_fn
        self.validate_fn = validate_fn
        self.default_value = default_value

    @property
    def name(self) -> str:
        return self._name

    @property
    def prompt(self) -> str:
        return self._prompt

    def execute(self, ctx: Context, state: State) -> StepOutcome:
        if self.execute_fn is None:
            raise StepConfigurationError(f"SimpleStep {self._name!r} has no execute_fn")
        return self.execute_fn(ctx, state)

    def validate(self, result: Result) -> None:
        if self.validate_fn is None:
            return None
        self.validate_fn(result)

    def default(self) -> Any:
        return self.default_value
