"""Wizard state - answer history plus a cursor that can move backward."""

from typing import List, Optional

from .errors import CannotGoBackError, InvalidStepIndexError
from .result import Result, StepResult


class State:
    """
    Ordered history of step answers and a cursor into the step sequence.

    Going back only moves the cursor; the history is kept so a step can
    offer its previous answer as the default. Recording a new answer while
    the cursor sits before the end of the history discards everything from
    the cursor onward first, since later answers were built on the one being
    replaced.
    """

    def __init__(self, max_steps: Optional[int] = None):
        """
        Initialize an empty state.

        Args:
            max_steps: Upper bound for the cursor (None means unbounded)
        """
        self._history: List[StepResult] = []
        self._current_step = 0
        self.max_steps = max_steps

    @classmethod
    def with_max(cls, max_steps: int) -> "State":
        """Create a state whose cursor may not reach ``max_steps``."""
        return cls(max_steps=max_steps)

    def history(self) -> List[StepResult]:
        """Return a copy of the recorded history, oldest first."""
        return [entry.model_copy(deep=True) for entry in self._history]

    def current_step(self) -> int:
        return self._current_step

    def set_current_step(self, index: int) -> None:
        """
        Move the cursor to ``index``.

        Raises:
            InvalidStepIndexError: If index is negative or beyond max_steps
        """
        if index < 0:
            raise InvalidStepIndexError(f"invalid step index: {index} (must be >= 0)")
        if self.max_steps is not None and self.max_steps > 0 and index >= self.max_steps:
            raise InvalidStepIndexError(
                f"invalid step index: {index} (max is {self.max_steps - 1})"
            )
        self._current_step = index

    def add_result(self, step_name: str, result: Result) -> None:
        """
        Record ``result`` at the cursor and advance.

        Args:
            step_name: Name of the step that produced the result
            result: The answer to record

        Raises:
            InvalidStepIndexError: If the cursor already sits at max_steps
        """
        if self.max_steps is not None and self.max_steps > 0 and self._current_step >= self.max_steps:
            raise InvalidStepIndexError(
                f"cannot record {step_name!r}: cursor is at the limit of {self.max_steps} steps"
            )

        if self._current_step < len(self._history):
            del self._history[self._current_step:]

        self._history.append(StepResult(step_name=step_name, result=result))
        self._current_step += 1

    def get_result(self, step_name: str) -> Optional[Result]:
        """
        Find the most recently recorded answer for ``step_name``.

        Only entries at or before the cursor count; answers past it belong
        to steps that have been rewound and are not active.

        Returns:
            A copy of the Result, or None if the step has no recorded answer
        """
        for entry in reversed(self._history[:self._current_step + 1]):
            if entry.step_name == step_name:
                return entry.result.model_copy(deep=True)
        return None

    def has_result(self, step_name: str) -> bool:
        return self.get_result(step_name) is not None

    def clear(self) -> None:
        """Forget all answers and rewind to the first step."""
        self._history = []
        self._current_step = 0

    def can_go_back(self) -> bool:
        return self._current_step > 0

    def back(self) -> int:
        """
        Move the cursor one step back.

        Returns:
            The new cursor position

        Raises:
            CannotGoBackError: If the cursor is already at the first step
        """
        if not self.can_go_back():
            raise CannotGoBackError()
        self._current_step -= 1
        return self._current_step

    def __repr__(self) -> str:
        names = [entry.step_name for entry in self._history]
        return f"State(current_step={self._current_step}, history={names!r})"
