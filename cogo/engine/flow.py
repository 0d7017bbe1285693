"""Flow - a named, ordered list of steps with the state they share."""

from typing import Optional, Sequence, Tuple

from .state import State
from .step import Step


class Flow:
    """
    One complete wizard (e.g. "Create Droplet").

    The step list is fixed at construction. The state is the single instance
    the Navigator mutates while running the flow; pass one in to resume a
    partially answered flow or to inspect it from a test.
    """

    def __init__(self, name: str, steps: Sequence[Step], state: Optional[State] = None):
        self._name = name
        self._steps: Tuple[Step, ...] = tuple(steps)
        self._state = state if state is not None else State()

    @property
    def name(self) -> str:
        return self._name

    @property
    def steps(self) -> Tuple[Step, ...]:
        return self._steps

    @property
    def state(self) -> State:
        return self._state

    def __repr__(self) -> str:
        return f"Flow(name={self._name!r}, steps={[s.name for s in self._steps]!r})"
