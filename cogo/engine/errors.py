"""Error taxonomy and control-flow signals for the navigation engine.

Control-flow outcomes (go back, cancel, interrupted, nothing to choose from)
are returned as ``Signal`` values rather than raised, so the Navigator can
classify a step's outcome with a single dispatch. Everything else is an
exception.
"""

from enum import Enum


class Signal(str, Enum):
    """Non-fatal outcome of a step or a prompt."""

    GO_BACK = "go_back"
    CANCEL = "cancel"
    CONTEXT_CANCELLED = "context_cancelled"
    EMPTY_STATE = "empty_state"


class AbortReason(str, Enum):
    """Why a flow stopped before completing."""

    CANCELLED = "cancelled"
    CONTEXT_CANCELLED = "context_cancelled"
    EMPTY_STATE = "empty_state"


class NavigationError(Exception):
    """Base class for all engine errors."""


class ValidationError(NavigationError):
    """A step's answer was rejected; the step is asked again."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NoStepsError(NavigationError):
    """Raised when a flow without steps is run."""

    def __init__(self, flow_name: str = ""):
        message = "flow has no steps"
        if flow_name:
            message = f"flow {flow_name!r} has no steps"
        super().__init__(message)


class InvalidStepIndexError(NavigationError, IndexError):
    """Raised when the cursor is set outside its allowed range."""


class CannotGoBackError(NavigationError):
    """Raised by ``State.back()`` when already at the first step."""

    def __init__(self):
        super().__init__("cannot go back from first step")


class StepConfigurationError(NavigationError):
    """A step was built without something it needs to run."""


class StepFailedError(NavigationError):
    """A step failed with an error that is not a control-flow signal."""

    def __init__(self, step_name: str, cause: BaseException):
        super().__init__(f"step {step_name!r} failed: {cause}")
        self.step_name = step_name
        self.cause = cause


class FlowInvariantError(NavigationError):
    """The flow finished in a state that should be impossible."""
