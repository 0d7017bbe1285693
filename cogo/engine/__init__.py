"""Navigation engine - step sequencing with backward navigation."""

from .context import Context
from .errors import (
    AbortReason,
    CannotGoBackError,
    FlowInvariantError,
    InvalidStepIndexError,
    NavigationError,
    NoStepsError,
    Signal,
    StepConfigurationError,
    StepFailedError,
    ValidationError,
)
from .flow import Flow
from .navigator import FlowOutcome, FlowStatus, Navigator
from .result import ResourceId, Result, StepResult, new_result
from .runner import ActionRunner, MockActionRunner, RealActionRunner
from .state import State
from .step import SimpleStep, Step, StepOutcome

__all__ = [
    'AbortReason',
    'ActionRunner',
    'CannotGoBackError',
    'Context',
    'Flow',
    'FlowInvariantError',
    'FlowOutcome',
    'FlowStatus',
    'InvalidStepIndexError',
    'MockActionRunner',
    'NavigationError',
    'Navigator',
    'NoStepsError',
    'RealActionRunner',
    'ResourceId',
    'Result',
    'Signal',
    'SimpleStep',
    'State',
    'Step',
    'StepConfigurationError',
    'StepFailedError',
    'StepOutcome',
    'StepResult',
    'ValidationError',
    'new_result',
]
