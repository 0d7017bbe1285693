"""Navigator - drives a flow's steps forward and backward."""

import logging
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .context import Context
from .errors import (
    AbortReason,
    FlowInvariantError,
    NoStepsError,
    Signal,
    StepFailedError,
    ValidationError,
)
from .flow import Flow
from .result import Result
from .runner import ActionRunner
from .state import State
from .step import Step

logger = logging.getLogger(__name__)


class FlowStatus(str, Enum):
    COMPLETED = "completed"
    ABORTED = "aborted"


class FlowOutcome(BaseModel):
    """Terminal outcome of a flow run."""

    model_config = ConfigDict(frozen=True)

    status: FlowStatus = Field(..., description="How the run ended")
    result: Optional[Result] = Field(None, description="Result of the last step (completed runs only)")
    reason: Optional[AbortReason] = Field(None, description="Why the run stopped (aborted runs only)")

    @classmethod
    def completed(cls, result: Result) -> "FlowOutcome":
        return cls(status=FlowStatus.COMPLETED, result=result)

    @classmethod
    def aborted(cls, reason: AbortReason) -> "FlowOutcome":
        return cls(status=FlowStatus.ABORTED, reason=reason)

    @property
    def is_completed(self) -> bool:
        return self.status == FlowStatus.COMPLETED


_ABORT_REASONS = {
    Signal.CANCEL: AbortReason.CANCELLED,
    Signal.CONTEXT_CANCELLED: AbortReason.CONTEXT_CANCELLED,
    Signal.EMPTY_STATE: AbortReason.EMPTY_STATE,
}


class Navigator:
    """
    Runs a flow one step at a time.

    Key responsibilities:
    - Execute the step under the state's cursor
    - Rewind on GO_BACK, abort on the other signals
    - Re-ask a step whose answer fails validation
    - Record accepted answers, which advances the cursor
    """

    def __init__(self, runner: ActionRunner):
        """
        Initialize the navigator.

        Args:
            runner: ActionRunner used to show validation messages
        """
        self.runner = runner

    def run(self, flow: Flow, ctx: Optional[Context] = None) -> FlowOutcome:
        """
        Run ``flow`` until it completes or is aborted.

        Args:
            flow: Flow to run; its state is mutated in place
            ctx: Cancellation signal (defaults to one that never fires)

        Returns:
            FlowOutcome with the last step's Result, or the abort reason

        Raises:
            NoStepsError: If the flow has no steps
            StepFailedError: If a step fails with an unclassified error
            FlowInvariantError: If the flow completes without recording anything
        """
        if flow is None:
            raise ValueError("flow cannot be None")

        steps = flow.steps
        if not steps:
            raise NoStepsError(flow.name)

        ctx = ctx if ctx is not None else Context.background()
        state = flow.state

        while state.current_step() < len(steps):
            if ctx.cancelled:
                logger.debug("Flow %r cancelled before step %d", flow.name, state.current_step())
                return FlowOutcome.aborted(AbortReason.CONTEXT_CANCELLED)

            step = steps[state.current_step()]
            outcome = self._execute(step, ctx, state)

            if outcome is None:
                # Rejected inside execute; ask the same step again
                continue

            if isinstance(outcome, Signal):
                if outcome is Signal.GO_BACK:
                    if not state.can_go_back():
                        logger.debug("Go back from first step of %r; cancelling", flow.name)
                        return FlowOutcome.aborted(AbortReason.CANCELLED)
                    index = state.back()
                    logger.debug("Rewound %r to step %d (%s)", flow.name, index, steps[index].name)
                    continue

                logger.debug("Step %r aborted flow %r with %s", step.name, flow.name, outcome.value)
                return FlowOutcome.aborted(_ABORT_REASONS[outcome])

            try:
                step.validate(outcome)
            except ValidationError as e:
                self._show_validation_error(step, e)
                continue

            state.add_result(step.name, outcome)
            logger.debug("Recorded %r; advancing to step %d", step.name, state.current_step())

        history = state.history()
        if not history:
            raise FlowInvariantError(f"flow {flow.name!r} completed but no results recorded")

        return FlowOutcome.completed(history[-1].result)

    def run_step(self, step: Step, ctx: Optional[Context] = None) -> Union[Result, Signal]:
        """
        Run a single step against a fresh state.

        Returns:
            The validated Result, or the Signal the step returned

        Raises:
            ValidationError: If the result fails validation
            StepFailedError: If the step fails with an unclassified error
        """
        if step is None:
            raise ValueError("step cannot be None")

        ctx = ctx if ctx is not None else Context.background()
        try:
            outcome = step.execute(ctx, State())
        except ValidationError:
            raise
        except Exception as e:
            raise StepFailedError(step.name, e) from e

        if isinstance(outcome, Signal):
            return outcome

        step.validate(outcome)
        return outcome

    def _execute(self, step: Step, ctx: Context, state: State) -> Optional[Union[Result, Signal]]:
        """Execute ``step``; None means it raised ValidationError and should be retried."""
        try:
            outcome = step.execute(ctx, state)
        except ValidationError as e:
            self._show_validation_error(step, e)
            return None
        except Exception as e:
            logger.debug("Step %r raised %s", step.name, type(e).__name__)
            raise StepFailedError(step.name, e) from e

        if not isinstance(outcome, (Result, Signal)):
            raise StepFailedError(
                step.name,
                TypeError(f"execute returned {type(outcome).__name__}, expected Result or Signal"),
            )
        return outcome

    def _show_validation_error(self, step: Step, error: ValidationError) -> None:
        logger.debug("Validation failed for %r: %s", step.name, error)
        self.runner.error(f"✗ Validation error: {error}")
        self.runner.display("")
