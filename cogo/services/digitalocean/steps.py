"""Building blocks shared by the droplet flows."""

from abc import abstractmethod
from typing import List, Optional

from cogo.engine import ActionRunner, Context, FlowOutcome, Result, Signal, State, Step, new_result
from cogo.engine.empty import EmptyStateHandler
from cogo.engine.errors import AbortReason
from cogo.engine.result import ResultValue
from cogo.engine.validation import validate_required

from .client import SelectItem


class SelectionStep(Step):
    """
    A step that shows a list of choices and records the picked value.

    The recorded Result carries the chosen label and its position as
    ``name`` and ``index`` metadata. After a rewind the previous choice is
    pre-selected. An empty list shows the step's empty-state message and
    aborts the flow.
    """

    step_name = ""
    step_prompt = ""
    field_label = "selection"

    def __init__(self, runner: ActionRunner):
        self.runner = runner

    @property
    def name(self) -> str:
        return self.step_name

    @property
    def prompt(self) -> str:
        return self.step_prompt

    @abstractmethod
    def load_items(self, state: State) -> List[SelectItem]:
        """Fetch the choices offered by this step."""
        pass

    def empty_handler(self, state: State) -> EmptyStateHandler:
        return EmptyStateHandler(resource_name="choices")

    def to_value(self, item: SelectItem) -> ResultValue:
        return item.value

    def default_index(self, state: State, items: List[SelectItem]) -> int:
        previous = state.get_result(self.name)
        if previous is not None:
            index = previous.get_metadata('index', 0)
            if 0 <= index < len(items):
                return index
        return 0

    def execute(self, ctx: Context, state: State):
        items = self.load_items(state)

        signal = self.empty_handler(state).check_and_display(items, self.runner)
        if signal is not None:
            return signal

        choice = self.runner.select(
            self.prompt,
            [item.name for item in items],
            ctx=ctx,
            allow_back=state.can_go_back(),
            default_index=self.default_index(state, items),
        )
        if isinstance(choice, Signal):
            return choice

        item = items[choice]
        return new_result(self.to_value(item), name=item.name, index=choice)

    def validate(self, result: Result) -> None:
        validate_required(self.field_label)(result.value)


def metadata_name(state: State, step_name: str, default: str = "") -> str:
    result = state.get_result(step_name)
    if result is None:
        return default
    return str(result.get_metadata('name', result.value))


def report_abort(runner: ActionRunner, outcome: FlowOutcome, action: str) -> None:
    """Tell the user why a flow stopped early.

    Empty states have already been explained by the step that hit them.
    """
    if outcome.reason == AbortReason.CANCELLED:
        runner.display("")
        runner.display(f"{action} canceled.", style="cyan")
    elif outcome.reason == AbortReason.CONTEXT_CANCELLED:
        # Clean newline after ^C
        runner.display("")


def show_summary(runner: ActionRunner, title: str, rows: List[tuple], footer: Optional[str] = None) -> None:
    """Print a framed key/value block."""
    width = max(len(label) for label, _ in rows) + 2
    runner.display("")
    runner.display(f"=== {title} ===", style="cyan")
    for label, value in rows:
        runner.display(f"{(label + ':').ljust(width)}{value}")
    runner.display(footer or "=" * (len(title) + 8), style="cyan")
    runner.display("")
