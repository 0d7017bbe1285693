"""Destroy Droplet wizard - three confirmations before anything is deleted."""

import logging
from typing import List, Optional

from cogo.engine import ActionRunner, Context, Flow, Navigator, Result, Signal, State, Step, new_result
from cogo.engine.empty import empty_droplets_handler
from cogo.engine.errors import ValidationError

from .client import DigitalOceanClient, Droplet, SelectItem, droplet_select_items
from .steps import SelectionStep, metadata_name, report_abort, show_summary

logger = logging.getLogger(__name__)


class SelectDropletStep(SelectionStep):
    step_name = "select_droplet"
    step_prompt = "Select droplet to delete"
    field_label = "droplet"

    def __init__(self, droplets: List[Droplet], runner: ActionRunner):
        super().__init__(runner)
        self.droplets = droplets

    def load_items(self, state: State) -> List[SelectItem]:
        return droplet_select_items(self.droplets)

    def empty_handler(self, state: State):
        return empty_droplets_handler()

    def to_value(self, item: SelectItem) -> int:
        return int(item.value)

    def validate(self, result: Result) -> None:
        if result.as_int() <= 0:
            raise ValidationError("invalid droplet ID")


class ConfirmDestroyStep(Step):
    def __init__(self, runner: ActionRunner):
        self.runner = runner

    @property
    def name(self) -> str:
        return "confirm_destroy"

    @property
    def prompt(self) -> str:
        return "Are you sure?"

    def execute(self, ctx: Context, state: State):
        self.runner.display("")
        self.runner.warning(f"⚠️  WARNING: You are about to delete droplet: {metadata_name(state, 'select_droplet')}")
        self.runner.display("")

        confirmed = self.runner.confirm(self.prompt, default=False, ctx=ctx)
        if isinstance(confirmed, Signal):
            return confirmed
        if not confirmed:
            return Signal.CANCEL
        return new_result(True)

    def default(self) -> bool:
        return False


class ReEnterNameStep(Step):
    """The user must type the droplet's exact name; a mismatch asks again."""

    def __init__(self, runner: ActionRunner):
        self.runner = runner

    @property
    def name(self) -> str:
        return "reenter_name"

    @property
    def prompt(self) -> str:
        return "Re-enter droplet name to confirm delete (WARNING: DROPLET WILL BE DELETED FOREVER)"

    def execute(self, ctx: Context, state: State):
        expected = metadata_name(state, "select_droplet")

        entered = self.runner.get_input(self.prompt, ctx=ctx)
        if isinstance(entered, Signal):
            return entered

        if entered != expected:
            raise ValidationError(f"name must match exactly: {expected}")

        return new_result(entered)

    def validate(self, result: Result) -> None:
        if not result.value:
            raise ValidationError("must enter the name of the droplet you want to delete")

    def default(self) -> str:
        return ""


class FinalConfirmDestroyStep(Step):
    def __init__(self, droplets: List[Droplet], runner: ActionRunner):
        self.droplets = droplets
        self.runner = runner

    @property
    def name(self) -> str:
        return "final_confirm"

    @property
    def prompt(self) -> str:
        return "Are you really really sure you want to delete this droplet?"

    def execute(self, ctx: Context, state: State):
        selected = state.get_result("select_droplet")
        droplet = self.droplets[selected.get_metadata('index')]

        show_summary(self.runner, "Droplet to be DELETED", [
            ("Name", droplet.name),
            ("Size", droplet.size_slug or "N/A"),
            ("Region", (droplet.region.name if droplet.region else None) or "N/A"),
            ("Image", (droplet.image.name if droplet.image else None) or "N/A"),
            ("IP", droplet.public_ipv4() or "N/A"),
        ], footer="=" * 29)

        confirmed = self.runner.confirm(self.prompt, default=False, ctx=ctx)
        if isinstance(confirmed, Signal):
            return confirmed
        if not confirmed:
            return Signal.CANCEL
        return new_result(True)

    def default(self) -> bool:
        return False


class DestroyDropletFlow(Flow):
    def __init__(self, droplets: List[Droplet], runner: ActionRunner, state: Optional[State] = None):
        super().__init__("Destroy Droplet", [
            SelectDropletStep(droplets, runner),
            ConfirmDestroyStep(runner),
            ReEnterNameStep(runner),
            FinalConfirmDestroyStep(droplets, runner),
        ], state=state)


def execute_destroy_flow(
    client: DigitalOceanClient,
    runner: ActionRunner,
    ctx: Optional[Context] = None,
) -> Optional[SelectItem]:
    """
    Run the Destroy Droplet wizard and delete the chosen droplet.

    Returns:
        SelectItem (name, id) of the deleted droplet, or None if nothing was deleted

    Raises:
        StepFailedError: If a step failed
        DigitalOceanError: If listing or deleting droplets failed
    """
    droplets = client.list_droplets()
    handler = empty_droplets_handler()
    if handler.check_and_display(droplets, runner) is not None:
        return None

    flow = DestroyDropletFlow(droplets, runner)
    outcome = Navigator(runner).run(flow, ctx)

    if not outcome.is_completed:
        report_abort(runner, outcome, "Droplet destruction")
        return None

    if not outcome.result.as_bool():
        runner.display("Droplet destruction canceled.", style="cyan")
        return None

    selected = flow.state.get_result("select_droplet")
    droplet_id = selected.as_int()
    logger.debug("Deleting droplet %d", droplet_id)
    client.delete_droplet(droplet_id)

    return SelectItem(name=selected.get_metadata('name'), value=str(droplet_id))
