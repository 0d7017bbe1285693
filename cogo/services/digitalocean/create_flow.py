"""Create Droplet wizard."""

import logging
import time
from typing import List, Optional

from cogo.engine import ActionRunner, Context, Flow, Navigator, Result, Signal, State, Step, new_result
from cogo.engine.empty import (
    EmptyStateHandler,
    empty_regions_handler,
    empty_sizes_handler,
    empty_ssh_keys_handler,
)
from cogo.engine.errors import ValidationError
from cogo.engine.validation import validate_droplet_name, validate_one_of

from .client import (
    IMAGE_TYPE_APPLICATION,
    IMAGE_TYPE_CUSTOM,
    IMAGE_TYPE_DISTRIBUTION,
    DigitalOceanClient,
    Droplet,
    DropletCreateRequest,
    SelectItem,
    image_select_items,
    region_select_items,
    size_select_items,
    ssh_key_select_items,
)
from .steps import SelectionStep, metadata_name, report_abort, show_summary

logger = logging.getLogger(__name__)

IMAGE_TYPES = [
    SelectItem(name="Distributions", value=IMAGE_TYPE_DISTRIBUTION),
    SelectItem(name="Applications", value=IMAGE_TYPE_APPLICATION),
    SelectItem(name="Custom", value=IMAGE_TYPE_CUSTOM),
]


def default_droplet_name() -> str:
    return f"my-droplet-{int(time.time())}"


class DropletNameStep(Step):
    """Free-text droplet name; a previous answer becomes the default after going back."""

    def __init__(self, runner: ActionRunner):
        self.runner = runner

    @property
    def name(self) -> str:
        return "droplet_name"

    @property
    def prompt(self) -> str:
        return "Droplet Name"

    def execute(self, ctx: Context, state: State):
        existing = state.get_result(self.name)
        default = existing.as_str() if existing is not None else default_droplet_name()

        answer = self.runner.get_input(self.prompt, default=default, ctx=ctx)
        if isinstance(answer, Signal):
            return answer
        return new_result(answer)

    def validate(self, result: Result) -> None:
        validate_droplet_name(result.value)

    def default(self) -> str:
        return default_droplet_name()


class ImageTypeStep(SelectionStep):
    step_name = "image_type"
    step_prompt = "Select Image Type"
    field_label = "image type"

    def load_items(self, state: State) -> List[SelectItem]:
        return list(IMAGE_TYPES)

    def validate(self, result: Result) -> None:
        validate_one_of("image type", [item.value for item in IMAGE_TYPES])(result.value)

    def default(self) -> str:
        return IMAGE_TYPE_DISTRIBUTION


class ImageSelectionStep(SelectionStep):
    step_name = "image_slug"
    step_prompt = "Select Image"
    field_label = "image slug"

    def __init__(self, client: DigitalOceanClient, runner: ActionRunner):
        super().__init__(runner)
        self.client = client

    def load_items(self, state: State) -> List[SelectItem]:
        image_type = state.get_result("image_type")
        if image_type is None:
            raise ValueError("image type not selected")
        return image_select_items(self.client.list_images(image_type.as_str()))

    def empty_handler(self, state: State) -> EmptyStateHandler:
        return EmptyStateHandler(
            resource_name="images",
            context=f"for {metadata_name(state, 'image_type')}",
            suggested_action="Try a different image type or contact DigitalOcean support.",
        )


class SizeSelectionStep(SelectionStep):
    step_name = "size_slug"
    step_prompt = "Select Size"
    field_label = "size slug"

    def __init__(self, client: DigitalOceanClient, runner: ActionRunner):
        super().__init__(runner)
        self.client = client

    def load_items(self, state: State) -> List[SelectItem]:
        return size_select_items(self.client.list_sizes())

    def empty_handler(self, state: State) -> EmptyStateHandler:
        return empty_sizes_handler()


class RegionSelectionStep(SelectionStep):
    step_name = "region_slug"
    step_prompt = "Select Region"
    field_label = "region slug"

    def __init__(self, client: DigitalOceanClient, runner: ActionRunner, default_region: Optional[str] = None):
        super().__init__(runner)
        self.client = client
        self.default_region = default_region

    def load_items(self, state: State) -> List[SelectItem]:
        return region_select_items(self.client.list_regions())

    def empty_handler(self, state: State) -> EmptyStateHandler:
        return empty_regions_handler()

    def default_index(self, state: State, items: List[SelectItem]) -> int:
        if state.get_result(self.name) is None and self.default_region:
            for index, item in enumerate(items):
                if item.value == self.default_region:
                    return index
        return super().default_index(state, items)

    def default(self) -> Optional[str]:
        return self.default_region


class SSHKeySelectionStep(SelectionStep):
    step_name = "ssh_key_id"
    step_prompt = "Select SSH Key"
    field_label = "SSH key"

    def __init__(self, client: DigitalOceanClient, runner: ActionRunner):
        super().__init__(runner)
        self.client = client

    def load_items(self, state: State) -> List[SelectItem]:
        return ssh_key_select_items(self.client.list_ssh_keys())

    def empty_handler(self, state: State) -> EmptyStateHandler:
        return empty_ssh_keys_handler()

    def to_value(self, item: SelectItem) -> int:
        return int(item.value)

    def validate(self, result: Result) -> None:
        if result.as_int() <= 0:
            raise ValidationError("SSH key ID must be positive")


class CreateConfirmationStep(Step):
    """Shows everything picked so far and asks for a final yes/no (default no)."""

    def __init__(self, runner: ActionRunner):
        self.runner = runner

    @property
    def name(self) -> str:
        return "confirm"

    @property
    def prompt(self) -> str:
        return "Create this droplet?"

    def execute(self, ctx: Context, state: State):
        show_summary(self.runner, "Droplet Configuration", [
            ("Name", metadata_name(state, "droplet_name")),
            ("Image", metadata_name(state, "image_slug")),
            ("Size", metadata_name(state, "size_slug")),
            ("Region", metadata_name(state, "region_slug")),
            ("SSH Key", metadata_name(state, "ssh_key_id")),
        ])

        confirmed = self.runner.confirm(self.prompt, default=False, ctx=ctx)
        if isinstance(confirmed, Signal):
            return confirmed
        return new_result(confirmed)

    def default(self) -> bool:
        return True


class CreateDropletFlow(Flow):
    """Name, image type, image, size, region, SSH key, confirmation."""

    def __init__(self, client: DigitalOceanClient, runner: ActionRunner, default_region: Optional[str] = None,
                 state: Optional[State] = None):
        super().__init__("Create Droplet", [
            DropletNameStep(runner),
            ImageTypeStep(runner),
            ImageSelectionStep(client, runner),
            SizeSelectionStep(client, runner),
            RegionSelectionStep(client, runner, default_region=default_region),
            SSHKeySelectionStep(client, runner),
            CreateConfirmationStep(runner),
        ], state=state)

    def build_request(self) -> DropletCreateRequest:
        """Turn the recorded answers into the API request body."""
        state = self.state
        image = state.get_result("image_slug").as_str()
        return DropletCreateRequest(
            name=state.get_result("droplet_name").as_str(),
            region=state.get_result("region_slug").as_str(),
            size=state.get_result("size_slug").as_str(),
            # Custom images have no slug and are referenced by numeric id
            image=int(image) if image.isdigit() else image,
            ssh_keys=[state.get_result("ssh_key_id").as_int()],
        )


def execute_create_flow(
    client: DigitalOceanClient,
    runner: ActionRunner,
    ctx: Optional[Context] = None,
    default_region: Optional[str] = None,
) -> Optional[Droplet]:
    """
    Run the Create Droplet wizard and create the droplet if confirmed.

    Returns:
        The new Droplet, or None if the user canceled, declined, or a list was empty

    Raises:
        StepFailedError: If a step failed (e.g. the API could not list sizes)
        DigitalOceanError: If the create request was rejected
    """
    flow = CreateDropletFlow(client, runner, default_region=default_region)
    outcome = Navigator(runner).run(flow, ctx)

    if not outcome.is_completed:
        report_abort(runner, outcome, "Droplet creation")
        return None

    if not outcome.result.as_bool():
        runner.display("Droplet creation canceled.", style="cyan")
        return None

    request = flow.build_request()
    logger.debug("Creating droplet %s in %s", request.name, request.region)
    return client.create_droplet(request)
