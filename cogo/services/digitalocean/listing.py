"""Droplet listing for ``cogo list``."""

from typing import List

from cogo.engine import ActionRunner
from cogo.engine.empty import empty_droplets_handler

from .client import DigitalOceanClient, Droplet


def format_droplet(index: int, droplet: Droplet) -> List[str]:
    region = droplet.region.slug if droplet.region and droplet.region.slug else "N/A"
    return [
        f"{index}  Name:   {droplet.name}",
        f"   ID:     {droplet.id}",
        f"   Status: {droplet.status or 'unknown'}",
        f"   Region: {region}",
        f"   IP:     {droplet.public_ipv4() or 'N/A'}",
    ]


def display_droplet_list(client: DigitalOceanClient, runner: ActionRunner) -> List[Droplet]:
    """Print every droplet in the account; returns what was listed."""
    droplets = client.list_droplets()
    if empty_droplets_handler().check_and_display(droplets, runner) is not None:
        return []

    runner.display("")
    runner.success("Your droplets:")
    runner.display("")
    for index, droplet in enumerate(droplets):
        for line in format_droplet(index, droplet):
            runner.display(line, style="cyan")
        runner.display("")
    return droplets
