"""DigitalOcean service - API client and the droplet wizards."""

from .client import DigitalOceanClient, DigitalOceanError, Droplet, DropletCreateRequest, SelectItem
from .create_flow import CreateDropletFlow, execute_create_flow
from .destroy_flow import DestroyDropletFlow, execute_destroy_flow
from .listing import display_droplet_list

__all__ = [
    'CreateDropletFlow',
    'DestroyDropletFlow',
    'DigitalOceanClient',
    'DigitalOceanError',
    'Droplet',
    'DropletCreateRequest',
    'SelectItem',
    'display_droplet_list',
    'execute_create_flow',
    'execute_destroy_flow',
]
