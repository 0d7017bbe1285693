"""DigitalOcean API client - lists the resources the wizard offers and creates/deletes droplets."""

import logging
from typing import Any, Dict, List, Optional, Union

import requests
from pydantic import BaseModel, ConfigDict, Field

from cogo.config import DEFAULT_API_URL

logger = logging.getLogger(__name__)

PER_PAGE = 200

IMAGE_TYPE_DISTRIBUTION = "D"
IMAGE_TYPE_APPLICATION = "A"
IMAGE_TYPE_CUSTOM = "C"


class DigitalOceanError(Exception):
    """The API rejected a request or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class _ApiModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class Image(_ApiModel):
    id: int
    name: str
    slug: Optional[str] = None
    distribution: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.distribution and not self.name.startswith(self.distribution):
            return f"{self.distribution} {self.name}"
        return self.name

    @property
    def reference(self) -> str:
        """Value the create endpoint accepts: the slug, or the id for custom images."""
        return self.slug or str(self.id)


class Size(_ApiModel):
    slug: str
    memory: int = 0
    vcpus: int = 0
    disk: int = 0
    price_monthly: float = 0.0
    available: bool = True

    @property
    def display_name(self) -> str:
        return f"{self.slug} ({self.vcpus} vCPU, {self.memory} MB, {self.disk} GB, ${self.price_monthly:g}/mo)"


class Region(_ApiModel):
    slug: str
    name: str
    available: bool = True


class SSHKey(_ApiModel):
    id: int
    name: str
    fingerprint: Optional[str] = None


class NamedRef(_ApiModel):
    name: Optional[str] = None
    slug: Optional[str] = None


class Droplet(_ApiModel):
    id: int
    name: str
    status: Optional[str] = None
    size_slug: Optional[str] = None
    region: Optional[NamedRef] = None
    image: Optional[NamedRef] = None
    networks: Dict[str, Any] = Field(default_factory=dict)

    def public_ipv4(self) -> Optional[str]:
        for network in self.networks.get('v4', []):
            if network.get('type') == 'public':
                return network.get('ip_address')
        return None


class DropletCreateRequest(_ApiModel):
    name: str
    region: str
    size: str
    image: Union[int, str]
    ssh_keys: List[int] = Field(default_factory=list)


class SelectItem(BaseModel):
    """A choice shown in a select list: label plus the value it stands for."""

    name: str
    value: str


class DigitalOceanClient:
    """
    Thin client over the DigitalOcean v2 REST API.

    List endpoints are paginated; every page is fetched by following
    ``links.pages.next``.
    """

    def __init__(self, token: str, base_url: str = DEFAULT_API_URL, timeout: float = 30.0,
                 session: Optional[requests.Session] = None):
        """
        Initialize API client.

        Args:
            token: DigitalOcean API token
            base_url: Base URL for the API
            timeout: Request timeout in seconds
            session: Optional pre-built session (tests inject a mock)
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'Authorization': f'Bearer {token}',
            'Content-Type': 'application/json',
        })

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def _request(self, method: str, url: str, **kwargs) -> Optional[Dict[str, Any]]:
        """
        Make a request and decode the JSON body.

        Raises:
            DigitalOceanError: On connection failure or a non-2xx response
        """
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise DigitalOceanError(f"request to DigitalOcean failed: {e}") from e

        if not response.ok:
            message = response.reason or "request failed"
            try:
                body = response.json()
                message = body.get('message', message)
            except ValueError:
                pass
            raise DigitalOceanError(f"{message} (HTTP {response.status_code})", response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def _list(self, endpoint: str, key: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Fetch every page of a list endpoint and return the items under ``key``."""
        items: List[Dict[str, Any]] = []
        url: Optional[str] = self._url(endpoint)
        query = dict(params or {})
        query.setdefault('per_page', PER_PAGE)

        while url:
            body = self._request('GET', url, params=query) or {}
            items.extend(body.get(key, []))
            url = body.get('links', {}).get('pages', {}).get('next')
            # The next link already carries the query string
            query = None

        return items

    def list_images(self, image_type: str) -> List[Image]:
        """List images of one type (D=distribution, A=application, C=custom/private)."""
        if image_type == IMAGE_TYPE_DISTRIBUTION:
            params = {'type': 'distribution'}
        elif image_type == IMAGE_TYPE_APPLICATION:
            params = {'type': 'application'}
        elif image_type == IMAGE_TYPE_CUSTOM:
            params = {'private': 'true'}
        else:
            raise ValueError(f"invalid image type: {image_type}")
        return [Image(**item) for item in self._list('images', 'images', params)]

    def list_sizes(self) -> List[Size]:
        sizes = [Size(**item) for item in self._list('sizes', 'sizes')]
        return [size for size in sizes if size.available]

    def list_regions(self) -> List[Region]:
        regions = [Region(**item) for item in self._list('regions', 'regions')]
        return [region for region in regions if region.available]

    def list_ssh_keys(self) -> List[SSHKey]:
        return [SSHKey(**item) for item in self._list('account/keys', 'ssh_keys')]

    def list_droplets(self) -> List[Droplet]:
        return [Droplet(**item) for item in self._list('droplets', 'droplets')]

    def create_droplet(self, request: DropletCreateRequest) -> Droplet:
        body = self._request('POST', self._url('droplets'), json=request.model_dump()) or {}
        return Droplet(**body['droplet'])

    def delete_droplet(self, droplet_id: int) -> None:
        self._request('DELETE', self._url(f'droplets/{droplet_id}'))


def image_select_items(images: List[Image]) -> List[SelectItem]:
    return [SelectItem(name=image.display_name, value=image.reference) for image in images]


def size_select_items(sizes: List[Size]) -> List[SelectItem]:
    return [SelectItem(name=size.display_name, value=size.slug) for size in sizes]


def region_select_items(regions: List[Region]) -> List[SelectItem]:
    return [SelectItem(name=region.name, value=region.slug) for region in regions]


def ssh_key_select_items(keys: List[SSHKey]) -> List[SelectItem]:
    return [SelectItem(name=key.name, value=str(key.id)) for key in keys]


def droplet_select_items(droplets: List[Droplet]) -> List[SelectItem]:
    return [SelectItem(name=droplet.name, value=str(droplet.id)) for droplet in droplets]
