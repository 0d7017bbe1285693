"""Fixtures for the droplet wizard tests."""

import pytest

from cogo.services.digitalocean.client import Droplet, Image, Region, Size, SSHKey


class FakeClient:
    """Stands in for DigitalOceanClient; records mutations."""

    def __init__(self):
        self.images = {
            "D": [
                Image(id=1, name="22.04 (LTS) x64", distribution="Ubuntu", slug="ubuntu-22-04-x64"),
                Image(id=2, name="12 x64", distribution="Debian", slug="debian-12-x64"),
            ],
            "A": [Image(id=3, name="Docker on Ubuntu", slug="docker-20-04")],
            "C": [],
        }
        self.sizes = [
            Size(slug="s-1vcpu-1gb", memory=1024, vcpus=1, disk=25, price_monthly=6),
            Size(slug="s-2vcpu-2gb", memory=2048, vcpus=2, disk=60, price_monthly=18),
        ]
        self.regions = [
            Region(slug="nyc3", name="New York 3"),
            Region(slug="ams3", name="Amsterdam 3"),
        ]
        self.ssh_keys = [SSHKey(id=101, name="laptop"), SSHKey(id=202, name="desktop")]
        self.droplets = [
            Droplet(
                id=11, name="web-1", status="active", size_slug="s-1vcpu-1gb",
                region={"slug": "nyc3", "name": "New York 3"},
                image={"name": "22.04 (LTS) x64"},
                networks={"v4": [{"ip_address": "203.0.113.7", "type": "public"}]},
            ),
            Droplet(id=22, name="db-1", status="off"),
        ]
        self.image_requests = []
        self.created = []
        self.deleted = []

    def list_images(self, image_type):
        self.image_requests.append(image_type)
        return self.images[image_type]

    def list_sizes(self):
        return self.sizes

    def list_regions(self):
        return self.regions

    def list_ssh_keys(self):
        return self.ssh_keys

    def list_droplets(self):
        return self.droplets

    def create_droplet(self, request):
        self.created.append(request)
        return Droplet(id=999, name=request.name, status="new")

    def delete_droplet(self, droplet_id):
        self.deleted.append(droplet_id)


@pytest.fixture
def fake_client():
    return FakeClient()
