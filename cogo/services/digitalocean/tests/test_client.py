"""Tests for DigitalOceanClient over a mocked requests session."""

from unittest.mock import MagicMock

import pytest
import requests

from cogo.services.digitalocean.client import (
    DigitalOceanClient,
    DigitalOceanError,
    Droplet,
    DropletCreateRequest,
    Image,
    image_select_items,
    size_select_items,
    ssh_key_select_items,
)


def make_response(status=200, body=None, reason="OK"):
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.reason = reason
    response.content = b"" if body is None else b"{}"
    if body is None:
        response.json.side_effect = ValueError("no body")
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session):
    return DigitalOceanClient("dop_v1_test", base_url="https://api.example.com/v2/", session=session)


def test_sets_bearer_token(session, client):
    session.headers.update.assert_called_once_with({
        'Authorization': 'Bearer dop_v1_test',
        'Content-Type': 'application/json',
    })


class TestListing:
    def test_follows_pagination(self, session, client):
        """Should fetch every page via links.pages.next."""
        session.request.side_effect = [
            make_response(body={
                "ssh_keys": [{"id": 1, "name": "laptop"}],
                "links": {"pages": {"next": "https://api.example.com/v2/account/keys?page=2&per_page=200"}},
            }),
            make_response(body={"ssh_keys": [{"id": 2, "name": "desktop"}], "links": {}}),
        ]

        keys = client.list_ssh_keys()

        assert [k.name for k in keys] == ["laptop", "desktop"]
        first, second = session.request.call_args_list
        assert first[0] == ('GET', 'https://api.example.com/v2/account/keys')
        assert first[1]['params'] == {'per_page': 200}
        assert second[0][1].endswith("page=2&per_page=200")
        assert second[1]['params'] is None

    @pytest.mark.parametrize("image_type,params", [
        ("D", {'type': 'distribution', 'per_page': 200}),
        ("A", {'type': 'application', 'per_page': 200}),
        ("C", {'private': 'true', 'per_page': 200}),
    ])
    def test_image_type_filters(self, session, client, image_type, params):
        session.request.return_value = make_response(body={"images": []})

        client.list_images(image_type)

        assert session.request.call_args[1]['params'] == params

    def test_unknown_image_type(self, client):
        with pytest.raises(ValueError, match="invalid image type"):
            client.list_images("X")

    def test_unavailable_sizes_and_regions_are_dropped(self, session, client):
        session.request.side_effect = [
            make_response(body={"sizes": [
                {"slug": "s-1vcpu-1gb", "memory": 1024, "vcpus": 1, "disk": 25, "price_monthly": 6, "available": True},
                {"slug": "old-size", "available": False},
            ]}),
            make_response(body={"regions": [
                {"slug": "nyc3", "name": "New York 3", "available": True},
                {"slug": "nyc2", "name": "New York 2", "available": False},
            ]}),
        ]

        assert [s.slug for s in client.list_sizes()] == ["s-1vcpu-1gb"]
        assert [r.slug for r in client.list_regions()] == ["nyc3"]

    def test_droplets_parse_nested_fields(self, session, client):
        session.request.return_value = make_response(body={"droplets": [{
            "id": 42,
            "name": "web-1",
            "status": "active",
            "size_slug": "s-1vcpu-1gb",
            "region": {"slug": "ams3", "name": "Amsterdam 3"},
            "image": {"slug": "ubuntu-22-04-x64", "name": "22.04 (LTS) x64"},
            "networks": {"v4": [
                {"ip_address": "10.0.0.2", "type": "private"},
                {"ip_address": "203.0.113.7", "type": "public"},
            ]},
        }]})

        droplet = client.list_droplets()[0]

        assert droplet.id == 42
        assert droplet.region.name == "Amsterdam 3"
        assert droplet.public_ipv4() == "203.0.113.7"


class TestMutations:
    def test_create_droplet_posts_request(self, session, client):
        session.request.return_value = make_response(status=202, body={"droplet": {"id": 7, "name": "web-1"}})
        request = DropletCreateRequest(name="web-1", region="nyc3", size="s-1vcpu-1gb",
                                       image="ubuntu-22-04-x64", ssh_keys=[99])

        droplet = client.create_droplet(request)

        assert droplet.id == 7
        args, kwargs = session.request.call_args
        assert args == ('POST', 'https://api.example.com/v2/droplets')
        assert kwargs['json'] == {
            "name": "web-1",
            "region": "nyc3",
            "size": "s-1vcpu-1gb",
            "image": "ubuntu-22-04-x64",
            "ssh_keys": [99],
        }

    def test_delete_droplet(self, session, client):
        session.request.return_value = make_response(status=204)

        assert client.delete_droplet(42) is None
        assert session.request.call_args[0] == ('DELETE', 'https://api.example.com/v2/droplets/42')


class TestErrors:
    def test_api_error_message(self, session, client):
        session.request.return_value = make_response(
            status=401, body={"id": "unauthorized", "message": "Unable to authenticate you"}, reason="Unauthorized",
        )

        with pytest.raises(DigitalOceanError, match="Unable to authenticate you \\(HTTP 401\\)") as exc_info:
            client.list_droplets()

        assert exc_info.value.status_code == 401

    def test_error_without_json_body(self, session, client):
        session.request.return_value = make_response(status=503, reason="Service Unavailable")

        with pytest.raises(DigitalOceanError, match="Service Unavailable"):
            client.list_regions()

    def test_connection_failure(self, session, client):
        session.request.side_effect = requests.ConnectionError("no route to host")

        with pytest.raises(DigitalOceanError, match="request to DigitalOcean failed"):
            client.list_sizes()


class TestSelectItems:
    def test_image_labels_and_references(self):
        images = [
            Image(id=1, name="22.04 (LTS) x64", distribution="Ubuntu", slug="ubuntu-22-04-x64"),
            Image(id=555, name="my-snapshot", distribution="Unknown"),
        ]

        items = image_select_items(images)

        assert items[0].name == "Ubuntu 22.04 (LTS) x64"
        assert items[0].value == "ubuntu-22-04-x64"
        # Custom images have no slug
        assert items[1].value == "555"

    def test_size_label(self, session, client):
        session.request.return_value = make_response(body={"sizes": [
            {"slug": "s-1vcpu-1gb", "memory": 1024, "vcpus": 1, "disk": 25, "price_monthly": 6.0},
        ]})

        item = size_select_items(client.list_sizes())[0]

        assert item.name == "s-1vcpu-1gb (1 vCPU, 1024 MB, 25 GB, $6/mo)"
        assert item.value == "s-1vcpu-1gb"

    def test_ssh_key_value_is_id_string(self, session, client):
        session.request.return_value = make_response(body={"ssh_keys": [{"id": 123, "name": "laptop"}]})

        assert ssh_key_select_items(client.list_ssh_keys())[0].value == "123"


def test_droplet_without_public_ip():
    assert Droplet(id=1, name="x").public_ipv4() is None
