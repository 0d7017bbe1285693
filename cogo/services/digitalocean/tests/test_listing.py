"""Tests for the droplet listing."""

from cogo.services.digitalocean.client import Droplet
from cogo.services.digitalocean.listing import display_droplet_list, format_droplet


def test_lists_every_droplet(fake_client, mock_runner):
    listed = display_droplet_list(fake_client, mock_runner)

    assert [d.name for d in listed] == ["web-1", "db-1"]
    assert ('success', "Your droplets:") in mock_runner.calls
    displayed = [c[1] for c in mock_runner.calls if c[0] == 'display']
    assert "0  Name:   web-1" in displayed
    assert "   IP:     203.0.113.7" in displayed
    assert "1  Name:   db-1" in displayed


def test_format_droplet_without_network():
    lines = format_droplet(3, Droplet(id=22, name="db-1", status="off"))

    assert lines == [
        "3  Name:   db-1",
        "   ID:     22",
        "   Status: off",
        "   Region: N/A",
        "   IP:     N/A",
    ]


def test_empty_account(fake_client, mock_runner):
    fake_client.droplets = []

    assert display_droplet_list(fake_client, mock_runner) == []
    assert mock_runner.calls[-1] == ('display', "Run 'cogo create' to get started.")
