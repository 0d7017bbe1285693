"""Tests for settings loading from the .cogo file."""

from pathlib import Path

import pytest

from cogo.config import (
    DEFAULT_API_URL,
    ConfigError,
    config_search_paths,
    find_config_file,
    load_settings,
    read_config_file,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ('COGO_API_URL', 'COGO_TIMEOUT', 'COGO_VERBOSE', 'COGO_DEFAULT_REGION'):
        monkeypatch.delenv(name, raising=False)


def test_search_paths_order(monkeypatch, tmp_path):
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)

    paths = config_search_paths()

    assert paths[0] == home / ".cogo"
    assert paths[1] == home / ".config" / ".cogo"
    assert paths[2] == Path.cwd() / ".cogo"


def test_find_config_file_returns_first_existing(tmp_path):
    first = tmp_path / "a" / ".cogo"
    second = tmp_path / "b" / ".cogo"
    second.parent.mkdir()
    second.write_text("verbose: true\n")

    assert find_config_file([first, second]) == second
    assert find_config_file([first]) is None


class TestReadConfigFile:
    def test_reads_yaml(self, tmp_path):
        path = tmp_path / ".cogo"
        path.write_text("digitaloceantoken: abc\ntimeout: 10\n")

        assert read_config_file(path) == {"digitaloceantoken": "abc", "timeout": 10}

    def test_reads_legacy_json(self, tmp_path):
        """Should load the older JSON form too."""
        path = tmp_path / ".cogo"
        path.write_text('{"digitalOceanToken": "abc"}')

        assert read_config_file(path) == {"digitalOceanToken": "abc"}

    def test_empty_file_is_empty_mapping(self, tmp_path):
        path = tmp_path / ".cogo"
        path.write_text("")

        assert read_config_file(path) == {}

    def test_malformed_file_raises(self, tmp_path):
        path = tmp_path / ".cogo"
        path.write_text("key: [unclosed\n")

        with pytest.raises(ConfigError, match="Unable to read config file"):
            read_config_file(path)

    def test_non_mapping_raises(self, tmp_path):
        path = tmp_path / ".cogo"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="must contain a mapping"):
            read_config_file(path)


class TestLoadSettings:
    def test_defaults_without_file(self, tmp_path):
        settings = load_settings([tmp_path / ".cogo"])

        assert settings.api_url == DEFAULT_API_URL
        assert settings.timeout == 30.0
        assert settings.verbose is False
        assert settings.default_region is None
        assert settings.config_file is None

    def test_values_from_file(self, tmp_path):
        path = tmp_path / ".cogo"
        path.write_text("digitaloceantoken: abc\ndefault_region: ams3\ntimeout: 5\n")

        settings = load_settings([path])

        assert settings.default_region == "ams3"
        assert settings.timeout == 5.0
        assert settings.config_file == path

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / ".cogo"
        path.write_text("default_region: ams3\n")
        monkeypatch.setenv("COGO_DEFAULT_REGION", "nyc3")
        monkeypatch.setenv("COGO_VERBOSE", "1")
        monkeypatch.setenv("COGO_API_URL", "http://localhost:8080/v2")

        settings = load_settings([path])

        assert settings.default_region == "nyc3"
        assert settings.verbose is True
        assert settings.api_url == "http://localhost:8080/v2"
