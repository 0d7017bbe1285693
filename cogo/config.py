"""Settings loaded from the ``.cogo`` file with environment overrides."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".cogo"
DEFAULT_API_URL = "https://api.digitalocean.com/v2"


class ConfigError(Exception):
    """The config file exists but cannot be used."""


def config_search_paths() -> List[Path]:
    """Candidate config files, in lookup order."""
    home = Path.home()
    return [
        home / CONFIG_FILENAME,
        home / ".config" / CONFIG_FILENAME,
        Path.cwd() / CONFIG_FILENAME,
    ]


def find_config_file(paths: Optional[List[Path]] = None) -> Optional[Path]:
    for path in paths if paths is not None else config_search_paths():
        if path.is_file():
            return path
    return None


def read_config_file(path: Path) -> Dict[str, Any]:
    """Read a ``.cogo`` file.

    The file is YAML; the older JSON form is valid YAML and loads the same way.

    Raises:
        ConfigError: If the file is not valid YAML or is not a mapping
    """
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Unable to read config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


class Settings(BaseModel):
    """Runtime settings for the CLI and API client."""

    model_config = ConfigDict(extra="ignore")

    api_url: str = Field(DEFAULT_API_URL, description="DigitalOcean API base URL")
    timeout: float = Field(30.0, description="HTTP timeout in seconds")
    verbose: bool = Field(False, description="Enable debug logging")
    default_region: Optional[str] = Field(None, description="Region slug pre-selected in create flow")
    config_file: Optional[Path] = Field(None, description="File the settings were read from")


_ENV_OVERRIDES = {
    'COGO_API_URL': 'api_url',
    'COGO_TIMEOUT': 'timeout',
    'COGO_VERBOSE': 'verbose',
    'COGO_DEFAULT_REGION': 'default_region',
}


def load_settings(paths: Optional[List[Path]] = None) -> Settings:
    """
    Load settings from the first config file found, then apply env overrides.

    Args:
        paths: Candidate files (default: ~/.cogo, ~/.config/.cogo, ./.cogo)

    Returns:
        Validated Settings instance

    Raises:
        ConfigError: If a config file exists but cannot be parsed
    """
    values: Dict[str, Any] = {}

    config_file = find_config_file(paths)
    if config_file is not None:
        values.update(read_config_file(config_file))
        values['config_file'] = config_file
        logger.debug("Loaded settings from %s", config_file)

    for env_var, key in _ENV_OVERRIDES.items():
        if os.environ.get(env_var):
            values[key] = os.environ[env_var]

    return Settings(**values)
