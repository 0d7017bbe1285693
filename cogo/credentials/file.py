"""Plain-text ``.cogo`` file credential provider (legacy storage)."""

import logging
import os
from pathlib import Path
from typing import List, Optional

import yaml

from cogo.config import CONFIG_FILENAME, ConfigError, config_search_paths, find_config_file, read_config_file

from .provider import CredentialError, Provider, TokenNotFoundError

logger = logging.getLogger(__name__)

TOKEN_KEYS = ('digitaloceantoken', 'digitalOceanToken')


class FileProvider(Provider):
    """
    Reads the token from the first ``.cogo`` file on the search path and
    writes it to ``~/.cogo``.

    Tokens stored this way are readable by anything that can read the file,
    so the first successful read prints a warning suggesting the keychain.
    """

    def __init__(self, search_paths: Optional[List[Path]] = None, write_path: Optional[Path] = None,
                 runner=None):
        """
        Initialize the provider.

        Args:
            search_paths: Files to read from (default: ~/.cogo, ~/.config/.cogo, ./.cogo)
            write_path: File written by set_token (default: ~/.cogo); delete_token
                removes the token from the file it was last read from, else this one
            runner: Optional ActionRunner used for the plain-text warning
        """
        self.search_paths = search_paths
        self.write_path = write_path
        self.runner = runner
        self.config_path: Optional[Path] = None
        self._warned = False

    @property
    def name(self) -> str:
        return "file"

    @property
    def location(self) -> str:
        return str(self.config_path or self._target_path())

    def _paths(self) -> List[Path]:
        return self.search_paths if self.search_paths is not None else config_search_paths()

    def _target_path(self) -> Path:
        return self.write_path or (Path.home() / CONFIG_FILENAME)

    def _warn(self, lines: List[str]) -> None:
        if self.runner is not None:
            for line in lines:
                self.runner.warning(line)
        else:
            logger.warning(" ".join(line.strip() for line in lines))

    def get_token(self) -> str:
        path = find_config_file(self._paths())
        if path is None:
            raise TokenNotFoundError()

        try:
            data = read_config_file(path)
        except ConfigError as e:
            raise TokenNotFoundError(str(e)) from e

        self.config_path = path
        token = next((data[key] for key in TOKEN_KEYS if data.get(key)), None)
        if not token:
            raise TokenNotFoundError()

        if not self._warned:
            self._warn([
                f"⚠️  WARNING: Token stored in plain text file: {path}",
                "   Consider migrating to secure keychain storage:",
                "   $ cogo config migrate",
            ])
            self._warned = True

        return str(token)

    def _load_target(self, path: Path) -> dict:
        if not path.exists():
            return {}
        try:
            return read_config_file(path)
        except ConfigError as e:
            raise CredentialError(str(e)) from e

    def _write(self, path: Path, data: dict) -> None:
        try:
            with open(path, 'w') as f:
                yaml.safe_dump(data, f, default_flow_style=False)
            os.chmod(path, 0o600)
        except OSError as e:
            raise CredentialError(f"failed to write {path}: {e}") from e

    def set_token(self, token: str) -> None:
        path = self._target_path()
        data = self._load_target(path)
        for key in TOKEN_KEYS:
            data.pop(key, None)
        data['digitaloceantoken'] = token
        self._write(path, data)
        self.config_path = path

    def delete_token(self) -> None:
        path = self.config_path or self._target_path()
        if not path.exists():
            raise TokenNotFoundError()

        data = self._load_target(path)
        if not any(key in data for key in TOKEN_KEYS):
            raise TokenNotFoundError()
        for key in TOKEN_KEYS:
            data.pop(key, None)

        if not data:
            try:
                path.unlink()
            except OSError as e:
                raise CredentialError(f"failed to remove {path}: {e}") from e
            return
        self._write(path, data)

    def available(self) -> bool:
        return find_config_file(self._paths()) is not None
