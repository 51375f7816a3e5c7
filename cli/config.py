"""Configuration management for the file store CLI."""

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from common.constants import DEFAULT_CHUNK_SIZE_BYTES, DEFAULT_PORT
from common.logging_config import get_logger

logger = get_logger(__name__)

# Settings that must be positive integers; bad values fall back to defaults.
INTEGER_SETTINGS = ("server_port", "timeout", "chunk_size", "retry_backoff_multiplier")


def default_settings() -> Dict[str, Any]:
    """
    Built-in defaults, with the server address taken from the environment.

    Returns:
        Fresh dictionary of default settings
    """
    return {
        "server_host": os.environ.get("FILESTORE_HOST", "localhost"),
        "server_port": int(os.environ.get("FILESTORE_PORT", str(DEFAULT_PORT))),
        "timeout": 30,
        "max_retries": 3,
        "retry_backoff_multiplier": 2,
        "chunk_size": DEFAULT_CHUNK_SIZE_BYTES,
    }


class Config:
    """CLI settings and the active identity, persisted as JSON."""

    def __init__(self, config_path: Path):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.filestore/config.json)
        """
        self.config_path = Path(config_path)
        self.data = self._load()

    def _load(self) -> dict:
        """
        Merge the config file over the defaults, creating the file on first use.

        A file that cannot be parsed is copied to config.json.bak and the
        defaults are used instead.
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            self.config_path = Path(tempfile.gettempdir()) / '.filestore' / 'config.json'
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

        settings = default_settings()

        if not self.config_path.exists():
            self._write(settings)
            return settings

        try:
            with open(self.config_path, 'r') as f:
                stored = json.load(f)
            if not isinstance(stored, dict):
                raise ValueError("top-level value is not an object")
        except (ValueError, OSError) as e:
            logger.warning(f"Config file {self.config_path} unreadable ({e}), using defaults")
            try:
                shutil.copy(self.config_path, self.config_path.with_suffix('.json.bak'))
            except OSError as copy_error:
                logger.warning(f"Could not back up config file: {copy_error}")
            return settings

        settings.update(stored)
        return self._validated(settings)

    def _validated(self, settings: Dict[str, Any]) -> Dict[str, Any]:
        defaults = default_settings()
        for key in INTEGER_SETTINGS:
            value = settings.get(key)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                logger.warning(f"Ignoring invalid {key}={value!r} in {self.config_path}")
                settings[key] = defaults[key]

        retries = settings.get('max_retries')
        if not isinstance(retries, int) or isinstance(retries, bool) or retries < 0:
            logger.warning(f"Ignoring invalid max_retries={retries!r} in {self.config_path}")
            settings['max_retries'] = defaults['max_retries']
        return settings

    def _write(self, settings: Dict[str, Any]) -> None:
        """Replace the config file atomically; OS errors are logged, not raised."""
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.config_path.parent, suffix='.tmp')
            try:
                with os.fdopen(fd, 'w') as f:
                    json.dump(settings, f, indent=2)
                os.replace(tmp_name, self.config_path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            logger.warning(f"Could not save config to {self.config_path}: {e}")

    def save(self) -> None:
        """Save current configuration to file."""
        self._write(self.data)

    def get_identity(self) -> Optional[str]:
        """
        Get the principal the CLI acts as.

        Returns:
            Identity string or None when acting anonymously
        """
        return self.data.get('identity')

    def set_identity(self, identity: Optional[str]) -> None:
        """
        Set (or clear, with None) the identity and save to file.

        Args:
            identity: Principal to present to the server
        """
        if identity is None:
            self.data.pop('identity', None)
        else:
            self.data['identity'] = identity
        self.save()

    def set_server(self, host: str, port: int) -> None:
        self.data['server_host'] = host
        self.data['server_port'] = port
        self.save()

    def get_base_url(self) -> str:
        """
        Get server base URL.

        Returns:
            Base URL string (e.g., "http://localhost:8000")
        """
        return f"http://{self.data['server_host']}:{self.data['server_port']}"

    def get_timeout(self) -> int:
        return self.data['timeout']

    def get_chunk_size(self) -> int:
        return self.data['chunk_size']

    def get_retry_config(self) -> dict:
        """
        Get retry configuration.

        Returns:
            Dictionary with 'max_retries' and 'retry_backoff_multiplier'
        """
        return {
            'max_retries': self.data['max_retries'],
            'retry_backoff_multiplier': self.data['retry_backoff_multiplier'],
        }
