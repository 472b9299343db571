"""
Persistent launcher preferences.

A flat string-to-string store backed by a JSON file. Loading and flushing are
best-effort: a missing or broken file never stops the launcher.
"""

import json
from pathlib import Path
from typing import Dict, Optional

from melon_client.utils.monitoring import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path("melonclient.json")

# Known keys
KEY_OFFLINE_USERNAME = "offline_username"
KEY_LOGIN_TYPE = "login_type"
KEY_RAM = "ram"
KEY_GAME_TYPE = "game_type"
KEY_GAME_DIR = "game_dir"
KEY_JAVA_PATH = "java_path"


class ConfigStore:
    """Key/value preferences persisted as JSON."""

    def __init__(self, config_path: Optional[Path] = None):
        self._path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._values: Dict[str, str] = {}

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> None:
        """Read the config file, keeping defaults if it is absent or unreadable."""
        if not self._path.exists():
            logger.info(f"No existing config at {self._path}; defaults loaded.")
            return
        try:
            with open(self._path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Config load failed for {self._path}: {e}")
            return

        if not isinstance(data, dict):
            logger.warning(f"Config {self._path} is not a JSON object, ignoring")
            return

        self._values = {str(k): str(v) for k, v in data.items() if v is not None}
        logger.debug(f"Loaded {len(self._values)} config value(s) from {self._path}")

    def get(self, key: str, default: str = "") -> str:
        return self._values.get(key, default)

    def set(self, key: str, value) -> None:
        self._values[key] = str(value)

    def flush(self) -> bool:
        """
        Write all values to disk.

        Returns:
            True if the file was written, False if the write failed (logged)
        """
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, 'w', encoding='utf-8') as f:
                json.dump(self._values, f, indent=2, sort_keys=True)
        except OSError as e:
            logger.warning(f"Config save failed for {self._path}: {e}")
            return False
        logger.debug(f"Config saved to {self._path}")
        return True

    def as_dict(self) -> Dict[str, str]:
        return dict(self._values)

    def __repr__(self) -> str:
        return f"ConfigStore(path={str(self._path)!r}, keys={sorted(self._values)!r})"
