"""
Version registry and installation locator.

The VersionRegistry provides a centralized way to:
- Map a game type (vanilla / forge / fabric) to an installed version id
- Override those ids and add classpath entries from versions.json
- Locate the platform's default game directory
"""

import json
import os
import sys
from pathlib import Path
from typing import Dict, Optional, Tuple, get_args

from pydantic import BaseModel, Field, ValidationError

from melon_client.utils.data_model import GameType
from melon_client.utils.monitoring import get_logger

logger = get_logger(__name__)

DEFAULT_VERSIONS: Dict[str, str] = {
    'vanilla': "1.20.4",
    'forge': "1.20.1-forge-47.2.20",
    'fabric': "fabric-loader-0.15.7-1.20.4",
}


class VersionEntry(BaseModel):
    """One game type's installed build."""
    version_id: str = Field(..., description="Installed version identifier")
    classpath: Tuple[str, ...] = Field(default=(), description="Extra classpath entries")


class VersionRegistry:
    """Registry of installed builds per game type."""

    def __init__(self, config_path: Optional[Path] = None):
        self._versions: Dict[str, VersionEntry] = {
            game_type: VersionEntry(version_id=version_id)
            for game_type, version_id in DEFAULT_VERSIONS.items()
        }
        if config_path is not None:
            self._load_config(Path(config_path))

    def _load_config(self, config_path: Path):
        """Load version overrides from a JSON file."""
        if not config_path.exists():
            logger.debug(f"No version overrides at {config_path}")
            return
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Invalid version file {config_path}: {e}")
            return

        if not isinstance(config_data, dict):
            logger.error(f"Version file {config_path} must contain a JSON object")
            return

        valid_types = get_args(GameType)
        for game_type, entry_data in config_data.items():
            if game_type not in valid_types:
                logger.warning(f"Unknown game type '{game_type}' in {config_path}, skipping")
                continue
            try:
                if isinstance(entry_data, str):
                    entry = VersionEntry(version_id=entry_data)
                else:
                    entry = VersionEntry(**entry_data)
            except (TypeError, ValidationError) as e:
                logger.error(f"Invalid entry for '{game_type}' in {config_path}: {e}")
                continue
            self._versions[game_type] = entry
            logger.debug(f"Registered {game_type}: {entry.version_id}")

        logger.info(f"Loaded version overrides from {config_path}")

    def resolve_version_id(self, game_type: str) -> Optional[str]:
        """
        Get the version id for a game type.

        Returns:
            The version id, or None when no suitable build exists
        """
        entry = self._versions.get(game_type)
        if entry is None or not entry.version_id:
            logger.warning(f"No {game_type} version available")
            return None
        return entry.version_id

    def extra_classpath(self, game_type: str) -> Tuple[str, ...]:
        """Additional classpath entries for a game type."""
        entry = self._versions.get(game_type)
        return entry.classpath if entry else ()

    def list_versions(self) -> Dict[str, str]:
        return {game_type: entry.version_id for game_type, entry in self._versions.items()}


def installation_root(platform: Optional[str] = None) -> Path:
    """Platform default game directory."""
    platform = platform or sys.platform
    home = Path.home()
    if platform == 'win32':
        appdata = os.environ.get("APPDATA")
        base = Path(appdata) if appdata else home / "AppData" / "Roaming"
        return base / ".minecraft"
    if platform == 'darwin':
        return home / "Library" / "Application Support" / "minecraft"
    return home / ".minecraft"
