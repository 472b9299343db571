"""
Authenticated-profile handling.

Real Microsoft login is not implemented; PlaceholderAuthenticator only
produces a profile of the right shape so the authenticated launch path can be
exercised end to end.
"""

import uuid
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from melon_client.utils.data_model import AuthenticatedProfile
from melon_client.utils.monitoring import get_logger

logger = get_logger(__name__)

DEFAULT_PROFILE_PATH = Path("melon_profile.json")
PLACEHOLDER_NAME = "Player"
PLACEHOLDER_TOKEN = "placeholder_token"


class PlaceholderAuthenticator:
    """Stands in for the Microsoft OAuth flow."""

    def login(self) -> AuthenticatedProfile:
        logger.info("Microsoft login placeholder invoked.")
        logger.warning("Microsoft login is not implemented in this build.")
        return AuthenticatedProfile(
            name=PLACEHOLDER_NAME,
            id=str(uuid.uuid4()),
            token=PLACEHOLDER_TOKEN,
        )


def save_profile(path: Path, profile: AuthenticatedProfile) -> None:
    """Write a profile to disk as JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(profile.model_dump_json(indent=2), encoding='utf-8')
    logger.info(f"Profile for {profile.name} saved to {path}")


def load_profile(path: Optional[Path]) -> Optional[AuthenticatedProfile]:
    """
    Read a previously saved profile.

    Returns:
        The profile, or None if the file is missing or invalid
    """
    if path is None:
        return None
    path = Path(path)
    if not path.exists():
        logger.debug(f"No saved profile at {path}")
        return None
    try:
        return AuthenticatedProfile.model_validate_json(path.read_text(encoding='utf-8'))
    except (OSError, ValidationError) as e:
        logger.warning(f"Ignoring unreadable profile {path}: {e}")
        return None
