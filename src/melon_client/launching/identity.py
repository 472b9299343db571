"""
Player identity resolution.

Offline players get a name-based UUID derived exactly the way the game's own
servers derive offline ids, so per-player save data stays stable across
launches without any central account.
"""

import hashlib
import re
import uuid
from typing import Optional, get_args

from melon_client.utils.data_model import (
    OFFLINE_TOKEN,
    AuthenticatedProfile,
    LoginMode,
    SessionIdentity,
)
from melon_client.utils.exceptions import InvalidUsername, NotAuthenticated
from melon_client.utils.monitoring import get_logger

logger = get_logger(__name__)

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]{3,16}$")
OFFLINE_NAMESPACE_PREFIX = "OfflinePlayer:"


def is_valid_username(name: Optional[str]) -> bool:
    """3-16 characters, ASCII letters, digits and underscores only."""
    return name is not None and USERNAME_PATTERN.fullmatch(name) is not None


def offline_uuid(username: str) -> str:
    """
    Derive the version-3 UUID used for an offline player.

    MD5 of "OfflinePlayer:<name>" with the version nibble forced to 3 and the
    variant bits forced to RFC 4122.
    """
    digest = bytearray(hashlib.md5((OFFLINE_NAMESPACE_PREFIX + username).encode("utf-8")).digest())
    digest[6] = (digest[6] & 0x0F) | 0x30
    digest[8] = (digest[8] & 0x3F) | 0x80
    return str(uuid.UUID(bytes=bytes(digest)))


def resolve_identity(
    mode: LoginMode,
    raw_username: Optional[str] = None,
    authenticated_profile: Optional[AuthenticatedProfile] = None,
) -> SessionIdentity:
    """
    Build the session identity for a launch attempt.

    Args:
        mode: 'offline' or 'authenticated'
        raw_username: Username typed by the player (offline mode)
        authenticated_profile: Profile from the identity provider (authenticated mode)

    Returns:
        SessionIdentity for the game

    Raises:
        InvalidUsername: Offline username fails the username policy
        NotAuthenticated: Authenticated mode without a profile
        ValueError: Unknown login mode
    """
    valid_modes = get_args(LoginMode)
    if mode not in valid_modes:
        raise ValueError(f"Invalid login mode: '{mode}'. Must be one of {valid_modes}")

    if mode == 'offline':
        if not is_valid_username(raw_username):
            logger.info(f"Rejected offline username: {raw_username!r}")
            raise InvalidUsername(raw_username)
        identity = SessionIdentity(
            display_name=raw_username,
            unique_id=offline_uuid(raw_username),
            credential_token=OFFLINE_TOKEN,
        )
    else:
        if authenticated_profile is None:
            logger.info("Authenticated launch requested without a profile")
            raise NotAuthenticated()
        # The provider is the source of truth; no username policy here
        identity = SessionIdentity(
            display_name=authenticated_profile.name,
            unique_id=authenticated_profile.id,
            credential_token=authenticated_profile.token,
        )

    logger.debug(f"Resolved {mode} identity: {identity.display_name} ({identity.unique_id})")
    return identity
