"""Exception types raised by the launch pipeline.

Every error here is recoverable by the user: the attempt is abandoned and the
message is shown as-is.
"""

from typing import Optional


class LauncherError(Exception):
    """Base exception for all Melon Client launch errors."""


# ── Identity ───────────────────────────────────────────────────


class IdentityError(LauncherError):
    """A session identity could not be resolved."""


class InvalidUsername(IdentityError):
    """Offline username violates the length/character policy."""

    def __init__(self, username: Optional[str] = None):
        self.username = username
        super().__init__(
            "Username must be 3-16 characters long and contain only letters, "
            "numbers, and underscores."
        )


class NotAuthenticated(IdentityError):
    """Authenticated mode was selected without a profile."""

    def __init__(self):
        super().__init__("Please log in with Microsoft before launching.")


# ── Command building ───────────────────────────────────────────


class BuildError(LauncherError):
    """A launch plan could not be assembled."""


class MissingVersion(BuildError):
    """No version identifier is available for the requested build."""

    def __init__(self, game_type: Optional[str] = None):
        self.game_type = game_type
        if game_type:
            message = f"Could not find a suitable {game_type} version."
        else:
            message = "No game version was selected."
        super().__init__(message)


# ── Process spawn ──────────────────────────────────────────────


class LaunchError(LauncherError):
    """The game process could not be started."""


class SpawnFailed(LaunchError):
    """The OS refused to spawn the child process."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Launch failed:\n{cause}")
