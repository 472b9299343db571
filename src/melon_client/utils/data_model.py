"""
Unified data models for Melon Client.

This module contains all Pydantic BaseModel classes passed between the launch
stages. Every model is frozen: a value is built once per launch attempt and
handed to the next stage unchanged.
"""

import subprocess
import uuid
from pathlib import Path
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================================================
# Type Definitions
# ============================================================================

LoginMode = Literal['offline', 'authenticated']
GameType = Literal['vanilla', 'forge', 'fabric']

OFFLINE_TOKEN = "null"
TOKEN_FLAG = "--accessToken"
REDACTED = "********"


def canonical_uuid(value: str) -> str:
    """Render any accepted UUID spelling (dashed, undashed, braced) as dashed lowercase hex."""
    try:
        return str(uuid.UUID(value))
    except (ValueError, TypeError, AttributeError):
        raise ValueError(f"not a valid UUID: {value!r}")


# ============================================================================
# Identity Models
# ============================================================================

class AuthenticatedProfile(BaseModel):
    """
    Profile handed over by the identity provider after a successful login.

    Attributes:
        name: Player name as reported by the provider
        id: Player UUID as reported by the provider
        token: Access token for the game session
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Player name reported by the provider")
    id: str = Field(..., description="Player UUID reported by the provider")
    token: str = Field(..., description="Session access token")

    @field_validator("id")
    @classmethod
    def _check_id(cls, value: str) -> str:
        return canonical_uuid(value)


class SessionIdentity(BaseModel):
    """
    Canonical player identity passed to the game.

    Attributes:
        display_name: Name shown in game
        unique_id: Canonical dashed UUID text
        credential_token: Access token, or "null" for offline sessions
    """
    model_config = ConfigDict(frozen=True)

    display_name: str = Field(..., description="Name shown in game")
    unique_id: str = Field(..., description="Canonical dashed UUID text")
    credential_token: str = Field(..., description="Access token ('null' when offline)")

    @field_validator("unique_id")
    @classmethod
    def _check_uuid(cls, value: str) -> str:
        return canonical_uuid(value)

    @property
    def is_offline(self) -> bool:
        return self.credential_token == OFFLINE_TOKEN


# ============================================================================
# Launch Models
# ============================================================================

class LaunchPlan(BaseModel):
    """
    Fully resolved child-process invocation.

    Attributes:
        executable: Java executable (name on PATH or absolute path)
        arguments: Ordered JVM and game arguments, excluding the executable
        working_directory: Directory the game is started in (the install root)
        requested_memory_gb: Maximum heap in GiB
        environment: Environment variables for the child process
    """
    model_config = ConfigDict(frozen=True)

    executable: str = Field(..., min_length=1, description="Java executable")
    arguments: Tuple[str, ...] = Field(..., description="Ordered JVM and game arguments")
    working_directory: Path = Field(..., description="Working directory for the game")
    requested_memory_gb: int = Field(..., ge=1, description="Maximum heap in GiB")
    environment: Dict[str, str] = Field(default_factory=dict, description="Child environment")

    @property
    def command(self) -> List[str]:
        """Full argv: executable followed by arguments."""
        return [self.executable, *self.arguments]

    def redacted_command(self) -> List[str]:
        """argv with the access token masked, for logs."""
        command = self.command
        for i, arg in enumerate(command[:-1]):
            if arg == TOKEN_FLAG and command[i + 1] != OFFLINE_TOKEN:
                command[i + 1] = REDACTED
        return command


class LaunchRequest(BaseModel):
    """
    Raw launch input collected by the front-end.

    Attributes:
        login_mode: 'offline' or 'authenticated'
        username: Offline username (ignored in authenticated mode)
        game_type: Which build flavour to start
        memory_gb: Requested heap in GiB (clamped to the detected budget)
    """
    model_config = ConfigDict(frozen=True)

    login_mode: LoginMode = Field(default='offline', description="Login mode")
    username: Optional[str] = Field(default=None, description="Offline username")
    game_type: GameType = Field(default='vanilla', description="Build flavour")
    memory_gb: int = Field(default=4, description="Requested heap in GiB")

    @field_validator("username")
    @classmethod
    def _strip_username(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else None


class LaunchResult(BaseModel):
    """Outcome of a successful launch: the plan and the spawned process."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    plan: LaunchPlan
    process: subprocess.Popen

    @property
    def pid(self) -> int:
        return self.process.pid
