"""
Launch orchestration.

This module provides:
- prepare_launch(): identity -> version -> LaunchPlan, with no side effects
- launch(): prepare_launch(), then persist preferences and spawn the game

Preferences are written only after the plan has been built, so a rejected
attempt leaves the stored config untouched. Callers are expected to run at
most one launch at a time.
"""

from pathlib import Path
from typing import Optional

from melon_client.launching.command import DEFAULT_JAVA_EXECUTABLE, build_launch_plan
from melon_client.launching.identity import resolve_identity
from melon_client.launching.versions import VersionRegistry, installation_root
from melon_client.utils import config_store as keys
from melon_client.utils.config_store import ConfigStore
from melon_client.utils.data_model import (
    AuthenticatedProfile,
    LaunchPlan,
    LaunchRequest,
    LaunchResult,
)
from melon_client.utils.exceptions import MissingVersion
from melon_client.utils.monitoring import get_logger
from melon_client.utils.process import launch_process

logger = get_logger(__name__)


def clamp_memory(requested_gb: int, max_memory_gb: int) -> int:
    """Keep the requested heap inside [1, max_memory_gb]."""
    return max(1, min(requested_gb, max(1, max_memory_gb)))


def resolve_install_root(config: ConfigStore, install_root: Optional[Path] = None) -> Path:
    """Explicit argument, then the configured game_dir, then the platform default."""
    if install_root is not None:
        return Path(install_root)
    configured = config.get(keys.KEY_GAME_DIR, "")
    if configured:
        return Path(configured)
    return installation_root()


def prepare_launch(
    request: LaunchRequest,
    *,
    config: ConfigStore,
    registry: VersionRegistry,
    max_memory_gb: int,
    authenticated_profile: Optional[AuthenticatedProfile] = None,
    install_root: Optional[Path] = None,
) -> LaunchPlan:
    """
    Validate the request and build its launch plan.

    Args:
        request: Front-end input (login mode, username, game type, memory)
        config: Preference store (read only here)
        registry: Version registry used to pick the build
        max_memory_gb: Detected memory budget
        authenticated_profile: Profile for authenticated mode
        install_root: Game directory override

    Returns:
        LaunchPlan for the request

    Raises:
        InvalidUsername, NotAuthenticated: Identity could not be resolved
        MissingVersion: No build for the requested game type
    """
    logger.info(f"Launch requested: mode={request.login_mode}, game={request.game_type}, "
                f"ram={request.memory_gb}G")

    identity = resolve_identity(request.login_mode, request.username, authenticated_profile)

    version_id = registry.resolve_version_id(request.game_type)
    if not version_id:
        raise MissingVersion(request.game_type.capitalize())

    memory_gb = clamp_memory(request.memory_gb, max_memory_gb)
    if memory_gb != request.memory_gb:
        logger.warning(f"Requested {request.memory_gb}G is outside 1-{max_memory_gb}G, using {memory_gb}G")

    java_executable = config.get(keys.KEY_JAVA_PATH, "") or DEFAULT_JAVA_EXECUTABLE
    return build_launch_plan(
        version_id,
        resolve_install_root(config, install_root),
        identity,
        memory_gb,
        extra_classpath=registry.extra_classpath(request.game_type),
        java_executable=java_executable,
        max_memory_gb=max(1, max_memory_gb),
    )


def _persist_preferences(config: ConfigStore, request: LaunchRequest, plan: LaunchPlan) -> None:
    if request.login_mode == 'offline':
        config.set(keys.KEY_OFFLINE_USERNAME, request.username)
    config.set(keys.KEY_LOGIN_TYPE, request.login_mode)
    config.set(keys.KEY_RAM, plan.requested_memory_gb)
    config.set(keys.KEY_GAME_TYPE, request.game_type)
    config.flush()


def launch(
    request: LaunchRequest,
    *,
    config: ConfigStore,
    registry: VersionRegistry,
    max_memory_gb: int,
    authenticated_profile: Optional[AuthenticatedProfile] = None,
    install_root: Optional[Path] = None,
) -> LaunchResult:
    """
    Run one launch attempt end to end.

    Arguments are the same as prepare_launch().

    Returns:
        LaunchResult with the plan and the spawned process

    Raises:
        InvalidUsername, NotAuthenticated: Identity could not be resolved
        MissingVersion: No build for the requested game type
        SpawnFailed: The OS could not start the game
    """
    plan = prepare_launch(
        request,
        config=config,
        registry=registry,
        max_memory_gb=max_memory_gb,
        authenticated_profile=authenticated_profile,
        install_root=install_root,
    )

    _persist_preferences(config, request, plan)

    process = launch_process(plan)
    logger.info(f"Minecraft launched -> {' '.join(plan.redacted_command())}")
    return LaunchResult(plan=plan, process=process)
