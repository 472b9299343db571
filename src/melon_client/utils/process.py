"""
Process management utilities for launching the game.

This module provides:
- launch_process(): Start a LaunchPlan as a detached child process
"""

import subprocess
import sys

from melon_client.utils.data_model import LaunchPlan
from melon_client.utils.exceptions import SpawnFailed
from melon_client.utils.monitoring import get_logger

logger = get_logger(__name__)


def _platform_spawn_options() -> dict:
    """Keep the child alive independently of the launcher."""
    if sys.platform == 'win32':
        return {"creationflags": subprocess.CREATE_NEW_PROCESS_GROUP}
    return {"start_new_session": True}


def launch_process(plan: LaunchPlan) -> subprocess.Popen:
    """
    Spawn the game described by a launch plan.

    Returns as soon as the OS has created the process; the child's exit is
    not awaited and its output streams are inherited, not consumed.

    Args:
        plan: Fully built LaunchPlan

    Returns:
        subprocess.Popen object for the launched process

    Raises:
        SpawnFailed: If the executable is missing, not executable, or the
            working directory is invalid
    """
    logger.info(f"Launching: {plan.executable}")
    logger.info(f"Working directory: {plan.working_directory}")

    try:
        process = subprocess.Popen(
            plan.command,
            cwd=str(plan.working_directory),
            env=plan.environment or None,
            **_platform_spawn_options()
        )
    except (OSError, ValueError, subprocess.SubprocessError) as e:
        logger.error(f"Failed to launch {plan.executable}: {e}")
        raise SpawnFailed(e) from e

    logger.info(f"Process launched (PID: {process.pid})")
    return process
