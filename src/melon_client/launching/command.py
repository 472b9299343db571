"""
Java command-line assembly for the game client.

build_launch_plan() turns already-validated inputs into a LaunchPlan. It does
not touch the filesystem or the network.
"""

import os
from pathlib import Path
from typing import Iterable, Mapping, Optional, Union

from melon_client.utils.data_model import TOKEN_FLAG, LaunchPlan, SessionIdentity
from melon_client.utils.exceptions import MissingVersion
from melon_client.utils.monitoring import get_logger

logger = get_logger(__name__)

MAIN_CLASS = "net.minecraft.client.main.Main"
DEFAULT_JAVA_EXECUTABLE = "java"


def initial_heap_gb(max_heap_gb: int) -> int:
    """Half the maximum heap, never below 1 GiB."""
    return max(1, max_heap_gb // 2)


def build_classpath(install_root: Path, version_id: str, extra_entries: Iterable[str] = ()) -> str:
    """Join classpath entries with the host's path-list separator."""
    entries = [
        str(install_root / "libraries"),
        str(install_root / "versions" / f"{version_id}.jar"),
    ]
    entries.extend(str(entry) for entry in extra_entries)
    return os.pathsep.join(entries)


def build_launch_plan(
    version_id: Optional[str],
    install_root: Union[str, Path],
    identity: SessionIdentity,
    requested_memory_gb: int,
    *,
    extra_classpath: Iterable[str] = (),
    java_executable: str = DEFAULT_JAVA_EXECUTABLE,
    environment: Optional[Mapping[str, str]] = None,
    max_memory_gb: Optional[int] = None,
) -> LaunchPlan:
    """
    Assemble the full game invocation.

    Args:
        version_id: Installed version identifier (e.g. '1.20.4')
        install_root: Game directory
        identity: Resolved session identity
        requested_memory_gb: Maximum heap in GiB (>= 1)
        extra_classpath: Additional classpath entries reported by the installation
        java_executable: Java binary to run
        environment: Child environment (defaults to a copy of os.environ)
        max_memory_gb: Upper bound for requested_memory_gb, if one is known

    Returns:
        LaunchPlan ready for launch_process()

    Raises:
        MissingVersion: If version_id is empty
        ValueError: If requested_memory_gb exceeds max_memory_gb
    """
    if not version_id:
        raise MissingVersion()
    if max_memory_gb is not None and requested_memory_gb > max_memory_gb:
        raise ValueError(f"{requested_memory_gb} GiB exceeds the {max_memory_gb} GiB budget")

    root = Path(install_root)
    arguments = (
        f"-Xmx{requested_memory_gb}G",
        f"-Xms{initial_heap_gb(requested_memory_gb)}G",
        f"-Djava.library.path={root / 'natives'}",
        "-cp",
        build_classpath(root, version_id, extra_classpath),
        MAIN_CLASS,
        "--username", identity.display_name,
        "--uuid", identity.unique_id,
        TOKEN_FLAG, identity.credential_token,
        "--version", version_id,
        "--gameDir", str(root),
    )

    plan = LaunchPlan(
        executable=java_executable,
        arguments=arguments,
        working_directory=root,
        requested_memory_gb=requested_memory_gb,
        environment=dict(os.environ if environment is None else environment),
    )
    logger.debug(f"Built launch plan for {version_id} ({requested_memory_gb} GiB)")
    return plan
