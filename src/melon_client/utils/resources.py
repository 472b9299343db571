"""
Memory ceiling detection for the game process.

Two strategies are tried in order: total physical memory (via psutil) and
then the launcher's own address-space limit. Neither raises; if both come up
empty the ceiling is 1 GiB.
"""

from typing import Callable, Optional, Sequence

import psutil

from melon_client.utils.monitoring import get_logger

logger = get_logger(__name__)

BYTES_PER_GB = 1 << 30

# Cached budget, computed on first use
_resource_budget: Optional[int] = None


def _bytes_to_gb(value: int) -> int:
    return max(1, value // BYTES_PER_GB)


def physical_memory_bytes() -> Optional[int]:
    """Total physical memory in bytes, or None if it cannot be read."""
    try:
        total = psutil.virtual_memory().total
    except Exception as e:
        logger.debug(f"Physical RAM detection unavailable: {e!r}")
        return None
    if not total or total <= 0:
        return None
    return int(total)


def process_memory_limit_bytes() -> Optional[int]:
    """Soft RLIMIT_AS of this process in bytes, or None if unlimited/unsupported."""
    try:
        import resource

        soft, _hard = resource.getrlimit(resource.RLIMIT_AS)
        if soft == resource.RLIM_INFINITY or soft <= 0:
            return None
        return int(soft)
    except Exception as e:
        logger.debug(f"Process memory limit unavailable: {e!r}")
        return None


DEFAULT_STRATEGIES: Sequence[Callable[[], Optional[int]]] = (
    physical_memory_bytes,
    process_memory_limit_bytes,
)


def detect_max_allocation(
    strategies: Sequence[Callable[[], Optional[int]]] = DEFAULT_STRATEGIES
) -> int:
    """
    Determine the maximum memory (whole GiB, >= 1) offerable to the game.

    Args:
        strategies: Ordered byte-count sources; the first non-None answer wins

    Returns:
        Memory ceiling in GiB, never less than 1
    """
    for strategy in strategies:
        try:
            value = strategy()
        except Exception as e:
            logger.debug(f"Memory strategy {getattr(strategy, '__name__', strategy)} failed: {e!r}")
            continue
        if value is not None:
            gb = _bytes_to_gb(value)
            logger.debug(f"Detected {gb} GiB via {getattr(strategy, '__name__', strategy)}")
            return gb

    logger.debug("No memory detection strategy available, defaulting to 1 GiB")
    return 1


def get_resource_budget() -> int:
    """Return the memory ceiling, detecting it on the first call only."""
    global _resource_budget
    if _resource_budget is None:
        _resource_budget = detect_max_allocation()
        logger.info(f"Maximum RAM allocation: {_resource_budget} GiB")
    return _resource_budget


def reset_resource_budget() -> None:
    """Forget the cached budget so the next call detects again."""
    global _resource_budget
    _resource_budget = None
