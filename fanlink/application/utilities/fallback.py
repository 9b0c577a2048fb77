"""Declarative fallback chains.

A chain is an ordered list of zero-argument coroutine factories. They are
tried in order and the first acceptable result wins; later attempts are never
started. An attempt that raises counts as no result.
"""

from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from fanlink.config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Attempt = Callable[[], Awaitable[T | None]]


async def first_successful(
    attempts: Sequence[Attempt[T]],
    operation: str = "fallback",
    accept: Callable[[T], bool] | None = None,
) -> T | None:
    """Run attempts in order until one returns an acceptable value.

    Args:
        attempts: Coroutine factories, most preferred first
        operation: Name used in log messages
        accept: Predicate a result must pass; any non-None result when omitted

    Returns:
        The first accepted result, or None when every attempt came up empty.
    """
    for index, attempt in enumerate(attempts):
        try:
            result = await attempt()
        except Exception as e:
            logger.warning(f"{operation}: attempt {index + 1} failed: {e!r}")
            continue
        if result is None:
            continue
        if accept is not None and not accept(result):
            logger.debug(f"{operation}: attempt {index + 1} result rejected")
            continue
        logger.debug(f"{operation}: attempt {index + 1} succeeded")
        return result
    logger.debug(f"{operation}: all {len(attempts)} attempts came up empty")
    return None
