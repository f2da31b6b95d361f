"""Timeout bounding for calls into external collaborators."""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

import structlog

from shared.errors import DependencyTimeout

logger = structlog.get_logger(__name__)

T = TypeVar("T")


async def bounded(awaitable: Awaitable[T], timeout: float, dependency: str) -> T:
    """Await ``awaitable`` for at most ``timeout`` seconds.

    Expiry cancels the call and raises ``DependencyTimeout`` naming the
    collaborator. The caller never hangs on a stuck dependency.
    """
    try:
        async with asyncio.timeout(timeout):
            return await awaitable
    except TimeoutError as exc:
        logger.warning("Dependency call timed out", dependency=dependency, timeout=timeout)
        raise DependencyTimeout(
            dependency,
            f"{dependency} did not respond within {timeout}s",
            timeout=timeout,
        ) from exc
