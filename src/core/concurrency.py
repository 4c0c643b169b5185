"""Async primitives: first-of(operation, timer) race and single-flight registry."""

import asyncio
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any, Generic, TypeVar

import structlog

from core.exceptions import OperationTimeoutError

logger = structlog.get_logger()

T = TypeVar("T")


def _retrieve_outcome(task: asyncio.Future[Any]) -> None:
    """Consume a late result so an abandoned task never reports as unhandled."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug("abandoned_operation_failed", error=str(exc), error_type=type(exc).__name__)


async def race_with_timeout(
    operation: Awaitable[T],
    timeout: float,
    *,
    name: str = "operation",
) -> T:
    """Return the operation's result, or raise OperationTimeoutError if the timer wins.

    The operation is not cancelled when it loses. It keeps running in the
    background and whatever it eventually produces is dropped.
    """
    task = asyncio.ensure_future(operation)
    done, _ = await asyncio.wait({task}, timeout=timeout)
    if task in done:
        return task.result()

    task.add_done_callback(_retrieve_outcome)
    raise OperationTimeoutError(name, timeout)


class SingleFlight(Generic[T]):
    """Registry of in-flight tasks keyed by a string.

    A second ``run`` for a key that is still in flight joins the existing
    task instead of starting another one. ``force=True`` always starts a
    new task and makes it the registered one for that key.
    """

    def __init__(self) -> None:
        self._in_flight: dict[str, asyncio.Task[T]] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._in_flight

    def __len__(self) -> int:
        return len(self._in_flight)

    def get(self, key: str) -> asyncio.Task[T] | None:
        return self._in_flight.get(key)

    def start(
        self,
        key: str,
        factory: Callable[[], Coroutine[Any, Any, T]],
        *,
        force: bool = False,
    ) -> asyncio.Task[T]:
        """Return the in-flight task for ``key``, creating it if needed."""
        existing = self._in_flight.get(key)
        if existing is not None and not existing.done() and not force:
            return existing

        task = asyncio.get_running_loop().create_task(factory())
        self._in_flight[key] = task

        def _forget(finished: asyncio.Task[T]) -> None:
            if self._in_flight.get(key) is finished:
                del self._in_flight[key]

        task.add_done_callback(_forget)
        return task

    def discard(self, key: str | None = None) -> None:
        """Forget one key (or all keys). Running tasks are left to finish."""
        if key is None:
            self._in_flight.clear()
        else:
            self._in_flight.pop(key, None)
