"""Executor for state-changing backend requests."""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from shop_admin.errors import AdminClientError
from shop_admin.services.invalidation import InvalidationBus

RequestFn = Callable[[], Awaitable[Any]]
SuccessCallback = Callable[[Any], object]
ErrorCallback = Callable[[AdminClientError], object]

logger = logging.getLogger(__name__)


@dataclass
class MutationExecutor:
    """Runs mutations once and announces the query keys they invalidate."""

    invalidation_bus: InvalidationBus
    _locks: dict[str, asyncio.Lock] = field(default_factory=dict)
    # Callers holding or waiting on each key's lock.
    _holders: dict[str, int] = field(default_factory=dict)

    async def mutate(
        self,
        request_fn: RequestFn,
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
        invalidates: Iterable[str] = (),
        key: str | None = None,
    ) -> None:
        """Run a mutation and report its outcome to exactly one callback.

        On success the ``invalidates`` keys are published before
        ``on_success`` runs. Failures are never retried and leave cached
        queries untouched; without ``on_error`` they are raised.
        """
        if key is None:
            await self._execute(request_fn, on_success, on_error, tuple(invalidates))
            return
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._holders[key] = self._holders.get(key, 0) + 1
        try:
            async with lock:
                await self._execute(
                    request_fn, on_success, on_error, tuple(invalidates)
                )
        finally:
            self._holders[key] -= 1
            if not self._holders[key]:
                del self._holders[key]
                del self._locks[key]

    async def _execute(
        self,
        request_fn: RequestFn,
        on_success: SuccessCallback | None,
        on_error: ErrorCallback | None,
        invalidates: tuple[str, ...],
    ) -> None:
        try:
            result = await request_fn()
        except AdminClientError as exc:
            logger.warning("Mutation failed: %s", exc.message)
            if on_error is None:
                raise
            await _call(on_error, exc)
            return
        self.invalidation_bus.publish(invalidates)
        if on_success is not None:
            await _call(on_success, result)


async def _call(callback: Callable[[Any], object], value: object) -> None:
    outcome = callback(value)
    if inspect.isawaitable(outcome):
        await outcome
