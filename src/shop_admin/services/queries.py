"""Keyed query cache for backend reads.

Each key holds one ``QueryEntry``. Concurrent ``query`` calls for a key share
a single in-flight request, and every request carries a per-key sequence
number so that a slow response can never overwrite one issued after it.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta

from shop_admin.domain.queries import QueryEntry, QueryStatus
from shop_admin.errors import AdminClientError

FetchFn = Callable[[], Awaitable[object]]
Clock = Callable[[], datetime]

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class _InFlight:
    seq: int
    task: "asyncio.Task[None]"


class QueryClient:
    """Caches the last result per query key and de-duplicates fetches."""

    def __init__(
        self, stale_after_seconds: float = 30.0, clock: Clock | None = None
    ) -> None:
        self.stale_after = timedelta(seconds=stale_after_seconds)
        self._clock = clock or _utcnow
        self._entries: dict[str, QueryEntry] = {}
        self._in_flight: dict[str, _InFlight] = {}
        self._issued: dict[str, int] = {}
        self._applied: dict[str, int] = {}
        self._stale_through: dict[str, int] = {}

    def get(self, key: str) -> QueryEntry:
        """Return the current entry for a key without fetching."""
        return self._entries.get(key) or QueryEntry(key=key)

    async def query(self, key: str, fetch_fn: FetchFn) -> QueryEntry:
        """Return a fresh entry for the key, fetching it when needed."""
        entry = self.get(key)
        if self._is_fresh(entry):
            return entry
        in_flight = self._in_flight.get(key)
        if in_flight is None:
            in_flight = self._start(key, fetch_fn)
        else:
            logger.debug("Joining in-flight request #%d for %r", in_flight.seq, key)
        await asyncio.shield(in_flight.task)
        return self.get(key)

    def invalidate(self, key: str) -> None:
        """Mark a key stale so the next query re-fetches it."""
        entry = self._entries.get(key)
        if entry is not None:
            self._entries[key] = replace(entry, is_stale=True)
        # Responses to requests issued so far land as stale.
        self._stale_through[key] = self._issued.get(key, 0)
        self._in_flight.pop(key, None)
        logger.debug("Invalidated query %r", key)

    def clear(self) -> None:
        """Drop every entry and ignore responses still in flight."""
        for key, seq in self._issued.items():
            self._applied[key] = seq
        self._entries.clear()
        self._in_flight.clear()
        self._stale_through.clear()

    def _is_fresh(self, entry: QueryEntry) -> bool:
        if not entry.is_success or entry.is_stale or entry.fetched_at is None:
            return False
        return self._clock() - entry.fetched_at < self.stale_after

    def _start(self, key: str, fetch_fn: FetchFn) -> _InFlight:
        seq = self._issued.get(key, 0) + 1
        self._issued[key] = seq
        self._entries[key] = replace(
            self.get(key), status=QueryStatus.LOADING, error=None
        )
        task = asyncio.create_task(self._run(key, seq, fetch_fn))
        in_flight = _InFlight(seq=seq, task=task)
        self._in_flight[key] = in_flight
        return in_flight

    async def _run(self, key: str, seq: int, fetch_fn: FetchFn) -> None:
        try:
            data = await fetch_fn()
        except AdminClientError as exc:
            logger.info("Query %r failed: %s", key, exc.message)
            self._apply(
                key,
                seq,
                QueryEntry(
                    key=key,
                    status=QueryStatus.ERROR,
                    error=exc,
                    fetched_at=self._clock(),
                ),
            )
        else:
            self._apply(
                key,
                seq,
                QueryEntry(
                    key=key,
                    status=QueryStatus.SUCCESS,
                    data=data,
                    fetched_at=self._clock(),
                ),
            )
        finally:
            current = self._in_flight.get(key)
            if current is not None and current.seq == seq:
                del self._in_flight[key]

    def _apply(self, key: str, seq: int, entry: QueryEntry) -> None:
        if seq <= self._applied.get(key, 0):
            logger.debug("Discarding out-of-order response #%d for %r", seq, key)
            return
        self._applied[key] = seq
        is_stale = seq < self._issued.get(key, 0) or seq <= self._stale_through.get(
            key, 0
        )
        self._entries[key] = replace(entry, is_stale=is_stale)
