"""Domain models for cached query state."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from shop_admin.errors import AdminClientError


class QueryStatus(Enum):
    """Lifecycle of a keyed query."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class QueryEntry:
    """Snapshot of the cached state for one query key."""

    key: str
    status: QueryStatus = QueryStatus.IDLE
    data: object | None = None
    error: AdminClientError | None = None
    fetched_at: datetime | None = None
    is_stale: bool = False

    @property
    def is_loading(self) -> bool:
        return self.status is QueryStatus.LOADING

    @property
    def is_success(self) -> bool:
        return self.status is QueryStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.status is QueryStatus.ERROR
