# dashboard/list_state.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Tuple

from backend.client import ApiError
from dashboard.filters import ALL, filter_records

logger = logging.getLogger(__name__)

LOAD_ERROR = "Could not load data. Please try again."

# A fetch returns (raw rows, backend total); `parse` turns rows into records
Fetch = Callable[[], Awaitable[Tuple[List[dict], int]]]


@dataclass
class ListParams:
    search: str = ""
    filters: Dict[str, Any] = field(default_factory=dict)

    def set_filter(self, name: str, value: Any) -> None:
        self.filters[name] = ALL if value in (None, "") else value


@dataclass
class ListState:
    """
    State of one list page: the last fetched records plus what the user
    typed into the filter widgets. `visible()` is recomputed on demand.
    """

    name: str
    parse: Callable[[dict], Any]
    items: List[Any] = field(default_factory=list)
    total: int = 0
    loading: bool = False
    loaded: bool = False
    error: Optional[str] = None
    params: ListParams = field(default_factory=ListParams)
    _ticket: int = field(default=0, init=False, repr=False)

    async def load(self, fetch: Fetch) -> None:
        self._ticket += 1
        ticket = self._ticket
        self.loading = True
        try:
            rows, total = await fetch()
            records = [self.parse(r) for r in rows if isinstance(r, dict)]
        except ApiError as e:
            if ticket == self._ticket:
                logger.error(f"Error fetching {self.name}: {e}")
                self.error = LOAD_ERROR
            return
        finally:
            if ticket == self._ticket:
                self.loading = False

        # a newer load was started while this one was in flight
        if ticket != self._ticket:
            logger.info(f"Dropping stale {self.name} response #{ticket}")
            return

        self.items = records
        self.total = total
        self.error = None
        self.loaded = True

    async def refresh(self, fetch: Fetch) -> None:
        await self.load(fetch)

    def visible(self, search_fields: Sequence[str] = ()) -> List[Any]:
        return filter_records(self.items, self.params.search, search_fields, **self.params.filters)

    def is_empty(self, search_fields: Sequence[str] = ()) -> bool:
        return self.loaded and self.error is None and not self.visible(search_fields)

    def replace(self, match: Callable[[Any], bool], updated: Any) -> None:
        self.items = [updated if match(item) else item for item in self.items]

    def remove(self, match: Callable[[Any], bool]) -> None:
        kept = [item for item in self.items if not match(item)]
        self.total = max(0, self.total - (len(self.items) - len(kept)))
        self.items = kept
