"""City feed controller: paginated, searchable, sortable city list."""

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

from weatherdesk.errors import UpstreamUnavailable
from weatherdesk.feed import state as transitions
from weatherdesk.feed.enrichment import WeatherSummaryFetcher
from weatherdesk.models.city import CityRow
from weatherdesk.models.common import SortDirection
from weatherdesk.models.feed import FeedQuery, FeedState

logger = logging.getLogger(__name__)

Listener = Callable[[FeedState], None]


class CityDirectory(Protocol):
    async def search(self, query: FeedQuery) -> list[CityRow]:
        ...


class CityFeedController:
    """Owns FeedState and runs the fetches the reducers ask for.

    Resets (new search term, new sort, refresh) bump a generation counter;
    a page that arrives for an older generation is dropped. Fetched pages
    are enriched in the background so rows are visible before their
    weather fields are.
    """

    def __init__(
        self,
        directory: CityDirectory,
        enricher: WeatherSummaryFetcher | None = None,
        page_size: int = 20,
        search_term: str = "",
        sort_column: str = "name",
        sort_direction: SortDirection = SortDirection.ASC,
        debounce_seconds: float = 0.0,
    ):
        self.directory = directory
        self.enricher = enricher
        self.debounce_seconds = debounce_seconds
        self._state = FeedState(
            query=FeedQuery(
                search_term=search_term,
                page_size=page_size,
                sort_column=sort_column,
                sort_direction=sort_direction,
            )
        )
        self._listeners: list[Listener] = []
        self._background: set[asyncio.Task] = set()
        self._debounce_task: asyncio.Task | None = None

    @property
    def state(self) -> FeedState:
        return self._state

    @property
    def query(self) -> FeedQuery:
        return self._state.query

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener` on every state change and enrichment completion."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    # --- inputs ---

    async def start(self) -> None:
        """Initial load."""
        await self._reset()

    async def set_search_term(self, term: str, debounce: bool = False) -> None:
        if debounce and self.debounce_seconds > 0:
            if self._debounce_task is not None:
                self._debounce_task.cancel()
            self._debounce_task = self._track(self._debounced_reset(term))
            return
        await self._reset(search_term=term)

    async def set_sort(self, column: str, direction: SortDirection) -> None:
        await self._reset(sort_column=column, sort_direction=SortDirection(direction))

    async def load_more(self) -> None:
        next_state = transitions.begin_load_more(self._state)
        if next_state is None:
            logger.debug(
                "load_more ignored (status=%s, has_more=%s)",
                self._state.status, self._state.has_more,
            )
            return
        self._commit(next_state)
        await self._fetch()

    async def refresh(self) -> None:
        await self._reset()

    async def settle(self) -> None:
        """Wait for pending debounced searches and background enrichment."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    # --- effects ---

    async def _reset(self, **changes) -> None:
        self._commit(transitions.begin_reset(self._state, **changes))
        await self._fetch()

    async def _debounced_reset(self, term: str) -> None:
        await asyncio.sleep(self.debounce_seconds)
        self._debounce_task = None
        await self._reset(search_term=term)

    async def _fetch(self) -> None:
        generation = self._state.generation
        query = self._state.query
        logger.info(
            "Fetching cities q=%r offset=%d limit=%d sort=%s %s (gen %d)",
            query.search_term, query.page_offset, query.page_size,
            query.sort_column, query.sort_direction, generation,
        )
        try:
            rows = await self.directory.search(query)
        except UpstreamUnavailable as e:
            self._apply(transitions.page_failed(self._state, generation, e.message))
            return
        except Exception:
            logger.exception("Error loading cities")
            self._apply(
                transitions.page_failed(self._state, generation, "Failed to load cities")
            )
            return

        if not self._apply(transitions.page_loaded(self._state, generation, rows)):
            logger.debug("Dropped stale page for generation %d", generation)
            return
        if self.enricher is not None and rows:
            self._track(self._enrich(rows))

    async def _enrich(self, rows: list[CityRow]) -> None:
        try:
            await self.enricher.enrich(rows)
            self._notify()
        except Exception:
            logger.exception("Error enriching %d rows", len(rows))

    def _apply(self, next_state: FeedState) -> bool:
        if next_state is self._state:
            return False
        self._commit(next_state)
        return True

    def _commit(self, next_state: FeedState) -> None:
        self._state = next_state
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._state)

    def _track(self, coro) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task
