"""Pure state transitions for the city feed.

Every function takes a FeedState and returns a new one; none of them do I/O.
The controller applies them and runs the fetches they call for.
"""

from dataclasses import replace

from weatherdesk.models.city import CityRow
from weatherdesk.models.common import SortDirection
from weatherdesk.models.feed import FeedState, FeedStatus


def begin_reset(
    state: FeedState,
    *,
    search_term: str | None = None,
    sort_column: str | None = None,
    sort_direction: SortDirection | None = None,
) -> FeedState:
    """Start a fresh fetch from offset 0 and supersede anything in flight."""
    query = state.query
    query = replace(
        query,
        search_term=query.search_term if search_term is None else search_term,
        sort_column=sort_column or query.sort_column,
        sort_direction=sort_direction or query.sort_direction,
        page_offset=0,
    )
    return replace(
        state,
        status=FeedStatus.LOADING,
        last_error=None,
        has_more=True,
        generation=state.generation + 1,
        next_offset=0,
        query=query,
    )


def begin_load_more(state: FeedState) -> FeedState | None:
    """Request the next page, or None when there is nothing to do."""
    if state.is_loading or not state.has_more:
        return None
    return replace(
        state,
        status=FeedStatus.LOADING,
        last_error=None,
        query=replace(state.query, page_offset=state.next_offset),
    )


def page_loaded(
    state: FeedState, generation: int, rows: list[CityRow]
) -> FeedState:
    """Apply a fetched page. Results from a superseded generation are ignored."""
    if generation != state.generation or not state.is_loading:
        return state

    query = state.query
    if query.page_offset == 0:
        merged = tuple(rows)
    else:
        merged = state.rows + tuple(rows)

    has_more = len(rows) >= query.page_size
    return replace(
        state,
        rows=merged,
        status=FeedStatus.LOADED_MORE_AVAILABLE if has_more else FeedStatus.LOADED_EXHAUSTED,
        last_error=None,
        has_more=has_more,
        next_offset=query.page_offset + query.page_size,
    )


def page_failed(state: FeedState, generation: int, message: str) -> FeedState:
    """Record a failed fetch; rows already shown are kept."""
    if generation != state.generation or not state.is_loading:
        return state
    return replace(state, status=FeedStatus.ERROR, last_error=message)
