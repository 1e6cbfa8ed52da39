"""City feed query and state models."""

from dataclasses import dataclass
from enum import StrEnum

from weatherdesk.models.city import CityRow
from weatherdesk.models.common import SortDirection


class FeedStatus(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    LOADED_MORE_AVAILABLE = "loaded_more_available"
    LOADED_EXHAUSTED = "loaded_exhausted"


@dataclass(frozen=True)
class FeedQuery:
    search_term: str = ""
    page_offset: int = 0
    page_size: int = 20
    sort_column: str = "name"
    sort_direction: SortDirection = SortDirection.ASC


@dataclass(frozen=True)
class FeedState:
    rows: tuple[CityRow, ...] = ()
    status: FeedStatus = FeedStatus.IDLE
    last_error: str | None = None
    has_more: bool = True
    generation: int = 0
    next_offset: int = 0
    query: FeedQuery = FeedQuery()

    @property
    def is_loading(self) -> bool:
        return self.status == FeedStatus.LOADING
