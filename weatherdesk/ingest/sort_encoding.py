"""Sort-direction encoders for the city directory.

OpenDataSoft's records API marks descending order with a leading "-" on the
field name. Other directories can plug in their own encoder.
"""

from typing import Protocol

from weatherdesk.config.defaults import SORT_FIELDS
from weatherdesk.models.common import SortDirection


class SortEncoder(Protocol):
    def encode(self, column: str, direction: SortDirection) -> dict[str, str]:
        """Return the query parameters expressing this sort."""
        ...


class SignPrefixSortEncoder:
    def __init__(self, field_map: dict[str, str] | None = None):
        self.field_map = SORT_FIELDS if field_map is None else field_map

    def encode(self, column: str, direction: SortDirection) -> dict[str, str]:
        field = self.field_map.get(column, column)
        if direction == SortDirection.DESC:
            field = f"-{field}"
        return {"sort": field}
