"""Weather summary fetcher: best-effort, batched enrichment of city rows."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from weatherdesk.errors import PartialEnrichmentFailure
from weatherdesk.models.city import CityRow, WeatherSummary

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 5


class SummarySource(Protocol):
    async def get_summary(self, city: str, country: str | None = None) -> WeatherSummary:
        ...


@dataclass(frozen=True)
class EnrichmentOutcome:
    row: CityRow
    summary: WeatherSummary | None = None
    error: PartialEnrichmentFailure | None = None

    @property
    def ok(self) -> bool:
        return self.summary is not None


class WeatherSummaryFetcher:
    """Fills in CityRow weather fields, `batch_size` requests at a time.

    A batch is fully settled before the next one starts. A failed row keeps
    its weather fields empty; nothing is retried or raised.
    """

    def __init__(self, source: SummarySource, batch_size: int = DEFAULT_BATCH_SIZE):
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        self.source = source
        self.batch_size = batch_size

    async def enrich(self, rows: list[CityRow]) -> list[CityRow]:
        outcomes = await self.summarize(rows)
        for outcome in outcomes:
            if outcome.ok:
                outcome.row.apply_summary(outcome.summary)
        failed = sum(1 for o in outcomes if not o.ok)
        if failed:
            logger.info("Enriched %d/%d rows", len(outcomes) - failed, len(outcomes))
        return rows

    async def summarize(self, rows: list[CityRow]) -> list[EnrichmentOutcome]:
        outcomes: list[EnrichmentOutcome] = []
        for start in range(0, len(rows), self.batch_size):
            batch = rows[start:start + self.batch_size]
            outcomes.extend(
                await asyncio.gather(*(self._fetch_one(row) for row in batch))
            )
        return outcomes

    async def _fetch_one(self, row: CityRow) -> EnrichmentOutcome:
        try:
            summary = await self.source.get_summary(row.name, row.country_code or None)
        except Exception as e:
            logger.debug("No weather for %s (%s): %s", row.name, row.country_code, e)
            return EnrichmentOutcome(
                row=row, error=PartialEnrichmentFailure(f"{row.name}: {e}")
            )
        return EnrichmentOutcome(row=row, summary=summary)
