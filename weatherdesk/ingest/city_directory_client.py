"""OpenDataSoft city directory client (geonames cities with population > 1000)."""

import logging

import httpx

from weatherdesk.config.defaults import COUNTRY_FACET
from weatherdesk.errors import UpstreamUnavailable
from weatherdesk.ingest.sort_encoding import SignPrefixSortEncoder, SortEncoder
from weatherdesk.models.city import CityRow, Coordinates
from weatherdesk.models.feed import FeedQuery

logger = logging.getLogger(__name__)

DIRECTORY_BASE_URL = "https://public.opendatasoft.com/api/records/1.0"
DEFAULT_DATASET = "geonames-all-cities-with-a-population-1000"


class CityDirectoryClient:
    def __init__(
        self,
        base_url: str = DIRECTORY_BASE_URL,
        dataset: str = DEFAULT_DATASET,
        timeout: float = 10.0,
        sort_encoder: SortEncoder | None = None,
        http: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.dataset = dataset
        self.timeout = timeout
        self.sort_encoder = sort_encoder or SignPrefixSortEncoder()
        self._http = http

    def build_params(self, query: FeedQuery) -> dict[str, str | int]:
        params: dict[str, str | int] = {
            "dataset": self.dataset,
            "start": query.page_offset,
            "rows": query.page_size,
            "facet": COUNTRY_FACET,
        }
        if query.search_term:
            params["q"] = query.search_term
        params.update(self.sort_encoder.encode(query.sort_column, query.sort_direction))
        return params

    async def search(self, query: FeedQuery) -> list[CityRow]:
        """Fetch one page of cities. Raises UpstreamUnavailable on failure."""
        url = f"{self.base_url}/search/"
        params = self.build_params(query)
        try:
            if self._http is not None:
                resp = await self._http.get(url, params=params, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    resp = await client.get(url, params=params)
        except httpx.RequestError as e:
            logger.error("City directory request failed: %s", e)
            raise UpstreamUnavailable(f"Failed to fetch cities: {e}") from e

        if resp.status_code >= 400:
            logger.error(
                "City directory returned %d: %s", resp.status_code, resp.text[:200]
            )
            raise UpstreamUnavailable(
                f"Failed to fetch cities: {resp.reason_phrase}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise UpstreamUnavailable("Invalid API response format") from e
        records = data.get("records") if isinstance(data, dict) else None
        if not isinstance(records, list):
            logger.error("Invalid city directory response: %r", data)
            raise UpstreamUnavailable("Invalid API response format")

        logger.info(
            "City directory: %s total, fetched %d (start=%d)",
            data.get("nhits"), len(records), query.page_offset,
        )
        return [parse_city_record(r) for r in records]


def parse_city_record(record: dict) -> CityRow:
    fields = record.get("fields")
    if not fields:
        logger.warning("Record missing fields: %s", record.get("recordid"))
        return CityRow(
            id=record.get("recordid") or "unknown",
            name="Unknown City",
            country="Unknown Country",
            country_code="XX",
            population=0,
            timezone="Unknown",
            coordinates=Coordinates(lat=0.0, lon=0.0),
        )

    # geometry.coordinates is [lon, lat]
    geometry = record.get("geometry") or {}
    coords = geometry.get("coordinates") or [0.0, 0.0]
    return CityRow(
        id=record.get("recordid", ""),
        name=fields.get("name", ""),
        country=fields.get("cou_name_en", ""),
        country_code=fields.get("country_code", ""),
        population=int(fields.get("population") or 0),
        timezone=fields.get("timezone") or "Unknown",
        coordinates=Coordinates(lat=float(coords[1]), lon=float(coords[0])),
    )
