"""Tests for the OpenDataSoft city directory client."""

import httpx
import pytest
import respx

from weatherdesk.errors import UpstreamUnavailable
from weatherdesk.ingest.city_directory_client import CityDirectoryClient, parse_city_record
from weatherdesk.models.common import SortDirection
from weatherdesk.models.feed import FeedQuery
from weatherdesk.tests.payloads import DIRECTORY_BASE

SEARCH_URL = f"{DIRECTORY_BASE}/search/"


def _record(name: str, code: str = "GB", population: int = 8_961_989) -> dict:
    return {
        "datasetid": "geonames-all-cities-with-a-population-1000",
        "recordid": f"rec-{name.lower()}",
        "fields": {
            "name": name,
            "country_code": code,
            "cou_name_en": "United Kingdom",
            "population": population,
            "timezone": "Europe/London",
        },
        "geometry": {"type": "Point", "coordinates": [-0.12574, 51.50853]},
    }


@pytest.fixture
def directory() -> CityDirectoryClient:
    return CityDirectoryClient(base_url=DIRECTORY_BASE)


class TestSearch:
    @pytest.mark.asyncio
    @respx.mock
    async def test_request_params(self, directory: CityDirectoryClient):
        route = respx.get(SEARCH_URL).mock(
            return_value=httpx.Response(200, json={"nhits": 1, "records": [_record("London")]})
        )
        query = FeedQuery(search_term="Lon", page_offset=0, page_size=20, sort_column="name")
        rows = await directory.search(query)

        params = route.calls.last.request.url.params
        assert params["dataset"] == "geonames-all-cities-with-a-population-1000"
        assert params["q"] == "Lon"
        assert params["start"] == "0"
        assert params["rows"] == "20"
        assert params["sort"] == "name"
        assert params["facet"] == "cou_name_en"
        assert len(rows) == 1
        assert len(rows) <= query.page_size

    @pytest.mark.asyncio
    @respx.mock
    async def test_descending_sort_and_no_search(self, directory: CityDirectoryClient):
        route = respx.get(SEARCH_URL).mock(
            return_value=httpx.Response(200, json={"nhits": 0, "records": []})
        )
        await directory.search(
            FeedQuery(page_offset=40, sort_column="population", sort_direction=SortDirection.DESC)
        )
        params = route.calls.last.request.url.params
        assert params["sort"] == "-population"
        assert params["start"] == "40"
        assert "q" not in params

    @pytest.mark.asyncio
    @respx.mock
    async def test_parses_rows(self, directory: CityDirectoryClient):
        respx.get(SEARCH_URL).mock(
            return_value=httpx.Response(200, json={"nhits": 1, "records": [_record("London")]})
        )
        (row,) = await directory.search(FeedQuery(search_term="London"))
        assert row.id == "rec-london"
        assert row.name == "London"
        assert row.country == "United Kingdom"
        assert row.country_code == "GB"
        assert row.population == 8_961_989
        assert row.coordinates.lat == 51.50853
        assert row.coordinates.lon == -0.12574
        assert row.current_temp is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_http_error(self, directory: CityDirectoryClient):
        respx.get(SEARCH_URL).mock(return_value=httpx.Response(503))
        with pytest.raises(UpstreamUnavailable) as exc_info:
            await directory.search(FeedQuery())
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    @respx.mock
    async def test_invalid_format(self, directory: CityDirectoryClient):
        respx.get(SEARCH_URL).mock(return_value=httpx.Response(200, json={"nhits": 0}))
        with pytest.raises(UpstreamUnavailable, match="Invalid API response format"):
            await directory.search(FeedQuery())


class TestParseCityRecord:
    def test_missing_fields_placeholder(self):
        row = parse_city_record({"recordid": "abc"})
        assert row.id == "abc"
        assert row.name == "Unknown City"
        assert row.country_code == "XX"
        assert row.coordinates.lat == 0.0

    def test_missing_population_and_timezone(self):
        record = _record("Tiny")
        del record["fields"]["population"]
        del record["fields"]["timezone"]
        row = parse_city_record(record)
        assert row.population == 0
        assert row.timezone == "Unknown"
