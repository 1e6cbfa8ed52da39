"""CLI entry point for weatherdesk."""

import argparse
import asyncio
import json
import logging

from weatherdesk.config.loader import (
    get_config_value,
    load_config,
    redacted_dump,
    require_api_key,
    set_config_value,
)
from weatherdesk.config.schema import AppConfig
from weatherdesk.errors import WeatherDeskError
from weatherdesk.feed.controller import CityFeedController
from weatherdesk.feed.enrichment import WeatherSummaryFetcher
from weatherdesk.ingest.city_directory_client import CityDirectoryClient
from weatherdesk.ingest.summary_client import SummaryProxyClient
from weatherdesk.models.common import SortDirection, TemperatureUnit, WindUnit
from weatherdesk.models.feed import FeedStatus
from weatherdesk.reporting.formatters import (
    format_city_rows,
    format_detail_json,
    format_detail_text,
)
from weatherdesk.reporting.health_checker import HealthChecker
from weatherdesk.service.weather_service import WeatherService
from weatherdesk.storage import cache_repo
from weatherdesk.storage.database import connect, run_migrations

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "ops/configs/default.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherdesk",
        description="City weather lookup service",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument("--db", default=None, help="SQLite DB path (overrides config)")

    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP backend")
    serve_p.add_argument("--host", default=None)
    serve_p.add_argument("--port", type=int, default=None)

    # cities
    cities_p = sub.add_parser("cities", help="List cities with current weather")
    cities_p.add_argument("--search", default="", help="Search term")
    cities_p.add_argument("--sort", default=None, help="Sort column")
    cities_p.add_argument("--desc", action="store_true", help="Sort descending")
    cities_p.add_argument("--pages", type=int, default=1, help="Pages to load")
    cities_p.add_argument("--page-size", type=int, default=None)
    cities_p.add_argument("--no-weather", action="store_true", help="Skip enrichment")
    cities_p.add_argument(
        "--via-backend", action="store_true",
        help="Fetch summaries through the backend at feed.summary_base_url",
    )
    cities_p.add_argument("--fahrenheit", action="store_true")

    # forecast
    fc_p = sub.add_parser("forecast", help="Current weather and 5-day forecast")
    fc_p.add_argument("city")
    fc_p.add_argument("--country", default=None, help="ISO country code")
    fc_p.add_argument("--json", action="store_true", help="Output JSON")
    fc_p.add_argument("--fahrenheit", action="store_true")
    fc_p.add_argument("--imperial-wind", action="store_true")

    # summary
    sum_p = sub.add_parser("summary", help="Weather summary for one city")
    sum_p.add_argument("city")
    sum_p.add_argument("--country", default=None)

    # cache get / cache put
    cache_p = sub.add_parser("cache", help="Weather cache operations")
    cache_sub = cache_p.add_subparsers(dest="cache_command")
    get_p = cache_sub.add_parser("get", help="Show cached weather for a city")
    get_p.add_argument("city")
    put_p = cache_sub.add_parser("put", help="Cache a JSON blob for a city")
    put_p.add_argument("city")
    put_p.add_argument("data", help="JSON document")

    # health
    sub.add_parser("health", help="Run health checks")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    if args.db:
        config = config.model_copy(
            update={"storage": config.storage.model_copy(update={"db_path": args.db})}
        )

    if args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "cities":
        return asyncio.run(_cmd_cities(config, args))
    elif args.command == "forecast":
        return asyncio.run(_cmd_forecast(config, args))
    elif args.command == "summary":
        return asyncio.run(_cmd_summary(config, args))
    elif args.command == "cache":
        return _cmd_cache(config, args)
    elif args.command == "health":
        return _cmd_health(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_serve(config: AppConfig, args) -> int:
    import uvicorn

    from weatherdesk.api import create_app

    try:
        require_api_key(config)
    except WeatherDeskError as e:
        logger.warning("%s; weather endpoints will return 500", e)
    uvicorn.run(
        create_app(config),
        host=args.host or config.server.host,
        port=args.port or config.server.port,
    )
    return 0


def _build_enricher(config: AppConfig, args) -> WeatherSummaryFetcher | None:
    if args.no_weather:
        return None
    if args.via_backend:
        source = SummaryProxyClient(config.feed.summary_base_url)
    else:
        try:
            require_api_key(config)
        except WeatherDeskError as e:
            logger.warning("%s; listing cities without weather", e)
            return None
        source = WeatherService(config)
    return WeatherSummaryFetcher(source, batch_size=config.feed.enrichment_batch_size)


async def _cmd_cities(config: AppConfig, args) -> int:
    directory = CityDirectoryClient(
        base_url=config.directory.base_url,
        dataset=config.directory.dataset,
        timeout=config.directory.timeout_seconds,
    )
    controller = CityFeedController(
        directory,
        enricher=_build_enricher(config, args),
        page_size=args.page_size or config.feed.page_size,
        search_term=args.search,
        sort_column=args.sort or config.feed.default_sort_column,
        sort_direction=SortDirection.DESC if args.desc else SortDirection.ASC,
        debounce_seconds=config.feed.search_debounce_ms / 1000.0,
    )
    await controller.start()
    for _ in range(max(args.pages, 1) - 1):
        await controller.load_more()
    await controller.settle()

    state = controller.state
    unit = TemperatureUnit.FAHRENHEIT if args.fahrenheit else TemperatureUnit.CELSIUS
    print(format_city_rows(list(state.rows), unit))
    if state.status == FeedStatus.ERROR:
        print(f"Error: {state.last_error}")
        return 1
    print(f"{len(state.rows)} cities{'' if state.has_more else ' (end of list)'}")
    return 0


async def _cmd_forecast(config: AppConfig, args) -> int:
    service = WeatherService(config)
    try:
        detail = await service.get_weather_detail(args.city, args.country)
    except WeatherDeskError as e:
        print(f"Error: {e.message}")
        return 1
    if args.json:
        print(format_detail_json(detail))
    else:
        print(format_detail_text(
            detail,
            TemperatureUnit.FAHRENHEIT if args.fahrenheit else TemperatureUnit.CELSIUS,
            WindUnit.IMPERIAL if args.imperial_wind else WindUnit.METRIC,
        ))
    return 0


async def _cmd_summary(config: AppConfig, args) -> int:
    service = WeatherService(config)
    try:
        summary = await service.get_summary(args.city, args.country)
    except WeatherDeskError as e:
        print(f"Error: {e.message}")
        return 1
    print(json.dumps(summary.to_dict(), indent=2))
    return 0


def _cmd_cache(config: AppConfig, args) -> int:
    conn = connect(config.storage.db_path)
    run_migrations(conn)
    try:
        if args.cache_command == "get":
            entry = cache_repo.get_cache_entry(conn, args.city)
            if entry is None:
                print(f"No cached weather for {args.city}")
                return 1
            print(f"Cached at {entry['timestamp']}")
            print(json.dumps(json.loads(entry["data"]), indent=2))
            return 0
        elif args.cache_command == "put":
            try:
                data = json.loads(args.data)
            except json.JSONDecodeError as e:
                print(f"Error: invalid JSON: {e}")
                return 1
            row_id = cache_repo.cache_weather_data(conn, args.city, data)
            print(f"Cached weather for {args.city} (id {row_id})")
            return 0
        else:
            print("Use: cache get CITY | cache put CITY JSON")
            return 1
    finally:
        conn.close()


def _cmd_health(config: AppConfig, args) -> int:
    conn = connect(config.storage.db_path)
    run_migrations(conn)
    checker = HealthChecker(conn, config)
    status = checker.check()

    print(f"DB: {'OK' if status.db_connected else 'FAIL'}")
    print(f"Weather API: {'OK' if status.weather_api_reachable else 'FAIL'}")
    print(f"City directory: {'OK' if status.directory_api_reachable else 'FAIL'}")
    print(f"API key: {'set' if status.api_key_configured else 'MISSING'}")
    conn.close()
    return 0


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        print(redacted_dump(config))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
            print(f"Set {key} = {get_config_value(new_config, key.strip())}")
            return 0
        except Exception as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config set key=value")
        return 1
