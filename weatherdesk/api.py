"""Weather backend: FastAPI proxy for OpenWeatherMap plus a weather blob cache."""

import logging
import sqlite3
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from weatherdesk.config.loader import load_config
from weatherdesk.config.schema import AppConfig
from weatherdesk.errors import NotFound, WeatherDeskError
from weatherdesk.service.weather_service import WeatherService
from weatherdesk.storage import cache_repo
from weatherdesk.storage.database import connect, run_migrations

logger = logging.getLogger(__name__)


def create_app(
    config: AppConfig | None = None,
    service: WeatherService | None = None,
) -> FastAPI:
    config = config or load_config()
    service = service or WeatherService(config)
    db_path = Path(config.storage.db_path)

    app = FastAPI(title="weatherdesk", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.config = config
    app.state.weather_service = service

    def _conn() -> sqlite3.Connection:
        conn = connect(db_path, check_same_thread=False)
        run_migrations(conn)
        return conn

    @app.exception_handler(WeatherDeskError)
    async def _weather_error(request: Request, exc: WeatherDeskError):
        # cache endpoints answer with "message", weather endpoints with "error"
        key = "message" if isinstance(exc, NotFound) else "error"
        return JSONResponse(status_code=exc.status_code, content={key: exc.message})

    # ── Weather proxy ───────────────────────────────────────────

    @app.get("/api/weather-summary")
    async def weather_summary(city: str | None = None, country: str | None = None):
        """Simplified current weather for the city table."""
        try:
            summary = await service.get_summary(city, country)
        except WeatherDeskError:
            raise
        except Exception:
            logger.exception("Error in weather summary for %s", city)
            return JSONResponse(
                status_code=500, content={"error": "Failed to fetch weather data"}
            )
        return summary.to_dict()

    @app.get("/api/weather-detail")
    async def weather_detail(city: str | None = None, country: str | None = None):
        """Raw current weather and 5-day forecast payloads, combined."""
        try:
            return await service.get_detail(city, country)
        except WeatherDeskError:
            raise
        except Exception:
            logger.exception("Error in weather detail for %s", city)
            return JSONResponse(
                status_code=500, content={"error": "Failed to fetch weather data"}
            )

    # ── Cache ───────────────────────────────────────────────────

    @app.get("/api/weather/{city}")
    def get_cached_weather(city: str):
        conn = _conn()
        try:
            data = cache_repo.get_cached_weather(conn, city)
        except Exception:
            logger.exception("Error reading cached weather for %s", city)
            return JSONResponse(
                status_code=500, content={"message": "Failed to fetch weather data"}
            )
        finally:
            conn.close()
        if data is None:
            raise NotFound("Weather data not found for this city")
        return data

    @app.post("/api/weather", status_code=201)
    async def cache_weather(request: Request):
        try:
            body = await request.json()
        except ValueError:
            body = None
        city_name = body.get("cityName") if isinstance(body, dict) else None
        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(city_name, str) or not city_name or data is None:
            return JSONResponse(
                status_code=400,
                content={"message": "City name and weather data are required"},
            )
        conn = _conn()
        try:
            cache_repo.cache_weather_data(conn, city_name, data)
        except Exception:
            logger.exception("Error caching weather data for %s", city_name)
            return JSONResponse(
                status_code=500, content={"message": "Failed to cache weather data"}
            )
        finally:
            conn.close()
        return {"message": "Weather data cached successfully"}

    # ── Health ──────────────────────────────────────────────────

    @app.get("/api/health")
    def get_health():
        try:
            conn = _conn()
            try:
                conn.execute("SELECT 1")
            finally:
                conn.close()
            db_ok = True
        except sqlite3.Error as e:
            logger.warning("Health check DB failure: %s", e)
            db_ok = False
        return {
            "db_ok": db_ok,
            "api_key_configured": bool(config.weather.api_key.strip()),
        }

    return app


if __name__ == "__main__":
    import uvicorn

    cfg = load_config()
    uvicorn.run(create_app(cfg), host=cfg.server.host, port=cfg.server.port)
