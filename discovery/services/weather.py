"""
Weather service — provider chain behind the 30-minute coordinate cache.

Chain (first non-None wins):
  1. OpenWeatherMap  5-day/3-hour forecast, first slot   (OPENWEATHER_API_KEY)
  2. WeatherAPI      forecast.json, current + day 1       (WEATHERAPI_KEY)
  3. Seasonal fallback keyed only by calendar month — never fails

A missing key or ANY failure of a network provider (HTTP error, timeout,
unexpected payload) is logged as a warning and the chain moves on. There
are no retries. HTTP calls use `requests` in a worker thread so the event
loop is never blocked.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any, Optional
from zoneinfo import ZoneInfo

import requests

from discovery.config import settings
from discovery.schemas.weather import WeatherSnapshot
from discovery.services.cache import weather_cache
from discovery.services.weather_classifier import classify
from discovery.utils.weather_copy import advice_for

logger = logging.getLogger(__name__)

OPENWEATHER_URL = "https://api.openweathermap.org/data/2.5/forecast"
WEATHERAPI_URL = "https://api.weatherapi.com/v1/forecast.json"

FALLBACK_HUMIDITY = 65.0

# month range (inclusive) → (condition, temperature °C, rain probability %)
_SEASONS: tuple[tuple[int, int, str, float, float], ...] = (
    (6, 10, "rainy", 23.0, 60.0),   # south-west monsoon
    (3, 5, "hot", 30.0, 10.0),      # summer
)
_WINTER = ("cool", 22.0, 15.0)


def local_now() -> datetime:
    """Current time in the configured local timezone."""
    return datetime.now(ZoneInfo(settings.timezone))


def _build_snapshot(
    temperature: float,
    rain_probability: float,
    humidity: float,
    description: str,
    source: str,
    now: datetime,
) -> WeatherSnapshot:
    condition = classify(temperature, rain_probability, humidity, now.hour)
    return WeatherSnapshot(
        condition=condition,
        temperature=round(temperature),
        humidity=humidity,
        rain_probability=round(rain_probability),
        description=description,
        recommendations=advice_for(condition),
        source=source,
        timestamp=now,
    )


def _get_json(url: str, params: dict[str, Any]) -> dict[str, Any]:
    """Blocking GET — always run via asyncio.to_thread."""
    response = requests.get(url, params=params, timeout=settings.vendor_timeout_seconds)
    response.raise_for_status()
    return response.json()


# ── Providers ────────────────────────────────────────────────────────────────

async def fetch_openweather(lat: float, lng: float, now: datetime) -> Optional[WeatherSnapshot]:
    if not settings.openweather_api_key:
        logger.warning("OpenWeatherMap API key not configured")
        return None

    params = {
        "lat": lat,
        "lon": lng,
        "appid": settings.openweather_api_key,
        "units": "metric",
        "cnt": 1,
    }
    try:
        data = await asyncio.to_thread(_get_json, OPENWEATHER_URL, params)
        slot = data["list"][0]
        return _build_snapshot(
            temperature=float(slot["main"]["temp"]),
            rain_probability=float(slot.get("pop", 0)) * 100,
            humidity=float(slot["main"]["humidity"]),
            description=(slot.get("weather") or [{}])[0].get("description", "Weather data"),
            source="openweather",
            now=now,
        )
    except (requests.RequestException, KeyError, IndexError, TypeError, ValueError) as exc:
        logger.warning("OpenWeatherMap fetch failed (%s) — trying WeatherAPI", exc)
        return None


async def fetch_weatherapi(lat: float, lng: float, now: datetime) -> Optional[WeatherSnapshot]:
    if not settings.weatherapi_key:
        logger.warning("WeatherAPI key not configured")
        return None

    params = {
        "key": settings.weatherapi_key,
        "q": f"{lat},{lng}",
        "days": 1,
        "aqi": "no",
        "alerts": "no",
    }
    try:
        data = await asyncio.to_thread(_get_json, WEATHERAPI_URL, params)
        current = data["current"]
        day = data["forecast"]["forecastday"][0]["day"]
        return _build_snapshot(
            temperature=float(current["temp_c"]),
            rain_probability=float(day.get("daily_chance_of_rain", 0)),
            humidity=float(current["humidity"]),
            description=current.get("condition", {}).get("text", "Weather data"),
            source="weatherapi",
            now=now,
        )
    except (requests.RequestException, KeyError, IndexError, TypeError, ValueError) as exc:
        logger.warning("WeatherAPI fetch failed (%s) — using seasonal fallback", exc)
        return None


def fallback_weather(now: datetime) -> WeatherSnapshot:
    """Seasonal estimate for Bangalore, keyed only by calendar month."""
    condition, temperature, rain = _WINTER
    for first, last, season_condition, season_temp, season_rain in _SEASONS:
        if first <= now.month <= last:
            condition, temperature, rain = season_condition, season_temp, season_rain
            break

    return WeatherSnapshot(
        condition=condition,
        temperature=temperature,
        humidity=FALLBACK_HUMIDITY,
        rain_probability=rain,
        description=f"Typical {condition} weather for Bangalore",
        recommendations=advice_for(condition),
        source="fallback",
        timestamp=now,
    )


# ── Public entry point ───────────────────────────────────────────────────────

async def get_current_weather(
    lat: float,
    lng: float,
    now: Optional[datetime] = None,
) -> WeatherSnapshot:
    """
    Cached lookup, then the provider chain. Every successful result
    (including the seasonal fallback) is cached for the configured TTL.
    """
    cached = weather_cache.get(lat, lng)
    if cached is not None:
        return cached

    now = now or local_now()

    snapshot = await fetch_openweather(lat, lng, now)
    if snapshot is None:
        snapshot = await fetch_weatherapi(lat, lng, now)
    if snapshot is None:
        snapshot = fallback_weather(now)

    weather_cache.set(lat, lng, snapshot)
    logger.info(
        "Weather for (%.3f, %.3f): %s %.0f°C via %s",
        lat, lng, snapshot.condition, snapshot.temperature, snapshot.source,
    )
    return snapshot
