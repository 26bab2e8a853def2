"""
Google Places client — nearby search, autocomplete, details, and photos.

All calls are blocking `requests` calls wrapped in asyncio.to_thread. Any
failure raises GooglePlacesError carrying the HTTP status the proxy routes
should return; there are no retries.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import requests

from discovery.config import settings
from discovery.services.geo import Coordinate, distance

logger = logging.getLogger(__name__)

BASE_URL = "https://maps.googleapis.com/maps/api/place"

DEFAULT_DETAIL_FIELDS: list[str] = [
    "place_id", "name", "formatted_address", "formatted_phone_number",
    "international_phone_number", "website", "rating", "user_ratings_total",
    "price_level", "opening_hours", "photos", "reviews", "types",
    "business_status", "geometry", "editorial_summary",
]

_OK_STATUSES = ("OK", "ZERO_RESULTS")


class GooglePlacesError(Exception):
    """Raised when Google Places is unconfigured, unreachable, or returns an error status."""

    def __init__(self, message: str, status_code: int = 502) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _require_key() -> str:
    if not settings.google_places_api_key:
        logger.error("Google Places API key not configured")
        raise GooglePlacesError("Service not configured", status_code=500)
    return settings.google_places_api_key


def _get(path: str, params: dict[str, Any]) -> requests.Response:
    """Blocking GET against the Places API — always run via asyncio.to_thread."""
    response = requests.get(
        f"{BASE_URL}/{path}",
        params=params,
        timeout=settings.vendor_timeout_seconds,
    )
    response.raise_for_status()
    return response


async def _get_json(path: str, params: dict[str, Any]) -> dict[str, Any]:
    params = {**params, "key": _require_key()}
    try:
        response = await asyncio.to_thread(_get, path, params)
        data = response.json()
    except (requests.RequestException, ValueError) as exc:
        logger.error("Google Places %s request failed: %s", path, exc)
        raise GooglePlacesError("Failed to reach Google Places") from exc

    status = data.get("status")
    if status not in _OK_STATUSES:
        logger.error("Google Places %s error: %s %s", path, status, data.get("error_message"))
        if status == "REQUEST_DENIED":
            message = "Google Places API request denied. Please check API key permissions."
        elif status == "OVER_QUERY_LIMIT":
            message = "API quota exceeded. Please try again later."
        else:
            message = data.get("error_message") or "Google Places request failed"
        raise GooglePlacesError(message, status_code=500)
    return data


# ── Endpoints ────────────────────────────────────────────────────────────────

async def nearby_search(
    lat: float,
    lng: float,
    radius: int = 1500,
    place_type: Optional[str] = None,
    keyword: Optional[str] = None,
) -> list[dict[str, Any]]:
    """Nearby places sorted by distance from (lat, lng), each with a `distance` in metres."""
    params: dict[str, Any] = {"location": f"{lat},{lng}", "radius": radius}
    if place_type:
        params["type"] = place_type
    if keyword:
        params["keyword"] = keyword

    data = await _get_json("nearbysearch/json", params)
    origin = Coordinate(lat, lng)
    results = []
    for place in data.get("results", []):
        loc = (place.get("geometry") or {}).get("location") or {}
        if "lat" not in loc or "lng" not in loc:
            continue
        results.append({**place, "distance": distance(origin, Coordinate(loc["lat"], loc["lng"]))})
    results.sort(key=lambda p: p["distance"])
    return results


async def autocomplete(
    text: str,
    session_token: Optional[str] = None,
    location: Optional[Coordinate] = None,
    radius: Optional[int] = None,
) -> list[dict[str, Any]]:
    params: dict[str, Any] = {"input": text, "components": "country:in"}
    if session_token:
        params["sessiontoken"] = session_token
    if location is not None:
        params["location"] = f"{location.latitude},{location.longitude}"
        if radius:
            params["radius"] = radius

    data = await _get_json("autocomplete/json", params)
    return data.get("predictions", [])


async def place_details(place_id: str, fields: Optional[list[str]] = None) -> dict[str, Any]:
    params = {"place_id": place_id, "fields": ",".join(fields or DEFAULT_DETAIL_FIELDS)}
    data = await _get_json("details/json", params)
    return data.get("result") or {}


async def fetch_photo(photo_reference: str, max_width: int = 800) -> tuple[bytes, str]:
    """Return (image bytes, content type)."""
    params = {
        "photo_reference": photo_reference,
        "maxwidth": max_width,
        "key": _require_key(),
    }
    try:
        response = await asyncio.to_thread(_get, "photo", params)
    except requests.HTTPError as exc:
        status_code = exc.response.status_code if exc.response is not None else 502
        logger.error("Google Places photo fetch failed: %s", exc)
        raise GooglePlacesError("Failed to fetch photo", status_code=status_code) from exc
    except requests.RequestException as exc:
        logger.error("Google Places photo fetch failed: %s", exc)
        raise GooglePlacesError("Failed to fetch photo") from exc

    return response.content, response.headers.get("Content-Type", "image/jpeg")
