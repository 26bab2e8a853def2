"""Tests for GET /api/weather and GET /api/recommendations/weather."""

import pytest
from httpx import AsyncClient

from discovery.schemas.weather import WeatherSnapshot
from discovery.services import weather as weather_service

INSIDE = {"lat": "12.9784", "lng": "77.6408"}


class TestWeatherEndpoint:
    async def test_outside_bounds(self, client: AsyncClient):
        response = await client.get("/api/weather", params={"lat": "10.0", "lng": "77.615"})
        assert response.status_code == 400
        assert response.json() == {"error": "Coordinates must be within Indiranagar boundaries"}

    @pytest.mark.parametrize("params", [{}, {"lat": "12.97"}, {"lng": "77.64"}, {"lat": "", "lng": "77.64"}])
    async def test_missing_coordinates(self, client: AsyncClient, params):
        response = await client.get("/api/weather", params=params)
        assert response.status_code == 400
        assert response.json() == {"error": "Missing latitude or longitude parameters"}

    @pytest.mark.parametrize("lat", ["north", "nan", "12,97"])
    async def test_invalid_coordinates(self, client: AsyncClient, lat):
        response = await client.get("/api/weather", params={"lat": lat, "lng": "77.64"})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid latitude or longitude values"}

    async def test_success_uses_fallback_without_keys(self, client: AsyncClient):
        response = await client.get("/api/weather", params=INSIDE)
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["source"] == "fallback"
        assert body["data"]["condition"] in {"rainy", "hot", "cool"}

    async def test_second_request_hits_cache(self, client: AsyncClient):
        await client.get("/api/weather", params=INSIDE)
        response = await client.get("/api/weather", params=INSIDE)
        assert response.json()["data"]["source"] == "cache"

    async def test_post_not_allowed(self, client: AsyncClient):
        response = await client.post("/api/weather", params=INSIDE)
        assert response.status_code == 405

    async def test_rate_limited_after_sixty_requests(self, client: AsyncClient):
        for _ in range(60):
            assert (await client.get("/api/weather", params=INSIDE)).status_code == 200

        response = await client.get("/api/weather", params=INSIDE)
        assert response.status_code == 429
        assert response.json() == {"error": "Rate limit exceeded. Please try again later."}

    async def test_rate_limit_is_per_client(self, client: AsyncClient):
        for _ in range(60):
            await client.get("/api/weather", params=INSIDE)

        response = await client.get(
            "/api/weather", params=INSIDE, headers={"X-Forwarded-For": "203.0.113.9"}
        )
        assert response.status_code == 200


class TestWeatherRecommendations:
    @pytest.fixture
    def rainy(self, monkeypatch):
        async def _rainy(lat, lng, now=None):
            return WeatherSnapshot(
                condition="rainy",
                temperature=24,
                humidity=80,
                rain_probability=60,
                description="light rain",
                recommendations=[],
                source="fallback",
                timestamp=weather_service.local_now(),
            )

        monkeypatch.setattr("discovery.routers.recommendations.get_current_weather", _rainy)

    async def test_scores_places_and_journeys(self, client: AsyncClient, make_place, make_journey, rainy):
        indoor = await make_place(
            name="Glen's Bakehouse",
            rating=4.0,
            weather_suitability={"ideal_conditions": ["rainy"]},
        )
        await make_place(
            name="Cubbon Park",
            rating=4.8,
            latitude=12.9763,
            longitude=77.5929,
            weather_suitability={"avoid_conditions": ["rainy"]},
        )
        await make_journey([indoor], slug="cafe-crawl", weather_suitability={"ideal_conditions": ["rainy"]})

        response = await client.get("/api/recommendations/weather", params=INSIDE)
        assert response.status_code == 200
        body = response.json()

        assert body["weather"]["condition"] == "rainy"
        assert [(p["name"], p["score"]) for p in body["places"]] == [
            ("Glen's Bakehouse", 2),
            ("Cubbon Park", -2),
        ]
        assert body["places"][0]["reason"] == "Ideal for rainy weather"
        assert [j["item"]["slug"] for j in body["journeys"]] == ["cafe-crawl"]
        assert "☔ Rain expected - choose indoor activities" in body["insights"]

    async def test_limit(self, client: AsyncClient, make_place, rainy):
        for name in ("Salt", "Muro", "Alba"):
            await make_place(name=name)
        response = await client.get("/api/recommendations/weather", params={**INSIDE, "limit": 2})
        assert len(response.json()["places"]) == 2

    async def test_validates_coordinates(self, client: AsyncClient):
        response = await client.get("/api/recommendations/weather", params={"lat": "10.0", "lng": "77.615"})
        assert response.status_code == 400
