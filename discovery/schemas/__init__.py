"""Pydantic schemas package."""

from discovery.schemas.place import (
    PlaceCreate,
    PlaceRead,
    PlaceUpdate,
    PlaceListResponse,
)
from discovery.schemas.journey import (
    JourneyCreate,
    JourneyRead,
    JourneyUpdate,
    JourneyStopIn,
)
from discovery.schemas.event import EventRead, ModerateRequest
from discovery.schemas.community import (
    EntityType,
    CommentCreate,
    CommentRead,
    RatingCreate,
    RatingSummary,
    CommunitySuggestionCreate,
    QuestionCreate,
)
from discovery.schemas.weather import WeatherSnapshot, WeatherSuitability

__all__ = [
    "PlaceCreate", "PlaceRead", "PlaceUpdate", "PlaceListResponse",
    "JourneyCreate", "JourneyRead", "JourneyUpdate", "JourneyStopIn",
    "EventRead", "ModerateRequest",
    "EntityType", "CommentCreate", "CommentRead",
    "RatingCreate", "RatingSummary",
    "CommunitySuggestionCreate", "QuestionCreate",
    "WeatherSnapshot", "WeatherSuitability",
]
