"""SQLAlchemy ORM models package."""

from discovery.database import Base
from discovery.models.place import Place
from discovery.models.journey import Journey, JourneyStop
from discovery.models.event import DiscoveredEvent, EventSource
from discovery.models.community import (
    Comment,
    CommentLike,
    CommunitySuggestion,
    Question,
    Rating,
    SuggestionVote,
)
from discovery.models.site_setting import SiteSetting

__all__ = [
    "Base", "Place", "Journey", "JourneyStop",
    "DiscoveredEvent", "EventSource",
    "Comment", "CommentLike", "Rating",
    "CommunitySuggestion", "SuggestionVote", "Question",
    "SiteSetting",
]
