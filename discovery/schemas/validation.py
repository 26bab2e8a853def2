"""
Shared input checks used by request schemas, routers, and the seed scripts.
A failed check never reaches the database.
"""

from __future__ import annotations

import math
import re

# Indiranagar bounding box (inclusive)
INDIRANAGAR_BOUNDS: dict[str, tuple[float, float]] = {
    "lat": (12.95, 13.00),
    "lng": (77.58, 77.65),
}

COMMENT_MAX_LENGTH = 1000

_SCRIPT_BLOCK = re.compile(
    r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>",
    re.IGNORECASE,
)


def validate_indiranagar(lat: float, lng: float) -> bool:
    """True when (lat, lng) lies inside the neighbourhood box. NaN is rejected."""
    lat_min, lat_max = INDIRANAGAR_BOUNDS["lat"]
    lng_min, lng_max = INDIRANAGAR_BOUNDS["lng"]
    return lat_min <= lat <= lat_max and lng_min <= lng <= lng_max


def validate_rating(rating: float) -> bool:
    """Accept exactly 1.0, 1.1, …, 5.0."""
    if math.isnan(rating) or not 1 <= rating <= 5:
        return False
    scaled = rating * 10
    return abs(scaled - round(scaled)) < 1e-9


def sanitize_comment(content: str) -> str:
    """Strip <script> blocks, trim, and truncate to COMMENT_MAX_LENGTH characters."""
    cleaned = _SCRIPT_BLOCK.sub("", content).strip()
    return cleaned[:COMMENT_MAX_LENGTH]
