"""
User-facing weather copy — advice lines, insights, and descriptions.
Both the weather endpoint and the recommendation feed render from here.
"""

from __future__ import annotations

# Condition → short advice lines shown with every weather snapshot
CONDITION_ADVICE: dict[str, list[str]] = {
    "sunny": [
        "Perfect weather for outdoor exploration!",
        "Great for walking around 100 Feet Road",
    ],
    "pleasant": [
        "Pleasant weather for exploration",
        "Good time for a neighbourhood walk",
    ],
    "cloudy": [
        "Pleasant weather for exploration",
        "Good for photography",
    ],
    "rainy": [
        "Perfect weather for cozy cafes",
        "Carry an umbrella between stops",
    ],
    "heavy_rain": [
        "Heavy rain expected — stay indoors",
        "Perfect weather for cozy cafes",
    ],
    "hot": [
        "Stay hydrated and seek shade",
        "Indoor venues recommended",
    ],
    "extreme_heat": [
        "Avoid long walks in the afternoon sun",
        "Air-conditioned venues strongly recommended",
    ],
    "cool": [
        "Great weather for long walks",
        "Perfect for outdoor dining",
    ],
    "humid": [
        "Light clothing recommended",
        "Air-conditioned venues preferred",
    ],
}


def advice_for(condition: str) -> list[str]:
    """Advice lines for a condition label (empty for unknown labels)."""
    return list(CONDITION_ADVICE.get(condition, []))


def time_of_day(hour: int) -> str:
    """Bucket an hour (0–23) into morning / afternoon / evening / night."""
    if hour < 12:
        return "morning"
    if hour < 17:
        return "afternoon"
    if hour < 21:
        return "evening"
    return "night"


def describe(temperature: float, rain_probability: float, period: str) -> str:
    """One-line human description, e.g. 'Pleasant and Possibly rainy evening (24°C)'."""
    temp = round(temperature)
    parts: list[str] = []

    if temp > 30:
        parts.append("Hot")
    elif temp < 20:
        parts.append("Cool")
    else:
        parts.append("Pleasant")

    if rain_probability > 70:
        parts.append("Rainy")
    elif rain_probability > 30:
        parts.append("Possibly rainy")

    return f"{' and '.join(parts)} {period} ({temp}°C)"


def insights(temperature: float, rain_probability: float, period: str) -> list[str]:
    """Short actionable insights for the recommendation feed."""
    lines: list[str] = []

    if temperature > 30:
        lines.append("🌡️ Hot weather - seek air-conditioned places")
        lines.append("💧 Stay hydrated and avoid prolonged outdoor activities")

    if rain_probability > 50:
        lines.append("☔ Rain expected - choose indoor activities")
        lines.append("🏠 Perfect time for cozy cafes and covered areas")

    if 20 <= temperature <= 28 and rain_probability < 30:
        lines.append("🌟 Perfect weather for outdoor dining")
        lines.append("🚶 Great time for walking around Indiranagar")

    if period == "morning":
        lines.append("☕ Morning is ideal for coffee and breakfast spots")
    elif period == "evening":
        lines.append("🌅 Evening is perfect for outdoor seating and social dining")

    return lines
