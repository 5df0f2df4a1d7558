"""German voice command parser package."""

from intent_parser.intents import (
    INTENT_TYPES,
    AllOff,
    Dim,
    Intent,
    LightOff,
    LightOn,
    SceneActivate,
    Temperature,
    Unknown,
)
from intent_parser.parser import (
    IntentParser,
    ParserMetrics,
    normalize_room,
    parse_dimming,
    parse_intent,
)

__all__ = [
    "INTENT_TYPES",
    "AllOff",
    "Dim",
    "Intent",
    "IntentParser",
    "LightOff",
    "LightOn",
    "ParserMetrics",
    "SceneActivate",
    "Temperature",
    "Unknown",
    "normalize_room",
    "parse_dimming",
    "parse_intent",
]
