"""
what3words API Client Library

This module provides a Python async client library for the what3words v3 API
(api.what3words.com) with typed request and response models.

Example usage:
    from lib.what3words import AutoSuggestInput, Coordinates, What3WordsClient, withLanguage

    async with What3WordsClient("your_api_key", withLanguage("en")) as client:
        # Coordinates to 3 word address
        location = await client.convertTo3wa(Coordinates(51.521251, -0.203586))

        # 3 word address to coordinates
        location = await client.convertToCoordinates("filled.count.soap")

        # Suggestions for partial input
        result = await client.autosuggest(AutoSuggestInput(words="filled.count.soa"))
"""

from lib.what3words.abstract import What3WordsAPI
from lib.what3words.client import (
    ClientConfig,
    ClientOption,
    What3WordsClient,
    newClient,
    withEndpoint,
    withHttpClient,
    withLanguage,
    withTimeout,
)
from lib.what3words.exceptions import (
    DecodeError,
    ServiceError,
    TransportError,
    ValidationError,
    What3WordsError,
)
from lib.what3words.models import (
    AutoSuggestInput,
    AutoSuggestResponse,
    BoundingBox,
    CoordinateRadius,
    Coordinates,
    GridLine,
    GridSection,
    Language,
    LocationResponse,
    PolygonCoordinates,
    Square,
    Suggestion,
)

__all__ = [
    "What3WordsAPI",
    "What3WordsClient",
    "ClientConfig",
    "ClientOption",
    "newClient",
    "withEndpoint",
    "withHttpClient",
    "withLanguage",
    "withTimeout",
    "What3WordsError",
    "ValidationError",
    "TransportError",
    "ServiceError",
    "DecodeError",
    "AutoSuggestInput",
    "AutoSuggestResponse",
    "BoundingBox",
    "CoordinateRadius",
    "Coordinates",
    "GridLine",
    "GridSection",
    "Language",
    "LocationResponse",
    "PolygonCoordinates",
    "Square",
    "Suggestion",
]
