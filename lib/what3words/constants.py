"""
what3words API Constants

This module contains the constants for the what3words v3 API client.
"""

from typing import Final

VERSION: Final[str] = "0.1.0"

# API Configuration
API_BASE_URL: Final[str] = "https://api.what3words.com/v3"
DEFAULT_LANGUAGE: Final[str] = "en"
DEFAULT_TIMEOUT: Final[float] = 10.0

# Headers
API_KEY_HEADER: Final[str] = "X-Api-Key"
CONTENT_TYPE_JSON: Final[str] = "application/json"

# API Endpoints
ENDPOINT_AUTOSUGGEST: Final[str] = "/autosuggest"
ENDPOINT_CONVERT_TO_3WA: Final[str] = "/convert-to-3wa"
ENDPOINT_CONVERT_TO_COORDINATES: Final[str] = "/convert-to-coordinates"
ENDPOINT_GRID_SECTION: Final[str] = "/grid-section"
ENDPOINT_AVAILABLE_LANGUAGES: Final[str] = "/available-languages"

# API Limits
# 24 distinct points plus the closing duplicate of the first one
MAX_POLYGON_POINTS: Final[int] = 25

# Error contexts
CONTEXT_AUTOSUGGEST: Final[str] = "retrieving auto suggestion"
CONTEXT_CONVERT_TO_3WA: Final[str] = "converting coordinates to address"
CONTEXT_CONVERT_TO_COORDINATES: Final[str] = "converting address to coordinates"
CONTEXT_GRID_SECTION: Final[str] = "retrieving grid section"
CONTEXT_AVAILABLE_LANGUAGES: Final[str] = "retrieving available languages"
