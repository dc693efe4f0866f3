"""
Abstract interface for what3words API clients, dood!
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .models import (
    AutoSuggestInput,
    AutoSuggestResponse,
    BoundingBox,
    Coordinates,
    GridSection,
    Language,
    LocationResponse,
)


class What3WordsAPI(ABC):
    """Operations supported by the what3words v3 API, dood!

    Every method performs exactly one request and either returns a fully
    decoded result or raises What3WordsError subclass.
    """

    __slots__ = ()

    @abstractmethod
    async def autosuggest(self, input: AutoSuggestInput, *, timeout: Optional[float] = None) -> AutoSuggestResponse:
        """Return 3 word address suggestions for partial user input.

        Args:
            input: AutoSuggest parameters
            timeout: Request timeout in seconds (default: client timeout)

        Returns:
            AutoSuggestResponse (suggestions may be empty)
        """
        raise NotImplementedError

    @abstractmethod
    async def availableLanguages(self, *, timeout: Optional[float] = None) -> List[Language]:
        """Return all available 3 word address languages in service order."""
        raise NotImplementedError

    @abstractmethod
    async def convertTo3wa(self, coordinates: Coordinates, *, timeout: Optional[float] = None) -> LocationResponse:
        """Convert latitude and longitude to a 3 word address."""
        raise NotImplementedError

    @abstractmethod
    async def convertToCoordinates(self, words: str, *, timeout: Optional[float] = None) -> LocationResponse:
        """Convert a 3 word address to latitude and longitude."""
        raise NotImplementedError

    @abstractmethod
    async def gridSection(self, boundingBox: BoundingBox, *, timeout: Optional[float] = None) -> GridSection:
        """Return the section of the 3m x 3m grid inside the bounding box as lines."""
        raise NotImplementedError

    @abstractmethod
    async def aclose(self) -> None:
        """Release resources held by the client."""
        raise NotImplementedError
