"""
what3words API Data Models

This module defines the value types used to build what3words API queries and
the models for decoded API responses. All models are frozen slotted dataclasses.

Query types implement __str__ as their query string serialization:
    >>> str(Coordinates(51.521251, 0.203586))
    '51.521251,0.203586'

Response types are created with from_dict() and converted back with to_dict(),
using the camelCase field names of the API.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Coordinates:
    """Latitude and longitude in WGS84 degrees, dood!"""

    lat: float
    """Latitude"""
    lng: float
    """Longitude"""

    def __str__(self) -> str:
        return f"{self.lat:f},{self.lng:f}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Coordinates":
        """Create Coordinates instance from API response dictionary."""
        return cls(
            lat=float(data.get("lat") or 0.0),
            lng=float(data.get("lng") or 0.0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True, slots=True)
class Square:
    """The 3m x 3m grid square, defined by its southwest and northeast corners"""

    southwest: Coordinates
    northeast: Coordinates

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Square":
        """Create Square instance from API response dictionary."""
        return cls(
            southwest=Coordinates.from_dict(data.get("southwest") or {}),
            northeast=Coordinates.from_dict(data.get("northeast") or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"southwest": self.southwest.to_dict(), "northeast": self.northeast.to_dict()}


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Rectangular area given by its southernmost latitude, westernmost longitude,
    northernmost latitude and easternmost longitude.

    South < north and west < east is expected but not checked, the service
    rejects malformed boxes itself.
    """

    southLat: float
    westLng: float
    northLat: float
    eastLng: float

    def __str__(self) -> str:
        return f"{self.southLat:f},{self.westLng:f},{self.northLat:f},{self.eastLng:f}"

    @classmethod
    def fromSquare(cls, square: Square) -> "BoundingBox":
        """Build a BoundingBox covering a grid Square."""
        return cls(
            southLat=square.southwest.lat,
            westLng=square.southwest.lng,
            northLat=square.northeast.lat,
            eastLng=square.northeast.lng,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BoundingBox":
        """Create BoundingBox from a {"southwest": ..., "northeast": ...} dictionary."""
        return cls.fromSquare(Square.from_dict(data))


@dataclass(frozen=True, slots=True)
class CoordinateRadius:
    """Circle given by its center and radius in kilometres"""

    coordinates: Coordinates
    radius: int
    """Radius in kilometres"""

    def __str__(self) -> str:
        return f"{self.coordinates},{self.radius:d}"


@dataclass(frozen=True, slots=True)
class PolygonCoordinates:
    """Ordered polygon points. The polygon should be closed, i.e. the first
    point repeated as the last one.
    """

    points: Tuple[Coordinates, ...]

    def __init__(self, points: Sequence[Coordinates]) -> None:
        object.__setattr__(self, "points", tuple(points))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Coordinates]:
        return iter(self.points)

    def __str__(self) -> str:
        return ",".join(str(point) for point in self.points)

    @property
    def isClosed(self) -> bool:
        return len(self.points) > 1 and self.points[0] == self.points[-1]

    def closed(self) -> "PolygonCoordinates":
        """Return closed copy of the polygon (first point appended if needed)."""
        if not self.points or self.isClosed:
            return self
        return PolygonCoordinates(self.points + (self.points[0],))


@dataclass(frozen=True, slots=True)
class AutoSuggestInput:
    """Parameters of an AutoSuggest request, dood!

    Only one clip filter is sent. If several are set, the first one in the order
    bounding box, circle, polygon, country is used and the rest are ignored.
    """

    words: str
    """Full or partial 3 word address, e.g. "filled.count.soa" (required)"""
    clipToBoundingBox: Optional[BoundingBox] = None
    """Restrict results to a bounding box"""
    clipToCircle: Optional[CoordinateRadius] = None
    """Restrict results to a circle"""
    clipToPolygon: Optional[PolygonCoordinates] = None
    """Restrict results to a closed polygon of at most 25 points"""
    clipToCountry: Tuple[str, ...] = ()
    """Restrict results to ISO 3166-1 alpha-2 country codes. A "GB" or "GB,FR" string is accepted"""
    focus: Optional[Coordinates] = None
    """Weight results towards this location"""
    language: str = ""
    """Fallback language, overrides the client language when non-empty"""
    preferLand: bool = True
    """Prefer results on land to those in the sea"""

    def __post_init__(self) -> None:
        countries = self.clipToCountry
        if isinstance(countries, str):
            # "GB" or pre-joined "GB,FR"
            countries = countries.split(",")
        normalized = tuple(code.strip() for code in countries if code.strip())
        if normalized != self.clipToCountry:
            object.__setattr__(self, "clipToCountry", normalized)
        if self.clipToPolygon is not None and not isinstance(self.clipToPolygon, PolygonCoordinates):
            object.__setattr__(self, "clipToPolygon", PolygonCoordinates(self.clipToPolygon))


@dataclass(frozen=True, slots=True)
class Suggestion:
    """Single AutoSuggest result"""

    country: str
    nearestPlace: str
    words: str
    distanceToFocusKm: int = 0
    rank: int = 0
    language: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Suggestion":
        """Create Suggestion instance from API response dictionary."""
        return cls(
            country=data.get("country") or "",
            nearestPlace=data.get("nearestPlace") or "",
            words=data.get("words") or "",
            distanceToFocusKm=int(data.get("distanceToFocusKm") or 0),
            rank=int(data.get("rank") or 0),
            language=data.get("language") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "country": self.country,
            "nearestPlace": self.nearestPlace,
            "words": self.words,
            "distanceToFocusKm": self.distanceToFocusKm,
            "rank": self.rank,
            "language": self.language,
        }


@dataclass(frozen=True, slots=True)
class AutoSuggestResponse:
    """AutoSuggest results, possibly empty"""

    suggestions: Tuple[Suggestion, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AutoSuggestResponse":
        """Create AutoSuggestResponse instance from API response dictionary."""
        return cls(
            suggestions=tuple(Suggestion.from_dict(item) for item in (data.get("suggestions") or [])),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"suggestions": [suggestion.to_dict() for suggestion in self.suggestions]}


@dataclass(frozen=True, slots=True)
class LocationResponse:
    """Result of convert-to-3wa and convert-to-coordinates, dood!

    Contains the 3 word address, its coordinates, the country, the bounds of the
    grid square, the nearest place (such as a local town) and a link to the map site.
    """

    coordinates: Coordinates
    country: str
    language: str
    map: str
    nearestPlace: str
    square: Square
    words: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LocationResponse":
        """Create LocationResponse instance from API response dictionary."""
        return cls(
            coordinates=Coordinates.from_dict(data.get("coordinates") or {}),
            country=data.get("country") or "",
            language=data.get("language") or "",
            map=data.get("map") or "",
            nearestPlace=data.get("nearestPlace") or "",
            square=Square.from_dict(data.get("square") or {}),
            words=data.get("words") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "coordinates": self.coordinates.to_dict(),
            "country": self.country,
            "language": self.language,
            "map": self.map,
            "nearestPlace": self.nearestPlace,
            "square": self.square.to_dict(),
            "words": self.words,
        }


@dataclass(frozen=True, slots=True)
class GridLine:
    """Start and end coordinates of a grid line"""

    start: Coordinates
    end: Coordinates

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GridLine":
        return cls(
            start=Coordinates.from_dict(data.get("start") or {}),
            end=Coordinates.from_dict(data.get("end") or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}


@dataclass(frozen=True, slots=True)
class GridSection:
    """Horizontal and vertical lines covering a grid area, in service order"""

    lines: Tuple[GridLine, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GridSection":
        """Create GridSection instance from API response dictionary."""
        return cls(lines=tuple(GridLine.from_dict(item) for item in (data.get("lines") or [])))

    def to_dict(self) -> Dict[str, Any]:
        return {"lines": [line.to_dict() for line in self.lines]}


@dataclass(frozen=True, slots=True)
class Language:
    """3 word address language: ISO 639-1 code, English name and native name"""

    code: str
    name: str
    nativeName: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Language":
        """Create Language instance from API response dictionary."""
        return cls(
            code=data.get("code") or "",
            name=data.get("name") or "",
            nativeName=data.get("nativeName") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "name": self.name, "nativeName": self.nativeName}


def parseAvailableLanguages(data: Dict[str, Any]) -> List[Language]:
    """Extract languages list from the /available-languages envelope."""
    return [Language.from_dict(item) for item in (data.get("languages") or [])]
