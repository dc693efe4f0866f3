"""
what3words API Async Client

This module provides the What3WordsClient class for interacting with the
what3words v3 API (https://api.what3words.com/v3) using httpx.

Client settings are given as an ordered list of options applied after the
defaults, so later options win:

    >>> client = What3WordsClient("your_api_key", withLanguage("de"), withTimeout(5))
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, TypeVar

import httpx

from .abstract import What3WordsAPI
from .constants import (
    API_BASE_URL,
    API_KEY_HEADER,
    CONTENT_TYPE_JSON,
    CONTEXT_AUTOSUGGEST,
    CONTEXT_AVAILABLE_LANGUAGES,
    CONTEXT_CONVERT_TO_3WA,
    CONTEXT_CONVERT_TO_COORDINATES,
    CONTEXT_GRID_SECTION,
    DEFAULT_LANGUAGE,
    DEFAULT_TIMEOUT,
    ENDPOINT_AUTOSUGGEST,
    ENDPOINT_AVAILABLE_LANGUAGES,
    ENDPOINT_CONVERT_TO_3WA,
    ENDPOINT_CONVERT_TO_COORDINATES,
    ENDPOINT_GRID_SECTION,
    MAX_POLYGON_POINTS,
    VERSION,
)
from .exceptions import DecodeError, TransportError, ValidationError, parseServiceError
from .models import (
    AutoSuggestInput,
    AutoSuggestResponse,
    BoundingBox,
    Coordinates,
    GridSection,
    Language,
    LocationResponse,
    parseAvailableLanguages,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True)
class ClientConfig:
    """Mutable client settings, only used while the client is being constructed"""

    language: str = DEFAULT_LANGUAGE
    endpoint: str = API_BASE_URL
    httpClient: Optional[httpx.AsyncClient] = None
    """Transport to use. If None, the client creates (and owns) its own AsyncClient"""
    timeout: Optional[float] = None
    """Request timeout in seconds. If None, the transport default is used"""


ClientOption = Callable[[ClientConfig], None]


def withLanguage(language: str) -> ClientOption:
    """Set default language for 3 word addresses (ISO 639-1 code)."""

    def _apply(config: ClientConfig) -> None:
        config.language = language

    return _apply


def withEndpoint(endpoint: str | httpx.URL) -> ClientOption:
    """Set API base URL (e.g. for a self-hosted what3words Enterprise Suite)."""

    def _apply(config: ClientConfig) -> None:
        config.endpoint = str(endpoint)

    return _apply


def withHttpClient(httpClient: httpx.AsyncClient) -> ClientOption:
    """Use the given httpx.AsyncClient as transport.

    This allows passing a client with custom transport, e.g. one with retries
    (httpx.AsyncHTTPTransport(retries=3)), proxies or mocks. The caller stays
    responsible for closing it.
    """

    def _apply(config: ClientConfig) -> None:
        config.httpClient = httpClient

    return _apply


def withTimeout(timeout: float) -> ClientOption:
    """Set request timeout in seconds."""

    def _apply(config: ClientConfig) -> None:
        config.timeout = timeout

    return _apply


class What3WordsClient(What3WordsAPI):
    """Async client for what3words v3 API, dood!

    Every operation makes exactly one GET request and returns a decoded model
    or raises What3WordsError subclass:
        - ValidationError: invalid input, nothing was sent
        - TransportError: the request could not be completed (network, timeout)
        - ServiceError: the service returned non-200 status
        - DecodeError: the response body did not match the expected shape

    The client keeps no per-call state, so one instance may be shared between
    many concurrent tasks.

    Example:
        >>> async with What3WordsClient("your_api_key") as client:
        ...     location = await client.convertToCoordinates("filled.count.soap")
        ...     print(location.coordinates)
    """

    __slots__ = ("_apiKey", "_language", "_endpoint", "_timeout", "_httpClient", "_ownsHttpClient")

    def __init__(self, apiKey: str, *options: ClientOption) -> None:
        """Initialize what3words client.

        Args:
            apiKey: what3words API key. It is not validated locally, an invalid
                key is reported by the service with 401 status
            *options: Client options (withLanguage, withEndpoint, withHttpClient,
                withTimeout), applied in order
        """
        config = ClientConfig()
        for option in options:
            option(config)

        self._apiKey = apiKey
        self._language = config.language
        self._endpoint = config.endpoint.rstrip("/")
        self._timeout = config.timeout
        self._httpClient = config.httpClient
        self._ownsHttpClient = config.httpClient is None

        logger.debug(f"What3WordsClient initialized for {self._endpoint}, language: {self._language}")

    @classmethod
    def fromConfig(cls, config: Dict[str, Any], *options: ClientOption) -> "What3WordsClient":
        """Create client from the [what3words] configuration section.

        Args:
            config: Dict with "api-key" and optional "language", "endpoint", "timeout"
            *options: Extra options applied after the configured ones

        Returns:
            Configured What3WordsClient
        """
        configOptions: List[ClientOption] = []
        if config.get("language"):
            configOptions.append(withLanguage(str(config["language"])))
        if config.get("endpoint"):
            configOptions.append(withEndpoint(str(config["endpoint"])))
        if config.get("timeout") is not None:
            configOptions.append(withTimeout(float(config["timeout"])))

        return cls(str(config.get("api-key", "")), *configOptions, *options)

    @property
    def apiKey(self) -> str:
        return self._apiKey

    @property
    def language(self) -> str:
        return self._language

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def timeout(self) -> Optional[float]:
        return self._timeout

    def __repr__(self) -> str:
        return f"{type(self).__name__}(endpoint={self._endpoint!r}, language={self._language!r})"

    async def __aenter__(self) -> "What3WordsClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def _getHttpClient(self) -> httpx.AsyncClient:
        """Get injected HTTP client, or create own one on first use.

        Returns:
            httpx.AsyncClient instance
        """
        httpClient = self._httpClient
        if httpClient is None or (self._ownsHttpClient and httpClient.is_closed):
            httpClient = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout if self._timeout is not None else DEFAULT_TIMEOUT),
                headers={"User-Agent": f"what3words-python-client/{VERSION}"},
            )
            self._httpClient = httpClient
            logger.debug("Created new HTTP client")

        return httpClient

    async def aclose(self) -> None:
        """Close the HTTP client if it was created by this client."""
        if self._ownsHttpClient and self._httpClient is not None and not self._httpClient.is_closed:
            await self._httpClient.aclose()
            logger.debug("HTTP client closed")

    def _buildUrl(self, endpoint: str, params: Optional[Dict[str, str]] = None) -> httpx.URL:
        """Build full URL with encoded query string for API endpoint.

        Args:
            endpoint: API endpoint path (e.g., "/grid-section")
            params: Query parameters

        Returns:
            URL for the request
        """
        url = self._endpoint + "/" + endpoint.lstrip("/")
        if not params:
            return httpx.URL(url)
        return httpx.URL(url, params=params)

    async def _makeRequest(
        self,
        endpoint: str,
        params: Optional[Dict[str, str]],
        parser: Callable[[Any], T],
        context: str,
        timeout: Optional[float] = None,
    ) -> T:
        """Make GET request to what3words API and decode the response, dood!

        Single point for all HTTP requests. The response body is always read
        completely, so the connection is released on every path.

        Args:
            endpoint: API endpoint path
            params: Query parameters
            parser: Function converting decoded JSON into the result model
            context: Operation description used as error message prefix
            timeout: Request timeout in seconds (default: client timeout)

        Returns:
            Parsed result

        Raises:
            TransportError: Network error or timeout
            ServiceError: Non-200 response status
            DecodeError: Response is not JSON or has unexpected shape
        """
        url = self._buildUrl(endpoint, params)
        headers = {
            "Content-Type": CONTENT_TYPE_JSON,
            API_KEY_HEADER: self._apiKey,
        }
        requestKwargs: Dict[str, Any] = {"headers": headers}
        requestTimeout = timeout if timeout is not None else self._timeout
        if requestTimeout is not None:
            requestKwargs["timeout"] = requestTimeout

        logger.debug(f"Making GET request to {url}")

        try:
            response = await self._getHttpClient().get(url, **requestKwargs)
        except httpx.TimeoutException as e:
            logger.error(f"Request timeout for {url}: {type(e).__name__}#{e}")
            raise TransportError(f"sending HTTP request: timeout: {type(e).__name__}#{e}", context) from e
        except httpx.RequestError as e:
            logger.error(f"Network error for {url}: {type(e).__name__}#{e}")
            raise TransportError(f"sending HTTP request: {type(e).__name__}#{e}", context) from e

        if response.status_code != 200:
            try:
                errorBody = response.json()
            except ValueError:
                errorBody = None
            error = parseServiceError(str(url), response.status_code, response.reason_phrase, errorBody, context)
            logger.warning(f"API error: {error}")
            raise error

        try:
            result = parser(response.json())
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            logger.error(f"Failed to decode response from {url}: {type(e).__name__}#{e}")
            raise DecodeError(f"decoding response body into output: {type(e).__name__}#{e}", context) from e

        logger.debug(f"Request successful: GET {url}")
        return result

    def _buildClipFilter(self, input: AutoSuggestInput) -> Dict[str, str]:
        """Build the clip filter query parameter.

        Only one filter is sent, first set one wins: bounding box, circle,
        polygon, country.
        """
        filters: List[tuple[str, str]] = []
        if input.clipToBoundingBox is not None:
            filters.append(("clip-to-bounding-box", str(input.clipToBoundingBox)))
        if input.clipToCircle is not None:
            filters.append(("clip-to-circle", str(input.clipToCircle)))
        if input.clipToPolygon is not None:
            filters.append(("clip-to-polygon", str(input.clipToPolygon)))
        countries = [code.strip().upper() for code in input.clipToCountry if code.strip()]
        if countries:
            filters.append(("clip-to-country", ",".join(countries)))

        if not filters:
            return {}

        if len(filters) > 1:
            ignored = ", ".join(name for name, _ in filters[1:])
            logger.warning(f"Several clip filters set, using {filters[0][0]} and ignoring {ignored}")

        name, value = filters[0]
        return {name: value}

    async def autosuggest(self, input: AutoSuggestInput, *, timeout: Optional[float] = None) -> AutoSuggestResponse:
        """Return a list of 3 word addresses based on user input, dood!

        Args:
            input: AutoSuggest parameters. Language falls back to the client
                language when input.language is empty
            timeout: Request timeout in seconds (default: client timeout)

        Returns:
            AutoSuggestResponse, suggestions may be empty

        Raises:
            ValidationError: clipToPolygon has more than 25 points (nothing is sent)
            TransportError, ServiceError, DecodeError: see _makeRequest()

        Example:
            >>> result = await client.autosuggest(AutoSuggestInput(words="filled.count.soa", clipToCountry=("GB",)))
            >>> [s.words for s in result.suggestions]
        """
        if input.clipToPolygon is not None and len(input.clipToPolygon) > MAX_POLYGON_POINTS:
            raise ValidationError(
                f"clip to polygon is limited to {MAX_POLYGON_POINTS} coordinate pairs, got {len(input.clipToPolygon)}",
                CONTEXT_AUTOSUGGEST,
            )

        params: Dict[str, str] = {
            "input": input.words,
            "language": input.language or self._language,
        }
        if input.focus is not None:
            params["focus"] = str(input.focus)

        params.update(self._buildClipFilter(input))
        params["prefer-land"] = "true" if input.preferLand else "false"

        return await self._makeRequest(
            ENDPOINT_AUTOSUGGEST,
            params,
            AutoSuggestResponse.from_dict,
            CONTEXT_AUTOSUGGEST,
            timeout=timeout,
        )

    async def convertTo3wa(self, coordinates: Coordinates, *, timeout: Optional[float] = None) -> LocationResponse:
        """Convert latitude and longitude to a 3 word address in the client language.

        Also returns country, the bounds of the grid square, a nearby place
        (such as a local town) and a link to the what3words map site.
        """
        params = {
            "coordinates": str(coordinates),
            "language": self._language,
        }
        return await self._makeRequest(
            ENDPOINT_CONVERT_TO_3WA,
            params,
            LocationResponse.from_dict,
            CONTEXT_CONVERT_TO_3WA,
            timeout=timeout,
        )

    async def convertToCoordinates(self, words: str, *, timeout: Optional[float] = None) -> LocationResponse:
        """Convert a 3 word address to latitude and longitude.

        The address is sent as is, malformed addresses are rejected by the service.
        """
        params = {
            "words": words,
            "language": self._language,
        }
        return await self._makeRequest(
            ENDPOINT_CONVERT_TO_COORDINATES,
            params,
            LocationResponse.from_dict,
            CONTEXT_CONVERT_TO_COORDINATES,
            timeout=timeout,
        )

    async def gridSection(self, boundingBox: BoundingBox, *, timeout: Optional[float] = None) -> GridSection:
        """Return a section of the 3m x 3m grid as horizontal and vertical lines
        covering the requested area, which can then be drawn onto a map.
        """
        params = {
            "bounding-box": str(boundingBox),
            "language": self._language,
        }
        return await self._makeRequest(
            ENDPOINT_GRID_SECTION,
            params,
            GridSection.from_dict,
            CONTEXT_GRID_SECTION,
            timeout=timeout,
        )

    async def availableLanguages(self, *, timeout: Optional[float] = None) -> List[Language]:
        """Retrieve all available 3 word address languages, in service order."""
        return await self._makeRequest(
            ENDPOINT_AVAILABLE_LANGUAGES,
            None,
            parseAvailableLanguages,
            CONTEXT_AVAILABLE_LANGUAGES,
            timeout=timeout,
        )


def newClient(apiKey: str, *options: ClientOption) -> What3WordsAPI:
    """Create a new client for the what3words API.

    Args:
        apiKey: what3words API key
        *options: Client options, applied in order (later ones win)

    Returns:
        What3WordsAPI implementation
    """
    return What3WordsClient(apiKey, *options)
