"""
Pytest configuration and common fixtures for w3w command line tests.

All fixtures follow camelCase naming convention.
"""

import json
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, Generator, List, Optional
from unittest.mock import Mock

import httpx
import pytest

from lib.what3words import What3WordsClient, withHttpClient

# ============================================================================
# Sample Data
# ============================================================================

CONFIG_TOML = """
[what3words]
api-key = "test_api_key"
language = "en"
timeout = 5
"""


@pytest.fixture
def locationResponse() -> Dict[str, Any]:
    """Sample convert-to-3wa / convert-to-coordinates response body."""
    return {
        "country": "GB",
        "square": {
            "southwest": {"lng": -0.195543, "lat": 51.520833},
            "northeast": {"lng": -0.195499, "lat": 51.52086},
        },
        "nearestPlace": "Bayswater, London",
        "coordinates": {"lng": -0.195521, "lat": 51.520847},
        "words": "filled.count.soap",
        "language": "en",
        "map": "https://w3w.co/filled.count.soap",
    }


# ============================================================================
# Filesystem Fixtures
# ============================================================================


@pytest.fixture
def tempDir(monkeypatch) -> Generator[Path, None, None]:
    """Create a temporary working directory, so no stray .env is loaded."""
    with tempfile.TemporaryDirectory() as tmpdir:
        monkeypatch.chdir(tmpdir)
        yield Path(tmpdir)


@pytest.fixture
def configFile(tempDir) -> Path:
    """Write a valid config.toml with what3words api-key."""
    configPath = tempDir / "config.toml"
    configPath.write_text(CONFIG_TOML)
    return configPath


# ============================================================================
# Service Fixtures
# ============================================================================


class MockService:
    """Fake what3words service recording every request, dood!"""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.statusCode = 200
        self.body: Any = {}

    def respondWith(self, body: Any, statusCode: int = 200) -> None:
        self.body = body
        self.statusCode = statusCode

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.statusCode, content=json.dumps(self.body).encode("utf-8"))

    @property
    def lastRequest(self) -> Optional[httpx.Request]:
        return self.requests[-1] if self.requests else None


@pytest.fixture
def mockService(monkeypatch) -> MockService:
    """
    Route every client created from configuration to a MockService.

    Returns:
        MockService: Recorder with configurable response
    """
    service = MockService()
    originalFromConfig: Callable = What3WordsClient.fromConfig.__func__  # type: ignore[attr-defined]

    def fromConfig(cls, config, *options):
        httpClient = httpx.AsyncClient(transport=httpx.MockTransport(service))
        return originalFromConfig(cls, config, withHttpClient(httpClient), *options)

    monkeypatch.setattr(What3WordsClient, "fromConfig", classmethod(fromConfig))
    return service


@pytest.fixture
def mockInitLogging(monkeypatch) -> Mock:
    """Keep the CLI from reconfiguring pytest's log handlers."""
    import main

    mock = Mock()
    monkeypatch.setattr(main, "initLogging", mock)
    return mock
