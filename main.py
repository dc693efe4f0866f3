"""
w3w - command line client for the what3words API.

Runs a single what3words API operation and prints the result as JSON, dood!

    w3w -c config.toml convert-to-coordinates filled.count.soap
    w3w -c config.toml autosuggest filled.count.soa --clip-to-country GB --focus 51.52,-0.2
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import Any, List, Optional, Sequence

from internal.config.manager import ConfigManager
from lib.logging_utils import initLogging
from lib.utils import jsonDumps
from lib.what3words import (
    AutoSuggestInput,
    BoundingBox,
    CoordinateRadius,
    Coordinates,
    PolygonCoordinates,
    What3WordsAPI,
    What3WordsClient,
    What3WordsError,
)

# Configure basic logging first
logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.WARNING)
logger = logging.getLogger(__name__)

DEFAULT_LOGGING_CONFIG = {"level": "WARNING", "console": True}


def parseFloatList(value: str, count: Optional[int] = None) -> List[float]:
    """Parse comma separated floats, optionally checking their count."""
    try:
        numbers = [float(part) for part in value.split(",")]
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not a comma separated list of numbers")
    if count is not None and len(numbers) != count:
        raise argparse.ArgumentTypeError(f"'{value}' must contain exactly {count} numbers")
    return numbers


def parseCoordinates(value: str) -> Coordinates:
    """Parse "lat,lng" argument."""
    lat, lng = parseFloatList(value, 2)
    return Coordinates(lat, lng)


def parseBoundingBox(value: str) -> BoundingBox:
    """Parse "south,west,north,east" argument."""
    return BoundingBox(*parseFloatList(value, 4))


def parseCircle(value: str) -> CoordinateRadius:
    """Parse "lat,lng,km" argument."""
    lat, lng, radius = parseFloatList(value, 3)
    if not radius.is_integer():
        raise argparse.ArgumentTypeError(f"radius in '{value}' must be whole kilometres")
    return CoordinateRadius(Coordinates(lat, lng), int(radius))


def parsePolygon(value: str) -> PolygonCoordinates:
    """Parse "lat,lng,lat,lng,..." argument. The polygon is closed if needed."""
    numbers = parseFloatList(value)
    if len(numbers) % 2 != 0:
        raise argparse.ArgumentTypeError(f"'{value}' must contain lat,lng pairs")
    points = [Coordinates(numbers[i], numbers[i + 1]) for i in range(0, len(numbers), 2)]
    return PolygonCoordinates(points).closed()


def parseArguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(prog="w3w", description="Command line client for the what3words API, dood!")
    parser.add_argument(
        "-c",
        "--config",
        default="config.toml",
        help="Path to configuration file (default: config.toml)",
    )
    parser.add_argument(
        "--config-dir",
        action="append",
        help="Directory to search for .toml config files recursively (can be specified multiple times), dood!",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Pretty-print loaded configuration and exit, dood!",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    to3wa = subparsers.add_parser("convert-to-3wa", help="Convert coordinates to a 3 word address")
    to3wa.add_argument("lat", type=float, help="Latitude")
    to3wa.add_argument("lng", type=float, help="Longitude")

    toCoordinates = subparsers.add_parser("convert-to-coordinates", help="Convert a 3 word address to coordinates")
    toCoordinates.add_argument("words", help="3 word address, e.g. filled.count.soap")

    grid = subparsers.add_parser("grid-section", help="Get grid lines inside a bounding box")
    grid.add_argument("south", type=float)
    grid.add_argument("west", type=float)
    grid.add_argument("north", type=float)
    grid.add_argument("east", type=float)

    subparsers.add_parser("languages", help="List available 3 word address languages")

    autosuggest = subparsers.add_parser("autosuggest", help="Suggest 3 word addresses for partial input")
    autosuggest.add_argument("words", help="Full or partial 3 word address")
    autosuggest.add_argument("--focus", type=parseCoordinates, metavar="LAT,LNG")
    autosuggest.add_argument("--language", default="", help="Fallback language (default: client language)")
    autosuggest.add_argument("--no-prefer-land", dest="preferLand", action="store_false")
    autosuggest.add_argument("--clip-to-country", action="append", default=[], metavar="CC")
    autosuggest.add_argument("--clip-to-bounding-box", type=parseBoundingBox, metavar="S,W,N,E")
    autosuggest.add_argument("--clip-to-circle", type=parseCircle, metavar="LAT,LNG,KM")
    autosuggest.add_argument("--clip-to-polygon", type=parsePolygon, metavar="LAT,LNG,...")

    args = parser.parse_args(argv)
    if args.command is None and not args.print_config:
        parser.error("a command is required")

    args.config = os.path.abspath(args.config)
    if args.config_dir:
        args.config_dir = [os.path.abspath(dirPath) for dirPath in args.config_dir]

    return args


def buildAutoSuggestInput(args: argparse.Namespace) -> AutoSuggestInput:
    """Build AutoSuggestInput from parsed autosuggest arguments."""
    return AutoSuggestInput(
        words=args.words,
        clipToBoundingBox=args.clip_to_bounding_box,
        clipToCircle=args.clip_to_circle,
        clipToPolygon=args.clip_to_polygon,
        clipToCountry=tuple(args.clip_to_country),
        focus=args.focus,
        language=args.language,
        preferLand=args.preferLand,
    )


async def runCommand(client: What3WordsAPI, args: argparse.Namespace) -> Any:
    """Run the selected API operation and return JSON serializable result."""
    match args.command:
        case "convert-to-3wa":
            return (await client.convertTo3wa(Coordinates(args.lat, args.lng))).to_dict()
        case "convert-to-coordinates":
            return (await client.convertToCoordinates(args.words)).to_dict()
        case "grid-section":
            boundingBox = BoundingBox(args.south, args.west, args.north, args.east)
            return (await client.gridSection(boundingBox)).to_dict()
        case "languages":
            return [language.to_dict() for language in await client.availableLanguages()]
        case "autosuggest":
            return (await client.autosuggest(buildAutoSuggestInput(args))).to_dict()
        case _:
            raise ValueError(f"Unknown command: {args.command}")


async def runWithClient(configManager: ConfigManager, args: argparse.Namespace) -> Any:
    async with What3WordsClient.fromConfig(configManager.getWhat3WordsConfig()) as client:
        return await runCommand(client, args)


def prettyPrintConfig(configManager: ConfigManager) -> None:
    """Pretty-print the loaded configuration with the API key masked, dood!"""
    config = dict(configManager.config)
    if "what3words" in config:
        w3wConfig = dict(config["what3words"])
        if w3wConfig.get("api-key"):
            w3wConfig["api-key"] = "***"
        config["what3words"] = w3wConfig

    print(jsonDumps(config, indent=2))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = parseArguments(argv)
    configManager = ConfigManager(configPath=args.config, configDirs=args.config_dir)

    if args.print_config:
        prettyPrintConfig(configManager)
        return 0

    initLogging(configManager.getLoggingConfig() or DEFAULT_LOGGING_CONFIG)

    try:
        result = asyncio.run(runWithClient(configManager, args))
    except What3WordsError as e:
        logger.error(f"what3words request failed: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    print(jsonDumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
