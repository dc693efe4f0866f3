"""
Logging utilities for the what3words client.

Logging is configured from the [logging] config section:

    [logging]
    level = "INFO"
    format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    console = true
    file = "logs/w3w.log"
    file-level = "DEBUG"
    rotate = true

    [logging.logger."lib.what3words"]
    level = "DEBUG"
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third party loggers and the least verbose level they may use
QUIET_LOGGERS: Dict[str, int] = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
}


def getLogLevelByStr(levelStr: str, default: Optional[int] = None) -> Optional[int]:
    """Get log level by string."""
    level = getattr(logging, str(levelStr).upper(), None)
    if not isinstance(level, int):
        logger.error(f"Invalid log level '{levelStr}'")
        return default
    return level


def _handlerLevel(config: Dict[str, Any], key: str, fallback: int) -> int:
    if key not in config:
        return fallback
    level = getLogLevelByStr(config[key], fallback)
    return fallback if level is None else level


def _makeConsoleHandler(config: Dict[str, Any], loggerLevel: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(_handlerLevel(config, "console-level", loggerLevel))
    return handler


def _makeFileHandler(config: Dict[str, Any], loggerLevel: int) -> logging.Handler:
    """Create file handler, rotated daily at midnight if "rotate" is set."""
    logPath = Path(config["file"])
    logPath.parent.mkdir(parents=True, exist_ok=True)

    handler: logging.Handler
    if config.get("rotate", False):
        handler = TimedRotatingFileHandler(
            filename=logPath,
            when="midnight",
            interval=1,
            backupCount=7,
            encoding="utf-8",
        )
    else:
        handler = logging.FileHandler(logPath, encoding="utf-8")
    handler.setLevel(_handlerLevel(config, "file-level", loggerLevel))
    return handler


def configureLogger(localLogger: logging.Logger, config: Dict[str, Any]) -> None:
    """Configure individual logger from config file settings.

    Existing handlers of the logger are replaced, so it is safe to call
    this more than once for the same logger.
    """
    if "propagate" in config:
        localLogger.propagate = bool(config["propagate"])

    if "level" in config:
        level = getLogLevelByStr(config["level"])
        if level is not None:
            localLogger.setLevel(level)
    loggerLevel = localLogger.getEffectiveLevel()

    for handler in localLogger.handlers[:]:
        localLogger.removeHandler(handler)

    handlers: Dict[str, logging.Handler] = {}
    if config.get("console", False):
        handlers["console"] = _makeConsoleHandler(config, loggerLevel)
    if "file" in config:
        try:
            handlers[f"file {config['file']}"] = _makeFileHandler(config, loggerLevel)
        except OSError as e:
            logger.error(f"Failed to setup file logging for {localLogger.name}: {e}")

    formatter = logging.Formatter(config.get("format", DEFAULT_LOG_FORMAT))
    for target, handler in handlers.items():
        handler.setFormatter(formatter)
        localLogger.addHandler(handler)
        logger.info(f"Logging {localLogger.name} to {target}, logLevel: {handler.level}")


def initLogging(config: Dict[str, Any]) -> None:
    """Configure root logger and per-logger overrides from [logging] section."""
    rootLogger = logging.getLogger()
    rootLogger.setLevel(logging.INFO)
    configureLogger(rootLogger, config)
    rootLevel = rootLogger.getEffectiveLevel()

    for name, level in QUIET_LOGGERS.items():
        if rootLevel < level:
            logging.getLogger(name).setLevel(level)

    for loggerName, loggerConfig in config.get("logger", {}).items():
        logger.debug(f"Configuring logger '{loggerName}' with config {loggerConfig}")
        configureLogger(logging.getLogger(loggerName), loggerConfig)

    logger.info(f"Logging configured: root level={rootLevel}")
