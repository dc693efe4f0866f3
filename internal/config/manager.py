"""
Configuration management for the what3words command line client.
"""

import logging
import os
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomli

import lib.utils as utils

logger = logging.getLogger(__name__)

API_KEY_PLACEHOLDERS = ("", "YOUR_API_KEY_HERE")


def replaceMatchToEnv(match: re.Match[str]) -> str:
    """Replace environment variable placeholder with actual value.

    Args:
        match: A regex match object containing the environment variable name.

    Returns:
        str: The value of the environment variable or the original placeholder
             if the variable is not set.
    """
    key = match.group(1)
    return os.getenv(key, match.group(0))


def substituteEnvVars(value: Any) -> Any:
    """Recursively substitute ${VAR_NAME} placeholders in configuration values.

    Strings, dictionaries and lists are processed, other values are returned unchanged.
    """
    if isinstance(value, str):
        return re.sub(r"\$\{([A-Za-z_][A-Za-z0-9_-]*)\}", replaceMatchToEnv, value)
    elif isinstance(value, dict):
        return {k: substituteEnvVars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [substituteEnvVars(item) for item in value]
    return value


class ConfigManager:
    """Manages configuration loading and validation, dood!

    Configuration layout:
        [what3words]
        api-key = "${W3W_API_KEY}"
        language = "en"
        endpoint = "https://api.what3words.com/v3"
        timeout = 10

        [logging]
        level = "INFO"
        console = true
    """

    def __init__(
        self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None, dotEnvFile: str = ".env"
    ):
        """Initialize ConfigManager with config file path and optional config directories."""
        self.config_path = configPath
        self.config_dirs = configDirs or []
        utils.load_dotenv(path=dotEnvFile)
        self.config = substituteEnvVars(self._loadConfig())
        self._validateConfig()

    def _findTomlFilesRecursive(self, directory: str) -> List[Path]:
        """Recursively find all .toml files in a directory, dood!"""
        toml_files: List[Path] = []
        dir_path = Path(directory)

        if not dir_path.exists():
            logger.warning(f"Config directory {directory} does not exist, skipping, dood!")
            return toml_files

        if not dir_path.is_dir():
            logger.warning(f"Config path {directory} is not a directory, skipping, dood!")
            return toml_files

        for toml_file in dir_path.rglob("*.toml"):
            if toml_file.is_file():
                toml_files.append(toml_file)
                logger.debug(f"Found config file: {toml_file}")

        return sorted(toml_files)

    def _mergeConfigs(self, base_config: Dict[str, Any], new_config: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge two configuration dictionaries, dood!"""
        merged = base_config.copy()

        for key, value in new_config.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._mergeConfigs(merged[key], value)
            else:
                merged[key] = value

        return merged

    def _loadConfig(self) -> Dict[str, Any]:
        """Load configuration from TOML file and optional config directories.

        Files found in config directories are merged on top of the main file in
        sorted order, so later files win. Nested tables are merged, other values
        (including arrays) are replaced.

        Raises:
            SystemExit: If neither the main config file nor config directories
                are available, or the main config file can not be parsed.
        """
        config_file = Path(self.config_path)
        hasConfigFile = config_file.exists()
        if not hasConfigFile and not self.config_dirs:
            logger.error(f"Configuration file {self.config_path} not found!")
            sys.exit(1)

        config: Dict[str, Any] = {}
        if hasConfigFile:
            try:
                with open(config_file, "rb") as f:
                    config = tomli.load(f)
            except (OSError, tomli.TOMLDecodeError) as e:
                logger.error(f"Failed to load configuration {self.config_path}: {e}")
                sys.exit(1)
            logger.info(f"Loaded main config from {self.config_path}")

        if self.config_dirs:
            logger.info(f"Scanning {len(self.config_dirs)} config directories for .toml files, dood!")

            for config_dir in self.config_dirs:
                toml_files = self._findTomlFilesRecursive(config_dir)
                logger.info(f"Found {len(toml_files)} .toml files in {config_dir}")

                for toml_file in toml_files:
                    try:
                        with open(toml_file, "rb") as f:
                            dir_config = tomli.load(f)
                    except (OSError, tomli.TOMLDecodeError) as e:
                        # Continue with other files instead of exiting
                        logger.error(f"Failed to load config file {toml_file}: {e}")
                        continue

                    config = self._mergeConfigs(config, dir_config)
                    logger.info(f"Merged config from {toml_file}")

        logger.info("Configuration loaded and merged successfully, dood!")
        return config

    def _validateConfig(self) -> None:
        """Validate required configuration.

        Raises:
            SystemExit: If the what3words API key is missing.
        """
        if self.getApiKey() in API_KEY_PLACEHOLDERS:
            logger.error("what3words api-key not found in configuration!")
            sys.exit(1)

    def get(self, key: str, default=None) -> Any:
        """Get configuration value by key."""
        return self.config.get(key, default)

    def getWhat3WordsConfig(self) -> Dict[str, Any]:
        """
        Get what3words client configuration

        Returns:
            Dict with what3words settings (api-key, language, endpoint, timeout)
        """
        return self.get("what3words", {})

    def getLoggingConfig(self) -> Dict[str, Any]:
        """Get logging-specific configuration."""
        return self.get("logging", {})

    def getApiKey(self) -> str:
        """Get what3words API key from configuration."""
        return str(self.getWhat3WordsConfig().get("api-key", ""))
