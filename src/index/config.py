"""Configuration parser for the string index."""

from pathlib import Path
from typing import cast

DEFAULT_INITIAL_CAPACITY = 16


class ConfigBoolParsingError(Exception):
    """Raised when the parsing of bool strings in
    the config file was not successful.
    """


class ConfigNotFoundError(Exception):
    """Raised when any of the required configuration settings
    is not provided.
    """


class ConfigValueError(Exception):
    """Raised when a configuration value is out of its allowed range."""


class IndexConfig:
    """A class to save the index configuration settings."""

    def __init__(
        self,
        keys_path: Path,
        log_details: bool,
        initial_capacity: int = DEFAULT_INITIAL_CAPACITY,
    ) -> None:
        """Initialize the index configuration.

        Args:
            keys_path (Path): The file holding one key per line.
            log_details (bool): Whether every lookup is logged.
            initial_capacity (int): Initial length of the trie arrays.

        """
        self.keys_path = keys_path
        self.log_details = log_details
        self.initial_capacity = initial_capacity

    def __repr__(self) -> str:
        """Return a string representation of the configuration object.

        Returns:
            str: A formatted string representing the configuration settings.

        """
        return f"""
                Index configuration settings:
                Keys path: {self.keys_path}
                Log details: {"YES" if self.log_details else "NO"}
                Initial capacity: {self.initial_capacity}
            """


def parse_bool(key: str, val: str) -> bool:
    """Parse given values into boolean ones (True or False).

    Args:
        key (str): The key to parse the boolean for.
        val (str): The value to be parsed to boolean.

    Raises:
        ConfigBoolParsingError: If an error occured
        while parsing the value to boolean.

    Returns:
        bool: True or False depending on the output of the parser.

    """
    if val.strip().lower() in {"true", "1", "yes"}:
        return True
    if val.strip().lower() in {"false", "0", "no"}:
        return False

    raise ConfigBoolParsingError(
        f"Invalid boolean value for key '{key}' in the configuration file. "
        "Expected 'true', 'false', '1', '0', 'yes', or 'no' "
        "(case-insensitive).",
    )


def parse_capacity(val: str) -> int:
    """Parse the initial array capacity.

    Raises:
        ConfigValueError: If the value is not a positive integer.

    """
    try:
        capacity = int(val)
    except ValueError as e:
        raise ConfigValueError(
            f"Invalid value '{val}' for 'initial_capacity'. "
            "Expected a positive integer.",
        ) from e

    if capacity <= 0:
        raise ConfigValueError(
            f"Invalid value '{val}' for 'initial_capacity'. "
            "Expected a positive integer.",
        )
    return capacity


def load_config_file(config_file_path: Path) -> IndexConfig:
    """Load and parse the configuration file.

    Args:
        config_file_path (Path): Path to the config file.

    Raises:
        ConfigNotFoundError: If required settings are missing.
        ConfigBoolParsingError: If a boolean setting is invalid.
        ConfigValueError: If the initial capacity is invalid.
        FileNotFoundError: If a file does not exist.

    Returns:
        IndexConfig: Parsed config object.

    """
    if not config_file_path.exists():
        raise FileNotFoundError(
            f"Missing required configuration file: '{config_file_path}'. "
            "Please ensure the file exists and the path is correct.",
        )

    keys_path = log_details = None
    initial_capacity = DEFAULT_INITIAL_CAPACITY

    with config_file_path.open("r", encoding="utf-8") as file:
        for line in file:
            line = line.strip()

            # Skip blank lines and comments
            if not line or line.startswith("#"):
                continue

            key, sep, value = line.partition("=")
            if sep != "=":
                continue

            key = key.strip().lower()
            value = value.strip()

            if key == "keyspath":
                keys_path = Path(value)
            elif key == "log_details":
                log_details = parse_bool("log_details", value)
            elif key == "initial_capacity":
                initial_capacity = parse_capacity(value)

    required = {
        "keys_path": keys_path,
        "log_details": log_details,
    }

    for key, val in required.items():
        if val is None:
            raise ConfigNotFoundError(
                f"Missing required configuration: '{key}'. "
                "Please ensure the config file includes a valid line for "
                f"'{'keyspath' if key == 'keys_path' else key.upper()}'.",
            )

    if keys_path is not None and not keys_path.exists():
        raise FileNotFoundError(
            f"The required file {keys_path} doesn't exist.",
        )

    return IndexConfig(
        cast("Path", keys_path),
        cast("bool", log_details),
        initial_capacity,
    )
