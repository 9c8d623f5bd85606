"""Configuration management for notez."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from notez.exceptions import (
    ConfigParseError,
    ConfigValidationError,
)

CHIP_LOGIC_VALUES: frozenset[str] = frozenset({"and", "or"})

DEFAULT_SNIPPET_LENGTH = 120


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "notez" / "config.toml"


def get_default_database_path() -> Path:
    """Get the default notes database path."""
    return Path.home() / ".local" / "share" / "notez" / "notez.db"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        database: Path to the notes SQLite database.
        colored_output: Whether to use colored terminal output.
        snippet_length: Maximum length of body snippets in search output.
        chip_logic: Default logic ("and"/"or") combining filter chips.
        search_limit: Maximum number of search results (None = unlimited).
        config_path: Path where config was loaded from (None if defaults).
    """

    database: Path = field(default_factory=get_default_database_path)
    colored_output: bool = True
    snippet_length: int = DEFAULT_SNIPPET_LENGTH
    chip_logic: str = "and"
    search_limit: int | None = None
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.

        Raises:
            ConfigValidationError: If a critical validation fails.
        """
        warnings: list[str] = []

        self.database = self.database.expanduser().resolve()

        if self.chip_logic not in CHIP_LOGIC_VALUES:
            raise ConfigValidationError(
                "search.chip_logic", self.chip_logic, "must be 'and' or 'or'"
            )

        if self.snippet_length <= 0:
            raise ConfigValidationError(
                "display.snippet_length", self.snippet_length, "must be positive"
            )

        # Missing database is only a warning - it is created on first use
        if not self.database.exists():
            warnings.append(f"Notes database not found: {self.database}")

        return warnings


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if not config_path.exists():
        config = Config()
        warnings.append(
            f"No config file found at {config_path}. Using defaults. "
            f"Create config with: notez init-config"
        )
        config_warnings = config.validate()
        return config, warnings + config_warnings

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    config_warnings = config.validate()

    return config, warnings + config_warnings


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [paths] section
    paths = data.get("paths", {})
    if "database" in paths:
        value = paths["database"]
        if not isinstance(value, str):
            raise ConfigValidationError("paths.database", value, "must be a string path")
        config.database = Path(value)

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    if "snippet_length" in display:
        value = display["snippet_length"]
        # bool is an int subclass; reject it explicitly
        if not isinstance(value, int) or isinstance(value, bool):
            raise ConfigValidationError("display.snippet_length", value, "must be an integer")
        config.snippet_length = value

    # Parse [search] section
    search = data.get("search", {})
    if "chip_logic" in search:
        value = search["chip_logic"]
        if not isinstance(value, str):
            raise ConfigValidationError("search.chip_logic", value, "must be a string")
        config.chip_logic = value.lower()

    if "limit" in search:
        value = search["limit"]
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise ConfigValidationError(
                "search.limit", value, "must be a non-negative integer"
            )
        config.search_limit = value or None

    return config


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = {
        "paths": {
            "database": str(config.database),
        },
        "display": {
            "colored_output": config.colored_output,
        },
    }

    if config.snippet_length != DEFAULT_SNIPPET_LENGTH:
        data["display"]["snippet_length"] = config.snippet_length

    # Build [search] section (only if non-default values)
    search_data: dict[str, Any] = {}
    if config.chip_logic != "and":
        search_data["chip_logic"] = config.chip_logic
    if config.search_limit is not None:
        search_data["limit"] = config.search_limit
    if search_data:
        data["search"] = search_data

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
