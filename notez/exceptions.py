"""Exception hierarchy for notez."""

from pathlib import Path


class NotezError(Exception):
    """Base exception for all notez errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all notez errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(NotezError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Database Errors
class DatabaseError(NotezError):
    """Database-related errors."""

    pass


class DatabaseNotFoundError(DatabaseError):
    """Database file doesn't exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Database not found: {path}")


class DatabaseConnectionError(DatabaseError):
    """Failed to connect to or read from the database."""

    pass


# Search Errors
class SearchError(NotezError):
    """Search-related errors."""

    pass


class SearchSyntaxError(SearchError):
    """Non-blank search text produced no expression.

    Carries the raw query only, never a position or detail.
    """

    MESSAGE = "Invalid search syntax"

    def __init__(self, query: str) -> None:
        self.query = query
        super().__init__(self.MESSAGE)
