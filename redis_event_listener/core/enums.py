"""Shared enums for the Redis event listener.

Logging and runtime environment enumerations used by the logging layer.
Event tags owned by the host live in ``redis_event_listener.events.types``.
"""

from enum import Enum


class Environment(Enum):
    """Runtime environment types."""

    DEVELOPMENT = "dev"
    TESTING = "test"
    STAGING = "staging"
    PRODUCTION = "prod"


class LogLevel(Enum):
    """Logging levels with priority mapping."""

    DEBUG = ("DEBUG", 10)
    INFO = ("INFO", 20)
    WARNING = ("WARNING", 30)
    ERROR = ("ERROR", 40)
    CRITICAL = ("CRITICAL", 50)

    def __init__(self, level_name: str, priority: int):
        self.level_name = level_name
        self.priority = priority

    def to_logging_level(self) -> int:
        """Convert to standard logging module level."""
        return self.priority


class LogFormat(Enum):
    """Log output formats."""

    JSON = "json"
    CONSOLE = "console"
    PLAIN = "plain"
