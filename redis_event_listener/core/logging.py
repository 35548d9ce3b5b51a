# ruff: noqa: A005
"""Structured logging configuration.

structlog-based logging for the listener. ``configure_logging`` builds the
processor chain; ``get_logger`` hands out ``StructuredLogger`` instances that
accept keyword context on every call:

    logger = get_logger(__name__)
    logger.error("Could not publish Redis event", channel=channel, error=str(e))

Modules create their loggers at import time, so reconfiguring (for example to
turn on DEBUG once the host's settings are known) updates the loggers already
handed out instead of replacing them.

Architecture:
- LogConfig: Configuration with validation and environment defaults
- StructuredLogger: Thin keyword-context wrapper over a structlog logger
- LoggerFactory: structlog/stdlib configuration and logger caching
"""

import logging
import sys
from dataclasses import dataclass, field
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars

from redis_event_listener.core.enums import Environment, LogFormat, LogLevel
from redis_event_listener.core.errors import ConfigurationError


@dataclass
class LogConfig:
    """
    Logging configuration with validation and environment defaults.

    ``format`` and ``enable_caller_info`` follow the environment unless they
    are given explicitly.

    Usage Example:
        config = LogConfig(level=LogLevel.DEBUG, environment=Environment.TESTING)
        configure_logging(config)
    """

    level: LogLevel = field(default=LogLevel.INFO)
    format: LogFormat | None = field(default=None)
    environment: Environment = field(default=Environment.PRODUCTION)

    enable_timestamps: bool = field(default=True)
    enable_caller_info: bool | None = field(default=None)
    enable_exception_info: bool = field(default=True)

    max_message_length: int = field(default=10000)

    def __post_init__(self):
        self.validate()
        self.apply_environment_defaults()

    def validate(self) -> None:
        """
        Validate logging configuration parameters.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if self.max_message_length < 1000:
            raise ConfigurationError(
                "Maximum message length must be at least 1000 characters",
                config_key="max_message_length",
            )

    def apply_environment_defaults(self) -> None:
        """Fill settings left unset from the environment."""
        if self.format is None:
            self.format = {
                Environment.DEVELOPMENT: LogFormat.CONSOLE,
                Environment.TESTING: LogFormat.PLAIN,
            }.get(self.environment, LogFormat.JSON)

        if self.enable_caller_info is None:
            self.enable_caller_info = self.environment == Environment.DEVELOPMENT

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level.level_name,
            "format": self.format.value,
            "environment": self.environment.value,
            "enable_timestamps": self.enable_timestamps,
            "enable_caller_info": self.enable_caller_info,
            "max_message_length": self.max_message_length,
        }


class StructuredLogger:
    """
    Structured logger with keyword context.

    String values longer than ``max_message_length`` are truncated so a
    runaway payload cannot flood the log sink.
    """

    def __init__(self, name: str, config: LogConfig):
        self.name = name
        self.config = config
        self._logger = structlog.get_logger(name)

    def rebind(self, config: LogConfig) -> None:
        """Switch to a new configuration and a freshly bound structlog logger."""
        self.config = config
        self._logger = structlog.get_logger(self.name)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.CRITICAL, message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log an error together with the active exception's traceback."""
        kwargs["exc_info"] = True
        self.error(message, **kwargs)

    def _log(self, level: LogLevel, message: str, **kwargs: Any) -> None:
        if level.priority < self.config.level.priority:
            return

        limit = self.config.max_message_length
        for key, value in kwargs.items():
            if isinstance(value, str) and len(value) > limit:
                kwargs[key] = value[:limit] + "...[truncated]"

        getattr(self._logger, level.level_name.lower())(message, **kwargs)


class LoggerFactory:
    """
    Factory for creating and managing structured loggers.

    Owns the structlog processor chain and the level of the standard library
    root logger, and caches one ``StructuredLogger`` per name.
    """

    def __init__(self, config: LogConfig):
        self.config = config
        self._loggers: dict[str, StructuredLogger] = {}
        self._configured = False

    def _processors(self) -> list:
        processors = [
            merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
        ]

        if self.config.enable_timestamps:
            processors.append(structlog.processors.TimeStamper(fmt="iso"))

        if self.config.enable_caller_info:
            processors.append(
                structlog.processors.CallsiteParameterAdder(
                    parameters=[
                        structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO,
                        structlog.processors.CallsiteParameter.FUNC_NAME,
                    ]
                )
            )

        if self.config.enable_exception_info:
            processors.extend(
                [
                    structlog.processors.StackInfoRenderer(),
                    structlog.processors.format_exc_info,
                ]
            )

        processors.append(structlog.processors.UnicodeDecoder())

        renderers = {
            LogFormat.JSON: structlog.processors.JSONRenderer,
            LogFormat.CONSOLE: lambda: structlog.dev.ConsoleRenderer(colors=True),
            LogFormat.PLAIN: structlog.processors.KeyValueRenderer,
        }
        processors.append(renderers[self.config.format]())
        return processors

    def configure_logging(self) -> None:
        """Configure global logging settings."""
        if self._configured:
            return

        structlog.configure(
            processors=self._processors(),
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        level = self.config.level.to_logging_level()
        logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
        # basicConfig is a no-op once the root logger has handlers
        logging.getLogger().setLevel(level)

        # redis-py reports every reconnect at DEBUG; keep it out of listener logs
        logging.getLogger("redis").setLevel(logging.WARNING)

        self._configured = True

    def reconfigure(self, config: LogConfig) -> None:
        """Apply ``config`` to the process and to every logger handed out."""
        self.config = config
        self._configured = False
        self.configure_logging()

        for logger in self._loggers.values():
            logger.rebind(config)

    def get_logger(self, name: str) -> StructuredLogger:
        """Get or create structured logger."""
        if not self._configured:
            self.configure_logging()

        if name not in self._loggers:
            self._loggers[name] = StructuredLogger(name, self.config)

        return self._loggers[name]


_logger_factory: LoggerFactory | None = None


def configure_logging(config: LogConfig | None = None) -> None:
    """
    Configure global logging system.

    Args:
        config: Logging configuration (uses defaults if not provided)
    """
    global _logger_factory  # noqa: PLW0603

    config = config or LogConfig()
    if _logger_factory is None:
        _logger_factory = LoggerFactory(config)
        _logger_factory.configure_logging()
    else:
        _logger_factory.reconfigure(config)


def get_logger(name: str) -> StructuredLogger:
    """
    Get structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        StructuredLogger: Configured logger instance
    """
    if _logger_factory is None:
        configure_logging()

    return _logger_factory.get_logger(name)


__all__ = [
    "LogConfig",
    "LoggerFactory",
    "StructuredLogger",
    "configure_logging",
    "get_logger",
]
