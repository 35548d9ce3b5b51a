"""
Tests for structured logging configuration.
"""

import logging
from unittest.mock import MagicMock

import pytest

from redis_event_listener.core.enums import Environment, LogFormat, LogLevel
from redis_event_listener.core.errors import ConfigurationError
from redis_event_listener.core.logging import (
    LogConfig,
    StructuredLogger,
    configure_logging,
    get_logger,
)
from redis_event_listener.events import listener
from redis_event_listener.events.filter import FilterPolicy
from redis_event_listener.events.types import EventType, UserEvent


class TestLogConfig:

    def test_environment_defaults(self):
        assert LogConfig(environment=Environment.DEVELOPMENT).format == LogFormat.CONSOLE
        assert LogConfig(environment=Environment.DEVELOPMENT).enable_caller_info
        assert LogConfig(environment=Environment.TESTING).format == LogFormat.PLAIN
        assert LogConfig().format == LogFormat.JSON
        assert LogConfig().enable_caller_info is False

    def test_explicit_format_kept(self):
        config = LogConfig(format=LogFormat.CONSOLE, environment=Environment.PRODUCTION)

        assert config.format == LogFormat.CONSOLE

    def test_message_length_validated(self):
        with pytest.raises(ConfigurationError):
            LogConfig(max_message_length=10)

    def test_to_dict(self):
        data = LogConfig(level=LogLevel.DEBUG).to_dict()

        assert data["level"] == "DEBUG"
        assert data["environment"] == "prod"


class TestStructuredLogger:

    @pytest.fixture
    def logger(self):
        logger = StructuredLogger("test", LogConfig(max_message_length=1000))
        logger._logger = MagicMock()
        return logger

    def test_below_level_is_skipped(self, logger):
        logger.debug("Publishing event", channel="keycloak/events")

        logger._logger.debug.assert_not_called()

    def test_keyword_context(self, logger):
        logger.error("Could not publish Redis event", error="refused")

        logger._logger.error.assert_called_once_with(
            "Could not publish Redis event", error="refused"
        )

    def test_long_values_truncated(self, logger):
        logger.warning("Large payload", payload="x" * 5000)

        payload = logger._logger.warning.call_args.kwargs["payload"]
        assert payload == "x" * 1000 + "...[truncated]"

    def test_exception_adds_exc_info(self, logger):
        logger.exception("Eviction failed")

        logger._logger.error.assert_called_once_with("Eviction failed", exc_info=True)


class TestConfigureLogging:
    """Test reconfiguring after module loggers exist."""

    @pytest.fixture(autouse=True)
    def restore_defaults(self):
        yield
        configure_logging(LogConfig())

    def test_get_logger_caches_by_name(self):
        assert get_logger("redis_event_listener.tests") is get_logger(
            "redis_event_listener.tests"
        )

    def test_existing_loggers_follow_new_level(self):
        module_logger = get_logger("redis_event_listener.tests.level")

        configure_logging(LogConfig(level=LogLevel.DEBUG))

        assert module_logger.config.level == LogLevel.DEBUG
        assert logging.getLogger().level == logging.DEBUG

    def test_debug_enabled_after_import(self, caplog):
        configure_logging(
            LogConfig(level=LogLevel.DEBUG, environment=Environment.TESTING)
        )
        context = listener.ListenerContext(
            publisher=MagicMock(),
            event_policy=FilterPolicy(excluded={EventType.LOGIN_ERROR}),
            operation_policy=FilterPolicy(name="operations"),
        )

        listener.dispatch_user_event(context, UserEvent(type=EventType.LOGIN_ERROR))

        assert "Ignoring filtered event" in caplog.text
        context.publisher.publish.assert_not_called()
