"""
Tests for event dispatch and the host plugin wiring.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from redis_event_listener.core.config import ConfigScope
from redis_event_listener.core.enums import LogLevel
from redis_event_listener.core.errors import ConfigurationError
from redis_event_listener.core.logging import LogConfig
from redis_event_listener.events.filter import FilterPolicy
from redis_event_listener.events.listener import (
    ListenerContext,
    RedisEventListenerProvider,
    RedisEventListenerProviderFactory,
    dispatch_admin_event,
    dispatch_user_event,
)
from redis_event_listener.events.publisher import (
    PublishResult,
    PublishTarget,
    RedisEventPublisher,
)
from redis_event_listener.events.types import (
    AdminEvent,
    EventType,
    OperationType,
    UserEvent,
)


def make_context(publisher, event_policy=None, operation_policy=None):
    return ListenerContext(
        publisher=publisher,
        event_policy=event_policy or FilterPolicy(),
        operation_policy=operation_policy or FilterPolicy(name="operations"),
    )


@pytest.fixture
def publisher():
    publisher = MagicMock(spec=RedisEventPublisher)
    publisher.publish.return_value = PublishResult.delivered(1)
    return publisher


def published_types(publisher):
    return [json.loads(c.args[0])["type"] for c in publisher.publish.call_args_list]


class TestDispatchUserEvent:
    """Test filtering and publishing of end-user events."""

    def test_excluded_event_dropped(self, publisher):
        context = make_context(
            publisher, event_policy=FilterPolicy(excluded={EventType.LOGIN_ERROR})
        )

        dispatch_user_event(context, UserEvent(type=EventType.LOGIN))
        dispatch_user_event(context, UserEvent(type=EventType.LOGIN_ERROR))

        assert published_types(publisher) == ["LOGIN"]

    def test_include_set_restricts(self, publisher):
        context = make_context(
            publisher, event_policy=FilterPolicy(included={EventType.LOGIN})
        )

        dispatch_user_event(context, UserEvent(type=EventType.LOGOUT))
        dispatch_user_event(context, UserEvent(type=EventType.LOGIN))

        assert published_types(publisher) == ["LOGIN"]

    def test_failed_publish_does_not_raise(self, publisher):
        publisher.publish.return_value = PublishResult(success=False)
        context = make_context(publisher)

        dispatch_user_event(context, UserEvent(type=EventType.LOGIN))

        publisher.publish.assert_called_once()

    def test_unavailable_bus(self):
        pool = MagicMock()
        pool.get_connection.side_effect = RedisConnectionError("Connection refused")
        target = PublishTarget("localhost", 6379, 1, "keycloak/events")
        context = make_context(RedisEventPublisher(pool, target))

        with patch("redis_event_listener.events.publisher.logger") as mock_logger:
            dispatch_user_event(context, UserEvent(type=EventType.LOGIN))

        mock_logger.error.assert_called_once()


class TestDispatchAdminEvent:
    """Test filtering and publishing of admin events."""

    def test_update_published(self, publisher):
        context = make_context(publisher)
        event = AdminEvent(
            operation_type=OperationType.UPDATE, resource_path="users/abc123"
        )

        dispatch_admin_event(context, event, include_representation=True)

        payload = json.loads(publisher.publish.call_args.args[0])
        assert payload["type"] == "UPDATE"
        assert payload["source"] == "adminAction"
        assert payload["resourcePath"] == "users/abc123"
        assert "error" not in payload

    def test_operation_policy_is_independent(self, publisher):
        context = make_context(
            publisher,
            event_policy=FilterPolicy(excluded={EventType.LOGIN}),
            operation_policy=FilterPolicy(excluded={OperationType.DELETE}),
        )

        dispatch_admin_event(context, AdminEvent(operation_type=OperationType.DELETE))
        dispatch_admin_event(context, AdminEvent(operation_type=OperationType.CREATE))

        assert published_types(publisher) == ["CREATE"]


class TestRedisEventListenerProvider:

    def test_delegates_to_dispatch(self, publisher):
        provider = RedisEventListenerProvider(make_context(publisher))

        provider.on_event(UserEvent(type=EventType.REGISTER))
        provider.on_admin_event(AdminEvent(operation_type=OperationType.ACTION), False)
        provider.close()

        assert published_types(publisher) == ["REGISTER", "ACTION"]


class TestRedisEventListenerProviderFactory:
    """Test the factory lifecycle."""

    @pytest.fixture
    def pool(self):
        return MagicMock()

    @pytest.fixture
    def factory(self, pool):
        factory = RedisEventListenerProviderFactory()
        with patch.object(factory, "_build_pool", return_value=pool):
            yield factory

    def test_id(self, factory):
        assert factory.get_id() == "redis"

    def test_init_builds_context(self, factory):
        factory.init(
            ConfigScope(
                {
                    "host": "redis.internal",
                    "db": "2",
                    "channel": "audit/events",
                    "exclude-events": "LOGIN_ERROR",
                    "include-operations": "CREATE,UPDATE",
                }
            )
        )

        context = factory.context
        assert context.publisher.target == PublishTarget(
            "redis.internal", 6379, 2, "audit/events"
        )
        assert context.event_policy.excluded == {EventType.LOGIN_ERROR}
        assert context.operation_policy.included == {
            OperationType.CREATE,
            OperationType.UPDATE,
        }
        assert factory.settings.redis_url == "redis://redis.internal:6379/2"

    def test_init_logs_target(self, factory):
        with patch("redis_event_listener.events.listener.logger") as mock_logger:
            factory.init(ConfigScope())

        message = mock_logger.info.call_args.args[0]
        assert "redis://localhost:6379/1" in message
        assert "keycloak/events" in message

    def test_create_before_init(self, factory):
        with pytest.raises(ConfigurationError):
            factory.create(session=None)

    def test_create_returns_provider(self, factory):
        factory.init(ConfigScope())

        provider = factory.create(session=object())

        assert isinstance(provider, RedisEventListenerProvider)

    def test_conflicting_policy_fails_init(self, factory, pool):
        scope = ConfigScope({"exclude-events": "LOGIN", "include-events": "LOGIN"})

        with patch("redis_event_listener.events.listener.logger") as mock_logger:
            with pytest.raises(ConfigurationError):
                factory.init(scope)

        mock_logger.error.assert_called_once()
        factory._build_pool.assert_not_called()

    def test_unknown_operation_fails_init(self, factory):
        with pytest.raises(ConfigurationError) as exc_info:
            factory.init(ConfigScope({"exclude-operations": "PURGE"}))

        assert exc_info.value.details["config_key"] == "exclude-operations"

    def test_reinit_closes_previous_pool(self, factory):
        first, second = MagicMock(), MagicMock()
        factory._build_pool.side_effect = [first, second]

        factory.init(ConfigScope())
        factory.init(ConfigScope({"channel": "audit/events"}))

        first.close.assert_called_once()
        second.close.assert_not_called()
        assert factory.context.publisher.target.channel == "audit/events"

    def test_log_level_setting_reconfigures_logging(self, factory):
        with patch(
            "redis_event_listener.events.listener.configure_logging"
        ) as mock_configure:
            factory.init(ConfigScope({"log-level": "debug"}))

        mock_configure.assert_called_once_with(LogConfig(level=LogLevel.DEBUG))

    def test_no_log_level_keeps_logging(self, factory):
        with patch(
            "redis_event_listener.events.listener.configure_logging"
        ) as mock_configure:
            factory.init(ConfigScope())

        mock_configure.assert_not_called()

    def test_close_closes_pool(self, factory, pool):
        factory.init(ConfigScope())

        factory.close()

        pool.close.assert_called_once()
        with pytest.raises(ConfigurationError):
            factory.create(session=None)
