"""
Redis event listener: dispatch and host plugin wiring.

``dispatch_user_event`` and ``dispatch_admin_event`` are the whole runtime
path: filter the event, serialize it, publish it. They hold no state; the
shared pieces (filter policies and publisher) live in a ``ListenerContext``
built once by ``RedisEventListenerProviderFactory.init``.
"""

from dataclasses import dataclass
from typing import Any

from redis_event_listener.core.config import ConfigScope, ListenerSettings
from redis_event_listener.core.errors import ConfigurationError
from redis_event_listener.core.logging import LogConfig, configure_logging, get_logger
from redis_event_listener.events.filter import FilterPolicy, should_forward
from redis_event_listener.events.pool import EventConnectionPool
from redis_event_listener.events.publisher import (
    PublishResult,
    PublishTarget,
    RedisEventPublisher,
)
from redis_event_listener.events.serialization import (
    serialize_admin_event,
    serialize_user_event,
)
from redis_event_listener.events.spi import (
    EventListenerProvider,
    EventListenerProviderFactory,
)
from redis_event_listener.events.types import (
    AdminEvent,
    EventType,
    OperationType,
    UserEvent,
)

logger = get_logger(__name__)

LISTENER_ID = "redis"


@dataclass(frozen=True)
class ListenerContext:
    """Shared, read-only state used by every dispatch."""

    publisher: RedisEventPublisher
    event_policy: FilterPolicy[EventType]
    operation_policy: FilterPolicy[OperationType]


def _log_result(result: PublishResult, kind: str, tag: str) -> None:
    if result.success:
        logger.debug("Event published", kind=kind, type=tag, receivers=result.receivers)
    else:
        logger.debug("Event dropped after publish failure", kind=kind, type=tag)


def dispatch_user_event(context: ListenerContext, event: UserEvent) -> None:
    """Forward an end-user event unless the event policy rejects it."""
    if not should_forward(event.type, context.event_policy):
        logger.debug("Ignoring filtered event", type=event.type.value)
        return

    result = context.publisher.publish(serialize_user_event(event))
    _log_result(result, "user", event.type.value)


def dispatch_admin_event(
    context: ListenerContext,
    event: AdminEvent,
    include_representation: bool = False,
) -> None:
    """
    Forward an admin event unless the operation policy rejects it.

    ``include_representation`` is accepted for parity with the host
    contract; representations are never added to the payload.
    """
    if not should_forward(event.operation_type, context.operation_policy):
        logger.debug(
            "Ignoring filtered admin operation", type=event.operation_type.value
        )
        return

    result = context.publisher.publish(serialize_admin_event(event))
    _log_result(result, "admin", event.operation_type.value)


class RedisEventListenerProvider(EventListenerProvider):
    """Per-session provider. Owns nothing; the pool belongs to the factory."""

    def __init__(self, context: ListenerContext):
        self._context = context

    def on_event(self, event: UserEvent) -> None:
        dispatch_user_event(self._context, event)

    def on_admin_event(self, event: AdminEvent, include_representation: bool = False) -> None:
        dispatch_admin_event(self._context, event, include_representation)

    def close(self) -> None:
        pass


class RedisEventListenerProviderFactory(EventListenerProviderFactory):
    """
    Factory registered with the host under the ``redis`` listener id.

    Example:
        factory = RedisEventListenerProviderFactory()
        factory.init(ConfigScope({"host": "redis", "exclude-events": "LOGIN_ERROR"}))
        provider = factory.create(session)
        provider.on_event(event)
        factory.close()
    """

    def __init__(self):
        self._context: ListenerContext | None = None
        self._pool: EventConnectionPool | None = None
        self.settings: ListenerSettings | None = None

    def init(self, config: ConfigScope) -> None:
        try:
            settings = ListenerSettings.from_scope(config)
            event_policy = FilterPolicy.from_names(
                EventType,
                excluded=settings.excluded_events,
                included=settings.included_events,
                name="events",
            )
            operation_policy = FilterPolicy.from_names(
                OperationType,
                excluded=settings.excluded_operations,
                included=settings.included_operations,
                name="operations",
            )
        except ConfigurationError as e:
            logger.error(
                "Invalid Redis event listener configuration",
                error=e.message,
                details=e.details,
            )
            raise

        if settings.log_level is not None:
            configure_logging(LogConfig(level=settings.log_level))

        previous_pool = self._pool
        self._pool = self._build_pool(settings)
        if previous_pool is not None:
            previous_pool.close()
            logger.info("Closed previous Redis event listener connection pool")

        target = PublishTarget(
            host=settings.host,
            port=settings.port,
            db=settings.db,
            channel=settings.channel,
        )
        self._context = ListenerContext(
            publisher=RedisEventPublisher(self._pool, target),
            event_policy=event_policy,
            operation_policy=operation_policy,
        )
        self.settings = settings

        logger.info(
            f"Initialized Redis event listener, using '{settings.redis_url}' "
            f"Redis instance and '{settings.channel}' channel",
            excluded_events=sorted(t.name for t in event_policy.excluded),
            included_events=sorted(t.name for t in event_policy.included),
            excluded_operations=sorted(t.name for t in operation_policy.excluded),
            included_operations=sorted(t.name for t in operation_policy.included),
        )

    def _build_pool(self, settings: ListenerSettings) -> EventConnectionPool:
        return EventConnectionPool(
            host=settings.host,
            port=settings.port,
            config=settings.pool,
        )

    @property
    def context(self) -> ListenerContext:
        if self._context is None:
            raise ConfigurationError("Redis event listener has not been initialized")
        return self._context

    def create(self, session: Any) -> RedisEventListenerProvider:
        return RedisEventListenerProvider(self.context)

    def close(self) -> None:
        if self._pool is not None:
            self._pool.close()
            logger.info("Closed Redis event listener connection pool")
        self._pool = None
        self._context = None

    def get_id(self) -> str:
        return LISTENER_ID


__all__ = [
    "LISTENER_ID",
    "ListenerContext",
    "RedisEventListenerProvider",
    "RedisEventListenerProviderFactory",
    "dispatch_admin_event",
    "dispatch_user_event",
]
