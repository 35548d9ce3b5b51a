"""Redis event listener for the identity server.

Filters user and admin events by include/exclude policy, serializes them to
JSON and publishes them on a Redis pub/sub channel.
"""

from redis_event_listener.core.config import ConfigScope, ListenerSettings, PoolConfig
from redis_event_listener.core.errors import ConfigurationError, PublishError
from redis_event_listener.events.listener import (
    LISTENER_ID,
    ListenerContext,
    RedisEventListenerProvider,
    RedisEventListenerProviderFactory,
    dispatch_admin_event,
    dispatch_user_event,
)
from redis_event_listener.events.types import (
    AdminEvent,
    AuthDetails,
    EventType,
    OperationType,
    UserEvent,
)

__version__ = "0.1.0"

__all__ = [
    "LISTENER_ID",
    "AdminEvent",
    "AuthDetails",
    "ConfigScope",
    "ConfigurationError",
    "EventType",
    "ListenerContext",
    "ListenerSettings",
    "OperationType",
    "PoolConfig",
    "PublishError",
    "RedisEventListenerProvider",
    "RedisEventListenerProviderFactory",
    "UserEvent",
    "dispatch_admin_event",
    "dispatch_user_event",
]
