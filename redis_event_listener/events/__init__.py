"""Event filtering, serialization and publishing."""

from redis_event_listener.events.filter import FilterPolicy, should_forward
from redis_event_listener.events.publisher import (
    PublishResult,
    PublishTarget,
    RedisEventPublisher,
)
from redis_event_listener.events.serialization import (
    serialize,
    serialize_admin_event,
    serialize_user_event,
)

__all__ = [
    "FilterPolicy",
    "PublishResult",
    "PublishTarget",
    "RedisEventPublisher",
    "serialize",
    "serialize_admin_event",
    "serialize_user_event",
    "should_forward",
]
