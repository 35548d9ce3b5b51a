"""
Redis publisher for serialized events.

Publishing is best effort: every failure is logged and reported through a
``PublishResult`` instead of an exception, so the host action that raised
the event is never failed by the message bus being unavailable.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from redis_event_listener.core.errors import PublishError
from redis_event_listener.core.logging import get_logger
from redis_event_listener.events.pool import EventConnectionPool

logger = get_logger(__name__)


@dataclass(frozen=True)
class PublishTarget:
    """Where accepted events are published."""

    host: str
    port: int
    db: int
    channel: str

    @property
    def url(self) -> str:
        return f"redis://{self.host}:{self.port}/{self.db}"

    def describe(self) -> str:
        return f"{self.url} channel '{self.channel}'"


@dataclass(frozen=True)
class PublishResult:
    """Outcome of a single publish."""

    success: bool
    receivers: int = 0
    error: PublishError | None = None

    @classmethod
    def delivered(cls, receivers: int) -> "PublishResult":
        return cls(success=True, receivers=receivers)

    @classmethod
    def failed(cls, error: PublishError) -> "PublishResult":
        return cls(success=False, error=error)


class RedisEventPublisher:
    """
    Publishes payloads on the configured channel through a shared pool.

    Every publish borrows one connection, selects the target database,
    issues ``PUBLISH`` and gives the connection back. A connection that
    raised while in use is discarded rather than returned.
    """

    def __init__(self, pool: EventConnectionPool, target: PublishTarget):
        self._pool = pool
        self._target = target

    @property
    def target(self) -> PublishTarget:
        return self._target

    @contextmanager
    def connection(self) -> Iterator:
        """Borrow a pooled connection for the duration of the block."""
        connection = self._pool.get_connection()
        try:
            yield connection
        except BaseException:
            self._pool.discard(connection)
            raise
        else:
            self._pool.release(connection)

    def publish(self, payload: str) -> PublishResult:
        """
        Publish ``payload`` on the target channel.

        Args:
            payload: Serialized event

        Returns:
            PublishResult: Delivery outcome; never raises for bus failures
        """
        logger.debug(
            "Publishing event", channel=self._target.channel, payload=payload
        )

        try:
            with self.connection() as connection:
                connection.send_command("SELECT", self._target.db)
                connection.read_response()
                connection.send_command("PUBLISH", self._target.channel, payload)
                receivers = connection.read_response()
        except Exception as e:
            error = PublishError(
                f"Could not publish Redis event: {e}",
                channel=self._target.channel,
                target=self._target.url,
                cause=e,
            )
            logger.error(
                "Could not publish Redis event",
                target=self._target.describe(),
                error=str(e),
                error_type=type(e).__name__,
                error_id=error.error_id,
            )
            return PublishResult.failed(error)

        return PublishResult.delivered(int(receivers or 0))


__all__ = ["PublishResult", "PublishTarget", "RedisEventPublisher"]
