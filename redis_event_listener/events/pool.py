"""
Bounded Redis connection pool with health checks and idle eviction.

``EventConnectionPool`` is a redis-py ``BlockingConnectionPool``: borrowers
wait (up to ``max_wait_seconds``) when every connection is checked out. On
top of that it adds the behaviour configured by ``PoolConfig``:

- ``PING`` health checks when a connection is borrowed and when it is returned
- at most ``max_idle`` idle connections kept connected
- a daemon evictor thread that periodically disconnects connections idle
  longer than ``min_evictable_idle_seconds`` (keeping ``min_idle`` connected)
  and pings a few idle connections

Each checked-out connection belongs to exactly one caller until it is
released or discarded.
"""

import threading
import time
from queue import Full

from redis import BlockingConnectionPool
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.utils import str_if_bytes

from redis_event_listener.core.config import PoolConfig
from redis_event_listener.core.logging import get_logger

logger = get_logger(__name__)


class EventConnectionPool(BlockingConnectionPool):
    """Blocking connection pool tuned for fire-and-forget publishing."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        config: PoolConfig | None = None,
        start_evictor: bool = True,
        **connection_kwargs,
    ):
        self.config = config or PoolConfig()
        self._state_lock = threading.Lock()
        self._idle_since: dict = {}
        self._checked_out: set = set()
        self._stop_eviction = threading.Event()
        self._evictor: threading.Thread | None = None

        connection_kwargs.setdefault("socket_timeout", self.config.socket_timeout_seconds)
        connection_kwargs.setdefault(
            "socket_connect_timeout", self.config.socket_timeout_seconds
        )

        super().__init__(
            max_connections=self.config.max_total,
            timeout=self.config.max_wait_seconds if self.config.block_when_exhausted else 0,
            host=host,
            port=port,
            **connection_kwargs,
        )

        if start_evictor and self.config.eviction_interval_seconds > 0:
            self.start_evictor()

    def reset(self):
        super().reset()
        # Connections of a parent process are never reused after fork
        with self._state_lock:
            self._idle_since = {}
            self._checked_out = set()

    # =========================================================================
    # CHECKOUT
    # =========================================================================

    def get_connection(self, *args, **options):
        """Borrow a connection, blocking while the pool is exhausted."""
        connection = super().get_connection(*args, **options)

        if self.config.test_on_borrow and not self._ping(connection):
            try:
                connection.disconnect()
                connection.connect()
                if not self._ping(connection):
                    raise RedisConnectionError("Connection failed health check on borrow")
            except BaseException:
                super().release(connection)
                raise

        with self._state_lock:
            self._idle_since.pop(connection, None)
            self._checked_out.add(connection)
        return connection

    def release(self, connection) -> None:
        """Return a connection, disconnecting it if it fails the return check."""
        with self._state_lock:
            borrowed = connection in self._checked_out
            self._checked_out.discard(connection)

        if borrowed:
            keep_connected = not self.config.test_on_return or self._ping(connection)
            if keep_connected:
                with self._state_lock:
                    keep_connected = len(self._idle_since) < self.config.max_idle
                    if keep_connected:
                        self._idle_since[connection] = time.monotonic()
            if not keep_connected:
                connection.disconnect()

        super().release(connection)

    def discard(self, connection) -> None:
        """Drop a connection in an unknown state and free its pool slot."""
        with self._state_lock:
            self._checked_out.discard(connection)
            self._idle_since.pop(connection, None)
        connection.disconnect()
        super().release(connection)

    @property
    def idle_count(self) -> int:
        """Number of connected connections waiting in the pool."""
        with self._state_lock:
            return len(self._idle_since)

    @property
    def active_count(self) -> int:
        """Number of connections currently checked out."""
        with self._state_lock:
            return len(self._checked_out)

    @staticmethod
    def _ping(connection) -> bool:
        try:
            connection.send_command("PING", check_health=False)
            return str_if_bytes(connection.read_response()) == "PONG"
        except (RedisError, OSError):
            return False

    # =========================================================================
    # EVICTION
    # =========================================================================

    def start_evictor(self) -> None:
        if self._evictor is not None and self._evictor.is_alive():
            return
        self._stop_eviction.clear()
        self._evictor = threading.Thread(
            target=self._eviction_loop,
            name="redis-event-pool-evictor",
            daemon=True,
        )
        self._evictor.start()

    def _eviction_loop(self) -> None:
        while not self._stop_eviction.wait(self.config.eviction_interval_seconds):
            try:
                self.evict()
            except Exception as e:
                logger.warning("Connection pool eviction run failed", error=str(e))

    def evict(self) -> int:
        """
        Run one eviction pass over the idle connections.

        Stale connections are disconnected where they sit in the queue, so a
        borrower that takes one later simply reconnects it. Connections
        picked for an idle health check leave the queue while they are
        pinged and are put back afterwards.

        Returns:
            int: Number of connections disconnected
        """
        now = time.monotonic()
        evict, test = [], []

        # Lock order: queue mutex, then bookkeeping lock
        with self.pool.mutex, self._state_lock:
            connected = len(self._idle_since)
            # Queue is LIFO, so the oldest idle connections sit at the bottom
            for item in list(self.pool.queue):
                idle_since = self._idle_since.get(item) if item is not None else None
                if idle_since is None:
                    continue
                if (
                    now - idle_since >= self.config.min_evictable_idle_seconds
                    and connected > self.config.min_idle
                ):
                    self._idle_since.pop(item)
                    connected -= 1
                    evict.append(item)
                elif (
                    self.config.test_while_idle
                    and len(test) < self.config.num_tests_per_eviction_run
                ):
                    test.append(item)

            for connection in evict:
                connection.disconnect()
            for connection in test:
                self.pool.queue.remove(connection)

        failed = 0
        try:
            for connection in test:
                if not self._ping(connection):
                    with self._state_lock:
                        self._idle_since.pop(connection, None)
                    connection.disconnect()
                    failed += 1
        finally:
            self._restore(test)

        if evict or failed:
            logger.debug(
                "Evicted idle Redis connections",
                evicted=len(evict),
                failed_health_check=failed,
            )
        return len(evict) + failed

    def _restore(self, items) -> None:
        for item in items:
            try:
                self.pool.put_nowait(item)
            except Full:
                break

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def close(self) -> None:
        """Stop the evictor and disconnect every connection."""
        self._stop_eviction.set()
        if self._evictor is not None:
            self._evictor.join()
            self._evictor = None
        with self._state_lock:
            self._idle_since.clear()
        self.disconnect()


__all__ = ["EventConnectionPool"]
