"""
Event listener plugin contract of the identity server.

The host creates one factory per listener id at startup, calls ``init``
with the listener's configuration scope and ``post_init`` once every
factory is initialized, then asks the factory for a provider per session.
Providers receive events synchronously on the host's worker threads.
"""

from abc import ABC, abstractmethod
from typing import Any

from redis_event_listener.core.config import ConfigScope
from redis_event_listener.events.types import AdminEvent, UserEvent


class EventListenerProvider(ABC):
    """Receives the events raised during one host session."""

    @abstractmethod
    def on_event(self, event: UserEvent) -> None:
        """Handle an end-user event."""

    @abstractmethod
    def on_admin_event(self, event: AdminEvent, include_representation: bool) -> None:
        """Handle an administrative console event."""

    @abstractmethod
    def close(self) -> None:
        """Release per-session resources."""


class EventListenerProviderFactory(ABC):
    """Process-wide factory registered with the host under ``get_id()``."""

    @abstractmethod
    def create(self, session: Any) -> EventListenerProvider:
        """Create the provider serving ``session``."""

    @abstractmethod
    def init(self, config: ConfigScope) -> None:
        """Read configuration and acquire shared resources."""

    def post_init(self, session_factory: Any) -> None:
        """Called after every factory has been initialized."""

    @abstractmethod
    def close(self) -> None:
        """Release shared resources at host shutdown."""

    @abstractmethod
    def get_id(self) -> str:
        """Listener id operators use to enable this listener."""


__all__ = ["EventListenerProvider", "EventListenerProviderFactory"]
