"""Error hierarchy for the Redis event listener.

Configuration errors are fatal and surface through the host's startup path.
Infrastructure errors describe publish failures; they are carried inside a
``PublishResult`` and never raised to the code that produced the event.
"""

import time
import uuid
from enum import Enum
from typing import Any


class ErrorSeverity(Enum):
    """Error severity levels for monitoring and alerting."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ListenerError(Exception):
    """
    Base exception for all listener errors.

    Carries an error ID, a machine readable code, severity and free-form
    details/context used when the error is logged.
    """

    default_code: str = "ERROR"
    severity: ErrorSeverity = ErrorSeverity.MEDIUM
    retryable: bool = False

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.code = kwargs.get("code") or self.default_code
        self.details = kwargs.get("details") or {}
        self.context = kwargs.get("context") or {}
        self.error_id = str(uuid.uuid4())
        self.timestamp = time.time()
        self.__cause__ = kwargs.get("cause")

    def to_dict(self, include_details: bool = True) -> dict[str, Any]:
        """Serialize error for logging."""
        data = {
            "error": self.code,
            "message": self.message,
            "error_id": self.error_id,
            "severity": self.severity.value,
            "timestamp": self.timestamp,
        }

        if include_details and self.details:
            data["details"] = dict(self.details)

        if self.context:
            data["context"] = dict(self.context)

        if self.retryable:
            data["retryable"] = True

        return data

    def with_context(self, **context: Any) -> "ListenerError":
        """Add context to error and return self for chaining."""
        self.context.update(context)
        return self

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class InfrastructureError(ListenerError):
    """Base class for infrastructure errors."""

    default_code = "INFRASTRUCTURE_ERROR"
    severity = ErrorSeverity.HIGH
    retryable = True


class ConfigurationError(ListenerError):
    """Invalid listener configuration. Prevents the listener from starting."""

    default_code = "CONFIGURATION_ERROR"
    severity = ErrorSeverity.CRITICAL

    def __init__(
        self, message: str, config_key: str | None = None, **kwargs: Any
    ) -> None:
        super().__init__(message, **kwargs)
        if config_key:
            self.details["config_key"] = config_key
        self.code = self.default_code


class PublishError(InfrastructureError):
    """Publishing a payload to the message bus failed."""

    default_code = "PUBLISH_FAILED"

    def __init__(
        self,
        message: str,
        channel: str | None = None,
        target: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        if channel:
            self.details["channel"] = channel
        if target:
            self.details["target"] = target
        self.code = self.default_code


__all__ = [
    "ConfigurationError",
    "ErrorSeverity",
    "InfrastructureError",
    "ListenerError",
    "PublishError",
]
