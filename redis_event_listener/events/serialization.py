"""
JSON payloads for published events.

User events:

    {"type": "LOGIN", "source": "userAction", "realmId": ..., "clientId": ...,
     "userId": ..., "ipAddress": ..., "details": {...}, "error": ...}

Admin events:

    {"type": "UPDATE", "source": "adminAction", "realmId": ..., "clientId": ...,
     "userId": ..., "ipAddress": ..., "resourcePath": ..., "error": ...}

Identity fields are ``null`` when the host did not set them. ``error`` is
only present when the event carries one. Detail keys and non-string detail
values are rendered with ``str()``; ``None`` detail values are dropped.
"""

import json
from collections.abc import Mapping
from functools import singledispatch
from typing import Any

from redis_event_listener.events.types import AdminEvent, UserEvent

USER_ACTION_SOURCE = "userAction"
ADMIN_ACTION_SOURCE = "adminAction"


def _dumps(data: dict[str, Any]) -> str:
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def _details(details: Mapping[str, Any] | None) -> dict[str, str]:
    if not details:
        return {}
    return {
        str(key): value if isinstance(value, str) else str(value)
        for key, value in details.items()
        if value is not None
    }


def user_event_to_dict(event: UserEvent) -> dict[str, Any]:
    data: dict[str, Any] = {
        "type": event.type.value,
        "source": USER_ACTION_SOURCE,
        "realmId": event.realm_id,
        "clientId": event.client_id,
        "userId": event.user_id,
        "ipAddress": event.ip_address,
    }

    if event.error is not None:
        data["error"] = event.error

    data["details"] = _details(event.details)
    return data


def admin_event_to_dict(event: AdminEvent) -> dict[str, Any]:
    auth = event.auth_details
    data: dict[str, Any] = {
        "type": event.operation_type.value,
        "source": ADMIN_ACTION_SOURCE,
        "realmId": auth.realm_id,
        "clientId": auth.client_id,
        "userId": auth.user_id,
        "ipAddress": auth.ip_address,
        "resourcePath": event.resource_path,
    }

    if event.error is not None:
        data["error"] = event.error

    return data


def serialize_user_event(event: UserEvent) -> str:
    """Render a user event as the published JSON payload."""
    return _dumps(user_event_to_dict(event))


def serialize_admin_event(event: AdminEvent) -> str:
    """Render an admin event as the published JSON payload."""
    return _dumps(admin_event_to_dict(event))


@singledispatch
def serialize(event: Any) -> str:
    """Render any host event as its published JSON payload."""
    raise TypeError(f"Cannot serialize {type(event).__name__}")


serialize.register(UserEvent, serialize_user_event)
serialize.register(AdminEvent, serialize_admin_event)


__all__ = [
    "ADMIN_ACTION_SOURCE",
    "USER_ACTION_SOURCE",
    "admin_event_to_dict",
    "serialize",
    "serialize_admin_event",
    "serialize_user_event",
    "user_event_to_dict",
]
