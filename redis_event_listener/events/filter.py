"""
Include/exclude filtering of event tags.

One ``FilterPolicy`` is built for user event types and an independent one
for admin operation types. A tag is forwarded when it is not excluded and
either nothing is explicitly included or the tag is included. A tag that is
both excluded and included is a configuration mistake and is rejected when
the policy is built.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

from redis_event_listener.core.errors import ConfigurationError

TagT = TypeVar("TagT", bound=Enum)


@dataclass(frozen=True)
class FilterPolicy(Generic[TagT]):
    """Immutable pair of excluded and included tag sets."""

    excluded: frozenset[TagT] = field(default_factory=frozenset)
    included: frozenset[TagT] = field(default_factory=frozenset)
    name: str = "events"

    def __post_init__(self):
        object.__setattr__(self, "excluded", frozenset(self.excluded))
        object.__setattr__(self, "included", frozenset(self.included))

        conflicting = self.excluded & self.included
        if conflicting:
            names = ", ".join(sorted(tag.name for tag in conflicting))
            raise ConfigurationError(
                f"Conflicting {self.name} filter: {names} both excluded and included",
                config_key=f"include-{self.name}",
                details={"conflicting": sorted(tag.name for tag in conflicting)},
            )

    @classmethod
    def from_names(
        cls,
        tag_type: type[TagT],
        excluded: Iterable[str] = (),
        included: Iterable[str] = (),
        name: str = "events",
    ) -> "FilterPolicy[TagT]":
        """
        Build a policy from configured tag names.

        Args:
            tag_type: Enum the names must belong to
            excluded: Names from the ``exclude-<name>`` setting
            included: Names from the ``include-<name>`` setting
            name: Setting family, used in error messages

        Raises:
            ConfigurationError: Unknown tag name or overlapping sets
        """
        return cls(
            excluded=frozenset(_resolve(tag_type, excluded, f"exclude-{name}")),
            included=frozenset(_resolve(tag_type, included, f"include-{name}")),
            name=name,
        )


def _resolve(tag_type: type[TagT], names: Iterable[str], setting: str) -> list[TagT]:
    tags = []
    for raw in names:
        tag_name = raw.strip()
        try:
            tags.append(tag_type[tag_name])
        except KeyError as e:
            raise ConfigurationError(
                f"Unknown {tag_type.__name__} '{tag_name}' in {setting}",
                config_key=setting,
            ) from e
    return tags


def should_forward(tag: TagT, policy: FilterPolicy[TagT]) -> bool:
    """Decide whether an event carrying ``tag`` should be published."""
    if tag in policy.excluded:
        return False
    return not policy.included or tag in policy.included


__all__ = ["FilterPolicy", "should_forward"]
