"""Listener configuration.

The host hands the factory a configuration scope (a flat set of
``key -> value`` settings, arrays given as comma separated strings). This
module wraps that scope with typed accessors, offers an
``EnvironmentLoader`` that builds a scope from prefixed environment
variables, and turns a scope into validated ``ListenerSettings``.

Architecture:
- ConfigScope: Typed read-only access to host settings
- EnvironmentLoader: Environment variable (and ``.env`` file) loading
- PoolConfig: Connection pool sizing, health checks and eviction
- ListenerSettings: Complete listener configuration with validation
"""

import os
from collections.abc import Iterable, Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Any

from redis_event_listener.core.enums import LogLevel
from redis_event_listener.core.errors import ConfigurationError

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 6379
DEFAULT_DB = 1
DEFAULT_CHANNEL = "keycloak/events"

ENV_PREFIX = "KC_SPI_EVENTS_LISTENER_REDIS_"

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


# =====================================================================================
# CONFIGURATION SCOPE
# =====================================================================================


class ConfigScope:
    """
    Read-only view over the listener's host configuration.

    Keys use the host's dashed spelling (``exclude-events``). Missing keys
    and blank values fall back to the supplied default.
    """

    def __init__(self, values: Mapping[str, Any] | None = None):
        self._values = dict(values or {})

    def _raw(self, key: str) -> Any:
        value = self._values.get(key)
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def get(self, key: str, default: str | None = None) -> str | None:
        value = self._raw(key)
        return default if value is None else str(value).strip()

    def get_int(self, key: str, default: int | None = None) -> int | None:
        value = self._raw(key)
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"{key} must be an integer, got {value!r}", config_key=key
            ) from e

    def get_float(self, key: str, default: float | None = None) -> float | None:
        value = self._raw(key)
        if value is None:
            return default
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"{key} must be a number, got {value!r}", config_key=key
            ) from e

    def get_bool(self, key: str, default: bool | None = None) -> bool | None:
        value = self._raw(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        lowered = str(value).strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ConfigurationError(
            f"{key} must be a boolean, got {value!r}", config_key=key
        )

    def get_array(self, key: str) -> list[str] | None:
        """Return the setting as a list of strings, or None when unset."""
        value = self._raw(key)
        if value is None:
            return None
        if isinstance(value, str):
            items: Iterable[Any] = value.split(",")
        else:
            items = value
        return [str(item).strip() for item in items if str(item).strip()]

    def keys(self) -> list[str]:
        return sorted(self._values)

    def __repr__(self) -> str:
        return f"ConfigScope({self.keys()!r})"


# =====================================================================================
# ENVIRONMENT LOADER
# =====================================================================================


class EnvironmentLoader:
    """
    Environment variable loader for deployments without a host config file.

    ``KC_SPI_EVENTS_LISTENER_REDIS_EXCLUDE_EVENTS=LOGIN_ERROR`` becomes the
    ``exclude-events`` key of the resulting scope.
    """

    def __init__(
        self,
        prefix: str = ENV_PREFIX,
        env_file: str | None = ".env",
        environ: MutableMapping[str, str] | None = None,
    ):
        """
        Initialize environment loader.

        Args:
            prefix: Variable name prefix selecting listener settings
            env_file: Optional environment file to load
            environ: Environment mapping (defaults to ``os.environ``)
        """
        self.prefix = prefix
        self.env_file = env_file
        self.environ = os.environ if environ is None else environ
        if env_file:
            self._load_env_file()

    def _load_env_file(self) -> None:
        """Load environment variables from file if it exists."""
        if not os.path.exists(self.env_file):
            return

        try:
            with open(self.env_file, encoding="utf-8") as f:
                for raw_line in f:
                    line = raw_line.strip()

                    if not line or line.startswith("#") or "=" not in line:
                        continue

                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip()

                    if (value.startswith('"') and value.endswith('"')) or (
                        value.startswith("'") and value.endswith("'")
                    ):
                        value = value[1:-1]

                    # Only set if not already in environment
                    if key not in self.environ:
                        self.environ[key] = value

        except OSError as e:
            raise ConfigurationError(
                f"Failed to load environment file {self.env_file}: {e}"
            ) from e

    def load_scope(self) -> ConfigScope:
        """Collect prefixed variables into a ``ConfigScope``."""
        values = {}
        for name, value in self.environ.items():
            if not name.startswith(self.prefix):
                continue
            key = name[len(self.prefix):].lower().replace("_", "-")
            values[key] = value
        return ConfigScope(values)


# =====================================================================================
# SETTINGS
# =====================================================================================


@dataclass(frozen=True)
class PoolConfig:
    """
    Connection pool configuration.

    Sizes, health checks and idle eviction for the pool of connections the
    publisher borrows from.
    """

    max_total: int = 128
    max_idle: int = 128
    min_idle: int = 16

    test_on_borrow: bool = True
    test_on_return: bool = True
    test_while_idle: bool = True

    min_evictable_idle_seconds: float = 60.0
    eviction_interval_seconds: float = 30.0
    num_tests_per_eviction_run: int = 3

    block_when_exhausted: bool = True
    max_wait_seconds: float = 20.0
    socket_timeout_seconds: float = 2.0

    def __post_init__(self):
        if self.max_total < 1:
            raise ConfigurationError(
                "Pool max total must be at least 1", config_key="pool-max-total"
            )
        if not 0 <= self.max_idle <= self.max_total:
            raise ConfigurationError(
                "Pool max idle must be between 0 and max total",
                config_key="pool-max-idle",
            )
        if not 0 <= self.min_idle <= self.max_idle:
            raise ConfigurationError(
                "Pool min idle must be between 0 and max idle",
                config_key="pool-min-idle",
            )
        if self.num_tests_per_eviction_run < 0:
            raise ConfigurationError("Tests per eviction run cannot be negative")
        for name in (
            "min_evictable_idle_seconds",
            "eviction_interval_seconds",
            "max_wait_seconds",
            "socket_timeout_seconds",
        ):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"Pool setting {name} cannot be negative")

    @classmethod
    def from_scope(cls, scope: ConfigScope) -> "PoolConfig":
        defaults = cls()
        return cls(
            max_total=scope.get_int("pool-max-total", defaults.max_total),
            max_idle=scope.get_int("pool-max-idle", defaults.max_idle),
            min_idle=scope.get_int("pool-min-idle", defaults.min_idle),
            block_when_exhausted=scope.get_bool(
                "pool-block-when-exhausted", defaults.block_when_exhausted
            ),
            max_wait_seconds=scope.get_float(
                "pool-max-wait", defaults.max_wait_seconds
            ),
            socket_timeout_seconds=scope.get_float(
                "pool-socket-timeout", defaults.socket_timeout_seconds
            ),
        )


@dataclass(frozen=True)
class ListenerSettings:
    """
    Complete listener configuration.

    Tag names are kept as strings here; resolving them against the host's
    event enums (and rejecting unknown names) happens when the filter
    policies are built.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    db: int = DEFAULT_DB
    channel: str = DEFAULT_CHANNEL

    excluded_events: tuple[str, ...] = ()
    included_events: tuple[str, ...] = ()
    excluded_operations: tuple[str, ...] = ()
    included_operations: tuple[str, ...] = ()

    pool: PoolConfig = field(default_factory=PoolConfig)

    log_level: LogLevel | None = None

    def __post_init__(self):
        if not self.host:
            raise ConfigurationError("Redis host is required", config_key="host")
        if not 1 <= self.port <= 65535:
            raise ConfigurationError(
                f"Redis port must be between 1 and 65535, got {self.port}",
                config_key="port",
            )
        if self.db < 0:
            raise ConfigurationError(
                f"Redis database index cannot be negative, got {self.db}",
                config_key="db",
            )
        if not self.channel:
            raise ConfigurationError("Channel name is required", config_key="channel")

    @classmethod
    def from_scope(cls, scope: ConfigScope) -> "ListenerSettings":
        """Build settings from a host configuration scope."""
        return cls(
            host=scope.get("host", DEFAULT_HOST),
            port=scope.get_int("port", DEFAULT_PORT),
            db=scope.get_int("db", DEFAULT_DB),
            channel=scope.get("channel", DEFAULT_CHANNEL),
            excluded_events=tuple(scope.get_array("exclude-events") or ()),
            included_events=tuple(scope.get_array("include-events") or ()),
            excluded_operations=tuple(scope.get_array("exclude-operations") or ()),
            included_operations=tuple(scope.get_array("include-operations") or ()),
            pool=PoolConfig.from_scope(scope),
            log_level=_log_level(scope.get("log-level")),
        )

    @classmethod
    def from_env(cls, env_file: str | None = ".env") -> "ListenerSettings":
        """Build settings from ``KC_SPI_EVENTS_LISTENER_REDIS_*`` variables."""
        return cls.from_scope(EnvironmentLoader(env_file=env_file).load_scope())

    @property
    def redis_url(self) -> str:
        return f"redis://{self.host}:{self.port}/{self.db}"


def _log_level(name: str | None) -> LogLevel | None:
    if name is None:
        return None
    try:
        return LogLevel[name.upper()]
    except KeyError as e:
        raise ConfigurationError(
            f"Unknown log level {name!r}", config_key="log-level"
        ) from e


__all__ = [
    "DEFAULT_CHANNEL",
    "DEFAULT_DB",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "ENV_PREFIX",
    "ConfigScope",
    "EnvironmentLoader",
    "ListenerSettings",
    "PoolConfig",
]
