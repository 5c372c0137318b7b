"""The container facade and the process-wide handle.

Most code should build a :class:`Container` and pass it to whoever needs to
resolve instances. Applications that want a single container per process can
use :func:`initialize` once at start-up and :func:`get_instance` afterwards.
"""

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Optional, Union

from autowire.config_store import CONFIG_FILENAME, ConfigStore, load_config_file
from autowire.errors import AlreadyInitialized, NotInitialized, UnexpectedType
from autowire.instance_cache import InstanceCache
from autowire.registry import TypeIntrospector, default_registry
from autowire.resolver import Resolver

__all__ = ["Container", "TypeKey", "initialize", "get_instance"]

logger = logging.getLogger(__name__)

TypeKey = Union[str, type]
"""Types can be requested by registered name or by class.

A class must be the one registered under its name; ``container.get(Database)``
and ``container.get("Database")`` return the same instance.
"""

_instance: Optional["Container"] = None


class Container:
    """Resolves instances, caching shared ones and applying configured parameters.

    Example:
        >>> from autowire.registry import TypeRegistry
        >>> class Mailer:
        ...     def __init__(self, host: str):
        ...         self.host = host
        >>> registry = TypeRegistry()
        >>> registry.register(Mailer)  # doctest: +ELLIPSIS
        <class '...Mailer'>
        >>> container = Container(registry)
        >>> container.register_config({"Mailer": {"host": "localhost"}})
        >>> container.get(Mailer).host
        'localhost'
    """

    def __init__(
        self,
        introspector: Optional[TypeIntrospector] = None,
        root_dir: Optional[Union[str, Path]] = None,
    ):
        self.root_dir = root_dir
        self._introspector = introspector or default_registry
        self._config_store = ConfigStore()
        self._cache = InstanceCache()
        self._resolver = Resolver(self, self._introspector, self._config_store, self._cache)

    def set_root_dir(self, root_dir: Union[str, Path]) -> "Container":
        self.root_dir = root_dir
        return self

    @property
    def configs_locked(self) -> bool:
        """True once anything has been resolved through this container."""
        return self._config_store.locked

    def register_config(self, block: Mapping[str, Mapping[str, Any]]) -> None:
        """Deep-merge a configuration block into the container's configuration.

        Raises:
            ConfigsLocked: If the container has already resolved something.
            ConfigurationError: If the block is malformed.
        """
        self._config_store.register(block)

    def get_config(self) -> dict[str, Any]:
        return self._config_store.snapshot()

    def dump_instance_cache(self) -> dict[str, Any]:
        return self._cache.snapshot()

    def get(self, type_key: TypeKey) -> Any:
        """Return the shared instance of a type, building it on first request."""
        type_name = self._type_name(type_key)
        if type_name in self._cache:
            return self._cache[type_name]

        instance = self._resolver.resolve(type_name)
        return self._cache.store(type_name, instance)

    def get_unique(self, type_key: TypeKey, overrides: Optional[Mapping[str, Any]] = None) -> Any:
        """Build a fresh instance that is neither read from nor stored in the cache.

        Args:
            type_key: The type to build.
            overrides: Parameter values taking precedence over configuration.
        """
        return self._resolver.resolve(self._type_name(type_key), overrides, unique=True)

    def get_many(
        self,
        type_map: Union[Mapping[Any, TypeKey], Sequence[TypeKey]],
        expected: Optional[type] = None,
    ) -> dict[Any, Any]:
        """Resolve several shared instances at once, keeping the caller's keys.

        Args:
            type_map: Mapping of arbitrary keys to types. A sequence is keyed by
                position.
            expected: Optional class every instance must be an instance of.

        Returns:
            A dict with the same keys, in the same order, mapped to instances.

        Raises:
            TypeError: If ``type_map`` is a string.
            UnexpectedType: If an instance is not an instance of ``expected``.
        """
        if isinstance(type_map, str):
            raise TypeError("get_many expects a mapping or a sequence of types, not a string")
        entries = type_map.items() if isinstance(type_map, Mapping) else enumerate(type_map)

        result = {}
        for key, type_key in entries:
            instance = self.get(type_key)
            if expected is not None and not isinstance(instance, expected):
                raise UnexpectedType(key, instance, expected)
            result[key] = instance
        return result

    def _type_name(self, type_key: TypeKey) -> str:
        if isinstance(type_key, str):
            return type_key
        return self._resolver.name_of(type_key)


def initialize(
    root_dir: Union[str, Path], introspector: Optional[TypeIntrospector] = None
) -> Container:
    """Create the process-wide container.

    If ``di_config.yaml`` exists directly under ``root_dir`` it is loaded and
    registered as the first configuration block.

    Raises:
        AlreadyInitialized: If the process container already exists.
        ConfigurationError: If the configuration file is malformed.
    """
    global _instance
    if _instance is not None:
        raise AlreadyInitialized()

    container = Container(introspector, root_dir)
    config_path = Path(root_dir) / CONFIG_FILENAME
    if config_path.is_file():
        container.register_config(load_config_file(config_path))

    _instance = container
    logger.debug("Initialized DI container at %s", root_dir)
    return container


def get_instance() -> Container:
    """Return the process-wide container.

    Raises:
        NotInitialized: If :func:`initialize` has not been called.
    """
    if _instance is None:
        raise NotInitialized()
    return _instance
