"""Storage for shared instances, keyed by type name."""

from typing import Any


class InstanceCache:
    """Instances built for non-unique resolutions.

    Entries live as long as the container and are never evicted; every
    consumer of a cached type shares the one instance.

    Example:
        >>> db = object()
        >>> cache = InstanceCache()
        >>> cache.store("Database", db) is db
        True
        >>> "Database" in cache
        True
        >>> cache["Database"] is db
        True
    """

    def __init__(self):
        self._instances: dict[str, Any] = {}

    def store(self, type_name: str, instance: Any) -> Any:
        self._instances[type_name] = instance
        return instance

    def get(self, type_name: str, default: Any = None) -> Any:
        return self._instances.get(type_name, default)

    def snapshot(self) -> dict[str, Any]:
        return dict(self._instances)

    def __getitem__(self, type_name: str) -> Any:
        return self._instances[type_name]

    def __contains__(self, type_name: str) -> bool:
        return type_name in self._instances

    def __len__(self) -> int:
        return len(self._instances)
