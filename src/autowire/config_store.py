"""Per-class parameter configuration, merged from one or more blocks.

A configuration block maps a class name to the constructor parameters that
should be supplied for it::

    Mailer:
      host: smtp.example.com
      port: 2525

Blocks are deep-merged in registration order: nested mappings combine key by
key, while lists and scalars at the same key are replaced by the newer block.
Once the container performs its first resolution the store is locked and no
further blocks are accepted.
"""

import copy
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from autowire.errors import ConfigsLocked, ConfigurationError

__all__ = ["CONFIG_FILENAME", "ConfigStore", "replace_recursive", "load_config_file"]

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "di_config.yaml"
"""Name of the configuration file looked up under a container's root directory."""


def replace_recursive(base: Mapping, incoming: Mapping) -> dict:
    """Merge ``incoming`` over ``base`` without mutating either.

    Where both sides hold a mapping at the same key the two are merged
    recursively; otherwise the incoming value wins.

    Example:
        >>> replace_recursive({"a": {"x": 1, "y": 2}, "b": [1, 2]}, {"a": {"y": 3}, "b": [9]})
        {'a': {'x': 1, 'y': 3}, 'b': [9]}
    """
    merged = dict(base)
    for key, value in incoming.items():
        existing = merged.get(key)
        if isinstance(existing, Mapping) and isinstance(value, Mapping):
            merged[key] = replace_recursive(existing, value)
        else:
            merged[key] = value
    return merged


class ConfigStore:
    """Holds the merged configuration and the lock that freezes it."""

    def __init__(self):
        self._config: dict[str, Any] = {}
        self._locked = False

    @property
    def locked(self) -> bool:
        return self._locked

    def lock(self) -> None:
        """Forbid further registration. There is no way to unlock."""
        self._locked = True

    def register(self, block: Mapping[str, Mapping[str, Any]]) -> None:
        """Deep-merge a configuration block into the store.

        Raises:
            ConfigsLocked: If the store has been locked.
            ConfigurationError: If ``block`` is not a mapping of class names to
                parameter mappings.
        """
        if self._locked:
            raise ConfigsLocked()
        _validate_block(block)
        self._config = replace_recursive(self._config, copy.deepcopy(block))
        logger.debug("Registered configuration for %s", sorted(block))

    def snapshot(self) -> dict[str, Any]:
        return copy.deepcopy(self._config)

    def params_for(self, type_name: str, overrides: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
        """Return the effective parameters for a type, with ``overrides`` taking precedence.

        Configured values are copied so that constructors can not alter the
        stored configuration; override values are passed through as given.
        """
        configured = copy.deepcopy(self._config.get(type_name, {}))
        return replace_recursive(configured, overrides or {})


def load_config_file(path: Union[str, Path]) -> dict[str, Any]:
    """Read a YAML configuration block from ``path``.

    An empty document is an empty block.

    Raises:
        ConfigurationError: If the file does not parse or is not a mapping.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid configuration file {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigurationError(
            f"Configuration file {path} must contain a mapping, got {type(data).__name__}"
        )
    logger.info("Loaded configuration from %s", path)
    return dict(data)


def _validate_block(block: Any) -> None:
    if not isinstance(block, Mapping):
        raise ConfigurationError(
            f"Configuration block must be a mapping, got {type(block).__name__}"
        )
    for class_name, params in block.items():
        if not isinstance(class_name, str):
            raise ConfigurationError(f"Configuration key {class_name!r} is not a class name")
        if not isinstance(params, Mapping):
            raise ConfigurationError(
                f"Configuration for {class_name} must be a mapping of parameters, "
                f"got {type(params).__name__}"
            )
