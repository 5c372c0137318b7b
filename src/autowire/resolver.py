"""
Recursive construction of instances from their constructor dependencies.

For each constructor parameter of the requested type the resolver picks a
value in this order of precedence:

1. the container itself, if the parameter is typed as the container;
2. an explicit override or configured value for the parameter name;
3. an auto-wired instance of the parameter's declared class;
4. the parameter's own default, by leaving it out of the call.

Auto-wired dependencies are shared through the instance cache unless the
resolution was asked to be unique.
"""

import inspect
import logging
from collections.abc import Mapping
from typing import Any, Optional

from autowire.config_store import ConfigStore
from autowire.domain import ParameterDescriptor
from autowire.errors import CyclicDependency, MissingParameter, UnknownType
from autowire.instance_cache import InstanceCache
from autowire.registry import TypeIntrospector

__all__ = ["Resolver"]

logger = logging.getLogger(__name__)


class Resolver:
    """Build instances on behalf of a container."""

    def __init__(
        self,
        container: Any,
        introspector: TypeIntrospector,
        config_store: ConfigStore,
        cache: InstanceCache,
    ):
        self._container = container
        self._introspector = introspector
        self._config_store = config_store
        self._cache = cache
        self._resolving: list[str] = []

    def resolve(
        self,
        type_name: str,
        overrides: Optional[Mapping[str, Any]] = None,
        unique: bool = False,
    ) -> Any:
        """Construct an instance of ``type_name``.

        The top-level instance is never cached here; only auto-wired
        dependencies are, and only when ``unique`` is false.

        Args:
            type_name: Registered name of the type to build.
            overrides: Parameter values that take precedence over configuration.
            unique: If true, auto-wired dependencies are built fresh and not cached.

        Returns:
            The constructed instance.

        Raises:
            UnknownType: If the type, or a type it depends on, is not registered.
            MissingParameter: If a required parameter has no value.
            CyclicDependency: If ``type_name`` is already being resolved further up.
            ConstructionFailed: If a factory can not be called with the resolved arguments.
        """
        self._config_store.lock()

        if not self._introspector.exists(type_name):
            raise UnknownType(type_name)

        if type_name in self._resolving:
            raise CyclicDependency(tuple(self._resolving) + (type_name,))

        self._resolving.append(type_name)
        try:
            params = self._config_store.params_for(type_name, overrides)
            arguments: dict[str, Any] = {}

            for parameter in self._introspector.parameters(type_name):
                if self._is_container_type(parameter.declared_type):
                    arguments[parameter.name] = self._container
                elif not parameter.is_builtin and parameter.name not in params:
                    arguments[parameter.name] = self._resolve_nested(parameter, unique)
                elif parameter.name in params:
                    arguments[parameter.name] = params[parameter.name]
                elif not parameter.is_optional:
                    raise MissingParameter(type_name, parameter.name)

            logger.debug("Constructing %s with %s", type_name, list(arguments))
            return self._introspector.construct(type_name, arguments)
        finally:
            self._resolving.pop()

    def _resolve_nested(self, parameter: ParameterDescriptor, unique: bool) -> Any:
        nested_name = self.name_of(parameter.declared_type)

        if not unique and nested_name in self._cache:
            logger.debug("Reusing cached %s for parameter %r", nested_name, parameter.name)
            return self._cache[nested_name]

        logger.debug("Auto-wiring %s for parameter %r", nested_name, parameter.name)
        instance = self.resolve(nested_name)
        if not unique:
            self._cache.store(nested_name, instance)
        return instance

    def name_of(self, cls: type) -> str:
        """Return the registered name of ``cls``.

        Raises:
            UnknownType: If the name belongs to a different class.
        """
        type_name = self._introspector.name_of(cls)
        if self._introspector.exists(type_name) and self._introspector.type_of(type_name) is not cls:
            raise UnknownType(f"{cls.__module__}.{cls.__qualname__}")
        return type_name

    def _is_container_type(self, declared_type: Any) -> bool:
        from autowire.container import Container

        return (
            inspect.isclass(declared_type)
            and issubclass(declared_type, Container)
            and isinstance(self._container, declared_type)
        )
