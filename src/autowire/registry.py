"""Registration and introspection of constructible types."""

import inspect
import logging
import types
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Union, get_args, get_origin, get_type_hints

from autowire.domain import ParameterDescriptor, TypeDescriptor
from autowire.errors import ConstructionFailed, RegistrationError, UnknownType

__all__ = [
    "TypeIntrospector",
    "TypeRegistry",
    "default_registry",
    "provides",
]

logger = logging.getLogger(__name__)


class TypeIntrospector(ABC):
    """Answers questions about types by name and builds instances of them.

    The resolver only talks to this interface, so any source of construction
    recipes can back a container.
    """

    @abstractmethod
    def exists(self, type_name: str) -> bool:
        ...

    @abstractmethod
    def name_of(self, cls: type) -> str:
        """Return the name ``cls`` is known by."""

    @abstractmethod
    def type_of(self, type_name: str) -> type:
        ...

    @abstractmethod
    def parameters(self, type_name: str) -> list[ParameterDescriptor]:
        """Return the constructor parameters of ``type_name`` in declaration order."""

    @abstractmethod
    def construct(self, type_name: str, arguments: dict[str, Any]) -> Any:
        """Build an instance of ``type_name`` from the resolved arguments.

        Raises:
            ConstructionFailed: If the factory can not be called with ``arguments``.
                Exceptions raised by the constructor body propagate unchanged.
        """


class TypeRegistry(TypeIntrospector):
    """Explicit registry mapping type names to classes.

    Constructors are inspected lazily, on first use, so that annotations may
    refer to classes registered later.

    Example:
        >>> registry = TypeRegistry()
        >>>
        >>> @registry.provides()
        ... class Database:
        ...     def __init__(self, dsn: str):
        ...         self.dsn = dsn
        >>>
        >>> registry.parameters("Database")[0].name
        'dsn'
    """

    def __init__(self):
        self._types: dict[str, type] = {}
        self._names: dict[type, str] = {}
        self._descriptors: dict[str, TypeDescriptor] = {}

    def register(self, cls: type, name: Optional[str] = None) -> type:
        """Register a class under a name.

        Args:
            cls: The class to register.
            name: Optional name; defaults to the class name.

        Returns:
            The class, unchanged.

        Raises:
            RegistrationError: If ``cls`` is not a class, or the name is taken by
                a different class.
        """
        if not inspect.isclass(cls):
            raise RegistrationError(f"{cls!r} is not a class")

        type_name = name or cls.__name__
        existing = self._types.get(type_name)
        if existing is not None and existing is not cls:
            raise RegistrationError(
                f"Type name '{type_name}' is already registered for {existing!r}"
            )

        self._types[type_name] = cls
        self._names.setdefault(cls, type_name)
        logger.debug("Registered type %s as %r", cls.__qualname__, type_name)
        return cls

    def provides(self, name: Optional[str] = None) -> Callable[[type], type]:
        """Decorator to register a class.

        Example:
            @registry.provides()
            class Mailer:
                def __init__(self, host: str, port: int = 25):
                    ...
        """

        def decorator(cls):
            return self.register(cls, name)

        return decorator

    def registered_names(self) -> list[str]:
        return list(self._types)

    def exists(self, type_name: str) -> bool:
        return type_name in self._types

    def name_of(self, cls: type) -> str:
        return self._names.get(cls, cls.__name__)

    def type_of(self, type_name: str) -> type:
        try:
            return self._types[type_name]
        except KeyError:
            raise UnknownType(type_name) from None

    def describe(self, type_name: str) -> TypeDescriptor:
        """Return the construction recipe for ``type_name``, inspecting it once."""
        descriptor = self._descriptors.get(type_name)
        if descriptor is None:
            cls = self.type_of(type_name)
            descriptor = TypeDescriptor(type_name, cls, _describe_parameters(cls))
            self._descriptors[type_name] = descriptor
        return descriptor

    def parameters(self, type_name: str) -> list[ParameterDescriptor]:
        return list(self.describe(type_name).parameters)

    def construct(self, type_name: str, arguments: dict[str, Any]) -> Any:
        descriptor = self.describe(type_name)

        positional = []
        skipped = None
        for parameter in descriptor.parameters:
            if not parameter.positional_only:
                break
            if parameter.name not in arguments:
                skipped = parameter.name
                continue
            if skipped is not None:
                raise ConstructionFailed(
                    type_name,
                    f"positional-only parameter '{skipped}' can not be skipped "
                    f"when '{parameter.name}' is supplied",
                )
            positional.append(arguments[parameter.name])

        positional_names = {p.name for p in descriptor.parameters if p.positional_only}
        keywords = {
            name: value for name, value in arguments.items() if name not in positional_names
        }

        try:
            inspect.signature(descriptor.factory).bind(*positional, **keywords)
        except TypeError as exc:
            raise ConstructionFailed(type_name, str(exc)) from exc

        return descriptor.factory(*positional, **keywords)


default_registry = TypeRegistry()
"""Registry used by containers created without an explicit introspector."""

provides = default_registry.provides


def _describe_parameters(cls: type) -> tuple[ParameterDescriptor, ...]:
    """Extract parameter descriptors from a class constructor.

    A class without its own constructor has no parameters. ``self``, ``*args``
    and ``**kwargs`` are not described.

    Raises:
        RegistrationError: If the constructor annotations can not be evaluated.
    """
    init = cls.__init__
    if init is object.__init__:
        return ()

    try:
        signature = inspect.signature(init)
        hints = get_type_hints(init)
    except (NameError, TypeError, ValueError) as exc:
        raise RegistrationError(
            f"Can not inspect constructor of {cls.__qualname__}: {exc}"
        ) from exc

    return tuple(
        _make_parameter(parameter, hints.get(parameter.name))
        for parameter in list(signature.parameters.values())[1:]
        if parameter.kind not in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD)
    )


def _make_parameter(parameter: inspect.Parameter, annotation: Any) -> ParameterDescriptor:
    declared_type = _unwrap_optional(annotation)
    return ParameterDescriptor(
        parameter.name,
        declared_type,
        _is_builtin(declared_type),
        parameter.default is not parameter.empty,
        parameter.default,
        parameter.kind is parameter.POSITIONAL_ONLY,
    )


def _unwrap_optional(annotation: Any) -> Any:
    """Turn ``Optional[X]`` and ``X | None`` into ``X``; leave anything else alone."""
    if get_origin(annotation) in (Union, types.UnionType):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return members[0]
    return annotation


def _is_builtin(annotation: Any) -> bool:
    """Whether a parameter must be supplied rather than auto-wired.

    Only plain classes outside the ``builtins`` module are auto-wired. Missing
    annotations, generics, unions and ``Any`` all count as builtin.

    Example:
        >>> class Database:
        ...     pass
        >>> _is_builtin(str), _is_builtin(list[str])
        (True, True)
        >>> _is_builtin(Database)
        False
    """
    if annotation is None or annotation is Any:
        return True
    if get_origin(annotation) is not None or not inspect.isclass(annotation):
        return True
    return annotation.__module__ == "builtins"
