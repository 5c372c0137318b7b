"""Domain models used throughout the container."""

import inspect
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ParameterDescriptor:
    """Describes one constructor parameter of a registered type.

    Attributes:
        name: The parameter name in the constructor signature.
        declared_type: The annotation, with ``Optional[X]`` unwrapped to ``X``. ``None``
            when the parameter is not annotated.
        is_builtin: True unless the annotation is a plain, non-builtin class that
            can be auto-wired.
        is_optional: True when the parameter declares a default value.
        default: The declared default, or ``inspect.Parameter.empty``.
        positional_only: True for parameters declared before ``/``.
    """

    name: str
    declared_type: Any
    is_builtin: bool
    is_optional: bool
    default: Any = inspect.Parameter.empty
    positional_only: bool = False


@dataclass(frozen=True)
class TypeDescriptor:
    """A construction recipe: the factory for a type and its parameters."""

    name: str
    factory: type
    parameters: tuple[ParameterDescriptor, ...]
