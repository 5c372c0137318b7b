"""Autowire dependency injection resolver.

Autowire builds objects by recursively resolving their constructor
dependencies. Parameters typed as registered classes are auto-wired, while
primitive parameters are supplied by per-class configuration or by
call-site overrides. Shared instances are cached for the lifetime of the
container; unique instances are built fresh on every request.

Key Features:
    - Explicit type registration with lazy constructor inspection
    - Auto-wiring of class-typed constructor parameters
    - Per-class parameter configuration, deep-merged from YAML or dicts
    - Overrides that take precedence over configuration and auto-wiring
    - Cycle detection during resolution

Basic Usage:
    >>> from autowire import Container, TypeRegistry
    >>>
    >>> registry = TypeRegistry()
    >>>
    >>> @registry.provides()
    ... class Database:
    ...     def __init__(self, dsn: str):
    ...         self.dsn = dsn
    >>>
    >>> @registry.provides()
    ... class UserService:
    ...     def __init__(self, db: Database):
    ...         self.db = db
    >>>
    >>> container = Container(registry)
    >>> container.register_config({"Database": {"dsn": "sqlite://"}})
    >>> container.get(UserService).db.dsn
    'sqlite://'

The package consists of these modules:
    - registry: Type registration and constructor introspection
    - config_store: Configuration blocks and their deep merge
    - instance_cache: Shared instance storage
    - resolver: The recursive resolution algorithm
    - container: The container facade and process-wide handle
    - errors: Framework-specific exceptions
"""

from autowire.container import Container, get_instance, initialize
from autowire.errors import (
    AlreadyInitialized,
    ConfigsLocked,
    ConfigurationError,
    ConstructionFailed,
    CyclicDependency,
    DependencyError,
    MissingParameter,
    NotInitialized,
    RegistrationError,
    UnexpectedType,
    UnknownType,
)
from autowire.registry import TypeIntrospector, TypeRegistry, default_registry, provides

__all__ = [
    "Container",
    "initialize",
    "get_instance",
    "TypeIntrospector",
    "TypeRegistry",
    "default_registry",
    "provides",
    "DependencyError",
    "NotInitialized",
    "AlreadyInitialized",
    "ConfigsLocked",
    "ConfigurationError",
    "RegistrationError",
    "UnknownType",
    "MissingParameter",
    "UnexpectedType",
    "ConstructionFailed",
    "CyclicDependency",
]
