from typing import Any

__all__ = [
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


class DependencyError(Exception):
    """Base class for everything the container raises."""

    pass


class NotInitialized(DependencyError):
    """Raised when the process container is requested before it exists."""

    def __init__(self):
        super().__init__("DI container is not initialized")


class AlreadyInitialized(DependencyError):
    """Raised when the process container is initialized twice."""

    def __init__(self):
        super().__init__("DI container is already initialized")


class ConfigsLocked(DependencyError):
    """Raised when configuration is registered after the first resolution."""

    def __init__(self):
        super().__init__("Configurations are not allowed after DI container is used")


class ConfigurationError(DependencyError):
    """Raised when a configuration block or file is malformed."""

    pass


class RegistrationError(DependencyError):
    """Raised when a type cannot be registered or described."""

    pass


class UnknownType(DependencyError):
    def __init__(self, type_name: str):
        super().__init__(f"Can not resolve type: {type_name}")
        self.type_name = type_name


class MissingParameter(DependencyError):
    """Raised when a required constructor parameter has no supplied value."""

    def __init__(self, class_name: str, parameter_name: str):
        super().__init__(
            f'Missing parameter in object instantiation: {class_name}: "{parameter_name}"'
        )
        self.class_name = class_name
        self.parameter_name = parameter_name


class UnexpectedType(DependencyError):
    """Raised when a batch-resolved instance fails its capability check."""

    def __init__(self, key: Any, instance: Any, expected: type):
        super().__init__(
            f"Unexpected object instance {type(instance).__name__} "
            f"for key {key!r}, expected {expected.__name__}"
        )
        self.key = key
        self.instance = instance
        self.expected = expected


class ConstructionFailed(DependencyError):
    """Raised when the factory of a type fails. The cause is chained."""

    def __init__(self, type_name: str, message: str):
        super().__init__(f"Failed to construct {type_name}: {message}")
        self.type_name = type_name


class CyclicDependency(DependencyError):
    def __init__(self, path: tuple[str, ...]):
        super().__init__(f"Cyclic dependency detected: {' -> '.join(path)}")
        self.path = path
