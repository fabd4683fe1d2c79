"""Exceptions raised by the modifier registry and the composition pipeline.

All of these are programmer errors: they are raised at registration or
composition time and are meant to be fixed in code, not recovered from.
"""
from typing import Any, Iterable, Optional


class ViewModError(Exception):
    """Base class for all viewmod errors."""


class ConfigurationError(ViewModError):
    """Raised when a configuration value is not usable."""

    def __init__(self, key: str, value: Any, reason: Optional[str] = None):
        message = f"Invalid value {value!r} for config key '{key}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.key = key
        self.value = value


class RegistryError(ViewModError):
    """Base class for modifier registry errors."""


class UnknownModifierError(RegistryError):
    """Raised when a modifier name is not registered."""

    def __init__(self, name: str, available: Optional[Iterable[str]] = None):
        """
        Args:
            name: The modifier name that was requested
            available: Names registered at the time of the lookup
        """
        available_text = ""
        if available:
            available_text = f" Available modifiers: {', '.join(sorted(available))}."
        super().__init__(f"Modifier '{name}' is not registered.{available_text}")
        self.name = name


class DuplicateNameError(RegistryError):
    """Raised when a modifier name is registered twice under the 'error' policy."""

    def __init__(self, name: str):
        super().__init__(
            f"Modifier '{name}' is already registered. "
            f"Choose another name or set registry.on_duplicate to 'shadow'."
        )
        self.name = name


class RegistryFrozenError(RegistryError):
    """Raised when registering into a registry that has been frozen."""

    def __init__(self, name: str):
        super().__init__(f"Cannot register modifier '{name}': the registry is frozen.")
        self.name = name


class ModifierArgumentError(ViewModError, TypeError):
    """Raised when parameters do not match a modifier's signature."""

    def __init__(self, name: str, reason: str):
        super().__init__(f"Bad arguments for modifier '{name}': {reason}")
        self.name = name


class InvalidElementError(ViewModError, TypeError):
    """Raised when something that is not an element or a view shows up where one is required."""

    def __init__(self, value: Any, source: Optional[str] = None):
        where = f" returned by modifier '{source}'" if source else ""
        super().__init__(f"Expected an Element or a View, got {type(value).__name__}{where}")
        self.value = value


class NodeNotFoundError(ViewModError, LookupError):
    """Raised when a rendered node cannot be found, or cannot be tapped."""

    def __init__(self, target: Any, reason: Optional[str] = None):
        message = f"No rendered node matches {target!r}"
        if reason:
            message = f"Node {target!r} {reason}"
        super().__init__(message)
        self.target = target
