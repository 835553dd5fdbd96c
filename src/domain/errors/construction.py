"""Construction errors raised by create()/create_null() factories.

A construction error is always fatal to the factory call that raised it.
Factories never retry, and they never wrap an error raised by a dependency's
own factory: that error reaches the caller unmodified.
"""

from __future__ import annotations

from src.domain.exceptions import NullablesError


class ConstructionError(NullablesError):
    """Base exception for factories that cannot produce a valid instance."""

    pass


class MissingConfigError(ConstructionError):
    """Raised when a required config field is absent and has no default."""

    def __init__(self, config_name: str = "", field_name: str = "") -> None:
        """Initialize with the config type and the missing field.

        Args:
            config_name: Name of the config dataclass being built.
            field_name: Name of the required field that was not supplied.
        """
        message = f"{config_name} requires field '{field_name}'"
        super().__init__(message)
        self.config_name = config_name
        self.field_name = field_name


class InvalidConfigError(ConstructionError, ValueError):
    """Raised when a config value is out of range or a field is unknown.

    Also a ValueError, matching how config dataclasses have always reported
    bad values from __post_init__.
    """

    def __init__(self, message: str = "Invalid configuration", field_name: str = "") -> None:
        """Initialize with details of the rejected field.

        Args:
            message: Error description.
            field_name: The offending field, if known.
        """
        super().__init__(message)
        self.field_name = field_name


class InvalidResponseError(ConstructionError):
    """Raised when a configured response cannot be understood.

    Raised while a null instance is being built, never later, so a bad
    canned response fails the test at its setup line.
    """

    def __init__(self, operation: str = "", reason: str = "") -> None:
        """Initialize with the operation whose response was rejected.

        Args:
            operation: Operation name the response was configured for.
            reason: Why the response was rejected.
        """
        message = f"Invalid configured response for '{operation}': {reason}"
        super().__init__(message)
        self.operation = operation
        self.reason = reason


class MixedModeGraphError(ConstructionError):
    """Raised when live and null components end up in one graph.

    A null graph must contain no live wrapper and a live graph must contain
    no stub.
    """

    def __init__(self, component: str = "", expected: str = "", actual: str = "") -> None:
        """Initialize with the component that broke the mode rule.

        Args:
            component: Name of the offending component or dependency.
            expected: Mode the graph is being built in.
            actual: Mode the component reports.
        """
        message = (
            f"Component '{component}' is {actual or 'unknown'} "
            f"but the graph is {expected or 'unknown'}"
        )
        super().__init__(message)
        self.component = component
        self.expected = expected
        self.actual = actual
