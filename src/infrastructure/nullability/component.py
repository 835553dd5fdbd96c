"""Base class for every component with a live and a null construction path.

A NullableComponent is built by one of two classmethod factories:

- ``create(config=None)``: live mode, talks to the real outside world
- ``create_null(config=None)``: null mode, fully wired onto embedded stubs

The component remembers which mode it was built in and the dependencies it
was wired with. Wiring happens once, in the constructor, and is never
re-resolved afterwards.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import Enum
from typing import Any

from src.domain.errors.construction import MixedModeGraphError


class Mode(str, Enum):
    """Construction mode of a component graph."""

    LIVE = "live"
    NULL = "null"


class NullableComponent(ABC):
    """A component that exposes ``create`` and ``create_null``.

    Subclasses call ``_wire()`` from their constructor. The mode is either
    given explicitly (leaf wrappers know whether they hold a real client or
    a stub) or derived from the dependencies, which must all agree.
    """

    _mode: Mode
    _dependencies: dict[str, Any]

    def _wire(
        self,
        mode: Mode | None = None,
        dependencies: Mapping[str, Any] | None = None,
    ) -> None:
        """Record mode and dependencies, rejecting mixed-mode wiring.

        Args:
            mode: Explicit mode, or None to derive it from the dependencies
                (live when there are none).
            dependencies: Constructed dependencies by constructor name.

        Raises:
            MixedModeGraphError: If a dependency's mode differs from the
                component's.
        """
        wired = dict(dependencies or {})
        modes = {
            name: dependency.mode
            for name, dependency in wired.items()
            if isinstance(dependency, NullableComponent)
        }
        if mode is None:
            mode = next(iter(modes.values()), Mode.LIVE)
        for name, dependency_mode in modes.items():
            if dependency_mode is not mode:
                raise MixedModeGraphError(
                    f"{type(self).__name__}.{name}", mode.value, dependency_mode.value
                )
        self._mode = mode
        self._dependencies = wired

    @property
    def mode(self) -> Mode:
        """Mode this component was constructed in."""
        return self._mode

    @property
    def is_null(self) -> bool:
        return self._mode is Mode.NULL

    def dependencies(self) -> dict[str, Any]:
        """Return the wired dependencies by constructor name (a copy)."""
        return dict(self._dependencies)

    @classmethod
    @abstractmethod
    def create(cls, config: Any = None) -> NullableComponent:
        """Build a production instance; must work with no arguments."""
        ...

    @classmethod
    @abstractmethod
    def create_null(cls, config: Any = None) -> NullableComponent:
        """Build a deterministic in-memory instance; must work with no arguments."""
        ...
