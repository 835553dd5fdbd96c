"""Construction graph helpers.

There is no graph object. The graph is what you get when every factory
builds its declared dependencies in its own mode and passes them to its
constructor. Components declare those dependencies once, as a tuple of
Dependency entries, and the live and null builders both read that tuple:

    class CounterService(ApplicationService):
        CONFIG = CounterServiceConfig
        DEPENDENCIES = (
            Dependency("api", CounterApiClient, config_field="api"),
            Dependency("clock", Clock, config_field="clock"),
        )

walk_graph() and verify_graph_mode() inspect a built graph afterwards.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from structlog import get_logger

from src.domain.errors.construction import MixedModeGraphError
from src.infrastructure.nullability.component import Mode, NullableComponent

logger = get_logger()


@dataclass(frozen=True)
class Dependency:
    """A dependency declared by a composite component.

    Attributes:
        name: Constructor keyword the built dependency is passed as.
        factory: Component class exposing ``create`` and ``create_null``.
        config_field: Attribute of the parent's config holding the
            dependency's config slice; None builds it with defaults.
    """

    name: str
    factory: type[NullableComponent]
    config_field: str | None = None


def build_dependencies(
    dependencies: Iterable[Dependency], config: Any, mode: Mode
) -> dict[str, Any]:
    """Build each declared dependency in ``mode``.

    Dependency factory errors propagate unmodified.

    Args:
        dependencies: Declarations, built in order.
        config: The parent's resolved config; slices are read from it.
        mode: Mode every dependency is built in.

    Returns:
        Built dependencies by constructor keyword.

    Raises:
        MixedModeGraphError: If a factory returns a component in the wrong
            mode.
    """
    built: dict[str, Any] = {}
    for dependency in dependencies:
        child_config = (
            getattr(config, dependency.config_field) if dependency.config_field else None
        )
        if mode is Mode.NULL:
            instance = dependency.factory.create_null(child_config)
        else:
            instance = dependency.factory.create(child_config)

        actual = getattr(instance, "mode", None)
        if actual is not mode:
            raise MixedModeGraphError(
                dependency.name,
                mode.value,
                actual.value if isinstance(actual, Mode) else repr(actual),
            )
        built[dependency.name] = instance
    return built


def walk_graph(root: NullableComponent) -> Iterator[tuple[str, NullableComponent]]:
    """Yield ``(path, component)`` for every nullable component in the graph.

    Depth-first, parents before children. Paths are dotted, starting at the
    root's class name (``CounterApp.counters.api.http``).

    Args:
        root: Top of the graph.

    Yields:
        Each component with its path.
    """
    seen: set[int] = set()
    stack: list[tuple[str, NullableComponent]] = [(type(root).__name__, root)]
    while stack:
        path, component = stack.pop()
        if id(component) in seen:
            continue
        seen.add(id(component))
        yield path, component
        children = [
            (f"{path}.{name}", child)
            for name, child in component.dependencies().items()
            if isinstance(child, NullableComponent)
        ]
        stack.extend(reversed(children))


def verify_graph_mode(root: NullableComponent, mode: Mode | None = None) -> int:
    """Check that every component in the graph shares one mode.

    Args:
        root: Top of the graph.
        mode: Expected mode; defaults to the root's.

    Returns:
        Number of components checked.

    Raises:
        MixedModeGraphError: Naming the first component in the wrong mode.
    """
    expected = mode or root.mode
    checked = 0
    for path, component in walk_graph(root):
        checked += 1
        if component.mode is not expected:
            raise MixedModeGraphError(path, expected.value, component.mode.value)
    logger.debug("graph_mode_verified", root=type(root).__name__, mode=expected.value, components=checked)
    return checked
