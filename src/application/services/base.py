"""Base class for application services.

An application service orchestrates infrastructure wrappers and pure domain
logic. It declares its dependencies and config type once:

    class CounterService(ApplicationService):
        CONFIG = CounterServiceConfig
        DEPENDENCIES = (
            Dependency("api", CounterApiClient, config_field="api"),
            Dependency("clock", Clock, config_field="clock"),
        )

        def __init__(self, api, clock, config=None, *, mode=None) -> None:
            super().__init__(config, mode=mode, api=api, clock=clock)
            ...

and inherits ``create``/``create_null``. Both read the same DEPENDENCIES
tuple, build every entry in their own mode from the matching config slice,
and pass the results to the constructor by name. Services may also be
constructed directly with hand-built dependencies.

Services hold no mutable state beyond their dependencies and do not catch
dependency errors unless an operation documents a named policy for it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, TypeVar

from src.config.loader import coerce_config
from src.infrastructure.nullability.component import Mode, NullableComponent
from src.infrastructure.nullability.graph import Dependency, build_dependencies
from src.infrastructure.observability.logging_mixin import LoggingMixin

ServiceT = TypeVar("ServiceT", bound="ApplicationService")


class ApplicationService(LoggingMixin, NullableComponent):
    """Shared create/create_null for application services.

    Attributes:
        CONFIG: Config dataclass the factories coerce their argument to.
        DEPENDENCIES: Declared dependencies, built in order.
    """

    CONFIG: ClassVar[type[Any]]
    DEPENDENCIES: ClassVar[tuple[Dependency, ...]] = ()

    def __init__(
        self,
        config: Any = None,
        *,
        mode: Mode | None = None,
        **dependencies: Any,
    ) -> None:
        """Wire the service.

        Args:
            config: Config instance or mapping (defaults when omitted).
            mode: Explicit mode; derived from the dependencies when omitted.
            **dependencies: Constructed dependencies by declared name.
        """
        self._config = coerce_config(self.CONFIG, config)
        self._wire(mode, dependencies)
        self._init_logger(layer="application", mode=self.mode.value)

    @classmethod
    def create(cls: type[ServiceT], config: Any = None) -> ServiceT:
        """Build the service and its whole dependency tree live."""
        return cls._build(config, Mode.LIVE)

    @classmethod
    def create_null(cls: type[ServiceT], config: Any = None) -> ServiceT:
        """Build the service and its whole dependency tree on embedded stubs."""
        return cls._build(config, Mode.NULL)

    @classmethod
    def _build(cls: type[ServiceT], config: Any, mode: Mode) -> ServiceT:
        resolved = coerce_config(cls.CONFIG, config)
        dependencies: Mapping[str, Any] = build_dependencies(cls.DEPENDENCIES, resolved, mode)
        service = cls(config=resolved, mode=mode, **dependencies)
        service._log.debug("component_created", dependencies=sorted(dependencies))
        return service

    @property
    def config(self) -> Any:
        return self._config
