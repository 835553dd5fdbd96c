"""Counter service: read a counter, transform it, write it back.

Each operation is a logic sandwich:

1. read: ``CounterApiClient.load``
2. logic: a pure Counter transformation
3. write: ``CounterApiClient.store``

Failures from either infrastructure call propagate to the caller; nothing
is retried. A failed store leaves the remote counter at its old value.
"""

from __future__ import annotations

from collections.abc import Callable

from src.application.dtos.counter_update import CounterUpdateDTO
from src.application.services.base import ApplicationService
from src.config.app_config import CounterServiceConfig
from src.domain.models.counter import Counter
from src.infrastructure.adapters.clock import Clock
from src.infrastructure.adapters.counter_api import CounterApiClient
from src.infrastructure.nullability.component import Mode
from src.infrastructure.nullability.graph import Dependency


class CounterService(ApplicationService):
    """Applies domain transformations to remote counters.

    Usage:
        service = CounterService.create_null(
            {"api": {"responses": {"load": 5}}}
        )
        update = await service.double("visits")  # 5 -> 10
    """

    CONFIG = CounterServiceConfig
    DEPENDENCIES = (
        Dependency("api", CounterApiClient, config_field="api"),
        Dependency("clock", Clock, config_field="clock"),
    )

    def __init__(
        self,
        api: CounterApiClient,
        clock: Clock,
        config: CounterServiceConfig | None = None,
        *,
        mode: Mode | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            api: Counter API wrapper.
            clock: Clock stamping each update.
            config: Service config (defaults when omitted).
            mode: Explicit mode; derived from the dependencies when omitted.
        """
        super().__init__(config, mode=mode, api=api, clock=clock)
        self._api = api
        self._clock = clock

    async def double(self, name: str) -> CounterUpdateDTO:
        """Double a counter."""
        return await self._update("double", name, Counter.double)

    async def increment(self, name: str, by: int = 1) -> CounterUpdateDTO:
        """Add ``by`` to a counter."""
        return await self._update("increment", name, lambda counter: counter.increment(by))

    async def _update(
        self,
        operation: str,
        name: str,
        transform: Callable[[Counter], Counter],
    ) -> CounterUpdateDTO:
        log = self._log_operation(operation, counter=name)

        current = await self._api.load(name)
        updated = transform(current)
        await self._api.store(updated)

        update = CounterUpdateDTO(
            name=name, before=current.value, after=updated.value, at=self._clock.now()
        )
        log.info("counter_updated", before=update.before, after=update.after)
        return update
