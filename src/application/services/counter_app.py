"""Top-level counter application.

CounterApp is the root of the reference graph:

    CounterApp
    ├── counters: CounterService
    │   ├── api: CounterApiClient
    │   │   └── http: HttpClient
    │   └── clock: Clock
    ├── files: FileSystem
    └── clock: Clock

``CounterApp.create()`` builds all of it live and ``create_null()`` builds
all of it on embedded stubs. Every component owns its own dependencies;
nothing is shared between branches.

Report format (one header per run, one line per update):

    # run started 2026-01-01T00:00:00+00:00
    2026-01-01T00:00:00+00:00 visits 5 -> 10
"""

from __future__ import annotations

from collections.abc import Iterable

from src.application.dtos.counter_update import CounterUpdateDTO
from src.application.services.base import ApplicationService
from src.application.services.counter_service import CounterService
from src.config.app_config import AppConfig
from src.infrastructure.adapters.clock import Clock
from src.infrastructure.adapters.file_system import FileSystem
from src.infrastructure.nullability.component import Mode
from src.infrastructure.nullability.graph import Dependency
from src.infrastructure.observability.run_context import bound_run_id

RUN_HEADER_PREFIX = "# run started "


class CounterApp(ApplicationService):
    """Doubles batches of counters and keeps a report of every update.

    Usage:
        app = CounterApp.create(AppConfig.from_environment())
        await app.double_all(["visits", "signups"])

        app = CounterApp.create_null(
            {"counters": {"api": {"responses": {"load": 5}}}}
        )
    """

    CONFIG = AppConfig
    DEPENDENCIES = (
        Dependency("counters", CounterService, config_field="counters"),
        Dependency("files", FileSystem, config_field="files"),
        Dependency("clock", Clock, config_field="clock"),
    )

    def __init__(
        self,
        counters: CounterService,
        files: FileSystem,
        clock: Clock,
        config: AppConfig | None = None,
        *,
        mode: Mode | None = None,
    ) -> None:
        """Initialize the application.

        Args:
            counters: Counter service.
            files: File system holding the report.
            clock: Clock stamping run headers.
            config: App config (defaults when omitted).
            mode: Explicit mode; derived from the dependencies when omitted.
        """
        super().__init__(config, mode=mode, counters=counters, files=files, clock=clock)
        self._counters = counters
        self._files = files
        self._clock = clock

    @property
    def report_path(self) -> str:
        return self._config.report_path

    async def double_all(self, names: Iterable[str]) -> list[CounterUpdateDTO]:
        """Double each named counter in order, reporting every update.

        The first failure stops the run and propagates; updates already
        stored stay stored and stay in the report.

        Args:
            names: Counter names.

        Returns:
            One update per counter, in order.
        """
        with bound_run_id() as run_id:
            log = self._log_operation("double_all")
            started = self._clock.now()
            self._files.append_text(self.report_path, f"{RUN_HEADER_PREFIX}{started.isoformat()}\n")
            log.info("run_started", run_id=run_id, started_at=started.isoformat())

            updates: list[CounterUpdateDTO] = []
            for name in names:
                update = await self._counters.double(name)
                self._files.append_text(self.report_path, update.to_report_line() + "\n")
                updates.append(update)

            log.info("run_completed", updated=len(updates))
        return updates

    def read_report(self) -> list[str]:
        """Return the report's lines; empty when no report exists yet."""
        if not self._files.exists(self.report_path):
            return []
        return self._files.read_text(self.report_path).splitlines()
