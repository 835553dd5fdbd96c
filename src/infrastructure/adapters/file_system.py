"""File system wrapper.

FileSystem is the only code that reads or writes files. Live instances hold
LocalDisk, a thin pathlib client rooted at ``config.root``; null instances
hold StubbedDisk, an in-memory file table seeded from ``config.files``.

Null behaviour:
- ``write_text`` and ``append_text`` update the in-memory table
- a path written through the stub reads back what was written and exists,
  whatever responses are configured
- any other ``read_text`` serves the configured ``read_text`` response when
  present, otherwise the seeded file, otherwise ``""``
- any other ``exists`` serves the configured ``exists`` response when
  present, otherwise whether a file was seeded at the path

A null read never fails unless an error response is configured, so
``{"read_text": {"kind": "error", "error": FileNotFoundError("x")}}`` is how
a test asks for the live failure shape.

Exhaustion policy: REPEAT_LAST. Once a read sequence is used up the file
keeps its last configured content, which is how a file on disk behaves.

State events:
- ``file.written`` ``{"path", "bytes", "append"}`` after every write
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path, PurePosixPath
from typing import Any, Protocol

from src.config.infrastructure_config import FileSystemConfig
from src.config.loader import coerce_config
from src.domain.errors.construction import InvalidResponseError
from src.domain.value_objects.configurable_response import ExhaustionPolicy
from src.infrastructure.nullability.responses import ConfigurableResponses
from src.infrastructure.nullability.wrapper import InfrastructureWrapper

ENCODING = "utf-8"

_RESPONSE_TYPES: dict[str, type] = {"read_text": str, "exists": bool}


def _validate_response(operation: str, value: Any) -> None:
    expected = _RESPONSE_TYPES[operation]
    if not isinstance(value, expected):
        raise InvalidResponseError(
            operation, f"expected {expected.__name__}, got {type(value).__name__}"
        )


class Disk(Protocol):
    """Capability interface shared by LocalDisk and StubbedDisk."""

    def read_text(self, path: str) -> str: ...

    def write_text(self, path: str, text: str) -> None: ...

    def append_text(self, path: str, text: str) -> None: ...

    def exists(self, path: str) -> bool: ...


class LocalDisk:
    """Real disk access below a root directory."""

    def __init__(self, root: str) -> None:
        self._root = Path(root)

    def _resolve(self, path: str) -> Path:
        return self._root / path

    def read_text(self, path: str) -> str:
        return self._resolve(path).read_text(encoding=ENCODING)

    def write_text(self, path: str, text: str) -> None:
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding=ENCODING)

    def append_text(self, path: str, text: str) -> None:
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("a", encoding=ENCODING) as handle:
            handle.write(text)

    def exists(self, path: str) -> bool:
        return self._resolve(path).exists()


class StubbedDisk:
    """Embedded in-memory stand-in for LocalDisk."""

    EXHAUSTION = ExhaustionPolicy.REPEAT_LAST

    def __init__(
        self,
        files: Mapping[str, str] | None = None,
        responses: Mapping[str, Any] | None = None,
    ) -> None:
        """Initialize the stub.

        Args:
            files: Initial file contents by path.
            responses: Canned ``read_text`` / ``exists`` responses.
        """
        self._files = {self._key(path): text for path, text in (files or {}).items()}
        self._written: set[str] = set()
        self._responses = ConfigurableResponses(
            responses,
            exhaustion=self.EXHAUSTION,
            operations=("read_text", "exists"),
            validate=_validate_response,
            owner=type(self).__name__,
        )

    @staticmethod
    def _key(path: str) -> str:
        return str(PurePosixPath(path))

    def read_text(self, path: str) -> str:
        key = self._key(path)
        if key not in self._written and self._responses.is_configured("read_text"):
            return self._responses.next("read_text")
        return self._files.get(key, "")

    def write_text(self, path: str, text: str) -> None:
        key = self._key(path)
        self._files[key] = text
        self._written.add(key)

    def append_text(self, path: str, text: str) -> None:
        key = self._key(path)
        self._files[key] = self._files.get(key, "") + text
        self._written.add(key)

    def exists(self, path: str) -> bool:
        key = self._key(path)
        if key not in self._written and self._responses.is_configured("exists"):
            return self._responses.next("exists")
        return key in self._files


class FileSystem(InfrastructureWrapper):
    """Wrapper for text file access.

    Usage:
        files = FileSystem.create({"root": "/var/lib/counters"})
        files.append_text("report.log", "line\\n")

        files = FileSystem.create_null({"files": {"report.log": "old\\n"}})
    """

    def __init__(
        self,
        disk: Disk,
        config: FileSystemConfig | None = None,
        *,
        null: bool = False,
    ) -> None:
        """Initialize with a real or stubbed disk.

        Args:
            disk: LocalDisk or StubbedDisk.
            config: Resolved config (defaults when omitted).
            null: True when ``disk`` is the embedded stub.
        """
        super().__init__(null=null)
        self._disk = disk
        self._config = config or FileSystemConfig()

    @classmethod
    def create(
        cls, config: FileSystemConfig | Mapping[str, Any] | None = None
    ) -> FileSystem:
        """Build a live file system rooted at ``config.root``."""
        resolved = cls._live_config(FileSystemConfig, config)
        return cls(LocalDisk(resolved.root), resolved)

    @classmethod
    def create_null(
        cls, config: FileSystemConfig | Mapping[str, Any] | None = None
    ) -> FileSystem:
        """Build an in-memory file system seeded from ``config.files``."""
        resolved = coerce_config(FileSystemConfig, config)
        return cls(StubbedDisk(resolved.files, resolved.responses), resolved, null=True)

    @property
    def root(self) -> str:
        return self._config.root

    def read_text(self, path: str) -> str:
        """Read a whole file as UTF-8 text.

        Raises:
            FileNotFoundError: Live mode, when the file does not exist.
        """
        self._record("read_text", path=path)
        return self._disk.read_text(path)

    def write_text(self, path: str, text: str) -> None:
        """Replace a file's content, creating parent directories."""
        self._record("write_text", path=path, text=text)
        self._disk.write_text(path, text)
        self._written(path, text, append=False)

    def append_text(self, path: str, text: str) -> None:
        """Append to a file, creating it when missing."""
        self._record("append_text", path=path, text=text)
        self._disk.append_text(path, text)
        self._written(path, text, append=True)

    def exists(self, path: str) -> bool:
        self._record("exists", path=path)
        return self._disk.exists(path)

    def _written(self, path: str, text: str, *, append: bool) -> None:
        size = len(text.encode(ENCODING))
        self._log_operation("append_text" if append else "write_text", path=path).debug(
            "file_written", bytes=size
        )
        self._emit("file.written", path=path, bytes=size, append=append)
