"""Live FileSystem against a temporary directory vs. the in-memory stub."""

from __future__ import annotations

from pathlib import Path

import pytest

from src.infrastructure.adapters.file_system import FileSystem

pytestmark = pytest.mark.integration


class TestFileSystemLiveMatchesNull:
    """FileSystem.create() rooted at tmp_path vs. create_null()."""

    def _exercise(self, files: FileSystem) -> list[object]:
        observed: list[object] = [files.exists("reports/run.log")]
        files.write_text("reports/run.log", "first\n")
        files.append_text("reports/run.log", "second\n")
        observed.append(files.exists("reports/run.log"))
        observed.append(files.read_text("reports/run.log"))
        return observed

    def test_same_observations(self, tmp_path: Path) -> None:
        live = FileSystem.create({"root": str(tmp_path)})
        null = FileSystem.create_null()

        assert self._exercise(live) == self._exercise(null) == [
            False,
            True,
            "first\nsecond\n",
        ]
        assert (tmp_path / "reports" / "run.log").read_text(encoding="utf-8") == "first\nsecond\n"
        assert live.track().all() == null.track().all()

    def test_missing_file_shape(self, tmp_path: Path) -> None:
        live = FileSystem.create({"root": str(tmp_path)})
        null = FileSystem.create_null(
            {"responses": {"read_text": {"kind": "error", "error": FileNotFoundError}}}
        )

        for files in (live, null):
            with pytest.raises(FileNotFoundError):
                files.read_text("absent.txt")

    def test_written_events_match(self, tmp_path: Path) -> None:
        payloads: dict[str, list[dict[str, object]]] = {"live": [], "null": []}
        live = FileSystem.create({"root": str(tmp_path)})
        null = FileSystem.create_null()
        live.on("file.written", lambda event: payloads["live"].append(dict(event.payload)))
        null.on("file.written", lambda event: payloads["null"].append(dict(event.payload)))

        for files in (live, null):
            files.append_text("a.txt", "ü")

        assert payloads["live"] == payloads["null"] == [
            {"path": "a.txt", "bytes": 2, "append": True}
        ]
