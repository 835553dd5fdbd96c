"""Unit tests for FileSystem and its embedded StubbedDisk."""

from __future__ import annotations

import pytest

from src.domain.errors import InvalidResponseError
from src.domain.value_objects.state_event import StateEvent
from src.infrastructure.adapters.file_system import FileSystem, LocalDisk, StubbedDisk
from src.infrastructure.nullability.component import Mode


class TestFileSystemCreation:
    """Tests for the factories."""

    def test_create_null_with_no_arguments(self) -> None:
        files = FileSystem.create_null()

        assert files.mode is Mode.NULL
        assert isinstance(files._disk, StubbedDisk)

    def test_create_with_root(self) -> None:
        files = FileSystem.create({"root": "/var/lib/counters"})

        assert files.mode is Mode.LIVE
        assert files.root == "/var/lib/counters"
        assert isinstance(files._disk, LocalDisk)

    @pytest.mark.parametrize(
        "responses",
        [{"read_text": 1}, {"exists": "yes"}, {"delete": True}],
    )
    def test_create_null_rejects_bad_responses(self, responses: dict[str, object]) -> None:
        with pytest.raises(InvalidResponseError):
            FileSystem.create_null({"responses": responses})


class TestNullFileSystem:
    """Tests for the in-memory behaviour."""

    def test_seeded_files(self) -> None:
        files = FileSystem.create_null({"files": {"data/a.txt": "hello"}})

        assert files.exists("data/a.txt")
        assert files.read_text("data/a.txt") == "hello"
        assert files.read_text("./data/a.txt") == "hello"

    def test_missing_file_reads_empty(self) -> None:
        files = FileSystem.create_null()

        assert not files.exists("nope.txt")
        assert files.read_text("nope.txt") == ""

    def test_write_then_read(self) -> None:
        files = FileSystem.create_null()

        files.write_text("a.txt", "one")
        files.append_text("a.txt", " two")
        files.append_text("b.txt", "new")

        assert files.read_text("a.txt") == "one two"
        assert files.read_text("b.txt") == "new"

    def test_read_responses_override_files(self) -> None:
        """REPEAT_LAST: the file keeps its last configured content."""
        files = FileSystem.create_null(
            {
                "files": {"a.txt": "ignored"},
                "responses": {"read_text": {"kind": "sequence", "values": ["v1", "v2"]}},
            }
        )

        assert [files.read_text("a.txt") for _ in range(3)] == ["v1", "v2", "v2"]

    def test_configured_missing_file(self) -> None:
        files = FileSystem.create_null(
            {"responses": {"read_text": {"kind": "error", "error": FileNotFoundError("a.txt")}}}
        )

        with pytest.raises(FileNotFoundError):
            files.read_text("a.txt")

    def test_exists_responses(self) -> None:
        files = FileSystem.create_null({"responses": {"exists": False}})

        assert files.exists("a.txt") is False

        files.write_text("a.txt", "x")

        assert files.exists("a.txt") is True
        assert files.exists("b.txt") is False

    def test_written_files_take_precedence_over_read_responses(self) -> None:
        files = FileSystem.create_null({"responses": {"read_text": "canned"}})

        files.write_text("other.txt", "written")
        files.append_text("log.txt", "line\n")

        assert files.read_text("other.txt") == "written"
        assert files.read_text("./log.txt") == "line\n"
        assert files.read_text("untouched.txt") == "canned"

    def test_instances_do_not_share_files(self) -> None:
        config = {"files": {"a.txt": "seed"}}
        first = FileSystem.create_null(config)
        second = FileSystem.create_null(config)

        first.write_text("a.txt", "changed")

        assert second.read_text("a.txt") == "seed"


class TestTrackingAndEvents:
    """Tests for output tracking and state events."""

    def test_calls_are_tracked(self) -> None:
        files = FileSystem.create_null()
        tracker = files.track()

        files.write_text("a.txt", "x")
        files.read_text("a.txt")
        files.exists("a.txt")

        assert [call.operation for call in tracker] == ["write_text", "read_text", "exists"]
        assert tracker.last("write_text").arguments == {"path": "a.txt", "text": "x"}

    def test_written_event_before_return(self) -> None:
        files = FileSystem.create_null()
        seen: list[tuple[StateEvent, str]] = []
        files.on("file.written", lambda event: seen.append((event, files.read_text("a.txt"))))

        files.append_text("a.txt", "héllo")

        assert len(seen) == 1
        event, content_at_event = seen[0]
        assert event.payload == {"path": "a.txt", "bytes": 6, "append": True}
        assert content_at_event == "héllo"

    def test_reads_emit_nothing(self) -> None:
        files = FileSystem.create_null({"files": {"a.txt": "x"}})
        events: list[StateEvent] = []
        files.on("*", events.append)

        files.read_text("a.txt")
        files.exists("a.txt")

        assert events == []
