"""Unit tests for the per-file logging context."""

import logging
import threading
from pathlib import Path

from muxplan.logging.context import FileContextFilter, file_context, get_file_context


def _record() -> logging.LogRecord:
    return logging.LogRecord("muxplan", logging.INFO, __file__, 1, "msg", (), None)


class TestFileContext:
    """Tests for the file_context context manager."""

    def test_unset_by_default(self) -> None:
        assert get_file_context() is None

    def test_sets_and_restores(self) -> None:
        with file_context("/media/a.mkv"):
            assert get_file_context() == "/media/a.mkv"
        assert get_file_context() is None

    def test_path_object_converted(self) -> None:
        with file_context(Path("/media/a.mkv")):
            assert get_file_context() == "/media/a.mkv"

    def test_nested(self) -> None:
        with file_context("/media/outer.mkv"):
            with file_context("/media/inner.mkv"):
                assert get_file_context() == "/media/inner.mkv"
            assert get_file_context() == "/media/outer.mkv"

    def test_restored_after_exception(self) -> None:
        try:
            with file_context("/media/a.mkv"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert get_file_context() is None

    def test_isolated_between_threads(self) -> None:
        """Each thread sees only its own file."""
        seen: dict[str, str | None] = {}
        barrier = threading.Barrier(2)

        def worker(name: str) -> None:
            with file_context(f"/media/{name}.mkv"):
                barrier.wait()
                seen[name] = get_file_context()

        threads = [threading.Thread(target=worker, args=(n,)) for n in ("a", "b")]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert seen == {"a": "/media/a.mkv", "b": "/media/b.mkv"}


class TestFileContextFilter:
    """Tests for FileContextFilter."""

    def test_adds_file_fields(self) -> None:
        record = _record()
        with file_context("/media/Movies/Film.mkv"):
            assert FileContextFilter().filter(record) is True

        assert record.file_path == "/media/Movies/Film.mkv"
        assert record.file_tag == "[Film.mkv] "

    def test_no_context(self) -> None:
        record = _record()
        FileContextFilter().filter(record)

        assert record.file_path is None
        assert record.file_tag == ""
