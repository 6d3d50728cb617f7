"""Tests for LocalStagingArea."""

import pytest

from application.services.commit_engine.change_set import ChangeSetTracker
from application.services.commit_engine.errors import InvalidStagingPathError
from application.services.commit_engine.staging_area import LocalStagingArea


@pytest.fixture
def tracker():
    return ChangeSetTracker()


@pytest.fixture
def staging(tmp_path, tracker):
    return LocalStagingArea(str(tmp_path / "public"), tracker)


class TestWriteFile:
    """Test LocalStagingArea.write_file."""

    def test_write_marks_dirty(self, staging, tracker):
        path = staging.write_file("css/site.css", b"body {}")

        assert path == "css/site.css"
        assert "css/site.css" in tracker
        assert staging.read("css/site.css") == b"body {}"

    def test_write_normalizes_path(self, staging, tracker):
        path = staging.write_file("./docs/../index.html", b"<html>")

        assert path == "index.html"
        assert tracker.paths() == frozenset({"index.html"})

    def test_binary_content_round_trips(self, staging):
        payload = bytes(range(256))
        staging.write_file("img/logo.png", payload)
        assert staging.read("img/logo.png") == payload

    @pytest.mark.parametrize("bad_path", ["../escape.txt", "a/../../escape.txt", "/etc/passwd"])
    def test_path_traversal_rejected(self, staging, tracker, bad_path):
        with pytest.raises(InvalidStagingPathError):
            staging.write_file(bad_path, b"x")
        assert len(tracker) == 0

    def test_empty_path_rejected(self, staging):
        with pytest.raises(InvalidStagingPathError):
            staging.write_file("", b"x")


class TestReadAndDelete:
    """Test LocalStagingArea.read and delete_file."""

    def test_read_missing_returns_none(self, staging):
        assert staging.read("nope.txt") is None

    def test_read_directory_returns_none(self, staging):
        staging.write_file("dir/a.txt", b"a")
        assert staging.read("dir") is None

    def test_read_below_a_file_returns_none(self, staging):
        """A path whose parent directory was replaced by a file reads as missing."""
        staging.write_file("sub/b.txt", b"b")
        (staging.root / "sub" / "b.txt").unlink()
        (staging.root / "sub").rmdir()
        (staging.root / "sub").write_bytes(b"now a file")

        assert staging.read("sub/b.txt") is None

    def test_write_without_marking_dirty(self, staging, tracker):
        staging.write_file("synced.txt", b"s", mark_dirty=False)

        assert staging.read("synced.txt") == b"s"
        assert len(tracker) == 0

    def test_delete_marks_dirty(self, staging, tracker):
        staging.write_file("a.txt", b"a")
        tracker.clear()

        assert staging.delete_file("a.txt") is True
        assert staging.read("a.txt") is None
        assert "a.txt" in tracker

    def test_delete_missing(self, staging, tracker):
        assert staging.delete_file("a.txt") is False
        assert len(tracker) == 0


class TestListFiles:
    """Test LocalStagingArea.list_files."""

    def test_list_all_sorted(self, staging):
        staging.write_file("b.txt", b"")
        staging.write_file("a/c.html", b"")
        staging.write_file("a.txt", b"")

        assert staging.list_files() == ["a.txt", "a/c.html", "b.txt"]

    def test_list_directory_and_suffix(self, staging):
        staging.write_file("a/c.html", b"")
        staging.write_file("a/d.css", b"")
        staging.write_file("e.html", b"")

        assert staging.list_files(directory="a") == ["a/c.html", "a/d.css"]
        assert staging.list_files(suffix=".html") == ["a/c.html", "e.html"]
