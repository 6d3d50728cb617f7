"""Tests for the commit audit log."""

from datetime import datetime, timezone

from application.services.commit_engine.commit_log import CommitLogEntry, CommitLogRecorder


class TestCommitLogEntry:
    """Test CommitLogEntry.format."""

    def test_format(self):
        entry = CommitLogEntry(
            datetime(2026, 3, 1, 12, 30, 0, 123000, tzinfo=timezone.utc),
            "Update homepage",
            ["index.html", "css/site.css"],
        )

        assert entry.format() == (
            "2026-03-01T12:30:00.123Z - Committed changes: Update homepage"
            " - Files: index.html, css/site.css"
        )


class TestCommitLogRecorder:
    """Test CommitLogRecorder."""

    def test_record_creates_directory_and_appends(self, tmp_path):
        recorder = CommitLogRecorder(str(tmp_path / "logs"))

        assert recorder.record("first", ["a.txt"]) is True
        assert recorder.record("second", ["b.txt"]) is True

        lines = recorder.log_path.read_text().splitlines()
        assert len(lines) == 2
        assert "Committed changes: first - Files: a.txt" in lines[0]

    def test_multiline_message_written_as_one_line(self, tmp_path):
        recorder = CommitLogRecorder(str(tmp_path))
        recorder.record("title\n\nbody", ["a.txt"])

        assert len(recorder.log_path.read_text().splitlines()) == 1

    def test_unencodable_message_is_escaped(self, tmp_path):
        recorder = CommitLogRecorder(str(tmp_path))

        assert recorder.record("bad \ud800 message", ["a.txt"]) is True
        assert "bad \\ud800 message" in recorder.read_entries()[0]

    def test_record_failure_returns_false(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")

        assert CommitLogRecorder(str(blocker)).record("msg", ["a.txt"]) is False

    def test_read_entries_newest_first(self, tmp_path):
        recorder = CommitLogRecorder(str(tmp_path))
        for i in range(3):
            recorder.record(f"commit {i}", ["a.txt"])

        entries = recorder.read_entries(lines=2)

        assert len(entries) == 2
        assert "commit 2" in entries[0]
        assert "commit 1" in entries[1]

    def test_read_entries_search(self, tmp_path):
        recorder = CommitLogRecorder(str(tmp_path))
        recorder.record("docs", ["README.md"])
        recorder.record("site", ["index.html"])

        assert len(recorder.read_entries(search="index.html")) == 1

    def test_read_entries_missing_file(self, tmp_path):
        assert CommitLogRecorder(str(tmp_path)).read_entries() == []
