"""Tests for the CommitService facade."""

import asyncio
from unittest.mock import patch

import pytest

from application.services.commit_engine import commit_service as commit_service_module
from application.services.commit_engine.commit_service import CommitService, get_commit_service
from application.services.commit_engine.models import PublishStatus
from application.services.github.models.types import CommitIdentity
from tests.fixtures.git_store_fixtures import FakeGitDataOperations


@pytest.fixture
def git_data():
    return FakeGitDataOperations()


@pytest.fixture
def service(git_data, tmp_path):
    return CommitService(
        git_data=git_data,
        staging_dir=str(tmp_path / "public"),
        logs_dir=str(tmp_path / "logs"),
        branch="main",
        cycle_timeout=5,
    )


class TestPublish:
    """Test CommitService.publish."""

    @pytest.mark.asyncio
    async def test_stage_and_publish(self, service, git_data):
        service.write_file("index.html", b"<h1>hi</h1>")
        service.write_file("css/site.css", b"h1 {}")

        result = await service.publish("Initial site")

        assert result.status == PublishStatus.COMMITTED
        assert git_data.files_at(result.commit_sha) == {
            "index.html": b"<h1>hi</h1>",
            "css/site.css": b"h1 {}",
        }
        assert service.pending_changes() == []
        assert service.commits_made == 1
        assert len(service.read_commit_log()) == 1

    @pytest.mark.asyncio
    async def test_nothing_to_publish_does_not_count(self, service, git_data):
        result = await service.publish("noop")

        assert result.status == PublishStatus.NOTHING_TO_PUBLISH
        assert service.commits_made == 0
        assert git_data.calls == []

    @pytest.mark.asyncio
    async def test_concurrent_publishes_are_serialized(self, service, git_data):
        """Two overlapping publishes never race each other on the ref."""
        service.write_file("a.txt", b"A")
        service.write_file("b.txt", b"B")

        first, second = await asyncio.gather(service.publish("one"), service.publish("two"))

        statuses = sorted([first.status.value, second.status.value])
        assert statuses == ["committed", "nothing_to_publish"]
        assert "create_ref" in git_data.calls
        assert "update_ref" not in git_data.calls

    @pytest.mark.asyncio
    async def test_author_from_constructor(self, git_data, tmp_path):
        author = CommitIdentity("Site Bot", "bot@example.com")
        service = CommitService(
            git_data=git_data,
            staging_dir=str(tmp_path),
            logs_dir=str(tmp_path),
            author=author,
        )

        assert service.cycle.publisher.author == author


class TestFilesAndStatus:
    """Test staging passthroughs and status reporting."""

    def test_delete_marks_pending(self, service):
        service.write_file("a.txt", b"A")
        service.tracker.clear()

        assert service.delete_file("a.txt") is True
        assert service.pending_changes() == ["a.txt"]
        assert service.read_file("a.txt") is None

    def test_list_files(self, service):
        service.write_file("a.html", b"")
        service.write_file("b.css", b"")
        assert service.list_files(suffix=".html") == ["a.html"]

    def test_status(self, service):
        service.write_file("a.txt", b"A")

        status = service.status()

        assert status.pop("uptime") == "0h 0m"
        assert status.pop("uptime_seconds") == 0
        assert status == {
            "repo": "octo/site",
            "branch": "main",
            "git_connected": True,
            "pending_changes": 1,
            "commits_made": 0,
            "requests_served": 0,
            "publish_in_progress": False,
        }

    def test_status_uptime_and_requests(self, service):
        service.started_at -= 2 * 3600 + 5 * 60 + 7
        service.record_request()
        service.record_request()

        status = service.status()

        assert status["uptime"] == "2h 5m"
        assert status["uptime_seconds"] == 7507
        assert status["requests_served"] == 2

    @pytest.mark.asyncio
    async def test_diff(self, service, git_data):
        await git_data.seed_commit("main", {"old.txt": b"x"})
        service.write_file("new.txt", b"n")

        result = await service.diff()

        assert result.added == ["new.txt"]
        assert result.deleted == ["old.txt"]


class TestRemoteSync:
    """Test sync_from_remote and latest_commit."""

    @pytest.mark.asyncio
    async def test_sync_then_publish_is_a_noop(self, service, git_data):
        await git_data.seed_commit("main", {"index.html": b"<h1>remote</h1>"})

        result = await service.sync_from_remote()

        assert result.synced == ["index.html"]
        assert service.read_file("index.html") == b"<h1>remote</h1>"
        assert service.pending_changes() == []
        assert (await service.publish("noop")).status == PublishStatus.NOTHING_TO_PUBLISH

    @pytest.mark.asyncio
    async def test_latest_commit_empty_repository(self, service):
        assert await service.latest_commit() is None

    @pytest.mark.asyncio
    async def test_latest_commit_after_publish(self, service, git_data):
        service.write_file("a.txt", b"A")
        published = await service.publish("first")

        commit = await service.latest_commit()

        assert commit.sha == published.commit_sha
        assert commit.message == "first"


class TestGetCommitService:
    """Test get_commit_service singleton."""

    def test_returns_same_instance(self):
        with patch.object(commit_service_module, "_commit_service", None), patch.object(
            commit_service_module, "CommitService"
        ) as mock_cls:
            first = get_commit_service()
            second = get_commit_service()

        assert first is second
        mock_cls.assert_called_once_with()
