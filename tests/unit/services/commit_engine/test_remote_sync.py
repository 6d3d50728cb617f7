"""Tests for RemoteSync."""

import pytest

from application.services.commit_engine.change_set import ChangeSetTracker
from application.services.commit_engine.remote_sync import RemoteSync
from application.services.commit_engine.snapshot_resolver import SnapshotResolver
from application.services.commit_engine.staging_area import LocalStagingArea
from tests.fixtures.git_store_fixtures import FakeGitDataOperations


@pytest.fixture
def git_data():
    return FakeGitDataOperations()


@pytest.fixture
def tracker():
    return ChangeSetTracker()


@pytest.fixture
def staging(tmp_path, tracker):
    return LocalStagingArea(str(tmp_path / "public"), tracker)


@pytest.fixture
def remote_sync(git_data, tracker, staging):
    return RemoteSync(git_data, SnapshotResolver(git_data, "main"), staging, tracker)


class TestPull:
    """Test RemoteSync.pull."""

    @pytest.mark.asyncio
    async def test_empty_repository_syncs_nothing(self, remote_sync, staging, git_data):
        result = await remote_sync.pull()

        assert result.synced == []
        assert result.to_dict()["head_sha"] is None
        assert staging.list_files() == []
        assert "get_tree" not in git_data.calls

    @pytest.mark.asyncio
    async def test_downloads_files_without_marking_dirty(self, remote_sync, staging, tracker, git_data):
        head = await git_data.seed_commit(
            "main", {"index.html": b"<h1>hi</h1>", "img/logo.png": b"\x89PNG"}
        )

        result = await remote_sync.pull()

        assert result.head_sha == head
        assert sorted(result.synced) == ["img/logo.png", "index.html"]
        assert staging.read("img/logo.png") == b"\x89PNG"
        assert len(tracker) == 0

    @pytest.mark.asyncio
    async def test_locally_modified_paths_are_kept(self, remote_sync, staging, tracker, git_data):
        await git_data.seed_commit("main", {"a.txt": b"remote", "b.txt": b"remote"})
        staging.write_file("a.txt", b"local edit")

        result = await remote_sync.pull()

        assert result.kept == ["a.txt"]
        assert result.synced == ["b.txt"]
        assert staging.read("a.txt") == b"local edit"
        assert tracker.paths() == frozenset({"a.txt"})
        assert git_data.calls.count("get_blob") == 1

    @pytest.mark.asyncio
    async def test_prefix_is_stripped(self, remote_sync, staging, git_data):
        await git_data.seed_commit("main", {"public/index.html": b"i", "README.md": b"r"})

        result = await remote_sync.pull("public/")

        assert result.synced == ["index.html"]
        assert staging.list_files() == ["index.html"]

    @pytest.mark.asyncio
    async def test_unsafe_remote_path_is_skipped(self, remote_sync, staging, git_data):
        await git_data.seed_commit("main", {"../outside.txt": b"x", "ok.txt": b"y"})

        result = await remote_sync.pull()

        assert result.synced == ["ok.txt"]
        assert staging.list_files() == ["ok.txt"]
