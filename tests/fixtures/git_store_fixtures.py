"""
Test fixtures for commit engine tests.

Provides an in-memory stand-in for GitDataOperations that behaves like the
GitHub git database: content-addressed blobs and trees, base-tree layering,
and fast-forward-only ref updates.
"""

import hashlib
import itertools
import json
from typing import Awaitable, Callable, Dict, Iterable, List, Optional, Sequence
from unittest.mock import MagicMock

from application.services.github.api.errors import (
    ObjectNotFoundError,
    RefAlreadyExistsError,
    RefConflictError,
    RefNotFoundError,
)
from application.services.github.models.types import (
    CommitIdentity,
    CommitInfo,
    RemoteTreeEntry,
    TreeEntry,
)


def _sha(kind: str, payload: bytes) -> str:
    return hashlib.sha1(kind.encode() + b"\0" + payload).hexdigest()


class FakeGitDataOperations:
    """
    In-memory git object store.

    Attributes:
        calls: Names of every operation invoked, in order
        fail_on: Operation name -> exception raised on the next call
        before_ref_write: Async hook run once before update_ref/create_ref,
            used to simulate a concurrent writer
    """

    def __init__(self) -> None:
        self.client = MagicMock(owner="octo", repository_name="site", token="test-token")
        self.blobs: Dict[str, bytes] = {}
        self.trees: Dict[str, Dict[str, str]] = {}
        self.commits: Dict[str, CommitInfo] = {}
        self.refs: Dict[str, str] = {}
        self.calls: List[str] = []
        self.fail_on: Dict[str, Exception] = {}
        self.before_ref_write: Optional[Callable[[], Awaitable[None]]] = None
        self._counter = itertools.count(1)

    def _enter(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise self.fail_on.pop(name)

    async def _run_ref_hook(self) -> None:
        hook, self.before_ref_write = self.before_ref_write, None
        if hook is not None:
            await hook()

    async def get_ref(self, branch: str) -> str:
        self._enter("get_ref")
        if branch not in self.refs:
            raise RefNotFoundError(404, "Not Found")
        return self.refs[branch]

    async def get_commit(self, sha: str) -> CommitInfo:
        self._enter("get_commit")
        if sha not in self.commits:
            raise ObjectNotFoundError(404, "Not Found")
        return self.commits[sha]

    async def get_tree(self, sha: str, recursive: bool = True) -> List[RemoteTreeEntry]:
        self._enter("get_tree")
        return [
            RemoteTreeEntry(path=path, mode="100644", type="blob", sha=blob_sha)
            for path, blob_sha in sorted(self.trees[sha].items())
        ]

    async def get_blob(self, sha: str) -> bytes:
        self._enter("get_blob")
        if sha not in self.blobs:
            raise ObjectNotFoundError(404, "Not Found")
        return self.blobs[sha]

    async def create_blob(self, content: bytes) -> str:
        self._enter("create_blob")
        sha = _sha("blob", content)
        self.blobs[sha] = content
        return sha

    async def create_tree(self, entries: Iterable[TreeEntry], base_tree: Optional[str] = None) -> str:
        self._enter("create_tree")
        files = dict(self.trees[base_tree]) if base_tree else {}
        for entry in entries:
            assert entry.sha in self.blobs, f"unknown blob {entry.sha}"
            files[entry.path] = entry.sha
        sha = _sha("tree", json.dumps(sorted(files.items())).encode())
        self.trees[sha] = files
        return sha

    async def create_commit(
        self,
        message: str,
        tree_sha: str,
        parent_shas: Sequence[str],
        author: Optional[CommitIdentity] = None,
    ) -> str:
        self._enter("create_commit")
        assert tree_sha in self.trees, f"unknown tree {tree_sha}"
        payload = json.dumps([message, tree_sha, list(parent_shas), next(self._counter)])
        sha = _sha("commit", payload.encode())
        self.commits[sha] = CommitInfo(
            sha=sha, tree_sha=tree_sha, parent_shas=list(parent_shas), message=message
        )
        return sha

    async def update_ref(self, branch: str, sha: str, force: bool = False) -> None:
        self._enter("update_ref")
        await self._run_ref_hook()
        if branch not in self.refs:
            raise RefConflictError(422, "Reference does not exist")
        if not force and self.refs[branch] not in self.commits[sha].parent_shas:
            raise RefConflictError(422, "Update is not a fast forward")
        self.refs[branch] = sha

    async def create_ref(self, branch: str, sha: str) -> None:
        self._enter("create_ref")
        await self._run_ref_hook()
        if branch in self.refs:
            raise RefAlreadyExistsError(422, "Reference already exists")
        self.refs[branch] = sha

    # Helpers for arranging and inspecting state

    async def seed_commit(
        self, branch: str, files: Dict[str, bytes], message: str = "seed"
    ) -> str:
        """Commit ``files`` on top of ``branch`` outside of the engine."""
        parent = self.refs.get(branch)
        base_tree = self.commits[parent].tree_sha if parent else None
        entries = [
            TreeEntry(path=path, sha=await self.create_blob(content))
            for path, content in files.items()
        ]
        tree_sha = await self.create_tree(entries, base_tree=base_tree)
        sha = await self.create_commit(message, tree_sha, [parent] if parent else [])
        self.refs[branch] = sha
        self.calls.clear()
        return sha

    def files_at(self, commit_sha: str) -> Dict[str, bytes]:
        tree = self.trees[self.commits[commit_sha].tree_sha]
        return {path: self.blobs[blob_sha] for path, blob_sha in tree.items()}

    def write_calls(self) -> List[str]:
        return [
            name
            for name in self.calls
            if name in ("create_blob", "create_tree", "create_commit", "update_ref", "create_ref")
        ]


class DictFileReader:
    """FileReader backed by a dict; missing keys read as None."""

    def __init__(self, files: Optional[Dict[str, bytes]] = None) -> None:
        self.files = dict(files or {})

    def read(self, path: str) -> Optional[bytes]:
        return self.files.get(path)
