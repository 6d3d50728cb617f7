"""Maps the dirty file set onto blobs and one layered tree."""

import logging
from typing import Callable, Iterable, List, Optional

from application.services.commit_engine.errors import (
    MissingStagedFileError,
    NothingToPublish,
    StagedFileReadError,
)
from application.services.commit_engine.models import (
    FileReader,
    MissingFilePolicy,
    PublishPhase,
    StagedFiles,
    TreeBuildResult,
)
from application.services.github.api.git_data import GitDataOperations
from application.services.github.models.types import TreeEntry

logger = logging.getLogger(__name__)


class TreeBuilder:
    def __init__(
        self,
        git_data: GitDataOperations,
        missing_file_policy: MissingFilePolicy = MissingFilePolicy.SKIP,
    ) -> None:
        self.git_data = git_data
        self.missing_file_policy = MissingFilePolicy(missing_file_policy)

    def collect(self, change_set: Iterable[str], file_reader: FileReader) -> StagedFiles:
        """Read every dirty path. Makes no remote call.

        Raises:
            NothingToPublish: If no path has a staged file
            MissingStagedFileError: Under the FAIL policy, for the first missing path
            StagedFileReadError: If a staged file exists but cannot be read
        """
        present = []
        skipped = []
        for path in sorted(change_set):
            try:
                content = file_reader.read(path)
            except OSError as e:
                raise StagedFileReadError(path, e.strerror or str(e)) from e
            if content is None:
                if self.missing_file_policy == MissingFilePolicy.FAIL:
                    raise MissingStagedFileError(path)
                logger.info(f"Skipping '{path}': staged file no longer exists")
                skipped.append(path)
                continue
            present.append((path, content))

        if not present:
            raise NothingToPublish(skipped)
        return StagedFiles(files=tuple(present), skipped=frozenset(skipped))

    async def write(
        self,
        base_tree_sha: Optional[str],
        staged: StagedFiles,
        on_phase: Optional[Callable[[PublishPhase], None]] = None,
    ) -> TreeBuildResult:
        """Upload one blob per staged file, then write a single tree for them.

        All entries go into one create-tree call so the resulting commit
        updates every file at once. Without a base tree the entries form a
        standalone root tree.
        """
        entries: List[TreeEntry] = []
        for path, content in staged.files:
            blob_sha = await self.git_data.create_blob(content)
            entries.append(TreeEntry(path=path, sha=blob_sha))

        if on_phase:
            on_phase(PublishPhase.TREE)
        tree_sha = await self.git_data.create_tree(entries, base_tree=base_tree_sha)

        base_label = f"base {base_tree_sha}" if base_tree_sha else "no base (root tree)"
        logger.info(f"Created tree {tree_sha} with {len(entries)} entries on {base_label}")
        return TreeBuildResult(tree_sha=tree_sha, entries=tuple(entries), skipped=staged.skipped)

    async def build_tree(
        self,
        base_tree_sha: Optional[str],
        change_set: Iterable[str],
        file_reader: FileReader,
    ) -> TreeBuildResult:
        """Read the dirty files and write them as one tree on ``base_tree_sha``.

        Raises:
            NothingToPublish: If no path has a staged file (no remote call is made)
            MissingStagedFileError: Under the FAIL policy
        """
        return await self.write(base_tree_sha, self.collect(change_set, file_reader))
