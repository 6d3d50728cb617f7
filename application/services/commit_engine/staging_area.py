"""
Local staging directory holding the files that will be published.

Every write or delete marks the path dirty in the injected tracker. Reads are
binary-safe and report a missing file as None.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

from application.services.commit_engine.change_set import ChangeSetTracker
from application.services.commit_engine.errors import InvalidStagingPathError

logger = logging.getLogger(__name__)


class LocalStagingArea:
    def __init__(self, root: str, tracker: ChangeSetTracker) -> None:
        self.root = Path(root).resolve()
        self.tracker = tracker
        self.root.mkdir(parents=True, exist_ok=True)

    def _resolve(self, path: str) -> Path:
        if not path:
            raise InvalidStagingPathError("Missing filename")
        target = (self.root / path).resolve()
        if target != self.root and self.root not in target.parents:
            raise InvalidStagingPathError(f"Invalid filename: path traversal not allowed ({path})")
        return target

    def _relative(self, target: Path) -> str:
        return target.relative_to(self.root).as_posix()

    def write_file(self, path: str, content: bytes, mark_dirty: bool = True) -> str:
        """Write ``content`` to ``path``. Returns the normalized path.

        The path is marked dirty unless ``mark_dirty`` is False (used when the
        content already matches the published branch).
        """
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
        relative = self._relative(target)
        if mark_dirty:
            self.tracker.mark_dirty(relative)
        logger.debug(f"Staged {relative} ({len(content)} bytes)")
        return relative

    def read(self, path: str) -> Optional[bytes]:
        target = self._resolve(path)
        try:
            return target.read_bytes()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            return None

    def delete_file(self, path: str) -> bool:
        """Remove a staged file. Returns False if it did not exist."""
        target = self._resolve(path)
        if not target.is_file():
            return False
        target.unlink()
        self.tracker.mark_dirty(self._relative(target))
        return True

    def list_files(self, directory: Optional[str] = None, suffix: Optional[str] = None) -> List[str]:
        """List staged files (relative, posix-style), optionally under ``directory``."""
        start = self._resolve(directory) if directory else self.root
        results = []
        for dirpath, _dirnames, filenames in os.walk(start):
            for name in filenames:
                relative = self._relative(Path(dirpath) / name)
                if not suffix or relative.endswith(suffix):
                    results.append(relative)
        return sorted(results)
