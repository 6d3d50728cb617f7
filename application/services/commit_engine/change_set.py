"""Tracks which staged files changed since the last successful publish."""

import itertools
import threading
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Iterator, Mapping, Optional


@dataclass(frozen=True)
class ChangeSet:
    """Point-in-time copy of the tracker.

    ``generations`` records the mark counter each path had when the snapshot
    was taken, so clearing can skip paths that were marked again since.
    """

    paths: FrozenSet[str] = frozenset()
    generations: Mapping[str, int] = field(default_factory=dict)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.paths))

    def __len__(self) -> int:
        return len(self.paths)

    def __contains__(self, path: object) -> bool:
        return path in self.paths

    def restrict(self, paths: Iterable[str]) -> "ChangeSet":
        keep = self.paths.intersection(paths)
        return ChangeSet(keep, {path: self.generations[path] for path in keep})


class ChangeSetTracker:
    """Set of relative paths awaiting publication.

    Marking is idempotent. ``snapshot`` never clears. ``clear`` given a
    ChangeSet removes only paths not marked again since that snapshot.
    """

    def __init__(self, paths: Optional[Iterable[str]] = None) -> None:
        self._counter = itertools.count(1)
        self._paths: Dict[str, int] = {}
        self._lock = threading.Lock()
        for path in paths or ():
            self.mark_dirty(path)

    def mark_dirty(self, path: str) -> None:
        with self._lock:
            self._paths[path] = next(self._counter)

    def snapshot(self) -> ChangeSet:
        with self._lock:
            return ChangeSet(frozenset(self._paths), dict(self._paths))

    def clear(self, paths: Optional[Iterable[str]] = None) -> None:
        """Remove published paths.

        Args:
            paths: A ChangeSet (removes each path only if unchanged since the
                snapshot), any other iterable of paths (removed
                unconditionally), or None to empty the tracker.
        """
        with self._lock:
            if paths is None:
                self._paths.clear()
            elif isinstance(paths, ChangeSet):
                for path, generation in paths.generations.items():
                    if self._paths.get(path) == generation:
                        del self._paths[path]
            else:
                for path in paths:
                    self._paths.pop(path, None)

    def paths(self) -> FrozenSet[str]:
        with self._lock:
            return frozenset(self._paths)

    def __contains__(self, path: str) -> bool:
        with self._lock:
            return path in self._paths

    def __len__(self) -> int:
        with self._lock:
            return len(self._paths)
