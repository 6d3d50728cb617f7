"""
Append-only audit log of published commits.

One line per publish:
    2026-01-01T12:00:00.000Z - Committed changes: <message> - Files: a.txt, b.txt
"""

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from common.config.config import LOGS_DIR
from common.constants import COMMIT_LOG_DEFAULT_LINES, COMMIT_LOG_FILENAME

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommitLogEntry:
    timestamp: datetime
    message: str
    files: List[str]

    def format(self) -> str:
        stamp = self.timestamp.astimezone(timezone.utc).isoformat(timespec="milliseconds")
        stamp = stamp.replace("+00:00", "Z")
        return f"{stamp} - Committed changes: {self.message} - Files: {', '.join(self.files)}"


class CommitLogRecorder:
    def __init__(self, logs_dir: Optional[str] = None, filename: str = COMMIT_LOG_FILENAME):
        self.log_path = Path(logs_dir or LOGS_DIR) / filename

    def record(self, message: str, paths: Iterable[str]) -> bool:
        """Append one audit line.

        Never raises: a write failure is logged as a warning and reported by
        returning False, since the commit has already landed remotely.
        """
        entry = CommitLogEntry(datetime.now(timezone.utc), message, list(paths))
        # Messages are single-line in the log; unencodable characters are escaped
        line = entry.format().replace("\n", " ")
        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_path, "a", encoding="utf-8", errors="backslashreplace") as fh:
                fh.write(line + "\n")
        except OSError as e:
            logger.warning(f"⚠️ Failed to write commit log {self.log_path}: {e}")
            return False
        return True

    def read_entries(
        self, lines: int = COMMIT_LOG_DEFAULT_LINES, search: Optional[str] = None
    ) -> List[str]:
        """Return up to ``lines`` log lines, newest first, optionally filtered."""
        if not os.path.exists(self.log_path):
            return []
        with open(self.log_path, "r", encoding="utf-8") as fh:
            entries = [line.rstrip("\n") for line in fh if line.strip()]
        entries.reverse()
        entries = entries[:lines]
        if search:
            entries = [line for line in entries if search in line]
        return entries
