"""A write-ahead log that appends entries to a file."""

from __future__ import annotations

import asyncio
import os


class WriteAheadLogService:
    """Appends log entries, one per line, to the end of a log file."""

    def __init__(self, log_file_path: str | os.PathLike[str]) -> None:
        self.log_file_path = os.fspath(log_file_path)
        self._lock = asyncio.Lock()

    def _write(self, entry: str) -> None:
        with open(self.log_file_path, "a", encoding="utf-8") as log_file:
            log_file.write(entry + "\n")
            log_file.flush()
            os.fsync(log_file.fileno())

    async def append(self, entry: str) -> None:
        """Append ``entry`` to the end of the log file and flush it to disk."""
        async with self._lock:
            await asyncio.to_thread(self._write, entry)