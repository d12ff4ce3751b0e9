"""
Local filesystem backend.

Implements the FileSystem protocol with pathlib and plain file handles.
"""

from __future__ import annotations

import contextlib
import stat as stat_module
from collections.abc import Iterator
from datetime import UTC, datetime
from pathlib import Path

from cc_transcript.storage.protocol import FileStat


class LocalFileSystem:
    """Local filesystem backend (read-only)."""

    def list_directory(self, path: Path) -> list[str]:
        """
        List entry names in a directory, sorted for deterministic scans.

        Args:
            path: Directory to list

        Returns:
            Entry names (not full paths)
        """
        return sorted(entry.name for entry in path.iterdir())

    def stat(self, path: Path) -> FileStat:
        """
        Stat a path.

        Args:
            path: Path to stat

        Returns:
            FileStat with type flags, mtime (UTC) and size
        """
        result = path.stat()
        return FileStat(
            is_file=stat_module.S_ISREG(result.st_mode),
            is_directory=stat_module.S_ISDIR(result.st_mode),
            modified_time=datetime.fromtimestamp(result.st_mtime, UTC),
            size_bytes=result.st_size,
        )

    @contextlib.contextmanager
    def open_lines(self, path: Path) -> Iterator[Iterator[str]]:
        """
        Open a UTF-8 text file for line iteration.

        Invalid UTF-8 sequences are replaced (U+FFFD) rather than aborting the
        read, so a single damaged byte shows up in one rendered line instead of
        hiding the rest of the transcript.

        Args:
            path: File to read

        Yields:
            Iterator over lines without trailing newline
        """
        with open(path, encoding='utf-8', errors='replace') as f:
            yield (line.rstrip('\n') for line in f)
