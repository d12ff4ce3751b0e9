"""
Filesystem protocol for session discovery and transcript reading.

The viewer consumes the ~/.claude/projects tree; it never writes to it. All
access goes through this narrow interface so the resolver and the streaming
services can be exercised against any backend.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class FileStat:
    """The subset of stat() results the viewer needs."""

    is_file: bool
    is_directory: bool
    modified_time: datetime  # Timezone-aware (UTC)
    size_bytes: int


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for read-only filesystem access."""

    def list_directory(self, path: Path) -> list[str]:
        """
        List entry names in a directory.

        Raises:
            FileNotFoundError: If the directory does not exist
            OSError: For permission and other I/O failures
        """
        ...

    def stat(self, path: Path) -> FileStat:
        """
        Stat a path (following symlinks).

        Raises:
            FileNotFoundError: If the path does not exist
            OSError: For permission and other I/O failures
        """
        ...

    def open_lines(self, path: Path) -> AbstractContextManager[Iterator[str]]:
        """
        Open a text file for forward-only line iteration.

        Lines are yielded without their trailing newline. The file is closed when
        the context exits, whether iteration finished, stopped early, or raised.

        Raises:
            FileNotFoundError: If the file does not exist
            OSError: For permission and other I/O failures
        """
        ...
