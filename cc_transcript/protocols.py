"""
Shared protocols for cc-transcript services.

Services never print. Anything they have to say about a scan or a file (an
unreadable agent transcript, a file that vanished mid-scan) goes through a
LoggerProtocol supplied by the caller, so the CLI can route it to stderr while
library users collect or discard it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Protocol

LogLevel = Literal['info', 'warning', 'error']


class LoggerProtocol(Protocol):
    """
    Protocol for async logger.

    Implementations:
    - CLILogger (cli/logger.py): stderr, info only in verbose mode
    - NullLogger: discards everything
    - CollectingLogger: keeps messages in memory
    """

    async def info(self, message: str) -> None: ...
    async def warning(self, message: str) -> None: ...
    async def error(self, message: str) -> None: ...


class NullLogger:
    """No-op logger for callers that don't want diagnostics."""

    async def info(self, message: str) -> None:
        pass

    async def warning(self, message: str) -> None:
        pass

    async def error(self, message: str) -> None:
        pass


@dataclass
class CollectingLogger:
    """Logger that records (level, message) pairs, for library callers and tests."""

    entries: list[tuple[LogLevel, str]] = field(default_factory=list)

    async def info(self, message: str) -> None:
        self.entries.append(('info', message))

    async def warning(self, message: str) -> None:
        self.entries.append(('warning', message))

    async def error(self, message: str) -> None:
        self.entries.append(('error', message))

    def messages(self, level: LogLevel) -> list[str]:
        return [message for entry_level, message in self.entries if entry_level == level]
