"""
Session discovery service - resolves session references to transcript files.

A reference can be:
- a path to a .jsonl file (relative or absolute)
- a path to a project directory (uses that project's sessions)
- '.' / '..' / a bare directory name
- a session ID or ID prefix, matched across all projects (case-insensitive)

Sessions live in ~/.claude/projects/<encoded project path>/:
- <uuid>.jsonl: main session transcripts
- agent-<id>.jsonl: sub-agent transcripts, whose first records carry the
  sessionId of the session that spawned them

Lookup is a native directory walk. Nothing is passed to a shell or subprocess.
"""

from __future__ import annotations

import contextlib
import os
import re
from collections.abc import Sequence
from pathlib import Path

from cc_transcript.exceptions import InvalidSessionReferenceError
from cc_transcript.paths import encode_project_path
from cc_transcript.protocols import LoggerProtocol, NullLogger
from cc_transcript.schemas.records import BaseRecord
from cc_transcript.schemas.resolution import (
    Candidates,
    DirectFile,
    NotFound,
    ResolutionError,
    ResolutionResult,
    SessionInfo,
    SingleMatch,
)
from cc_transcript.services.parser import iter_records
from cc_transcript.storage import FileSystem, LocalFileSystem

TRANSCRIPT_EXTENSION = '.jsonl'
AGENT_FILE_PREFIX = 'agent-'

# Session ID prefixes: UUIDs, agent-<hex>, agent-<type>-<hex>
SESSION_REFERENCE_PATTERN = re.compile(r'^[A-Za-z0-9_-]+$')
SESSION_REFERENCE_ALLOWED = 'letters, digits, "-" and "_"'


def validate_session_reference(reference: str) -> str:
    """
    Check a session ID prefix against the allowed character set.

    Raises:
        InvalidSessionReferenceError: If the reference is empty or has other characters
    """
    if not SESSION_REFERENCE_PATTERN.fullmatch(reference):
        raise InvalidSessionReferenceError(reference, SESSION_REFERENCE_ALLOWED)
    return reference


def is_agent_file(filename: str) -> bool:
    return filename.startswith(AGENT_FILE_PREFIX)


class SessionResolver:
    """
    Resolves session references against a projects directory.

    Every call rescans the filesystem; nothing is cached between calls.
    Discovered sessions are sorted by modification time, newest first.
    """

    def __init__(
        self,
        projects_dir: Path,
        *,
        include_agents: bool = True,
        auto_pick_latest: bool = False,
        filesystem: FileSystem | None = None,
        logger: LoggerProtocol | None = None,
        cwd: Path | None = None,
    ) -> None:
        """
        Initialize resolver.

        Args:
            projects_dir: Root holding one folder per project (~/.claude/projects)
            include_agents: Include agent-*.jsonl sessions in scans
            auto_pick_latest: Resolve ambiguous matches to the newest session
            filesystem: Filesystem backend (default: local)
            logger: Receives non-fatal scan diagnostics (default: discard)
            cwd: Base for relative references (default: process working directory)
        """
        self.projects_dir = projects_dir
        self.include_agents = include_agents
        self.auto_pick_latest = auto_pick_latest
        self.filesystem = filesystem or LocalFileSystem()
        self.logger = logger or NullLogger()
        self.cwd = cwd or Path.cwd()

    async def resolve(self, reference: str) -> ResolutionResult:
        """
        Resolve a session reference. Never raises.

        Priority:
        1. '*.jsonl' -> that file, or NotFound
        2. Contains a path separator -> file, or project directory scan, or NotFound
        3. Existing directory as-is ('.', '..') -> project directory scan
        4. Session ID prefix across all projects

        Args:
            reference: User-supplied reference

        Returns:
            Exactly one ResolutionResult variant
        """
        try:
            return await self._resolve(reference)
        except InvalidSessionReferenceError as e:
            return ResolutionError(input=reference, error=str(e))
        except OSError as e:
            return ResolutionError(input=reference, error=str(e))

    async def _resolve(self, reference: str) -> ResolutionResult:
        if not reference:
            raise InvalidSessionReferenceError(reference, SESSION_REFERENCE_ALLOWED)

        # 1. Direct .jsonl file path
        if reference.endswith(TRANSCRIPT_EXTENSION):
            path = self._absolute(reference)
            if self._is_file(path):
                return DirectFile(path=path)
            return NotFound(input=reference)

        # 2. Path with separators - file or project directory
        if '/' in reference or '\\' in reference:
            path = self._absolute(reference)
            if self._is_file(path):
                return DirectFile(path=path)
            if self._is_directory(path):
                return self._reduce(await self.find_by_directory(path), reference)
            return NotFound(input=reference)

        # 3. '.', '..' or a directory name relative to cwd
        path = self._absolute(reference)
        if self._is_directory(path):
            return self._reduce(await self.find_by_directory(path), reference)

        # 4. Session ID prefix
        return self._reduce(await self.find_by_prefix(reference), reference)

    # =========================================================================
    # Lookups
    # =========================================================================

    async def find_by_prefix(self, prefix: str) -> list[SessionInfo]:
        """
        Find sessions whose ID starts with prefix (case-insensitive), across all projects.

        A prefix that itself looks like an agent ID ('agent-...') always searches
        agent sessions, even when agents are otherwise excluded.

        Raises:
            InvalidSessionReferenceError: If prefix has characters outside the allowed set
        """
        validate_session_reference(prefix)
        normalized = prefix.lower()
        include_agents = self.include_agents or normalized.startswith(AGENT_FILE_PREFIX)

        sessions = await self.scan_sessions(include_agents=include_agents)
        return [s for s in sessions if s.session_id.lower().startswith(normalized)]

    async def find_by_directory(self, directory: Path) -> list[SessionInfo]:
        """
        Find the sessions of the project rooted at directory.

        Args:
            directory: Absolute project directory

        Returns:
            Sessions in its project folder, newest first ([] if the project has none)
        """
        encoded = encode_project_path(directory)
        project_folder = self.projects_dir / encoded
        if not self._is_directory(project_folder):
            return []
        sessions = await self._scan_project_folder(project_folder, encoded, self.include_agents)
        return _newest_first(sessions)

    async def scan_sessions(self, include_agents: bool | None = None) -> list[SessionInfo]:
        """
        Scan every project folder.

        A project folder that cannot be listed is logged as a warning and skipped;
        failure to list the projects directory itself propagates.

        Args:
            include_agents: Override the resolver's agent setting for this scan

        Returns:
            All sessions, newest first ([] if the projects directory does not exist)
        """
        if include_agents is None:
            include_agents = self.include_agents

        try:
            entries = self.filesystem.list_directory(self.projects_dir)
        except FileNotFoundError:
            return []

        sessions: list[SessionInfo] = []
        for name in entries:
            folder = self.projects_dir / name
            try:
                if self._is_directory(folder):
                    sessions.extend(await self._scan_project_folder(folder, name, include_agents))
            except OSError as e:
                # One unreadable project must not hide matches in the others
                await self.logger.warning(f'Cannot scan {folder}: {e}')
        return _newest_first(sessions)

    async def read_agent_parent_id(self, agent_file: Path) -> str | None:
        """
        Read the session ID that spawned an agent transcript.

        Stops at the first record exposing a sessionId. Read failures are logged
        as warnings and yield None; they never fail the surrounding scan.

        Args:
            agent_file: Path to agent-<id>.jsonl

        Returns:
            Parent session ID, or None if absent or unreadable
        """
        try:
            with contextlib.closing(iter_records(agent_file, self.filesystem)) as records:
                for _, record in records:
                    if isinstance(record, BaseRecord) and record.sessionId:
                        return record.sessionId
        except OSError as e:
            await self.logger.warning(f'Could not read agent parent ID from {agent_file.name}: {e}')
        return None

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _scan_project_folder(self, folder: Path, folder_name: str, include_agents: bool) -> list[SessionInfo]:
        try:
            filenames = self.filesystem.list_directory(folder)
        except FileNotFoundError:
            return []  # Removed since the parent listing

        sessions: list[SessionInfo] = []
        for filename in filenames:
            if not filename.endswith(TRANSCRIPT_EXTENSION):
                continue
            is_agent = is_agent_file(filename)
            if is_agent and not include_agents:
                continue

            path = folder / filename
            try:
                file_stat = self.filesystem.stat(path)
            except FileNotFoundError:
                continue  # Deleted between listing and stat
            except OSError as e:
                await self.logger.warning(f'Cannot read session {filename}: {e}')
                continue
            if not file_stat.is_file:
                continue

            sessions.append(
                SessionInfo(
                    path=path,
                    session_id=filename[: -len(TRANSCRIPT_EXTENSION)],
                    project_dir_name=folder_name,
                    modified_time=file_stat.modified_time,
                    size_bytes=file_stat.size_bytes,
                    is_agent=is_agent,
                    parent_session_id=await self.read_agent_parent_id(path) if is_agent else None,
                )
            )
        return sessions

    def _reduce(self, sessions: Sequence[SessionInfo], reference: str) -> ResolutionResult:
        """Zero -> NotFound; one (or newest, with auto-pick) -> SingleMatch; else Candidates."""
        if not sessions:
            return NotFound(input=reference)
        if len(sessions) == 1 or self.auto_pick_latest:
            return SingleMatch(path=sessions[0].path, session=sessions[0])
        return Candidates(sessions=list(sessions))

    def _absolute(self, reference: str) -> Path:
        return Path(os.path.normpath(os.path.join(self.cwd, reference)))

    def _is_file(self, path: Path) -> bool:
        try:
            return self.filesystem.stat(path).is_file
        except (FileNotFoundError, NotADirectoryError):
            return False

    def _is_directory(self, path: Path) -> bool:
        try:
            return self.filesystem.stat(path).is_directory
        except (FileNotFoundError, NotADirectoryError):
            return False


def _newest_first(sessions: list[SessionInfo]) -> list[SessionInfo]:
    return sorted(sessions, key=lambda s: s.modified_time, reverse=True)
