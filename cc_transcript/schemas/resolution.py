"""
Session resolution schemas.

Models for discovered session files and the result of resolving a user-supplied
session reference. Exactly one ResolutionResult variant is produced per reference;
callers are expected to handle all five with a match statement.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Literal

from cc_transcript.schemas.base import StrictModel


class SessionInfo(StrictModel):
    """
    Information about a discovered session file.

    Note: The project path cannot be reliably determined from the folder name
    due to lossy encoding (every non-alphanumeric character becomes -). The real
    working directory lives in the records' cwd field.
    """

    path: Path
    session_id: str  # File name without the .jsonl extension
    project_dir_name: str  # Encoded ~/.claude/projects/{encoded}/ folder name
    modified_time: datetime
    size_bytes: int
    is_agent: bool  # agent-<id>.jsonl sub-agent transcript
    parent_session_id: str | None = None  # Only populated for agent sessions


# ==============================================================================
# Resolution Result (tagged variant)
# ==============================================================================


class DirectFile(StrictModel):
    """Reference named an existing transcript file."""

    kind: Literal['file'] = 'file'
    path: Path


class SingleMatch(StrictModel):
    """Reference matched one session (or the newest, with auto-pick)."""

    kind: Literal['match'] = 'match'
    path: Path
    session: SessionInfo


class Candidates(StrictModel):
    """Reference matched several sessions; the caller must disambiguate."""

    kind: Literal['candidates'] = 'candidates'
    sessions: Sequence[SessionInfo]  # Newest first


class NotFound(StrictModel):
    kind: Literal['not_found'] = 'not_found'
    input: str


class ResolutionError(StrictModel):
    """Resolution failed for a reason other than "does not exist"."""

    kind: Literal['error'] = 'error'
    input: str
    error: str


ResolutionResult = DirectFile | SingleMatch | Candidates | NotFound | ResolutionError
