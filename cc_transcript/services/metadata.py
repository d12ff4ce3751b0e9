"""
Session metadata aggregation - one streaming pass over a transcript file.

Counts human, assistant and system records (summaries, unparseable lines and
other record types are not messages) and picks the identifying fields from the
first counted record that carries a session id. The file is never held in
memory as a whole.
"""

from __future__ import annotations

from pathlib import Path

from cc_transcript.schemas.records import AssistantRecord, SystemRecord, ToolUsePart, UserRecord
from cc_transcript.schemas.results import SessionMetadata
from cc_transcript.services.extractor import is_sub_agent_tool
from cc_transcript.services.formatter import EMOJI
from cc_transcript.services.parser import iter_records
from cc_transcript.storage import FileSystem
from cc_transcript.timefmt import format_local_iso

METADATA_SEPARATOR = '═' * 60


def summarize_session(path: Path, filesystem: FileSystem | None = None) -> SessionMetadata:
    """
    Compute summary counts for a transcript file.

    Args:
        path: Path to JSONL transcript
        filesystem: Filesystem backend (default: local)

    Returns:
        SessionMetadata with identity fields and counts

    Raises:
        OSError: If the file cannot be read
    """
    session_id: str | None = None
    project_path: str | None = None
    started_at: str | None = None
    message_count = 0
    tool_call_count = 0
    has_sub_agents = False

    for _, record in iter_records(path, filesystem):
        if not isinstance(record, (UserRecord, AssistantRecord, SystemRecord)):
            continue

        message_count += 1

        if session_id is None and record.sessionId:
            session_id = record.sessionId
            started_at = record.timestamp
            project_path = record.cwd

        if isinstance(record, AssistantRecord) and record.message and not isinstance(record.message.content, str):
            for part in record.message.content or ():
                if isinstance(part, ToolUsePart):
                    tool_call_count += 1
                    has_sub_agents = has_sub_agents or is_sub_agent_tool(part.name)

    return SessionMetadata(
        session_id=session_id,
        project_path=project_path,
        started_at=started_at,
        message_count=message_count,
        tool_call_count=tool_call_count,
        has_sub_agents=has_sub_agents,
    )


def format_metadata(metadata: SessionMetadata) -> str:
    """Format metadata as the header block printed above a transcript."""
    started = format_local_iso(metadata.started_at) if metadata.started_at else 'unknown'
    lines = [
        '',
        f'{EMOJI["metadata"]} SESSION METADATA',
        METADATA_SEPARATOR,
        f'Session ID:     {metadata.session_id or "unknown"}',
        f'Project Path:   {metadata.project_path or "unknown"}',
        f'Started:        {started}',
        f'Messages:       {metadata.message_count}',
        f'Tool Calls:     {metadata.tool_call_count}',
        f'Has Sub-Agents: {"Yes" if metadata.has_sub_agents else "No"}',
        METADATA_SEPARATOR,
        '',
    ]
    return '\n'.join(lines)
