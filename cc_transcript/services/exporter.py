"""
API exporter - rebuilds an Anthropic Messages API `messages` array from a session file.

Claude Code writes one assistant record per streamed content block, so a single
API response is spread over consecutive records sharing a requestId. The
ChunkReassembler folds those back into one assistant message, and merges
adjacent user records (tool results are written separately from typed text)
into one user message, which is what the API expects.

Records that are not part of the primary conversation are skipped:
- system records (hook output, notices)
- sidechain records (sub-agent traffic)
- summary records - noted in has_summaries, since compacted history means the
  export may be missing earlier turns
- unparseable lines - noted in unparseable_lines so callers can warn
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cc_transcript.schemas.records import (
    AssistantRecord,
    BaseRecord,
    ContentPart,
    Record,
    SummaryRecord,
    SystemRecord,
    UnparseableRecord,
    UserRecord,
)
from cc_transcript.schemas.results import ApiExport
from cc_transcript.services.parser import iter_records
from cc_transcript.storage import FileSystem


@dataclass
class PendingTurn:
    """Assistant content accumulated for one API request."""

    request_id: str | None
    content: list[dict[str, Any]] = field(default_factory=list)


class ChunkReassembler:
    """
    State machine folding streamed record chunks into API messages.

    States: idle (no pending turn) or accumulating (one PendingTurn). A pending
    turn is flushed exactly once - when a different requestId arrives, when a
    user record arrives, or in finish().

    Usage:
        reassembler = ChunkReassembler()
        for _, record in iter_records(path):
            reassembler.feed(record)
        export = reassembler.finish()
    """

    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []
        self.session_id: str | None = None
        self.has_summaries = False
        self.unparseable_lines: list[int] = []
        self._pending: PendingTurn | None = None

    def feed(self, record: Record) -> None:
        """Consume the next record in file order."""
        if self.session_id is None and isinstance(record, BaseRecord) and record.sessionId:
            self.session_id = record.sessionId

        match record:
            case UnparseableRecord():
                self.unparseable_lines.append(record.line_number)
            case SummaryRecord():
                self.has_summaries = True
            case SystemRecord():
                pass
            case BaseRecord(isSidechain=True):
                pass
            case AssistantRecord():
                self._feed_assistant(record)
            case UserRecord():
                self._feed_user(record)
            case _:
                pass

    def finish(self) -> ApiExport:
        """Flush the open turn (if any) and return the export."""
        self._flush()
        return ApiExport(
            messages=self.messages,
            session_id=self.session_id,
            has_summaries=self.has_summaries,
            unparseable_lines=self.unparseable_lines,
        )

    def _feed_assistant(self, record: AssistantRecord) -> None:
        content = record.message.content if record.message else None
        if not content:
            return

        parts = _as_part_list(content)
        if self._pending is not None and self._pending.request_id == record.requestId:
            self._pending.content.extend(parts)
            return

        self._flush()
        self._pending = PendingTurn(request_id=record.requestId, content=parts)

    def _feed_user(self, record: UserRecord) -> None:
        # Role change always closes the assistant turn
        self._flush()

        content = record.message.content if record.message else None
        if content is None:
            return

        last = self.messages[-1] if self.messages else None
        if last is not None and last['role'] == 'user':
            if isinstance(last['content'], str):
                last['content'] = [{'type': 'text', 'text': last['content']}]
            last['content'].extend(_as_part_list(content))
        else:
            self.messages.append({'role': 'user', 'content': _dump_content(content)})

    def _flush(self) -> None:
        if self._pending is None:
            return
        self.messages.append({'role': 'assistant', 'content': self._pending.content})
        self._pending = None


def export_api_messages(path: Path, filesystem: FileSystem | None = None) -> ApiExport:
    """
    Export a transcript file as API messages.

    Args:
        path: Path to JSONL transcript
        filesystem: Filesystem backend (default: local)

    Returns:
        ApiExport with messages and completeness flags

    Raises:
        OSError: If the file cannot be read
    """
    reassembler = ChunkReassembler()
    for _, record in iter_records(path, filesystem):
        reassembler.feed(record)
    return reassembler.finish()


def _dump_content(content: str | Sequence[ContentPart]) -> str | list[dict[str, Any]]:
    """Serialize message content back into its input shape."""
    if isinstance(content, str):
        return content
    return [part.model_dump(mode='json', exclude_unset=True) for part in content]


def _as_part_list(content: str | Sequence[ContentPart]) -> list[dict[str, Any]]:
    dumped = _dump_content(content)
    if isinstance(dumped, str):
        return [{'type': 'text', 'text': dumped}]
    return dumped
