"""
Operation result schemas.

Models returned by the metadata aggregator and the API exporter.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from cc_transcript.schemas.base import StrictModel


class SessionMetadata(StrictModel):
    """
    Summary counts for one transcript file.

    Identifying fields come from the first human/assistant/system record that
    carries a sessionId, which is not necessarily the first line.
    """

    session_id: str | None = None
    project_path: str | None = None  # cwd of the first identifying record
    started_at: str | None = None  # Raw ISO timestamp of the first identifying record
    message_count: int = 0  # human + assistant + system records
    tool_call_count: int = 0
    has_sub_agents: bool = False


class ApiExport(StrictModel):
    """
    Conversation re-exported as an Anthropic Messages API `messages` array.

    Each message is {'role': 'user' | 'assistant', 'content': str | list[part]},
    with parts in the same shape as the session file's message content.
    """

    messages: Sequence[dict[str, Any]]
    session_id: str | None = None
    has_summaries: bool = False  # History was compacted upstream; export may be incomplete
    unparseable_lines: Sequence[int] = ()  # Lines that could not be decoded and were left out

    def to_api_payload(self) -> dict[str, Any]:
        """The JSON body consumers feed back to the API (metadata excluded)."""
        return {'messages': list(self.messages)}
