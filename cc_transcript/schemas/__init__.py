"""
Schema definitions for cc-transcript.

This package contains the data model of the viewer:
- records: JSONL record and content part models (Pydantic, permissive)
- blocks: normalized content blocks extracted from records
- resolution: discovered sessions and session reference resolution results
- policy: display policy for the formatter
- results: metadata and API export results
"""

from __future__ import annotations

from cc_transcript.schemas.base import StrictModel
from cc_transcript.schemas.blocks import (
    AssistantTextBlock,
    ContentBlock,
    HumanTextBlock,
    ParseErrorBlock,
    SummaryBlock,
    SystemNoteBlock,
    ThinkingBlock,
    ToolCallBlock,
    ToolResultBlock,
)
from cc_transcript.schemas.policy import DisplayPolicy, Visibility
from cc_transcript.schemas.records import (
    AssistantRecord,
    OtherRecord,
    Record,
    SummaryRecord,
    SystemRecord,
    UnparseableRecord,
    UserRecord,
)
from cc_transcript.schemas.resolution import (
    Candidates,
    DirectFile,
    NotFound,
    ResolutionError,
    ResolutionResult,
    SessionInfo,
    SingleMatch,
)
from cc_transcript.schemas.results import ApiExport, SessionMetadata

__all__ = [
    'StrictModel',
    # Blocks
    'AssistantTextBlock',
    'ContentBlock',
    'HumanTextBlock',
    'ParseErrorBlock',
    'SummaryBlock',
    'SystemNoteBlock',
    'ThinkingBlock',
    'ToolCallBlock',
    'ToolResultBlock',
    # Policy
    'DisplayPolicy',
    'Visibility',
    # Records
    'AssistantRecord',
    'OtherRecord',
    'Record',
    'SummaryRecord',
    'SystemRecord',
    'UnparseableRecord',
    'UserRecord',
    # Resolution
    'Candidates',
    'DirectFile',
    'NotFound',
    'ResolutionError',
    'ResolutionResult',
    'SessionInfo',
    'SingleMatch',
    # Results
    'ApiExport',
    'SessionMetadata',
]
