"""
Pydantic models for Claude Code session JSONL records.

One input line decodes to exactly one record. Records are discriminated by the
JSON `type` field:

    user       -> UserRecord        (kind: human_turn)
    assistant  -> AssistantRecord   (kind: assistant_turn)
    system     -> SystemRecord      (kind: system_note)
    summary    -> SummaryRecord     (kind: summary)
    <other>    -> OtherRecord       (kind: other, e.g. file-history-snapshot, progress)

Lines that are not JSON, or JSON that fits none of the shapes above, become an
UnparseableRecord (kind: unparseable) carrying the raw text and the reason.

Unlike a strict schema, these models only declare the fields the viewer reads.
The log format changes with every Claude Code release, so unknown fields are kept
(PermissiveModel) and unknown content part types fall through to UnknownPart
instead of failing validation.

Round-trip serialization:
- Use model_dump(exclude_unset=True, mode='json') to reproduce a part in its input shape
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Annotated, Any, ClassVar, Literal

import pydantic

from cc_transcript.schemas.types import BaseStrictModel, PermissiveModel

RecordKind = Literal['human_turn', 'assistant_turn', 'system_note', 'summary', 'other', 'unparseable']

# Record types with a dedicated model. OtherRecord refuses these so a malformed
# user/assistant line is reported instead of being filed under "other".
KNOWN_RECORD_TYPES = frozenset({'user', 'assistant', 'system', 'summary'})


# ==============================================================================
# Message Content Parts
# ==============================================================================


class TextPart(PermissiveModel):
    """Text content part from user or assistant messages."""

    type: Literal['text']
    text: str


class ThinkingPart(PermissiveModel):
    """Extended thinking content part from assistant messages."""

    type: Literal['thinking']
    thinking: str


class ToolUsePart(PermissiveModel):
    """Tool invocation content part from assistant messages."""

    type: Literal['tool_use']
    id: str
    name: str
    input: Any = None


class ImageSource(PermissiveModel):
    """Image source descriptor (base64 payload, URL, ...)."""

    type: str | None = None


class ImagePart(PermissiveModel):
    """Image content part from user messages or tool results."""

    type: Literal['image']
    source: ImageSource | None = None


class UnknownPart(PermissiveModel):
    """Fallback for content part types this package does not model (document, tool_reference, ...)."""

    type: str | None = None


# Content inside a tool_result part
ToolResultSubPart = Annotated[
    TextPart | ImagePart | UnknownPart,
    pydantic.Field(union_mode='left_to_right'),
]


class ToolResultPart(PermissiveModel):
    """Tool result content part from user messages."""

    type: Literal['tool_result']
    tool_use_id: str
    content: str | Sequence[ToolResultSubPart] | None = None  # String, list of sub-parts, or missing
    is_error: bool | None = None


# Union of all message content parts (validated left-to-right, fallback last)
ContentPart = Annotated[
    TextPart | ThinkingPart | ToolUsePart | ToolResultPart | ImagePart | UnknownPart,
    pydantic.Field(union_mode='left_to_right'),
]


class Message(PermissiveModel):
    """The API message wrapped by user and assistant records."""

    role: str | None = None
    content: str | Sequence[ContentPart] | None = None


# ==============================================================================
# Records
# ==============================================================================


class BaseRecord(PermissiveModel):
    """Fields shared by every JSON record (all optional - summaries carry almost none)."""

    kind: ClassVar[RecordKind]

    type: str | None = None
    uuid: str | None = None
    sessionId: str | None = None
    timestamp: str | None = None
    cwd: str | None = None
    isSidechain: bool | None = None


class UserRecord(BaseRecord):
    """Human turn: typed prompt text or tool results sent back to the model."""

    kind: ClassVar[RecordKind] = 'human_turn'

    type: Literal['user']
    message: Message | None = None
    toolUseResult: Any = None  # Tool execution metadata (dict, list or string)


class AssistantRecord(BaseRecord):
    """Assistant turn chunk. One API response may span several records sharing a requestId."""

    kind: ClassVar[RecordKind] = 'assistant_turn'

    type: Literal['assistant']
    message: Message | None = None
    requestId: str | None = None


class SystemRecord(BaseRecord):
    """System note (hook output, informational notices, compaction boundaries)."""

    kind: ClassVar[RecordKind] = 'system_note'

    type: Literal['system']
    content: str | None = None
    level: str | None = None


class SummaryRecord(BaseRecord):
    """Session summary written when history was compacted."""

    kind: ClassVar[RecordKind] = 'summary'

    type: Literal['summary']
    summary: str | None = None
    leafUuid: str | None = None


class OtherRecord(BaseRecord):
    """Any record type without a dedicated model (file-history-snapshot, progress, ...)."""

    kind: ClassVar[RecordKind] = 'other'

    @pydantic.field_validator('type')
    @classmethod
    def reject_known_types(cls, v: str | None) -> str | None:
        """Known record types must validate against their own model."""
        if v in KNOWN_RECORD_TYPES:
            raise ValueError(f"'{v}' record does not match the {v} record shape")
        return v


class UnparseableRecord(BaseStrictModel):
    """A line that could not be decoded into a record. Rendered, never skipped."""

    kind: ClassVar[RecordKind] = 'unparseable'

    line_number: int
    error: str
    preview: str  # First 100 characters of the raw line
    raw_line: str


# Union of all JSON record types (validated left-to-right)
# NOTE: OtherRecord must be last - it accepts any object whose type is not known
JsonRecord = Annotated[
    UserRecord | AssistantRecord | SystemRecord | SummaryRecord | OtherRecord,
    pydantic.Field(union_mode='left_to_right'),
]

Record = UserRecord | AssistantRecord | SystemRecord | SummaryRecord | OtherRecord | UnparseableRecord

# Type adapter for validating decoded JSON (required for union types)
JsonRecordAdapter: pydantic.TypeAdapter[JsonRecord] = pydantic.TypeAdapter(JsonRecord)
