"""
Content block types - the normalized display unit extracted from a record.

Blocks are derived values (not parsed from JSON), so they are plain frozen
dataclasses rather than Pydantic models. Ordering of blocks within a record
always matches the ordering of parts in the source record.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ThinkingBlock:
    """Assistant extended thinking."""

    text: str


@dataclass(frozen=True)
class AssistantTextBlock:
    """Assistant response text."""

    text: str


@dataclass(frozen=True)
class HumanTextBlock:
    """Text typed by the human."""

    text: str


@dataclass(frozen=True)
class ToolCallBlock:
    """Tool invocation by the assistant."""

    name: str
    id: str
    input: Any
    is_sub_agent: bool


@dataclass(frozen=True)
class ToolResultBlock:
    """Tool result, with every sub-part of a multi-part result folded into text."""

    id: str
    text: str
    is_error: bool
    has_multiple_parts: bool
    has_non_text_parts: bool  # Images etc. were replaced by a marker, not rendered


@dataclass(frozen=True)
class SystemNoteBlock:
    text: str
    level: str | None


@dataclass(frozen=True)
class SummaryBlock:
    text: str


@dataclass(frozen=True)
class ParseErrorBlock:
    """A line that failed to decode."""

    line_number: int
    error: str
    preview: str


ContentBlock = (
    ThinkingBlock
    | AssistantTextBlock
    | HumanTextBlock
    | ToolCallBlock
    | ToolResultBlock
    | SystemNoteBlock
    | SummaryBlock
    | ParseErrorBlock
)
