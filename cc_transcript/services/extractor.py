"""
Content extraction - maps a record to its ordered content blocks.

Pure functions, no I/O. Dispatch is a closed match over the record models with
an explicit fallback: record kinds without a handler (file-history-snapshot,
progress, anything a future Claude Code release adds) produce no blocks rather
than an error.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

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
from cc_transcript.schemas.records import (
    AssistantRecord,
    ImagePart,
    Record,
    SummaryRecord,
    SystemRecord,
    TextPart,
    ThinkingPart,
    ToolResultPart,
    ToolResultSubPart,
    ToolUsePart,
    UnparseableRecord,
    UserRecord,
)

# Built-in tool that delegates work to a sub-agent
SUB_AGENT_TOOL_NAME = 'Task'


def is_sub_agent_tool(name: str | None) -> bool:
    """
    Whether a tool call delegates to a sub-agent.

    Heuristic: the delegation tool itself, or any tool whose name contains the
    case-sensitive substring 'agent'. Unrelated tools with 'agent' in their name
    are false positives; kept as-is so every count and label agrees.
    """
    if name is None:
        return False
    return name == SUB_AGENT_TOOL_NAME or 'agent' in name


def extract_content(record: Record) -> list[ContentBlock]:
    """
    Extract content blocks from a record, in source order.

    Args:
        record: Any decoded record

    Returns:
        Content blocks (possibly empty)
    """
    match record:
        case AssistantRecord():
            return _extract_assistant(record)
        case UserRecord():
            return _extract_user(record)
        case SystemRecord():
            return [SystemNoteBlock(text=record.content or '', level=record.level)]
        case SummaryRecord():
            return [SummaryBlock(text=record.summary or '')]
        case UnparseableRecord():
            return [ParseErrorBlock(line_number=record.line_number, error=record.error, preview=record.preview)]
        case _:
            return []


def _extract_assistant(record: AssistantRecord) -> list[ContentBlock]:
    content = record.message.content if record.message else None
    if content is None:
        return []
    if isinstance(content, str):
        return [AssistantTextBlock(text=content)]

    blocks: list[ContentBlock] = []
    for part in content:
        match part:
            case ThinkingPart():
                blocks.append(ThinkingBlock(text=part.thinking))
            case TextPart():
                blocks.append(AssistantTextBlock(text=part.text))
            case ToolUsePart():
                blocks.append(
                    ToolCallBlock(
                        name=part.name,
                        id=part.id,
                        input=part.input,
                        is_sub_agent=is_sub_agent_tool(part.name),
                    )
                )
    return blocks


def _extract_user(record: UserRecord) -> list[ContentBlock]:
    content = record.message.content if record.message else None
    if content is None:
        return []
    if isinstance(content, str):
        return [HumanTextBlock(text=content)]

    wrapper_error = isinstance(record.toolUseResult, Mapping) and bool(record.toolUseResult.get('is_error'))

    blocks: list[ContentBlock] = []
    for part in content:
        match part:
            case ToolResultPart():
                text, has_multiple, has_non_text = tool_result_text(part.content)
                blocks.append(
                    ToolResultBlock(
                        id=part.tool_use_id,
                        text=text,
                        is_error=wrapper_error or bool(part.is_error),
                        has_multiple_parts=has_multiple,
                        has_non_text_parts=has_non_text,
                    )
                )
            case TextPart():
                blocks.append(HumanTextBlock(text=part.text))
    return blocks


def tool_result_text(content: str | Sequence[ToolResultSubPart] | None) -> tuple[str, bool, bool]:
    """
    Fold every sub-part of a tool result into one text.

    With more than one sub-part, each one is preceded by its own numbered
    marker. Non-text sub-parts are never rendered; a bracketed marker naming
    their type stands in for them.

    Args:
        content: tool_result content (string, list of sub-parts, or None)

    Returns:
        (text, has_multiple_parts, has_non_text_parts)
    """
    if content is None:
        return '', False, False
    if isinstance(content, str):
        return content, False, False

    has_multiple = len(content) > 1
    has_non_text = False
    pieces: list[str] = []

    for index, sub_part in enumerate(content, start=1):
        match sub_part:
            case TextPart():
                if has_multiple:
                    pieces.append(f'\n--- Content Block {index} ---\n')
                pieces.append(sub_part.text)
            case ImagePart():
                has_non_text = True
                source_type = sub_part.source.type if sub_part.source and sub_part.source.type else 'unknown type'
                pieces.append(f'\n[IMAGE BLOCK {index}: {source_type}]\n')
            case _:
                has_non_text = True
                pieces.append(f'\n[{(sub_part.type or "unknown").upper()} BLOCK {index}]\n')

    return ''.join(pieces), has_multiple, has_non_text
