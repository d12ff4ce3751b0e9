"""
Transcript formatter - renders records as text under a display policy.

For every content block of a record the policy decides one of:
- show: header (label, local timestamp, line number) + body, optionally truncated
- indicator: a single line naming what was hidden (tool name, status, kind)
- suppress: nothing

Human and assistant text, summaries and parse errors are always shown. Nothing
is dropped unless the policy explicitly says 'suppress' for its category.

Tool results only carry a tool_use_id, so the formatter keeps a per-file
FormattingContext that maps ids to tool names as tool calls stream past.
"""

from __future__ import annotations

import json
from collections import defaultdict
from collections.abc import Sequence

import attrs

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
from cc_transcript.schemas.records import AssistantRecord, BaseRecord, Record, ToolUsePart
from cc_transcript.schemas.resolution import SessionInfo
from cc_transcript.services.extractor import extract_content
from cc_transcript.timefmt import format_local_iso, format_local_short, format_size

EMOJI = {
    'thinking': '🐱💭',
    'claude': '🐱💬',
    'human': '👤',
    'tool_call': '🔧',
    'sub_agent': '🤖',
    'tool_result': '✅',
    'tool_error': '❌',
    'system': '💻',
    'metadata': '📋',
    'parse_error': '⚠️',
}

SEPARATOR_WIDTH = 50
SUFFIX_MIN_PADDING = 2


# ==============================================================================
# Formatting Context (per file)
# ==============================================================================


@attrs.define
class FormattingContext:
    """
    Per-file formatting state: tool_use_id -> tool name.

    Create one per transcript file and discard it afterwards; it is never
    shared between files.
    """

    tool_names: dict[str, str] = attrs.field(factory=dict)

    def register(self, record: Record) -> None:
        """Remember the tool calls of an assistant record."""
        if not isinstance(record, AssistantRecord) or record.message is None:
            return
        content = record.message.content
        if content is None or isinstance(content, str):
            return
        for part in content:
            if isinstance(part, ToolUsePart):
                self.tool_names[part.id] = part.name

    def tool_name(self, tool_use_id: str) -> str:
        return self.tool_names.get(tool_use_id, 'Unknown')


# ==============================================================================
# Record Rendering
# ==============================================================================


def render_record(
    record: Record,
    policy: DisplayPolicy,
    context: FormattingContext,
    line_number: int | None = None,
) -> str:
    """
    Render all content blocks of a record.

    Args:
        record: Decoded record
        policy: Display policy
        context: Per-file formatting context (updated with this record's tool calls)
        line_number: Source line number for the L<n> header suffix

    Returns:
        Rendered text ('' when the record has nothing to show)
    """
    context.register(record)
    timestamp = record.timestamp if isinstance(record, BaseRecord) else None
    suffix = _header_suffix(timestamp, line_number, policy)

    output: list[str] = []
    for block in extract_content(record):
        match block_visibility(block, policy):
            case 'show':
                output.append(_format_block(block, policy, context, suffix))
            case 'indicator':
                output.append(_format_indicator(block, context, suffix))
            case 'suppress':
                pass
    return '\n'.join(output)


def block_visibility(block: ContentBlock, policy: DisplayPolicy) -> Visibility:
    """Look up the policy for a block's category."""
    match block:
        case ThinkingBlock():
            return policy.thinking
        case ToolCallBlock():
            return policy.tool_calls
        case ToolResultBlock():
            return policy.tool_results
        case SystemNoteBlock():
            return policy.system
        case _:
            return 'show'


def truncate_text(text: str | None, policy: DisplayPolicy, label: str = 'content') -> list[str]:
    """
    Apply the policy's truncation to a text body.

    Returns:
        Output lines: the (possibly cut) text, plus a trailer naming the original length when cut
    """
    text = text or ''
    if not policy.truncate or len(text) <= policy.max_length:
        return [text]
    return [
        text[: policy.max_length] + '...',
        f'[Truncated {label} - {len(text)} total characters]',
    ]


def pretty_print_json(text: str) -> str:
    """Pretty-print text that is a JSON object or array; anything else is returned unchanged."""
    trimmed = text.strip()
    if not trimmed.startswith(('{', '[')):
        return text
    try:
        return json.dumps(json.loads(trimmed), indent=2, ensure_ascii=False)
    except json.JSONDecodeError:
        return text


def _header_suffix(timestamp: str | None, line_number: int | None, policy: DisplayPolicy) -> str:
    parts = []
    if policy.show_timestamps and timestamp:
        parts.append(f'[{format_local_iso(timestamp)}]')
    if line_number is not None:
        parts.append(f'L{line_number}')
    return ' '.join(parts)


def _right_align(text: str, suffix: str) -> tuple[str, int]:
    """Right-align suffix after text; returns (line, width used)."""
    if not suffix:
        return text, SEPARATOR_WIDTH
    width = max(SEPARATOR_WIDTH, len(text) + SUFFIX_MIN_PADDING + len(suffix))
    return f'{text}{" " * (width - len(text) - len(suffix))}{suffix}', width


def _block_label(block: ContentBlock) -> str:
    match block:
        case ThinkingBlock():
            return f'● {EMOJI["thinking"]} THINKING:'
        case AssistantTextBlock():
            return f'● {EMOJI["claude"]} CLAUDE:'
        case HumanTextBlock():
            return f'{EMOJI["human"]} HUMAN:'
        case ToolCallBlock(is_sub_agent=True):
            return f'● {EMOJI["sub_agent"]} SUB-AGENT CALL:'
        case ToolCallBlock():
            return f'● {EMOJI["tool_call"]} TOOL_CALL:'
        case ToolResultBlock(is_error=True):
            return f'● {EMOJI["tool_error"]} TOOL_ERROR:'
        case ToolResultBlock():
            return f'● {EMOJI["tool_result"]} TOOL_RESULT:'
        case SystemNoteBlock():
            return f'● {EMOJI["system"]} SYSTEM ({block.level or "info"}):'
        case SummaryBlock():
            return f'● {EMOJI["metadata"]} SUMMARY:'
        case ParseErrorBlock():
            return f'● {EMOJI["parse_error"]} PARSE ERROR:'
        case _:
            raise ValueError(f'Unknown content block type: {type(block).__name__}')


def _format_block(block: ContentBlock, policy: DisplayPolicy, context: FormattingContext, suffix: str) -> str:
    header, width = _right_align(_block_label(block), suffix)
    lines = ['', '—' * width, header, '']

    match block:
        case ThinkingBlock():
            lines.extend(truncate_text(block.text, policy, 'thinking block'))
        case AssistantTextBlock():
            lines.extend(truncate_text(block.text, policy, 'response'))
        case HumanTextBlock():
            lines.extend(truncate_text(block.text, policy, 'message'))
        case SystemNoteBlock():
            lines.extend(truncate_text(block.text, policy, 'system message'))
        case SummaryBlock():
            lines.append(block.text)
        case ToolCallBlock():
            lines.append(f'Tool: {block.name}')
            lines.append(f'ID: {block.id}')
            if block.is_sub_agent:
                lines.append('Type: SUB-AGENT')
            lines.append('Input:')
            lines.extend(truncate_text(json.dumps(block.input, indent=2, ensure_ascii=False), policy, 'tool input'))
        case ToolResultBlock():
            lines.append(f'Tool: {context.tool_name(block.id)}')
            lines.append(f'ID: {block.id}')
            if block.is_error:
                lines.append('Status: ERROR')
            if block.has_multiple_parts:
                lines.append('Content: Multiple blocks (separated below)')
            if block.has_non_text_parts:
                lines.append('Note: Contains non-text content (images, etc.)')
            lines.extend(truncate_text(pretty_print_json(block.text or 'null'), policy, 'tool result'))
        case ParseErrorBlock():
            lines.append(f'Line {block.line_number}: Failed to parse JSONL')
            lines.append(f'Error: {block.error}')
            lines.append(f'Preview: {block.preview}...')
            lines.append('')
            lines.append('⚠️  This line contains corrupt data and cannot be displayed.')
            lines.append('    The transcript may be incomplete.')

    return '\n'.join(lines)


def _format_indicator(block: ContentBlock, context: FormattingContext, suffix: str) -> str:
    match block:
        case ThinkingBlock():
            text = f'● {EMOJI["thinking"]} [THINKING BLOCK HIDDEN]'
        case ToolCallBlock():
            text = f'● {EMOJI["tool_call"]} [TOOL CALL HIDDEN: {block.name}]'
        case ToolResultBlock():
            status = 'ERROR' if block.is_error else 'SUCCESS'
            emoji = EMOJI['tool_error'] if block.is_error else EMOJI['tool_result']
            text = f'● {emoji} [TOOL RESULT HIDDEN ({status}): {context.tool_name(block.id)}]'
        case SystemNoteBlock():
            text = f'● {EMOJI["system"]} [SYSTEM MESSAGE HIDDEN ({block.level or "info"})]'
        case _:
            raise ValueError(f'{type(block).__name__} cannot be hidden')

    line, _ = _right_align(text, suffix)
    return '\n' + line


# ==============================================================================
# Candidate Listing
# ==============================================================================


def format_candidates(sessions: Sequence[SessionInfo]) -> str:
    """
    Format ambiguous matches as a table for disambiguation.

    Input is newest-first; regular sessions are listed oldest-first so the newest
    ends up at the bottom, next to the prompt. Agent sessions are nested under
    their parent session when it is in the list, otherwise listed as orphans.

    Args:
        sessions: Matching sessions, newest first

    Returns:
        Formatted table with a footer line
    """
    regular = [s for s in sessions if not s.is_agent][::-1]
    agents = [s for s in sessions if s.is_agent]

    agents_by_parent: defaultdict[str, list[SessionInfo]] = defaultdict(list)
    for agent in agents:
        if agent.parent_session_id:
            agents_by_parent[agent.parent_session_id].append(agent)

    lines = [
        f'  {"SESSION ID":<36}  {"PROJECT":<38}  {"MODIFIED":<25}  {"SIZE":>10}',
        '  ' + '─' * 115,
    ]

    for session in regular:
        lines.append(
            f'  {session.session_id:<36}  {session.project_dir_name[:38]:<38}  '
            f'{format_local_short(session.modified_time):<25}  {format_size(session.size_bytes):>10}'
        )
        for agent in agents_by_parent.get(session.session_id, []):
            agent_id = f'  └─ {agent.session_id}'
            lines.append(
                f'  {agent_id:<38}  {"":<38}  '
                f'{format_local_short(agent.modified_time):<25}  {format_size(agent.size_bytes):>10}'
            )

    regular_ids = {s.session_id for s in regular}
    orphans = [a for a in agents if a.parent_session_id not in regular_ids]
    for agent in orphans:
        lines.append(
            f'  {agent.session_id:<36}  {agent.project_dir_name[:38]:<38}  '
            f'{format_local_short(agent.modified_time):<25}  {format_size(agent.size_bytes):>10}  (agent)'
        )

    lines.append('')
    lines.append(
        f'Found {len(regular) + len(orphans)} matching sessions. Use --latest to auto-pick most recent.'
    )
    return '\n'.join(lines)
