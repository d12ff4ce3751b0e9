"""Tests for record rendering, display policy and the candidate table."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

import pydantic
import pytest

from cc_transcript.schemas import DisplayPolicy, SessionInfo
from cc_transcript.services.formatter import (
    SEPARATOR_WIDTH,
    FormattingContext,
    format_candidates,
    pretty_print_json,
    render_record,
    truncate_text,
)
from cc_transcript.services.parser import decode_line

PLAIN = DisplayPolicy(show_timestamps=False)


def decode(data: dict, line_number: int = 1) -> object:
    return decode_line(json.dumps(data), line_number)


def tool_call(name: str = 'Bash', tool_id: str = 'toolu_1') -> object:
    return decode(
        {
            'type': 'assistant',
            'requestId': 'r1',
            'message': {'content': [{'type': 'tool_use', 'id': tool_id, 'name': name, 'input': {'command': 'ls'}}]},
        }
    )


def tool_result(content: object, tool_id: str = 'toolu_1', is_error: bool = False) -> object:
    return decode(
        {
            'type': 'user',
            'message': {
                'content': [{'type': 'tool_result', 'tool_use_id': tool_id, 'content': content, 'is_error': is_error}]
            },
        }
    )


# ==============================================================================
# Display policy
# ==============================================================================


def test_policy_rejects_non_positive_max_length() -> None:
    with pytest.raises(pydantic.ValidationError):
        DisplayPolicy(max_length=0)
    with pytest.raises(pydantic.ValidationError):
        DisplayPolicy(max_length=-5)


def test_policy_rejects_unknown_visibility() -> None:
    with pytest.raises(pydantic.ValidationError):
        DisplayPolicy(thinking='hidden')


# ==============================================================================
# Truncation
# ==============================================================================


def test_truncation_keeps_prefix_and_reports_length() -> None:
    text = 'abcdefghijklmnopqrstuvwxy'
    assert len(text) == 25

    lines = truncate_text(text, DisplayPolicy(truncate=True, max_length=10), 'message')

    assert lines == ['abcdefghij...', '[Truncated message - 25 total characters]']


def test_truncation_disabled_or_short_text_is_untouched() -> None:
    assert truncate_text('x' * 25, DisplayPolicy(max_length=10)) == ['x' * 25]
    assert truncate_text('short', DisplayPolicy(truncate=True, max_length=10)) == ['short']
    assert truncate_text(None, DisplayPolicy()) == ['']


def test_rendered_human_text_is_truncated() -> None:
    record = decode_line('{"type":"user","message":{"content":"' + 'a' * 25 + '"}}', 1)
    policy = DisplayPolicy(show_timestamps=False, truncate=True, max_length=10)

    output = render_record(record, policy, FormattingContext())

    assert 'a' * 10 + '...' in output.splitlines()
    assert 'a' * 11 not in output
    assert '[Truncated message - 25 total characters]' in output


# ==============================================================================
# Blocks
# ==============================================================================


def test_human_block_layout() -> None:
    record = decode_line('{"type":"user","message":{"content":"hi"}}', 1)

    output = render_record(record, PLAIN, FormattingContext())

    assert output.splitlines() == ['', '—' * SEPARATOR_WIDTH, '👤 HUMAN:', '', 'hi']


def test_header_suffix_is_right_aligned() -> None:
    record = decode({'type': 'user', 'message': {'content': 'hi'}})

    output = render_record(record, PLAIN, FormattingContext(), line_number=42)
    header = output.splitlines()[2]

    assert header.startswith('👤 HUMAN:')
    assert header.endswith('L42')
    assert len(header) == SEPARATOR_WIDTH


def test_header_shows_local_timestamp() -> None:
    record = decode({'type': 'user', 'timestamp': '2025-12-29T09:30:45.123Z', 'message': {'content': 'hi'}})

    header = render_record(record, DisplayPolicy(), FormattingContext(), line_number=1).splitlines()[2]
    without = render_record(record, PLAIN, FormattingContext(), line_number=1).splitlines()[2]

    assert '[2025-12-' in header
    assert header.endswith('] L1')
    assert '[' not in without


def test_parse_error_block() -> None:
    output = render_record(decode_line('not-json', 3), DisplayPolicy(thinking='suppress'), FormattingContext(), 3)

    assert 'PARSE ERROR:' in output
    assert 'Line 3: Failed to parse JSONL' in output
    assert 'Preview: not-json...' in output


def test_tool_call_and_sub_agent_labels() -> None:
    regular = render_record(tool_call('Bash'), PLAIN, FormattingContext())
    sub_agent = render_record(tool_call('Task'), PLAIN, FormattingContext())

    assert '🔧 TOOL_CALL:' in regular
    assert 'Tool: Bash' in regular
    assert '"command": "ls"' in regular
    assert 'Type: SUB-AGENT' not in regular
    assert '🤖 SUB-AGENT CALL:' in sub_agent
    assert 'Type: SUB-AGENT' in sub_agent


def test_tool_result_uses_name_from_context() -> None:
    context = FormattingContext()
    render_record(tool_call('Read', 'toolu_9'), PLAIN, context)

    output = render_record(tool_result('{"lines": 3}', 'toolu_9'), PLAIN, context)

    assert 'TOOL_RESULT:' in output
    assert 'Tool: Read' in output
    assert '{\n  "lines": 3\n}' in output


def test_tool_result_for_unknown_call() -> None:
    output = render_record(tool_result('done', 'toolu_missing'), PLAIN, FormattingContext())

    assert 'Tool: Unknown' in output


def test_error_tool_result() -> None:
    output = render_record(tool_result('boom', is_error=True), PLAIN, FormattingContext())

    assert '❌ TOOL_ERROR:' in output
    assert 'Status: ERROR' in output


def test_multi_part_tool_result_renders_every_marker() -> None:
    record = tool_result(
        [
            {'type': 'text', 'text': 'one'},
            {'type': 'text', 'text': 'two'},
            {'type': 'image', 'source': {'type': 'url'}},
        ]
    )

    output = render_record(record, PLAIN, FormattingContext())

    assert 'Content: Multiple blocks (separated below)' in output
    assert 'Note: Contains non-text content (images, etc.)' in output
    assert '--- Content Block 1 ---' in output
    assert '--- Content Block 2 ---' in output
    assert '[IMAGE BLOCK 3: url]' in output


def test_context_is_per_instance() -> None:
    first = FormattingContext()
    render_record(tool_call('Grep', 'toolu_x'), PLAIN, first)

    assert first.tool_name('toolu_x') == 'Grep'
    assert FormattingContext().tool_name('toolu_x') == 'Unknown'


# ==============================================================================
# Visibility
# ==============================================================================


def test_indicators_replace_hidden_blocks() -> None:
    policy = DisplayPolicy(
        show_timestamps=False, thinking='indicator', tool_calls='indicator', tool_results='indicator', system='indicator'
    )
    context = FormattingContext()
    assistant = decode(
        {
            'type': 'assistant',
            'message': {
                'content': [
                    {'type': 'thinking', 'thinking': 'secret plan'},
                    {'type': 'tool_use', 'id': 'toolu_5', 'name': 'Bash', 'input': {}},
                ]
            },
        }
    )

    thinking_and_call = render_record(assistant, policy, context)
    result = render_record(tool_result('rm: permission denied', 'toolu_5', is_error=True), policy, context)
    system = render_record(decode({'type': 'system', 'content': 'hook', 'level': 'warning'}), policy, context)

    assert '[THINKING BLOCK HIDDEN]' in thinking_and_call
    assert 'secret plan' not in thinking_and_call
    assert '[TOOL CALL HIDDEN: Bash]' in thinking_and_call
    assert '[TOOL RESULT HIDDEN (ERROR): Bash]' in result
    assert 'permission denied' not in result
    assert '[SYSTEM MESSAGE HIDDEN (warning)]' in system


def test_suppress_renders_nothing() -> None:
    policy = DisplayPolicy(system='suppress', thinking='suppress')

    system = render_record(decode({'type': 'system', 'content': 'hook'}), policy, FormattingContext())
    thinking = render_record(
        decode({'type': 'assistant', 'message': {'content': [{'type': 'thinking', 'thinking': 'x'}]}}),
        policy,
        FormattingContext(),
    )

    assert system == ''
    assert thinking == ''


def test_text_is_always_shown() -> None:
    policy = DisplayPolicy(thinking='suppress', tool_calls='suppress', tool_results='suppress', system='suppress')
    record = decode({'type': 'assistant', 'message': {'content': [{'type': 'text', 'text': 'visible'}]}})

    assert 'visible' in render_record(record, policy, FormattingContext())
    assert 'Earlier' in render_record(decode({'type': 'summary', 'summary': 'Earlier'}), policy, FormattingContext())


def test_other_records_render_empty() -> None:
    record = decode({'type': 'file-history-snapshot', 'snapshot': {}})

    assert render_record(record, DisplayPolicy(), FormattingContext()) == ''


# ==============================================================================
# Helpers
# ==============================================================================


def test_pretty_print_json() -> None:
    assert pretty_print_json('[1, 2]') == '[\n  1,\n  2\n]'
    assert pretty_print_json('{not json') == '{not json'
    assert pretty_print_json('plain text') == 'plain text'
    assert pretty_print_json('42') == '42'


def session(session_id: str, minute: int, *, is_agent: bool = False, parent: str | None = None) -> SessionInfo:
    return SessionInfo(
        path=Path(f'/projects/-home-dev-app/{session_id}.jsonl'),
        session_id=session_id,
        project_dir_name='-home-dev-app',
        modified_time=datetime(2026, 1, 5, 12, minute, tzinfo=UTC),
        size_bytes=2048,
        is_agent=is_agent,
        parent_session_id=parent,
    )


def test_format_candidates_nests_agents_under_parents() -> None:
    older = session('aaaa-older', 1)
    newer = session('aaaa-newer', 2)
    child = session('agent-child', 3, is_agent=True, parent='aaaa-older')
    orphan = session('agent-orphan', 4, is_agent=True, parent='gone')
    sessions = sorted([older, newer, child, orphan], key=lambda s: s.modified_time, reverse=True)

    lines = format_candidates(sessions).splitlines()

    assert 'SESSION ID' in lines[0]
    assert set(lines[1].strip()) == {'─'}
    rows = lines[2:6]
    assert rows[0].strip().startswith('aaaa-older')
    assert rows[1].strip().startswith('└─ agent-child')
    assert rows[2].strip().startswith('aaaa-newer')
    assert rows[3].strip().startswith('agent-orphan')
    assert rows[3].endswith('(agent)')
    assert '2.0 KB' in rows[0]
    assert lines[-1] == 'Found 3 matching sessions. Use --latest to auto-pick most recent.'
