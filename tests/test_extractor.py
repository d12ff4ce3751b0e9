"""Tests for content block extraction."""

from __future__ import annotations

import json

from cc_transcript.schemas.blocks import (
    AssistantTextBlock,
    HumanTextBlock,
    ParseErrorBlock,
    SummaryBlock,
    SystemNoteBlock,
    ThinkingBlock,
    ToolCallBlock,
    ToolResultBlock,
)
from cc_transcript.services.extractor import extract_content, is_sub_agent_tool
from cc_transcript.services.parser import decode_line


def decode(data: dict) -> object:
    return decode_line(json.dumps(data), 1)


def test_human_string_content() -> None:
    record = decode_line('{"type":"user","message":{"content":"hi"}}', 1)

    assert extract_content(record) == [HumanTextBlock(text='hi')]


def test_parse_error_block() -> None:
    record = decode_line('not-json', 3)

    [block] = extract_content(record)

    assert isinstance(block, ParseErrorBlock)
    assert block.line_number == 3
    assert block.preview == 'not-json'


def test_assistant_parts_in_order() -> None:
    record = decode(
        {
            'type': 'assistant',
            'message': {
                'content': [
                    {'type': 'thinking', 'thinking': 'hmm', 'signature': 's'},
                    {'type': 'text', 'text': 'Let me look.'},
                    {'type': 'tool_use', 'id': 't1', 'name': 'Read', 'input': {'file_path': '/a'}},
                    {'type': 'server_tool_use', 'id': 't2'},
                ]
            },
        }
    )

    assert extract_content(record) == [
        ThinkingBlock(text='hmm'),
        AssistantTextBlock(text='Let me look.'),
        ToolCallBlock(name='Read', id='t1', input={'file_path': '/a'}, is_sub_agent=False),
    ]


def test_assistant_string_content() -> None:
    record = decode({'type': 'assistant', 'message': {'content': 'plain'}})

    assert extract_content(record) == [AssistantTextBlock(text='plain')]


def test_sub_agent_predicate() -> None:
    assert is_sub_agent_tool('Task')
    assert is_sub_agent_tool('mcp__agent_runner')
    assert not is_sub_agent_tool('task')
    assert not is_sub_agent_tool('Agent')
    assert not is_sub_agent_tool('Bash')
    assert not is_sub_agent_tool(None)


def test_task_call_is_flagged_as_sub_agent() -> None:
    record = decode(
        {'type': 'assistant', 'message': {'content': [{'type': 'tool_use', 'id': 't', 'name': 'Task', 'input': {}}]}}
    )

    [block] = extract_content(record)

    assert isinstance(block, ToolCallBlock)
    assert block.is_sub_agent


def test_multi_part_tool_result_has_one_marker_per_part() -> None:
    record = decode(
        {
            'type': 'user',
            'message': {
                'content': [
                    {
                        'type': 'tool_result',
                        'tool_use_id': 't1',
                        'content': [
                            {'type': 'text', 'text': 'first'},
                            {'type': 'image', 'source': {'type': 'base64', 'data': 'AAAA'}},
                            {'type': 'text', 'text': 'third'},
                            {'type': 'document'},
                        ],
                    }
                ]
            },
        }
    )

    [block] = extract_content(record)

    assert isinstance(block, ToolResultBlock)
    assert block.has_multiple_parts
    assert block.has_non_text_parts
    assert '--- Content Block 1 ---' in block.text
    assert '[IMAGE BLOCK 2: base64]' in block.text
    assert '--- Content Block 3 ---' in block.text
    assert '[DOCUMENT BLOCK 4]' in block.text
    assert block.text.index('first') < block.text.index('third')
    assert 'AAAA' not in block.text


def test_single_text_part_has_no_marker() -> None:
    record = decode(
        {
            'type': 'user',
            'message': {
                'content': [{'type': 'tool_result', 'tool_use_id': 't1', 'content': [{'type': 'text', 'text': 'ok'}]}]
            },
        }
    )

    [block] = extract_content(record)

    assert block == ToolResultBlock(id='t1', text='ok', is_error=False, has_multiple_parts=False, has_non_text_parts=False)


def test_single_image_part_still_gets_marker() -> None:
    record = decode(
        {
            'type': 'user',
            'message': {'content': [{'type': 'tool_result', 'tool_use_id': 't1', 'content': [{'type': 'image'}]}]},
        }
    )

    [block] = extract_content(record)

    assert block.text == '\n[IMAGE BLOCK 1: unknown type]\n'
    assert block.has_non_text_parts
    assert not block.has_multiple_parts


def test_tool_result_error_flags() -> None:
    part_error = decode(
        {
            'type': 'user',
            'message': {'content': [{'type': 'tool_result', 'tool_use_id': 't1', 'content': 'boom', 'is_error': True}]},
        }
    )
    wrapper_error = decode(
        {
            'type': 'user',
            'message': {'content': [{'type': 'tool_result', 'tool_use_id': 't2', 'content': 'boom'}]},
            'toolUseResult': {'is_error': True},
        }
    )
    string_wrapper = decode(
        {
            'type': 'user',
            'message': {'content': [{'type': 'tool_result', 'tool_use_id': 't3', 'content': 'fine'}]},
            'toolUseResult': 'Error: ignored because it is not a mapping',
        }
    )

    assert extract_content(part_error)[0].is_error
    assert extract_content(wrapper_error)[0].is_error
    assert not extract_content(string_wrapper)[0].is_error


def test_user_text_and_tool_result_parts() -> None:
    record = decode(
        {
            'type': 'user',
            'message': {
                'content': [
                    {'type': 'tool_result', 'tool_use_id': 't1'},
                    {'type': 'text', 'text': 'and another thing'},
                ]
            },
        }
    )

    result, text = extract_content(record)

    assert isinstance(result, ToolResultBlock)
    assert result.text == ''
    assert text == HumanTextBlock(text='and another thing')


def test_system_summary_and_other_records() -> None:
    system = decode({'type': 'system', 'content': 'hook output', 'level': 'warning'})
    summary = decode({'type': 'summary', 'summary': 'Earlier work'})
    other = decode({'type': 'file-history-snapshot', 'snapshot': {}})

    assert extract_content(system) == [SystemNoteBlock(text='hook output', level='warning')]
    assert extract_content(summary) == [SummaryBlock(text='Earlier work')]
    assert extract_content(other) == []


def test_records_without_message_have_no_blocks() -> None:
    assert extract_content(decode({'type': 'user'})) == []
    assert extract_content(decode({'type': 'assistant', 'message': {'role': 'assistant'}})) == []
