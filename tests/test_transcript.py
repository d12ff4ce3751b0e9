"""Tests for the per-file transcript pipeline."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cc_transcript.exceptions import TranscriptFileError
from cc_transcript.schemas import DisplayPolicy
from cc_transcript.services.transcript import export_transcript, render_transcript


def write_session(path: Path, records: list[dict]) -> Path:
    path.write_text('\n'.join(json.dumps(r) for r in records) + '\n', encoding='utf-8')
    return path


def test_metadata_header_comes_first(tmp_path: Path) -> None:
    path = write_session(tmp_path / 's.jsonl', [{'type': 'user', 'sessionId': 'S', 'message': {'content': 'hi'}}])

    chunks = list(render_transcript(path, DisplayPolicy(show_timestamps=False)))

    assert 'SESSION METADATA' in chunks[0]
    assert 'HUMAN:' in chunks[1]
    assert chunks[1].splitlines()[2].endswith('L1')


def test_records_without_output_are_skipped(tmp_path: Path) -> None:
    path = write_session(
        tmp_path / 's.jsonl',
        [{'type': 'file-history-snapshot'}, {'type': 'system', 'content': 'x'}, {'type': 'user', 'message': {'content': 'hi'}}],
    )

    chunks = list(render_transcript(path, DisplayPolicy(show_metadata=False, system='suppress')))

    assert len(chunks) == 1
    assert chunks[0].splitlines()[2].endswith('L3')


def test_tool_names_do_not_leak_between_files(tmp_path: Path) -> None:
    call = write_session(
        tmp_path / 'a.jsonl',
        [{'type': 'assistant', 'message': {'content': [{'type': 'tool_use', 'id': 't1', 'name': 'Grep', 'input': {}}]}}],
    )
    result = write_session(
        tmp_path / 'b.jsonl',
        [{'type': 'user', 'message': {'content': [{'type': 'tool_result', 'tool_use_id': 't1', 'content': 'ok'}]}}],
    )
    policy = DisplayPolicy(show_metadata=False)

    list(render_transcript(call, policy))
    output = '\n'.join(render_transcript(result, policy))

    assert 'Tool: Unknown' in output


def test_missing_file_raises_transcript_file_error(tmp_path: Path) -> None:
    missing = tmp_path / 'missing.jsonl'

    with pytest.raises(TranscriptFileError) as excinfo:
        list(render_transcript(missing, DisplayPolicy()))

    assert excinfo.value.path == missing
    assert str(missing) in str(excinfo.value)

    with pytest.raises(TranscriptFileError):
        export_transcript(missing)


def test_directory_raises_transcript_file_error(tmp_path: Path) -> None:
    with pytest.raises(TranscriptFileError):
        list(render_transcript(tmp_path, DisplayPolicy(show_metadata=False)))
