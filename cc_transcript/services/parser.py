"""
Session parser service - JSONL line decoding.

Every input line becomes exactly one record. A line that is not JSON, or JSON
that does not fit any record shape, becomes an UnparseableRecord carrying the
line number, the reason and a preview, so the number of records always equals
the number of lines read.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path

import pydantic

from cc_transcript.schemas.records import JsonRecordAdapter, Record, UnparseableRecord
from cc_transcript.storage import FileSystem, LocalFileSystem

PREVIEW_LENGTH = 100


def decode_line(line: str, line_number: int) -> Record:
    """
    Decode one JSONL line into a record. Never raises.

    Args:
        line: Raw line without trailing newline
        line_number: 1-indexed line number (for error reporting)

    Returns:
        The typed record, or an UnparseableRecord describing why decoding failed
    """
    try:
        raw_data = json.loads(line)
    except json.JSONDecodeError as e:
        return _unparseable(line, line_number, str(e))
    except RecursionError:
        # Nesting deeper than the interpreter's recursion limit
        return _unparseable(line, line_number, 'JSON nesting too deep to decode')

    try:
        return JsonRecordAdapter.validate_python(raw_data)
    except pydantic.ValidationError as e:
        return _unparseable(line, line_number, _describe_validation_error(e))


def iter_records(path: Path, filesystem: FileSystem | None = None) -> Iterator[tuple[int, Record]]:
    """
    Stream (line_number, record) pairs from a JSONL file.

    The file is held open only while the generator runs and is closed when it
    finishes, raises, or is closed early by the consumer.

    Args:
        path: Path to JSONL file
        filesystem: Filesystem backend (default: local)

    Yields:
        Tuples of (line_number, record), line numbers 1-indexed
    """
    filesystem = filesystem or LocalFileSystem()
    with filesystem.open_lines(path) as lines:
        for line_number, line in enumerate(lines, start=1):
            yield line_number, decode_line(line, line_number)


def _unparseable(line: str, line_number: int, error: str) -> UnparseableRecord:
    return UnparseableRecord(
        line_number=line_number,
        error=error,
        preview=line[:PREVIEW_LENGTH],
        raw_line=line,
    )


def _describe_validation_error(error: pydantic.ValidationError) -> str:
    """Condense a (possibly multi-branch) union validation error into one line."""
    first = error.errors()[0]
    location = '.'.join(str(part) for part in first['loc'])
    detail = f'{location}: {first["msg"]}' if location else first['msg']
    return f'Record does not match any known record shape ({error.error_count()} errors, first: {detail})'
