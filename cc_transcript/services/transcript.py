"""
Transcript pipeline - one file in, rendered text or API messages out.

Both entry points stream the file and translate I/O failures into
TranscriptFileError so callers can report the file and move on to the next one.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from cc_transcript.exceptions import TranscriptFileError
from cc_transcript.schemas.policy import DisplayPolicy
from cc_transcript.schemas.results import ApiExport
from cc_transcript.services.exporter import export_api_messages
from cc_transcript.services.formatter import FormattingContext, render_record
from cc_transcript.services.metadata import format_metadata, summarize_session
from cc_transcript.services.parser import iter_records
from cc_transcript.storage import FileSystem


def render_transcript(path: Path, policy: DisplayPolicy, filesystem: FileSystem | None = None) -> Iterator[str]:
    """
    Render a transcript file chunk by chunk.

    Yields the metadata header first (when the policy asks for it), then one
    chunk per record that has visible output. Tool names are tracked in a
    FormattingContext private to this file.

    Raises:
        TranscriptFileError: If the file cannot be read
    """
    try:
        if policy.show_metadata:
            yield format_metadata(summarize_session(path, filesystem))

        context = FormattingContext()
        for line_number, record in iter_records(path, filesystem):
            rendered = render_record(record, policy, context, line_number)
            if rendered:
                yield rendered
    except OSError as e:
        raise TranscriptFileError(path, e.strerror or str(e)) from e


def export_transcript(path: Path, filesystem: FileSystem | None = None) -> ApiExport:
    """
    Export a transcript file as API messages.

    Raises:
        TranscriptFileError: If the file cannot be read
    """
    try:
        return export_api_messages(path, filesystem)
    except OSError as e:
        raise TranscriptFileError(path, e.strerror or str(e)) from e
