"""
Services for reading, resolving and rendering session transcripts.
"""

from __future__ import annotations

from cc_transcript.services.discovery import SessionResolver
from cc_transcript.services.exporter import ChunkReassembler, export_api_messages
from cc_transcript.services.extractor import extract_content, is_sub_agent_tool
from cc_transcript.services.formatter import FormattingContext, format_candidates, render_record
from cc_transcript.services.metadata import format_metadata, summarize_session
from cc_transcript.services.parser import decode_line, iter_records
from cc_transcript.services.transcript import export_transcript, render_transcript

__all__ = [
    'ChunkReassembler',
    'FormattingContext',
    'SessionResolver',
    'decode_line',
    'export_api_messages',
    'export_transcript',
    'extract_content',
    'format_candidates',
    'format_metadata',
    'is_sub_agent_tool',
    'iter_records',
    'render_record',
    'render_transcript',
    'summarize_session',
]
