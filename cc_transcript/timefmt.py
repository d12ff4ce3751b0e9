"""
Local-time formatting for transcript headers and session listings.

Session files store UTC ISO 8601 timestamps ("2025-12-29T09:30:45.123Z"); the
viewer shows them in the local timezone with an explicit offset.
"""

from __future__ import annotations

from datetime import datetime


def parse_timestamp(value: str) -> datetime | None:
    """Parse an ISO 8601 timestamp (Z suffix allowed). Returns None if unparseable."""
    try:
        return datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return None


def _offset(moment: datetime) -> str:
    raw = moment.strftime('%z')  # +0100
    return f'{raw[:3]}:{raw[3:]}' if raw else '+00:00'


def format_local_iso(value: str | datetime) -> str:
    """
    Format as local ISO 8601 with offset, e.g. '2025-12-29T10:30:45 +01:00'.

    Strings that aren't valid timestamps are returned unchanged.
    """
    moment = parse_timestamp(value) if isinstance(value, str) else value
    if moment is None:
        return str(value)
    local = moment.astimezone()
    return f'{local.strftime("%Y-%m-%dT%H:%M:%S")} {_offset(local)}'


def format_local_short(value: str | datetime) -> str:
    """Format as short local datetime with offset, e.g. '2025-12-29 10:30 +01:00'."""
    moment = parse_timestamp(value) if isinstance(value, str) else value
    if moment is None:
        return str(value)
    local = moment.astimezone()
    return f'{local.strftime("%Y-%m-%d %H:%M")} {_offset(local)}'


def format_size(size_bytes: int) -> str:
    """Human-readable file size: '512 B', '1.2 KB', '3.4 MB'."""
    if size_bytes < 1024:
        return f'{size_bytes} B'
    if size_bytes < 1024 * 1024:
        return f'{size_bytes / 1024:.1f} KB'
    return f'{size_bytes / (1024 * 1024):.1f} MB'
