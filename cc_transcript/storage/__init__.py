"""Filesystem access for session discovery and transcript reading."""

from cc_transcript.storage.local import LocalFileSystem
from cc_transcript.storage.protocol import FileStat, FileSystem

__all__ = ['FileStat', 'FileSystem', 'LocalFileSystem']
