"""
Shared exceptions for cc-transcript.

Domain-specific exceptions used across services.

Exception Hierarchy:
    TranscriptError (base)
    ├── SessionResolutionError (lookup/resolution failures)
    │   └── InvalidSessionReferenceError (reference rejected before any session scan)
    └── TranscriptFileError (I/O failure while reading a transcript)

"Does not exist" is not an exception here: the resolver reports it as a
NotFound result. Decode failures are not exceptions either - they become
UnparseableRecord values and are rendered.
"""

from __future__ import annotations

from pathlib import Path


class TranscriptError(Exception):
    """Base exception for all cc-transcript errors."""


class SessionResolutionError(TranscriptError):
    """Base exception for session lookup and resolution failures."""


class InvalidSessionReferenceError(SessionResolutionError):
    """Raised when a session ID prefix contains characters outside the allowed set."""

    def __init__(self, reference: str, allowed: str) -> None:
        self.reference = reference
        self.allowed = allowed
        super().__init__(
            f"Invalid session reference '{reference}': session IDs may only contain {allowed}. "
            f'Pass a path containing / to open a file or project directory.'
        )


class TranscriptFileError(TranscriptError):
    """Raised when a transcript file cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f'Cannot read transcript {path}: {reason}')
