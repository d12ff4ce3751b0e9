"""Configuration for cc-transcript (pydantic-settings)."""

from __future__ import annotations

from cc_transcript.config.base import BaseTranscriptSettings, get_settings, lazy_settings
from cc_transcript.config.cli import CliSettings

__all__ = ['BaseTranscriptSettings', 'CliSettings', 'get_settings', 'lazy_settings']
