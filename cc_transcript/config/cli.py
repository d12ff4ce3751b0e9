"""
CLI configuration.
"""

from __future__ import annotations

import pydantic

from cc_transcript.config.base import BaseTranscriptSettings, lazy_settings
from cc_transcript.schemas.policy import DEFAULT_MAX_LENGTH


class CliSettings(BaseTranscriptSettings):
    """Settings for the cc-transcript command."""

    # Truncation threshold used by --truncate when --max-length is not given
    DEFAULT_MAX_LENGTH: int = DEFAULT_MAX_LENGTH

    @pydantic.field_validator('DEFAULT_MAX_LENGTH')
    @classmethod
    def validate_default_max_length(cls, v: int) -> int:
        if v < 1:
            raise ValueError('DEFAULT_MAX_LENGTH must be at least 1')
        return v


settings = lazy_settings(CliSettings)
