"""
Display policy - what the formatter shows in full, hides behind an indicator, or suppresses.

Hiding a category with an indicator and suppressing it entirely are different
trust trade-offs: an indicator still tells the reader that something was left
out, suppression does not. The choice is always explicit in the policy; the
formatter never picks one on its own.
"""

from __future__ import annotations

from typing import Literal

import pydantic

from cc_transcript.schemas.base import StrictModel

# show: full header + body
# indicator: one line naming what was hidden
# suppress: nothing at all
Visibility = Literal['show', 'indicator', 'suppress']

DEFAULT_MAX_LENGTH = 500


class DisplayPolicy(StrictModel):
    """Rendering options for one transcript."""

    thinking: Visibility = 'show'
    tool_calls: Visibility = 'show'
    tool_results: Visibility = 'show'
    system: Visibility = 'show'

    show_timestamps: bool = True
    show_metadata: bool = True

    # Truncation applies to every text body (thinking, messages, tool input/output), not summaries
    truncate: bool = False
    max_length: int = DEFAULT_MAX_LENGTH

    @pydantic.field_validator('max_length')
    @classmethod
    def validate_max_length(cls, v: int) -> int:
        """Truncation threshold must be a positive character count."""
        if v < 1:
            raise ValueError(f'max_length must be a positive number of characters, got {v}')
        return v
