"""
Shared Pydantic base model for strict validation.

All operation schema models in the application should inherit from StrictModel.
This module re-exports BaseStrictModel as StrictModel for resolution, policy and result schemas.
"""

from __future__ import annotations

from cc_transcript.schemas.types import BaseStrictModel


class StrictModel(BaseStrictModel):
    """Operations-layer strict model.

    Inherits from BaseStrictModel (extra='forbid', strict=True, frozen=True).
    """

    pass
