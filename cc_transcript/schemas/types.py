"""
Shared type definitions for schemas.

Centralizes the foundation models used across record, block and operation schemas.

Layering:
- This module provides FOUNDATION types (BaseStrictModel, PermissiveModel)
- schemas/records.py builds the JSONL record models on PermissiveModel
- schemas/resolution.py, schemas/policy.py and schemas/results.py build on BaseStrictModel
"""

from __future__ import annotations

import pydantic

# ==============================================================================
# Base Strict Model (Foundation)
# ==============================================================================


class BaseStrictModel(pydantic.BaseModel):
    """
    Foundation strict model for values this package creates itself.

    Uses extra='forbid' to reject unknown fields - any field not modeled
    causes immediate validation failure (fail-fast).
    """

    model_config = pydantic.ConfigDict(
        extra='forbid',  # Reject unknown fields (fail-fast)
        strict=True,  # Strict type coercion
        frozen=True,  # Immutable after creation
    )


# ==============================================================================
# Permissive Model (Foundation)
# ==============================================================================


class PermissiveModel(pydantic.BaseModel):
    """
    Foundation permissive model for data read from session files.

    Symmetry with BaseStrictModel:
    - BaseStrictModel: extra='forbid' (rejects unknown fields)
    - PermissiveModel: extra='allow' (accepts unknown fields)

    The session log schema grows with every Claude Code release, so records and
    content parts only declare the fields this package reads. Everything else is
    carried along in __pydantic_extra__ and survives model_dump() unchanged.

    Use as the LAST type in typed unions to catch unknown structures:

        ContentPart = Annotated[
            TextPart | ThinkingPart | UnknownPart,
            pydantic.Field(union_mode='left_to_right'),
        ]
    """

    model_config = pydantic.ConfigDict(
        extra='allow',  # Accept unknown fields (graceful fallback)
        strict=True,  # Strict type coercion for known fields
        frozen=True,  # Immutable after creation
    )
