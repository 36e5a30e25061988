"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, rollctl.toml only contains
overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_MAX_DICE = 1_000_000


class RollConfig(BaseModel):
    """[roll] section."""

    model_config = {"frozen": True}

    seed: int | None = None
    max_dice: int | None = Field(default=DEFAULT_MAX_DICE, ge=0)
