"""Configuration models for compression editing sessions."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class HistoryConfig(BaseModel):
    """Configuration for the undo/redo history."""

    max_depth: int | None = Field(
        default=50,
        ge=1,
        description=(
            "Maximum number of undo steps retained. When exceeded, the oldest "
            "step is dropped silently. None = unbounded."
        ),
    )


class TokenConfig(BaseModel):
    """Configuration for the default token estimator."""

    encoding: Literal["heuristic", "cl100k_base", "o200k_base"] = Field(
        default="heuristic",
        description=(
            "Tokeniser used by TokenEstimator. 'heuristic' divides the character "
            "count by chars_per_token; the others load a tiktoken encoding."
        ),
    )

    chars_per_token: int = Field(
        default=4,
        ge=1,
        le=16,
        description="Characters per token for the heuristic estimate.",
    )


class ChiselConfig(BaseModel):
    """
    Top-level configuration for a compression editing session.

    All sub-configs have sensible defaults and can be overridden individually.

    Example::

        config = ChiselConfig(
            history=HistoryConfig(max_depth=200),
            tokens=TokenConfig(encoding="cl100k_base"),
        )
    """

    history: HistoryConfig = Field(default_factory=HistoryConfig)
    tokens: TokenConfig = Field(default_factory=TokenConfig)

    @classmethod
    def default(cls) -> ChiselConfig:
        """Return a config instance with all defaults."""
        return cls()
