from __future__ import annotations

from typing import Literal

from pydantic import Field

from data_designer.config.column_configs import SingleColumnConfig


class HumanizerColumnConfig(SingleColumnConfig):
    """Rewrite text columns so they read less like machine output.

    Scores each row with the heuristic analyzer, runs the rule-based humanization
    pipeline gated by that analysis, and re-scores the result.

    Attributes:
        target_columns: Columns whose text content will be concatenated and rewritten.
        tone: Style used for marker and phrase injection.
        strength: Scales rewrite probabilities and the per-pass stage repeat count
            (light 1, medium 2, aggressive 3).
        passes: Outer humanization rounds. The stage sequence runs
            ``passes * strength repeat`` times in total.
        seed: Seed for the random source shared by all rows of one generate call.
            ``None`` gives non-repeatable output.
        include_analysis: Include before/after analysis payloads in output.
        include_comparison: Include a word/character/score comparison summary.
    """

    target_columns: list[str]
    tone: Literal["casual", "professional", "academic", "creative"] = "casual"
    strength: Literal["light", "medium", "aggressive"] = "medium"
    passes: int = Field(default=2, ge=1, le=5, description="Outer humanization rounds")
    seed: int | None = Field(default=None, description="Seed for repeatable rewrites")
    include_analysis: bool = Field(default=True, description="Include before/after analysis payloads in output")
    include_comparison: bool = Field(default=False, description="Include a before/after comparison summary")
    column_type: Literal["humanizer"] = "humanizer"

    @staticmethod
    def get_column_emoji() -> str:
        return "✍️"

    @property
    def required_columns(self) -> list[str]:
        return self.target_columns

    @property
    def side_effect_columns(self) -> list[str]:
        return []
