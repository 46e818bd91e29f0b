from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from data_designer.engine.column_generators.generators.base import ColumnGeneratorFullColumn

from data_designer_humanizer.config import HumanizerColumnConfig
from data_designer_humanizer.core import analyze_text, compare_texts, confidence_level
from data_designer_humanizer.humanizer import humanize

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)


def humanize_row(text: str, config: HumanizerColumnConfig, rng: random.Random) -> dict:
    """Analyze, rewrite and re-analyze one row's text according to ``config``."""
    before = analyze_text(text)
    humanized = humanize(text, config.tone, config.strength, before, passes=config.passes, rng=rng)
    after = analyze_text(humanized)
    output: dict = {
        "humanized_text": humanized,
        "ai_score_before": before.overall_ai_score,
        "ai_score_after": after.overall_ai_score,
        "confidence_before": confidence_level(before.overall_ai_score),
        "confidence_after": confidence_level(after.overall_ai_score),
        "ai_patterns": list(before.ai_patterns),
    }
    if config.include_analysis:
        output["analysis_before"] = before.to_payload()
        output["analysis_after"] = after.to_payload()
    if config.include_comparison:
        output["comparison"] = compare_texts(text, humanized, before, after)
    return output


class HumanizerColumnGenerator(ColumnGeneratorFullColumn[HumanizerColumnConfig]):
    """Column generator that rewrites text through the rule-based humanization pipeline."""

    def generate(self, data: pd.DataFrame) -> pd.DataFrame:
        logger.info(f"✍️ Humanizing column {self.config.name!r}")
        logger.info(f"   target columns: {self.config.target_columns}")
        logger.info(f"   tone: {self.config.tone}, strength: {self.config.strength}, passes: {self.config.passes}")

        rng = random.Random(self.config.seed)
        results = []
        for _, row in data[self.config.target_columns].iterrows():
            text = " ".join(str(v) for v in row.values if v is not None)
            results.append(humanize_row(text, self.config, rng))

        data = data.copy()
        data[self.config.name] = results
        return data
