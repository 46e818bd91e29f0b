# SPDX-License-Identifier: Apache-2.0
"""Humanizer plugin for NeMo Data Designer.

Adds a ``humanizer`` column type that scores text for AI-like writing patterns
and rewrites it through a rule-based, multi-pass humanization pipeline. No LLM
calls, no API dependencies.

Usage::

    from data_designer_humanizer import HumanizerColumnConfig

    builder.add_column(HumanizerColumnConfig(
        name="humanized",
        target_columns=["article"],
        tone="professional",
        strength="medium",
    ))

The analyzer and pipeline are also usable directly::

    from data_designer_humanizer import analyze_text, humanize

    analysis = analyze_text(text)
    rewritten = humanize(text, "casual", "medium", analysis)
"""

from data_designer_humanizer.config import HumanizerColumnConfig
from data_designer_humanizer.core import Hyperparameters, PatternAnalysis, analyze_text, compare_texts, confidence_level
from data_designer_humanizer.humanizer import final_polish, humanize, total_rounds

__all__ = [
    "HumanizerColumnConfig",
    "analyze_text",
    "Hyperparameters",
    "PatternAnalysis",
    "compare_texts",
    "confidence_level",
    "humanize",
    "final_polish",
    "total_rounds",
]
