import random
from unittest.mock import patch

import pandas as pd
import pytest
from pydantic import ValidationError

from data_designer_humanizer.config import HumanizerColumnConfig
from data_designer_humanizer.generator import HumanizerColumnGenerator, humanize_row

ARTICLE = (
    "It is important to note that the methodology was developed by researchers. "
    "Furthermore, the framework can be utilized to optimize strategic outcomes. "
    "The data was analyzed by the team. The results were reviewed by the board."
)


class TestHumanizerColumnConfig:
    def test_defaults(self):
        config = HumanizerColumnConfig(name="humanized", target_columns=["article"])
        assert config.tone == "casual"
        assert config.strength == "medium"
        assert config.passes == 2
        assert config.seed is None
        assert config.column_type == "humanizer"
        assert config.required_columns == ["article"]
        assert config.side_effect_columns == []

    def test_passes_out_of_range(self):
        with pytest.raises(ValidationError):
            HumanizerColumnConfig(name="humanized", target_columns=["article"], passes=0)
        with pytest.raises(ValidationError):
            HumanizerColumnConfig(name="humanized", target_columns=["article"], passes=6)

    def test_invalid_tone(self):
        with pytest.raises(ValidationError):
            HumanizerColumnConfig(name="humanized", target_columns=["article"], tone="angry")


class TestHumanizeRow:
    def test_output_shape(self):
        config = HumanizerColumnConfig(
            name="humanized", target_columns=["article"], tone="professional", include_comparison=True,
        )
        output = humanize_row(ARTICLE, config, random.Random(3))
        assert set(output) == {
            "humanized_text", "ai_score_before", "ai_score_after", "confidence_before",
            "confidence_after", "ai_patterns", "analysis_before", "analysis_after", "comparison",
        }
        assert output["humanized_text"]
        assert output["confidence_before"] in ("LOW", "MODERATE", "HIGH", "VERY HIGH")
        assert isinstance(output["ai_patterns"], list)
        assert output["analysis_before"]["overall_ai_score"] == output["ai_score_before"]
        assert output["comparison"]["score_after"] == output["ai_score_after"]

    def test_optional_payloads_can_be_dropped(self):
        config = HumanizerColumnConfig(name="humanized", target_columns=["article"], include_analysis=False)
        output = humanize_row(ARTICLE, config, random.Random(3))
        assert "analysis_before" not in output
        assert "comparison" not in output

    def test_seeded_rows_are_repeatable(self):
        config = HumanizerColumnConfig(name="humanized", target_columns=["article"], strength="aggressive")
        first = humanize_row(ARTICLE, config, random.Random(11))
        second = humanize_row(ARTICLE, config, random.Random(11))
        assert first == second


FOLLOW_UP = "It is important to note that the framework was implemented by the team."

CELL_KEYS = {
    "humanized_text", "ai_score_before", "ai_score_after", "confidence_before",
    "confidence_after", "ai_patterns", "analysis_before", "analysis_after",
}


def _frame() -> pd.DataFrame:
    return pd.DataFrame({"title": ["Our Strategy", None], "body": [ARTICLE, FOLLOW_UP]})


def _generate(config: HumanizerColumnConfig, data: pd.DataFrame) -> pd.DataFrame:
    generator = object.__new__(HumanizerColumnGenerator)
    with patch.object(HumanizerColumnGenerator, "config", config, create=True):
        return generator.generate(data)


class TestHumanizerColumnGenerator:
    def test_cells_have_expected_keys(self):
        config = HumanizerColumnConfig(name="humanized", target_columns=["title", "body"], seed=5)
        result = _generate(config, _frame())
        assert len(result) == 2
        for cell in result["humanized"]:
            assert set(cell) == CELL_KEYS

    def test_target_columns_are_joined_skipping_none(self):
        config = HumanizerColumnConfig(name="humanized", target_columns=["title", "body"], seed=5)
        result = _generate(config, _frame())
        first, second = result["humanized"].tolist()
        assert first["analysis_before"]["detailed_metrics"]["total_words"] == len(f"Our Strategy {ARTICLE}".split())
        assert second["analysis_before"]["detailed_metrics"]["total_words"] == len(FOLLOW_UP.split())

    def test_seeded_runs_are_repeatable(self):
        config = HumanizerColumnConfig(
            name="humanized", target_columns=["title", "body"], strength="aggressive", seed=5,
        )
        first = _generate(config, _frame())["humanized"].tolist()
        second = _generate(config, _frame())["humanized"].tolist()
        assert first == second

    def test_rows_share_one_random_source(self):
        config = HumanizerColumnConfig(
            name="humanized", target_columns=["title", "body"], strength="aggressive", seed=9,
        )
        rng = random.Random(9)
        expected = [
            humanize_row(f"Our Strategy {ARTICLE}", config, rng),
            humanize_row(FOLLOW_UP, config, rng),
        ]
        assert _generate(config, _frame())["humanized"].tolist() == expected

    def test_input_frame_is_not_mutated(self):
        config = HumanizerColumnConfig(name="humanized", target_columns=["title", "body"], seed=5)
        data = _frame()
        snapshot = data.copy(deep=True)
        _generate(config, data)
        assert "humanized" not in data.columns
        pd.testing.assert_frame_equal(data, snapshot)
