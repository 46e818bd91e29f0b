import random
from dataclasses import replace

import pytest

from data_designer_humanizer.core import analyze_text
from data_designer_humanizer.humanizer import (
    add_contractions,
    add_natural_flow,
    apply_tone,
    combine_sentences,
    convert_passive_to_active,
    final_polish,
    humanize,
    inject_personality,
    make_academic,
    make_casual,
    make_creative,
    make_professional,
    reduce_formality,
    reduce_repetition,
    remove_robotic_transitions,
    split_sentence,
    start_with_conjunction,
    total_rounds,
    vary_sentence_structure,
)


class FixedRandom:
    """Random source that always returns the same draw."""

    def __init__(self, value=0.0, index=0):
        self.value = value
        self.index = index

    def random(self):
        return self.value

    def choice(self, seq):
        return seq[self.index % len(seq)]

    def randrange(self, n):
        return self.index % n


NEVER = FixedRandom(0.99)
ALWAYS = FixedRandom(0.0)

AI_TEXT = (
    "Furthermore, it is important to note that the methodology was developed by researchers. "
    "The framework can be utilized to optimize strategic outcomes. "
    "It is not possible to ascertain the results in order to implement changes. "
    "The data was analyzed by the team and the results were reviewed. "
    "Moreover, the comprehensive approach is important, the approach is important, and the plan is important."
)

SLANG_TEXT = (
    "Yeah, we are gonna utilize the framework. It is kinda obvious that we wanna win. "
    "Nope, it is not done. The results were reviewed by the team. YEAH and NOPE are fine."
)

FORBIDDEN = ("kinda", "gonna", "wanna", "yeah", "nope")


class TestFinalPolish:
    def test_normalizes_spacing_and_case(self):
        assert final_polish("hello   world .this is  it!!!") == "Hello world. This is it!"

    def test_collapses_repeated_terminals(self):
        assert final_polish("what?? really...") == "What? Really."

    def test_dash_spacing(self):
        assert final_polish("imagine  -  the sky") == "Imagine - the sky"

    def test_leading_whitespace(self):
        assert final_polish("   \n lowercase start.") == "Lowercase start."

    def test_idempotent(self):
        samples = [
            "hello   world .this is  it!!!",
            "a .. b ?! c , d ;e:f",
            "  leading space. and  more . . .",
            "x.,y -  z",
            AI_TEXT,
            SLANG_TEXT,
            "",
        ]
        for sample in samples:
            once = final_polish(sample)
            assert final_polish(once) == once


class TestStages:
    def test_reduce_formality_preserves_case(self):
        assert reduce_formality("We utilize the framework. Utilize it.", "light") == "We use the system. Use it."

    def test_reduce_formality_phrases(self):
        assert reduce_formality("In order to win, we rest.", "medium") == "To win, we rest."

    def test_reduce_formality_whole_words_only(self):
        assert reduce_formality("Frameworks are fine.", "light") == "Frameworks are fine."

    def test_aggressive_tier(self):
        assert reduce_formality("We must demonstrate value.", "light") == "We must demonstrate value."
        assert reduce_formality("We must demonstrate value.", "aggressive") == "We must show value."

    def test_reduce_repetition_from_third_occurrence(self):
        assert reduce_repetition("good good good good", "light", ALWAYS) == "good good great great"
        assert reduce_repetition("Good good Good", "aggressive", ALWAYS) == "Good good Great"

    def test_reduce_repetition_respects_probability(self):
        assert reduce_repetition("good good good good", "aggressive", NEVER) == "good good good good"

    def test_passive_to_active(self):
        assert convert_passive_to_active("The ball was kicked by John.", "light", ALWAYS) == "The John kicked ball."
        assert convert_passive_to_active("It was decided that we stay.", "light", ALWAYS) == "we decided that we stay."

    def test_passive_to_active_skipped(self):
        text = "The ball was kicked by John."
        assert convert_passive_to_active(text, "light", FixedRandom(0.5)) == text
        assert convert_passive_to_active(text, "aggressive", FixedRandom(0.5)) == "The John kicked ball."

    def test_add_contractions(self):
        text = "I am sure it is not what we are doing. They do not know."
        assert add_contractions(text, "light", ALWAYS) == "I'm sure it's not what we're doing. They don't know."
        assert add_contractions(text, "light", NEVER) == text

    def test_add_contractions_is_case_sensitive(self):
        assert add_contractions("It is late.", "aggressive", ALWAYS) == "It is late."

    def test_split_sentence(self):
        words = "one two three four five six seven eight nine ten eleven twelve thirteen fourteen fifteen"
        assert split_sentence(words) == words
        assert split_sentence(words + " sixteen") == (
            "one two three four five six seven eight. Nine ten eleven twelve thirteen fourteen fifteen sixteen"
        )

    def test_combine_sentences(self):
        assert combine_sentences("It rained.", "We stayed in.", ALWAYS) == "It rained, and we stayed in."
        assert combine_sentences("", "Solo.", ALWAYS) == "Solo."

    def test_start_with_conjunction(self):
        assert start_with_conjunction("The end.", ALWAYS) == "And the end."
        assert start_with_conjunction("the end.", ALWAYS) == "the end."
        assert start_with_conjunction("The end.", NEVER) == "The end."

    def test_vary_merges_into_previous_sentence(self):
        rng = FixedRandom(0.0, index=2)
        assert vary_sentence_structure("A one. B two. C three.", "light", rng) == "A one, so b two, so c three."

    def test_vary_without_transforms_keeps_text(self):
        assert vary_sentence_structure("A one. B two. C three.", "aggressive", NEVER) == "A one. B two. C three."

    def test_vary_keeps_trailing_fragment(self):
        assert vary_sentence_structure("First part. trailing bit", "light", NEVER) == "First part. trailing bit"

    def test_punctuation_led_text_is_kept(self):
        assert vary_sentence_structure("... wow", "light", NEVER) == "... wow"
        assert vary_sentence_structure("?!", "aggressive", NEVER) == "?!"
        assert make_casual("!!! Really", "light", NEVER) == "!!! Really"
        assert make_creative("?!", "light", ALWAYS) == "imagine - ?!"
        assert inject_personality("... One. Two. Three.", "casual", NEVER) == "... One. Two. Three."

    def test_remove_robotic_transitions(self):
        text = "Furthermore, it works. It is important to note that it scales."
        assert remove_robotic_transitions(text) == "plus, it works. note that it scales."

    def test_professional_tone(self):
        result = make_professional("Yeah, I'm gonna do it, kinda. Nope, we wanna wait.", "light", NEVER)
        assert result == "Yes, I'm going to do it, somewhat. No, we want to wait."

    def test_marker_tones(self):
        assert make_casual("Hi there. Bye now.", "light", ALWAYS) == "honestly, hi there. honestly, bye now."
        assert make_academic("Hi there.", "light", ALWAYS) == "interestingly, hi there."
        assert make_creative("Hi there.", "light", ALWAYS) == "imagine - hi there."
        assert make_casual("Hi there. Bye now.", "light", NEVER) == "Hi there. Bye now."

    def test_apply_tone_dispatch(self):
        assert apply_tone("Yeah.", "professional", "light", NEVER) == "Yes."
        assert apply_tone("Hi there.", "casual", "light", ALWAYS) == "honestly, hi there."

    def test_natural_flow(self):
        result = add_natural_flow("It is done and they were here.", "professional", "light", ALWAYS)
        assert result == "It certainly is done and they certainly were here."
        assert add_natural_flow("It is done.", "casual", "light", NEVER) == "It is done."

    def test_inject_personality(self):
        assert inject_personality("One. Two. Three.", "casual", ALWAYS) == "Let me tell you - one. Two. Three."
        assert inject_personality("One. Two.", "casual", ALWAYS) == "One. Two."
        assert inject_personality("One. Two. Three.", "casual", NEVER) == "One. Two. Three."


class TestHumanize:
    def test_total_rounds(self):
        assert total_rounds("light") == 1
        assert total_rounds("aggressive", 2) == 6
        assert total_rounds("medium", 3) == 6

    def test_invalid_arguments(self):
        analysis = analyze_text(AI_TEXT)
        with pytest.raises(ValueError):
            humanize(AI_TEXT, "angry", "light", analysis)
        with pytest.raises(ValueError):
            humanize(AI_TEXT, "casual", "maximum", analysis)
        with pytest.raises(ValueError):
            humanize(AI_TEXT, "casual", "light", analysis, passes=0)
        with pytest.raises(ValueError):
            humanize(AI_TEXT, "casual", "light", analysis, passes=6)

    def test_gates_use_given_analysis(self):
        text = "We utilize tools."
        closed = replace(analyze_text(text), formality_score=0.0)
        opened = replace(closed, formality_score=0.5)
        assert humanize(text, "professional", "light", closed, rng=NEVER) == "We utilize tools."
        assert humanize(text, "professional", "light", opened, rng=NEVER) == "We use tools."

    def test_seeded_rng_is_repeatable(self):
        analysis = analyze_text(AI_TEXT)
        first = humanize(AI_TEXT, "casual", "aggressive", analysis, passes=2, rng=random.Random(7))
        second = humanize(AI_TEXT, "casual", "aggressive", analysis, passes=2, rng=random.Random(7))
        assert first == second

    def test_professional_tone_removes_slang(self):
        analysis = analyze_text(SLANG_TEXT)
        for seed in range(20):
            for strength in ("light", "medium", "aggressive"):
                result = humanize(SLANG_TEXT, "professional", strength, analysis, rng=random.Random(seed))
                lowered = result.lower()
                assert not any(token in lowered for token in FORBIDDEN)
                assert final_polish(result) == result

    def test_default_rng_output_is_polished(self):
        analysis = analyze_text(SLANG_TEXT)
        outputs = [humanize(SLANG_TEXT, "professional", "light", analysis) for _ in range(2)]
        for result in outputs:
            assert final_polish(result) == result
            assert not any(token in result.lower() for token in FORBIDDEN)

    def test_all_tones_produce_polished_text(self):
        analysis = analyze_text(AI_TEXT)
        for tone in ("casual", "professional", "academic", "creative"):
            result = humanize(AI_TEXT, tone, "aggressive", analysis, passes=3, rng=random.Random(len(tone)))
            assert result
            assert final_polish(result) == result
            assert 0 <= analyze_text(result).overall_ai_score <= 1

    def test_formal_words_are_replaced(self):
        analysis = analyze_text(AI_TEXT)
        result = humanize(AI_TEXT, "professional", "light", analysis, rng=random.Random(1))
        lowered = result.lower()
        for formal in ("methodology", "ascertain", "furthermore", "in order to"):
            assert formal not in lowered

    def test_empty_text(self):
        analysis = analyze_text("")
        assert humanize("", "casual", "aggressive", analysis, rng=random.Random(0)) == ""

    def test_punctuation_only_text_survives(self):
        for text in ("?!", "... wow"):
            result = humanize(text, "professional", "light", analyze_text(text), rng=NEVER)
            assert result == final_polish(text)
            assert result
