# Rule-based humanization pipeline.
#
# Threads text through an ordered sequence of regex-level rewrites (formality,
# repetition, passive voice, rhythm, contractions, transitions, tone, flow,
# personality), repeats the sequence a strength-dependent number of times and
# finishes with a deterministic polish. Several stages are randomized; pass a
# seeded ``random.Random`` as ``rng`` for reproducible output.

from __future__ import annotations

import logging
import random
import re
from typing import Callable, Literal

from data_designer_humanizer.core import PatternAnalysis

logger = logging.getLogger(__name__)

Tone = Literal["casual", "professional", "academic", "creative"]
Strength = Literal["light", "medium", "aggressive"]

TONES: tuple[str, ...] = ("casual", "professional", "academic", "creative")
STRENGTHS: tuple[str, ...] = ("light", "medium", "aggressive")
MIN_PASSES = 1
MAX_PASSES = 5

# ---------------------------------------------------------------------------
# Strength tables
# ---------------------------------------------------------------------------

_INNER_PASSES = {"light": 1, "medium": 2, "aggressive": 3}
_SYNONYM_PROBABILITY = {"light": 0.4, "medium": 0.4, "aggressive": 0.7}
_PASSIVE_INTENSITY = {"light": 0.3, "medium": 0.6, "aggressive": 1.0}
_VARIATION_INTENSITY = {"light": 0.15, "medium": 0.25, "aggressive": 0.4}
_CONTRACTION_INTENSITY = {"light": 0.5, "medium": 0.7, "aggressive": 1.0}
_CASUAL_INTENSITY = {"light": 0.1, "medium": 0.15, "aggressive": 0.25}
_ACADEMIC_INTENSITY = {"light": 0.05, "medium": 0.1, "aggressive": 0.15}
_CREATIVE_INTENSITY = {"light": 0.08, "medium": 0.12, "aggressive": 0.2}
_FLOW_INTENSITY = {"light": 0.05, "medium": 0.1, "aggressive": 0.15}

# Gates on the caller's analysis of the original text.
FORMALITY_GATE = 0.1
REPETITION_GATE = 0.05
PASSIVE_GATE = 0.2
VARIETY_GATE = 0.4
CONTRACTION_GATE = 0.2

CONJUNCTION_PROBABILITY = 0.3
MERGE_PROBABILITY = 0.3
PERSONALITY_PROBABILITY = 0.3
SPLIT_MIN_WORDS = 16

# ---------------------------------------------------------------------------
# Dictionaries
# ---------------------------------------------------------------------------

_BASE_REPLACEMENTS = {
    "utilize": "use",
    "implement": "set up",
    "facilitate": "help",
    "leverage": "use",
    "optimize": "improve",
    "strategic": "smart",
    "comprehensive": "complete",
    "methodology": "approach",
    "framework": "system",
    "paradigm": "model",
    "in order to": "to",
    "due to the fact that": "because",
    "it is important to note": "note that",
    "it should be noted": "worth noting",
    "the majority of": "most",
    "a significant number": "many",
    "substantial": "big",
    "numerous": "many",
    "approximately": "about",
    "regarding": "about",
    "concerning": "about",
    "pertaining to": "about",
    "with respect to": "about",
    "in light of": "because of",
    "endeavor": "try",
    "ascertain": "find out",
    "procure": "get",
    "subsequently": "later",
    "therefore": "so",
    "thus": "so",
    "hence": "so",
    "accordingly": "so",
    "consequently": "as a result",
    "nevertheless": "but",
    "nonetheless": "but",
    "notwithstanding": "despite",
}

_AGGRESSIVE_REPLACEMENTS = {
    "demonstrate": "show",
    "indicate": "show",
    "illustrate": "show",
    "establish": "prove",
    "determine": "figure out",
    "examine": "look at",
    "analyze": "break down",
    "evaluate": "check out",
    "assess": "judge",
    "investigate": "look into",
    "commence": "start",
    "terminate": "end",
    "initiate": "start",
    "conclude": "end",
    "obtain": "get",
    "acquire": "get",
    "purchase": "buy",
    "receive": "get",
}


def _compile_replacements(table: dict[str, str]) -> list[tuple[re.Pattern[str], str]]:
    return [(re.compile(rf"\b{re.escape(k)}\b", re.IGNORECASE), v) for k, v in table.items()]


_BASE_FORMALITY_RES = _compile_replacements(_BASE_REPLACEMENTS)
_AGGRESSIVE_FORMALITY_RES = _BASE_FORMALITY_RES + _compile_replacements(_AGGRESSIVE_REPLACEMENTS)

_SYNONYMS = {
    "important": ["key", "crucial", "vital", "essential", "critical"],
    "good": ["great", "excellent", "solid", "strong", "effective"],
    "bad": ["poor", "weak", "problematic", "flawed", "subpar"],
    "big": ["large", "major", "significant", "substantial", "huge"],
    "small": ["minor", "tiny", "limited", "modest", "slight"],
    "show": ["reveal", "display", "demonstrate", "indicate", "present"],
    "make": ["create", "build", "produce", "generate", "develop"],
    "get": ["obtain", "acquire", "receive", "gain", "secure"],
    "use": ["apply", "employ", "utilize", "implement", "deploy"],
    "think": ["believe", "feel", "consider", "reckon", "figure"],
    "say": ["state", "mention", "note", "express", "indicate"],
    "help": ["assist", "support", "aid", "facilitate", "enable"],
    "need": ["require", "necessitate", "demand", "call for", "want"],
    "want": ["desire", "wish", "prefer", "seek", "need"],
}

_PASSIVE_REWRITES = [
    (re.compile(r"(\w+)\s+(?:is|are)\s+(\w+ed)\s+by\s+(\w+)", re.IGNORECASE), r"\3 \2s \1"),
    (re.compile(r"(\w+)\s+(?:was|were)\s+(\w+ed)\s+by\s+(\w+)", re.IGNORECASE), r"\3 \2 \1"),
    (re.compile(r"it\s+(?:is|was)\s+(\w+ed)\s+that", re.IGNORECASE), r"we \1 that"),
    (re.compile(r"(\w+)\s+(?:can|could)\s+be\s+(\w+ed)", re.IGNORECASE), r"you can \2 \1"),
]

_CONTRACTIONS = [
    (re.compile(r"\bI am\b"), "I'm"),
    (re.compile(r"\byou are\b"), "you're"),
    (re.compile(r"\bwe are\b"), "we're"),
    (re.compile(r"\bthey are\b"), "they're"),
    (re.compile(r"\bit is\b"), "it's"),
    (re.compile(r"\bthat is\b"), "that's"),
    (re.compile(r"\bwhat is\b"), "what's"),
    (re.compile(r"\bwho is\b"), "who's"),
    (re.compile(r"\bdo not\b"), "don't"),
    (re.compile(r"\bdoes not\b"), "doesn't"),
    (re.compile(r"\bdid not\b"), "didn't"),
    (re.compile(r"\bcannot\b"), "can't"),
    (re.compile(r"\bcould not\b"), "couldn't"),
    (re.compile(r"\bwould not\b"), "wouldn't"),
    (re.compile(r"\bshould not\b"), "shouldn't"),
    (re.compile(r"\bwill not\b"), "won't"),
    (re.compile(r"\bhave not\b"), "haven't"),
    (re.compile(r"\bhas not\b"), "hasn't"),
    (re.compile(r"\bhad not\b"), "hadn't"),
    (re.compile(r"\bis not\b"), "isn't"),
    (re.compile(r"\bare not\b"), "aren't"),
    (re.compile(r"\bwas not\b"), "wasn't"),
    (re.compile(r"\bwere not\b"), "weren't"),
]

_CONJUNCTIONS = ["And", "But", "Or", "So", "Yet", "Because"]
_CONNECTORS = [", and", ", but", ", so", ", yet", " - ", ";"]

_TRANSITION_REPLACEMENTS = [
    (re.compile(re.escape(robotic), re.IGNORECASE), natural)
    for robotic, natural in {
        "furthermore,": "plus,",
        "moreover,": "also,",
        "in conclusion,": "so,",
        "additionally,": "also,",
        "consequently,": "so,",
        "subsequently,": "later,",
        "therefore,": "so,",
        "thus,": "so,",
        "hence,": "so,",
        "accordingly,": "so,",
        "nevertheless,": "but,",
        "nonetheless,": "but,",
        "it is important to note that": "note that",
        "it should be noted that": "worth noting that",
        "it is worth mentioning that": "worth mentioning that",
    }.items()
]

_CASUAL_MARKERS = ["honestly", "look", "you know", "like", "actually", "basically", "literally", "seriously"]
_ACADEMIC_MARKERS = ["interestingly", "notably", "it's worth noting", "this suggests", "significantly", "evidently"]
_CREATIVE_MARKERS = ["imagine", "picture this", "here's what's interesting", "the beauty is", "get this", "check it out"]

_PROFESSIONAL_REPLACEMENTS = [
    (re.compile(r"\bkinda\b", re.IGNORECASE), "somewhat"),
    (re.compile(r"\bgonna\b", re.IGNORECASE), "going to"),
    (re.compile(r"\bwanna\b", re.IGNORECASE), "want to"),
    (re.compile(r"\byeah\b", re.IGNORECASE), "yes"),
    (re.compile(r"\bnope\b", re.IGNORECASE), "no"),
]

_EMPHASIS_WORDS = {
    "casual": ["really", "actually", "honestly", "totally", "definitely", "pretty"],
    "professional": ["certainly", "indeed", "clearly", "notably", "particularly"],
    "academic": ["significantly", "particularly", "notably", "especially", "considerably"],
    "creative": ["incredibly", "amazingly", "beautifully", "remarkably", "strikingly"],
}

_PERSONAL_TOUCHES = {
    "casual": ["Let me tell you", "Here's the deal", "The thing is", "You see"],
    "professional": ["It's important to understand", "Consider this", "What we're seeing is"],
    "academic": ["It bears mentioning", "One must consider", "The evidence suggests"],
    "creative": ["Here's what's wild", "The fascinating part is", "You won't believe this"],
}

_SENTENCE_RE = re.compile(r"[^.!?]*[.!?]+|[^.!?]+$")
_COPULA_RE = re.compile(r"\b(is|are|was|were|has|have)\b", re.IGNORECASE)
_TRAILING_TERMINAL_RE = re.compile(r"[.!?]+$")
_UPPER_START_RE = re.compile(r"^[A-Z]")

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _sentences(text: str) -> list[str]:
    sentences = [s for s in _SENTENCE_RE.findall(text) if s.strip()]
    if not sentences and text.strip():
        return [text]
    return sentences


def _lower_first(s: str) -> str:
    return s[:1].lower() + s[1:]


def _upper_first(s: str) -> str:
    return s[:1].upper() + s[1:]


def _match_case(original: str, replacement: str) -> str:
    if original[:1] == original[:1].upper():
        return _upper_first(replacement)
    return replacement


def _sub_preserving_case(pattern: re.Pattern[str], replacement: str, text: str) -> str:
    return pattern.sub(lambda m: _match_case(m.group(0), replacement), text)


def _prepend_markers(text: str, markers: list[str], separator: str, probability: float, rng: random.Random) -> str:
    processed = []
    for sentence in _sentences(text):
        sentence = sentence.strip()
        if rng.random() < probability:
            processed.append(rng.choice(markers) + separator + _lower_first(sentence))
        else:
            processed.append(sentence)
    return " ".join(processed)


def _check_choice(name: str, value: str, allowed: tuple[str, ...]) -> None:
    if value not in allowed:
        raise ValueError(f"Invalid {name}: {value!r}. Use one of: {', '.join(allowed)}")


def _check_passes(passes: int) -> None:
    if not MIN_PASSES <= passes <= MAX_PASSES:
        raise ValueError(f"Passes must be between {MIN_PASSES} and {MAX_PASSES}, got {passes}")


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------


def reduce_formality(text: str, strength: str) -> str:
    """Swap formal words and stock phrases for plain ones, keeping a leading capital."""
    table = _AGGRESSIVE_FORMALITY_RES if strength == "aggressive" else _BASE_FORMALITY_RES
    for pattern, casual in table:
        text = _sub_preserving_case(pattern, casual, text)
    return text


def reduce_repetition(text: str, strength: str, rng: random.Random) -> str:
    """From the third occurrence on, swap known words for a random synonym."""
    probability = _SYNONYM_PROBABILITY[strength]
    seen: dict[str, int] = {}
    out = []
    for token in re.split(r"(\s+)", text):
        key = token.lower()
        count = seen.get(key, 0)
        synonyms = _SYNONYMS.get(key)
        if count > 1 and synonyms and rng.random() < probability:
            out.append(_match_case(token, rng.choice(synonyms)))
        else:
            out.append(token)
        seen[key] = count + 1
    return "".join(out)


def convert_passive_to_active(text: str, strength: str, rng: random.Random) -> str:
    # Capture-group reordering only; the result is not guaranteed grammatical.
    if rng.random() > _PASSIVE_INTENSITY[strength]:
        return text
    for pattern, replacement in _PASSIVE_REWRITES:
        text = pattern.sub(replacement, text)
    return text


def add_contractions(text: str, strength: str, rng: random.Random) -> str:
    intensity = _CONTRACTION_INTENSITY[strength]
    for pattern, contraction in _CONTRACTIONS:
        if rng.random() < intensity:
            text = pattern.sub(contraction, text)
    return text


def start_with_conjunction(sentence: str, rng: random.Random) -> str:
    if rng.random() < CONJUNCTION_PROBABILITY and _UPPER_START_RE.match(sentence):
        return f"{rng.choice(_CONJUNCTIONS)} {_lower_first(sentence)}"
    return sentence


def combine_sentences(first: str, second: str, rng: random.Random) -> str:
    if not first or not second:
        return second or first
    connector = rng.choice(_CONNECTORS)
    return _TRAILING_TERMINAL_RE.sub("", first) + connector + " " + _lower_first(second)


def split_sentence(sentence: str) -> str:
    words = sentence.split()
    if len(words) < SPLIT_MIN_WORDS:
        return sentence
    midpoint = len(words) // 2
    return " ".join(words[:midpoint]) + ". " + _upper_first(" ".join(words[midpoint:]))


def vary_sentence_structure(text: str, strength: str, rng: random.Random) -> str:
    """Randomly contract, conjoin, merge or split sentences to break up uniform rhythm."""
    sentences = _sentences(text)
    intensity = _VARIATION_INTENSITY[strength]
    result: list[str] = []

    for i, raw in enumerate(sentences):
        sentence = raw.strip()
        if rng.random() < intensity:
            transform = rng.randrange(4)
            if transform == 0:
                sentence = add_contractions(sentence, "medium", rng)
            elif transform == 1:
                sentence = start_with_conjunction(sentence, rng)
            elif transform == 2:
                if i > 0 and result and len(sentences) > 2 and rng.random() < MERGE_PROBABILITY:
                    result[-1] = combine_sentences(result[-1], sentence, rng)
                    continue
            else:
                sentence = split_sentence(sentence)
        result.append(sentence)

    return " ".join(result)


def remove_robotic_transitions(text: str) -> str:
    for pattern, natural in _TRANSITION_REPLACEMENTS:
        text = pattern.sub(natural, text)
    return text


def make_casual(text: str, strength: str, rng: random.Random) -> str:
    return _prepend_markers(text, _CASUAL_MARKERS, ", ", _CASUAL_INTENSITY[strength], rng)


def make_professional(text: str, strength: str, rng: random.Random) -> str:
    for pattern, formal in _PROFESSIONAL_REPLACEMENTS:
        text = _sub_preserving_case(pattern, formal, text)
    return text


def make_academic(text: str, strength: str, rng: random.Random) -> str:
    return _prepend_markers(text, _ACADEMIC_MARKERS, ", ", _ACADEMIC_INTENSITY[strength], rng)


def make_creative(text: str, strength: str, rng: random.Random) -> str:
    return _prepend_markers(text, _CREATIVE_MARKERS, " - ", _CREATIVE_INTENSITY[strength], rng)


_TONE_STAGES: dict[str, Callable[[str, str, random.Random], str]] = {
    "casual": make_casual,
    "professional": make_professional,
    "academic": make_academic,
    "creative": make_creative,
}


def apply_tone(text: str, tone: str, strength: str, rng: random.Random) -> str:
    stage = _TONE_STAGES.get(tone)
    return stage(text, strength, rng) if stage else text


def add_natural_flow(text: str, tone: str, strength: str, rng: random.Random) -> str:
    """Occasionally put an emphasis adverb in front of is/are/was/were/has/have."""
    words = _EMPHASIS_WORDS.get(tone, _EMPHASIS_WORDS["casual"])
    intensity = _FLOW_INTENSITY[strength]

    def _emphasize(m: re.Match[str]) -> str:
        if rng.random() < intensity:
            return f"{rng.choice(words)} {m.group(0)}"
        return m.group(0)

    return _COPULA_RE.sub(_emphasize, text)


def inject_personality(text: str, tone: str, rng: random.Random) -> str:
    touches = _PERSONAL_TOUCHES.get(tone, _PERSONAL_TOUCHES["casual"])
    sentences = [s.strip() for s in _sentences(text)]
    if len(sentences) > 2 and rng.random() < PERSONALITY_PROBABILITY:
        idx = rng.randrange(len(sentences))
        sentences[idx] = rng.choice(touches) + " - " + _lower_first(sentences[idx])
    return " ".join(sentences)


_WHITESPACE_RE = re.compile(r"\s+")
_SPACE_BEFORE_PUNCT_RE = re.compile(r"\s+([.,!?;:])")
_SPACE_AFTER_PUNCT_RE = re.compile(r"([.,!?;:])\s*")
_REPEATED_TERMINALS = [(re.compile(r"\.+"), "."), (re.compile(r"\?+"), "?"), (re.compile(r"!+"), "!")]
_SENTENCE_START_RE = re.compile(r"([.!?]\s+)(\w)")
_DASH_RE = re.compile(r"\s+-\s+")


def final_polish(text: str) -> str:
    """Normalize spacing, punctuation and sentence capitals. Idempotent."""
    text = _WHITESPACE_RE.sub(" ", text).strip()
    text = _SPACE_BEFORE_PUNCT_RE.sub(r"\1", text)
    for pattern, single in _REPEATED_TERMINALS:
        text = pattern.sub(single, text)
    text = _SPACE_AFTER_PUNCT_RE.sub(r"\1 ", text).strip()
    text = _SENTENCE_START_RE.sub(lambda m: m.group(1) + m.group(2).upper(), text)
    text = _upper_first(text)
    text = _DASH_RE.sub(" - ", text)
    return text


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def total_rounds(strength: str, passes: int = 1) -> int:
    """Number of stage-sequence traversals ``humanize`` performs.

    Each outer pass runs the whole sequence once per strength level
    (light 1, medium 2, aggressive 3), so the total is their product.
    """
    _check_choice("strength", strength, STRENGTHS)
    _check_passes(passes)
    return passes * _INNER_PASSES[strength]


def _run_stages(text: str, tone: str, strength: str, analysis: PatternAnalysis, rng: random.Random) -> str:
    if analysis.formality_score > FORMALITY_GATE:
        text = reduce_formality(text, strength)
    if analysis.repetition_score > REPETITION_GATE:
        text = reduce_repetition(text, strength, rng)
    if analysis.passive_score > PASSIVE_GATE:
        text = convert_passive_to_active(text, strength, rng)
    if analysis.sentence_variety < VARIETY_GATE:
        text = vary_sentence_structure(text, strength, rng)
    if analysis.contraction_score < CONTRACTION_GATE:
        text = add_contractions(text, strength, rng)

    text = remove_robotic_transitions(text)
    text = apply_tone(text, tone, strength, rng)
    text = add_natural_flow(text, tone, strength, rng)

    if strength == "aggressive":
        text = inject_personality(text, tone, rng)
    return text


def apply_humanization(
    text: str,
    tone: str,
    strength: str,
    analysis: PatternAnalysis,
    rng: random.Random | None = None,
) -> str:
    """Run one round: the stage sequence once per strength level, then ``final_polish``.

    Stage gates read ``analysis`` as given; they are not re-evaluated between
    inner passes.
    """
    _check_choice("tone", tone, TONES)
    _check_choice("strength", strength, STRENGTHS)
    if rng is None:
        rng = random.Random()

    inner = _INNER_PASSES[strength]
    logger.debug(
        f"gates: formality={analysis.formality_score > FORMALITY_GATE} "
        f"repetition={analysis.repetition_score > REPETITION_GATE} "
        f"passive={analysis.passive_score > PASSIVE_GATE} "
        f"variety={analysis.sentence_variety < VARIETY_GATE} "
        f"contractions={analysis.contraction_score < CONTRACTION_GATE}"
    )
    for _ in range(inner):
        text = _run_stages(text, tone, strength, analysis, rng)
    return final_polish(text)


def humanize(
    text: str,
    tone: Tone,
    strength: Strength,
    analysis: PatternAnalysis,
    *,
    passes: int = 1,
    rng: random.Random | None = None,
) -> str:
    """Rewrite text so it reads less like machine output.

    Output is intentionally non-deterministic: stage selection and acceptance
    draw from ``rng``. Two calls with the same arguments and an unseeded (or
    default) ``rng`` may differ.

    Args:
        text: The text to rewrite.
        tone: casual, professional, academic or creative.
        strength: light, medium or aggressive.
        analysis: Analysis of the original text; gates which stages run.
        passes: Outer rounds (1-5). Every round runs ``apply_humanization``,
            so the stage sequence runs ``total_rounds(strength, passes)`` times.
        rng: Random source. Pass ``random.Random(seed)`` for repeatable output.

    Returns:
        The rewritten text.

    Raises:
        ValueError: If tone, strength or passes is out of range.
    """
    _check_choice("tone", tone, TONES)
    _check_choice("strength", strength, STRENGTHS)
    _check_passes(passes)
    if rng is None:
        rng = random.Random()

    for round_no in range(1, passes + 1):
        logger.debug(f"Round {round_no}/{passes}: tone={tone} strength={strength}")
        text = apply_humanization(text, tone, strength, analysis, rng)
    return text
