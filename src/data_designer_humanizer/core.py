# Heuristic AI-writing analyzer.
#
# Scores text against ten lexical and statistical signals (formality, repetition,
# passive voice, sentence rhythm, starters, contractions, transitions, structure,
# vocabulary diversity, paragraph layout) and folds six of them into a weighted
# composite score in [0, 1].

from __future__ import annotations

import math
import re
from dataclasses import asdict, dataclass

# ---------------------------------------------------------------------------
# Hyperparameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Hyperparameters:
    """Thresholds and weights used by the analyzer."""

    formality_multiplier: float = 5.0
    repetition_min_word_length: int = 4
    repetition_free_occurrences: int = 2
    repetition_step: float = 0.5
    transition_saturation: float = 3.0
    perfect_structure_min_sentences: int = 4
    perfect_structure_min_words: int = 16
    lack_of_contractions_cutoff: float = 0.1
    lack_of_contractions_value: float = 0.8
    low_diversity_cutoff: float = 0.5
    low_diversity_value: float = 0.6
    paragraph_cv_cutoff: float = 0.2
    paragraph_consistency_value: float = 0.5

    formality_flag: float = 0.15
    repetition_flag: float = 0.08
    phrase_repetition_flag: int = 3
    passive_flag: float = 0.25
    variety_flag: float = 0.35
    starter_flag: float = 0.3
    starter_repeat_min: int = 3
    lack_of_contractions_flag: float = 0.5
    perfect_structure_flag: float = 0.3
    low_diversity_flag: float = 0.3
    paragraph_consistency_flag: float = 0.3

    formality_weight: float = 0.20
    repetition_weight: float = 0.15
    passive_weight: float = 0.15
    uniformity_weight: float = 0.15
    starter_weight: float = 0.10
    contraction_weight: float = 0.10
    transition_weight: float = 0.10
    diversity_weight: float = 0.05

    confidence_very_high: float = 0.7
    confidence_high: float = 0.5
    confidence_moderate: float = 0.3


DEFAULT_HYPERPARAMETERS = Hyperparameters()

INSUFFICIENT_TEXT = "Insufficient text for analysis"

# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DetailedMetrics:
    total_words: int
    total_sentences: int
    avg_sentence_length: float
    unique_word_ratio: float
    contraction_count: int
    passive_voice_instances: int
    repeated_phrases: int = 0


@dataclass(frozen=True)
class PatternAnalysis:
    """Result of a single analyzer pass over a document.

    Every ``*_score`` field except ``contraction_score`` lies in [0, 1].
    ``contraction_score`` is contractions per sentence and is not clamped.
    """

    ai_patterns: tuple[str, ...]
    formality_score: float
    repetition_score: float
    passive_count: int
    passive_score: float
    sentence_variety: float
    starter_score: float
    contraction_score: float
    transition_score: float
    vocab_diversity: float
    overall_ai_score: float
    detailed_metrics: DetailedMetrics

    def to_payload(self) -> dict[str, object]:
        payload = asdict(self)
        payload["ai_patterns"] = list(self.ai_patterns)
        return payload


# ---------------------------------------------------------------------------
# Compiled patterns
# ---------------------------------------------------------------------------

_FORMAL_WORDS = frozenset({
    "utilize", "implement", "facilitate", "leverage", "optimize", "strategic",
    "comprehensive", "methodology", "framework", "paradigm", "subsequently",
    "aforementioned", "nonetheless", "heretofore", "wherein", "whereby",
    "notwithstanding", "henceforth", "ascertain", "endeavor", "procure",
    "paramount", "integral", "quintessential", "multifaceted", "substantiate",
})

_PASSIVE_PATTERNS = [
    re.compile(r"\b(is|are|was|were|been|being)\s+\w+ed\b", re.IGNORECASE),
    re.compile(r"\b(is|are|was|were|been|being)\s+\w+en\b", re.IGNORECASE),
    re.compile(r"\bcan\s+be\s+\w+ed\b", re.IGNORECASE),
    re.compile(r"\bwill\s+be\s+\w+ed\b", re.IGNORECASE),
    re.compile(r"\bhas\s+been\s+\w+ed\b", re.IGNORECASE),
    re.compile(r"\bhave\s+been\s+\w+ed\b", re.IGNORECASE),
]

_CONTRACTION_RE = re.compile(
    r"\b(can't|won't|don't|isn't|aren't|wasn't|weren't|haven't|hasn't|hadn't"
    r"|you're|we're|they're|it's|that's|I'm|I've|I'll|there's|who's|what's|where's|how's)\b",
    re.IGNORECASE,
)

_ROBOTIC_TRANSITIONS = [
    "furthermore", "moreover", "in conclusion", "additionally", "consequently",
    "subsequently", "therefore", "thus", "hence", "accordingly", "nevertheless",
    "notwithstanding", "it is important to note", "it should be noted",
    "it is worth mentioning", "in this regard", "in light of", "with respect to",
    "in terms of", "with regard to", "as previously mentioned",
]

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _split_sentences(text: str) -> list[str]:
    return [s for s in _SENTENCE_SPLIT_RE.split(text) if s.strip()]


def _split_words(text: str) -> list[str]:
    return text.lower().split()


def _mean_and_std(values: list[float]) -> tuple[float, float]:
    mean = sum(values) / len(values)
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    return mean, math.sqrt(variance)


def _degenerate(words: list[str], sentences: list[str]) -> PatternAnalysis:
    return PatternAnalysis(
        ai_patterns=(INSUFFICIENT_TEXT,),
        formality_score=0.0,
        repetition_score=0.0,
        passive_count=0,
        passive_score=0.0,
        sentence_variety=0.0,
        starter_score=0.0,
        contraction_score=0.0,
        transition_score=0.0,
        vocab_diversity=0.0,
        overall_ai_score=0.0,
        detailed_metrics=DetailedMetrics(
            total_words=len(words),
            total_sentences=len(sentences),
            avg_sentence_length=0.0,
            unique_word_ratio=0.0,
            contraction_count=0,
            passive_voice_instances=0,
        ),
    )


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------


def _formality(words: list[str], hp: Hyperparameters) -> float:
    formal_count = sum(1 for w in words if w in _FORMAL_WORDS)
    return min(formal_count / len(words) * hp.formality_multiplier, 1.0)


def _repetition(words: list[str], hp: Hyperparameters) -> tuple[float, int]:
    word_freq: dict[str, int] = {}
    phrase_freq: dict[str, int] = {}
    for i, word in enumerate(words):
        if len(word) >= hp.repetition_min_word_length:
            word_freq[word] = word_freq.get(word, 0) + 1
        if i < len(words) - 1:
            phrase = f"{word} {words[i + 1]}"
            phrase_freq[phrase] = phrase_freq.get(phrase, 0) + 1

    excess = sum(
        (freq - hp.repetition_free_occurrences) * hp.repetition_step
        for freq in word_freq.values()
        if freq > hp.repetition_free_occurrences
    )
    repeated_phrases = sum(1 for freq in phrase_freq.values() if freq > 1)
    return min(excess / len(words), 1.0), repeated_phrases


def count_passive(text: str) -> int:
    """Count passive-voice constructions across all six passive patterns."""
    return sum(len(pat.findall(text)) for pat in _PASSIVE_PATTERNS)


def count_contractions(text: str) -> int:
    return len(_CONTRACTION_RE.findall(text))


def count_transitions(text: str) -> int:
    """Number of distinct robotic transition phrases present anywhere in ``text``."""
    lowered = text.lower()
    return sum(1 for t in _ROBOTIC_TRANSITIONS if t in lowered)


def _starter_repeats(sentences: list[str], hp: Hyperparameters) -> int:
    starter_freq: dict[str, int] = {}
    for sentence in sentences:
        starter = sentence.split()[0].lower()
        starter_freq[starter] = starter_freq.get(starter, 0) + 1
    return sum(1 for freq in starter_freq.values() if freq >= hp.starter_repeat_min)


def _perfect_structure(sentences: list[str], hp: Hyperparameters) -> float:
    if len(sentences) < hp.perfect_structure_min_sentences:
        return 0.0
    indicators = 0
    if all(len(s.split()) >= hp.perfect_structure_min_words for s in sentences):
        indicators += 1
    if all("," in s for s in sentences):
        indicators += 1
    return indicators / 2


def _paragraph_consistency(text: str, hp: Hyperparameters) -> float:
    paragraphs = [p for p in text.split("\n\n") if p.strip()]
    if len(paragraphs) <= 1:
        return 0.0
    mean, std = _mean_and_std([float(len(p)) for p in paragraphs])
    if std / mean < hp.paragraph_cv_cutoff:
        return hp.paragraph_consistency_value
    return 0.0


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def analyze_text(text: str, hyperparameters: Hyperparameters | None = None) -> PatternAnalysis:
    """Score text for AI-like writing patterns.

    Pure and deterministic: the same text always yields an identical record.
    Empty input, or input without any words or sentences, yields a zeroed
    record whose only pattern is ``"Insufficient text for analysis"``.

    Args:
        text: The prose to analyze.
        hyperparameters: Optional threshold/weight overrides.

    Returns:
        A ``PatternAnalysis`` record.
    """
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    sentences = _split_sentences(text)
    words = _split_words(text)
    if not words or not sentences:
        return _degenerate(words, sentences)

    formality_score = _formality(words, hp)
    repetition_score, repeated_phrases = _repetition(words, hp)

    passive_count = count_passive(text)
    passive_score = min(passive_count / len(sentences), 1.0)

    sentence_lengths = [float(len(s.split())) for s in sentences]
    avg_length, std_length = _mean_and_std(sentence_lengths)
    sentence_variety = _clamp(std_length / max(avg_length, 1.0))

    starter_score = min(_starter_repeats(sentences, hp) / len(sentences), 1.0)

    contraction_count = count_contractions(text)
    contraction_score = contraction_count / len(sentences)
    lack_of_contractions = hp.lack_of_contractions_value if contraction_score < hp.lack_of_contractions_cutoff else 0.0

    transition_count = count_transitions(text)
    transition_score = min(transition_count / hp.transition_saturation, 1.0)

    perfect_structure = _perfect_structure(sentences, hp)

    vocab_diversity = len(set(words)) / len(words)
    low_diversity = hp.low_diversity_value if vocab_diversity < hp.low_diversity_cutoff else 0.0

    paragraph_consistency = _paragraph_consistency(text, hp)

    patterns: list[str] = []
    if formality_score > hp.formality_flag:
        patterns.append(f"High formality level detected ({formality_score * 100:.1f}%)")
    if repetition_score > hp.repetition_flag:
        patterns.append(f"Word repetition detected ({repetition_score * 100:.1f}%)")
    if repeated_phrases > hp.phrase_repetition_flag:
        patterns.append(f"Phrase repetition detected ({repeated_phrases} repeated phrases)")
    if passive_score > hp.passive_flag:
        patterns.append(f"Excessive passive voice ({passive_count} instances)")
    if sentence_variety < hp.variety_flag:
        patterns.append(f"Uniform sentence lengths (variety: {sentence_variety * 100:.1f}%)")
    if starter_score > hp.starter_flag:
        patterns.append("Repetitive sentence starters detected")
    if lack_of_contractions > hp.lack_of_contractions_flag:
        patterns.append(f"Lack of contractions ({contraction_count} found)")
    if transition_count > 0:
        patterns.append(f"Robotic transitions detected ({transition_count} found)")
    if perfect_structure > hp.perfect_structure_flag:
        patterns.append("Unnaturally perfect sentence structure")
    if low_diversity > hp.low_diversity_flag:
        patterns.append(f"Limited vocabulary diversity ({vocab_diversity * 100:.1f}%)")
    if paragraph_consistency > hp.paragraph_consistency_flag:
        patterns.append("Suspiciously consistent paragraph lengths")

    overall = _clamp(
        formality_score * hp.formality_weight
        + repetition_score * hp.repetition_weight
        + passive_score * hp.passive_weight
        + (1 - sentence_variety) * hp.uniformity_weight
        + starter_score * hp.starter_weight
        + lack_of_contractions * hp.contraction_weight
        + transition_score * hp.transition_weight
        + low_diversity * hp.diversity_weight
    )

    return PatternAnalysis(
        ai_patterns=tuple(patterns),
        formality_score=formality_score,
        repetition_score=repetition_score,
        passive_count=passive_count,
        passive_score=passive_score,
        sentence_variety=sentence_variety,
        starter_score=starter_score,
        contraction_score=contraction_score,
        transition_score=transition_score,
        vocab_diversity=vocab_diversity,
        overall_ai_score=overall,
        detailed_metrics=DetailedMetrics(
            total_words=len(words),
            total_sentences=len(sentences),
            avg_sentence_length=round(avg_length, 1),
            unique_word_ratio=round(vocab_diversity, 2),
            contraction_count=contraction_count,
            passive_voice_instances=passive_count,
            repeated_phrases=repeated_phrases,
        ),
    )


def confidence_level(score: float, hyperparameters: Hyperparameters | None = None) -> str:
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    if score > hp.confidence_very_high:
        return "VERY HIGH"
    if score > hp.confidence_high:
        return "HIGH"
    if score > hp.confidence_moderate:
        return "MODERATE"
    return "LOW"


def compare_texts(
    original: str,
    humanized: str,
    before: PatternAnalysis | None = None,
    after: PatternAnalysis | None = None,
) -> dict[str, object]:
    """Summarize what a rewrite changed.

    ``before``/``after`` are computed when omitted. ``improvement`` is the drop in
    composite score relative to the original score, in percent.
    """
    before = before or analyze_text(original)
    after = after or analyze_text(humanized)
    words_before = len(original.split())
    words_after = len(humanized.split())
    word_delta = words_after - words_before
    length_change = (word_delta / words_before * 100) if words_before else 0.0
    score_before = before.overall_ai_score
    score_after = after.overall_ai_score
    improvement = ((score_before - score_after) / score_before * 100) if score_before else 0.0
    return {
        "words_before": words_before,
        "words_after": words_after,
        "word_delta": word_delta,
        "length_change": round(length_change, 1),
        "chars_before": len(original),
        "chars_after": len(humanized),
        "score_before": score_before,
        "score_after": score_after,
        "improvement": round(improvement, 1),
    }
