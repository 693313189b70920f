"""
Heuristic answer scoring and feedback
"""
import math
import random
from dataclasses import dataclass
from typing import List, Optional, Union

import structlog

from docqa.models import Difficulty

logger = structlog.get_logger()

SHORT_ANSWER_WORDS = 5
SHORT_ANSWER_SCORE = 20

STOP_WORDS = frozenset({
    "the", "is", "at", "which", "on", "a", "an", "and", "or", "but", "in", "to", "for",
})

EXPLANATION_MARKERS = ("because", "therefore", "since", "as a result", "consequently")
EXAMPLE_MARKERS = ("for example", "such as", "instance", "specifically")
CONTRAST_MARKERS = ("however", "although", "nevertheless", "moreover", "additionally")

MARKER_BONUS = 3
COVERAGE_WEIGHT = 70
MAX_VOCABULARY_BONUS = 0.2

# (minimum word count, bonus), highest first
LENGTH_BONUSES = ((100, 20), (75, 18), (50, 15), (30, 10), (20, 5))

PERTURBATION_LOW = -2
PERTURBATION_HIGH = 3

DETAIL_RATIO = 0.6
MIN_KEY_CONCEPT_CHARS = 5
MAX_KEY_CONCEPTS = 3

FEEDBACK_MORE_DETAIL = "Your answer could benefit from more detail and explanation."
FEEDBACK_KEY_CONCEPTS = "Consider discussing these key concepts: {concepts}"
FEEDBACK_EXPLANATIONS = "Include clear explanations showing cause-and-effect relationships"
FEEDBACK_EXAMPLES = "Support your answer with specific examples"
FEEDBACK_GOOD = "Good job! Your answer covers the main points."


@dataclass(frozen=True)
class ScoreBreakdown:
    word_count: int
    concept_coverage: float
    vocabulary_bonus: float
    weighted_score: int
    length_bonus: int
    coherence_bonus: int
    score: int


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def word_count(text: str) -> int:
    return len(text.split())


def concept_tokens(text: str) -> List[str]:
    """Distinct lower-cased content words, in first-seen order."""
    unique = dict.fromkeys(text.lower().split())
    return [w for w in unique if len(w) > 3 and w not in STOP_WORDS]


def has_marker(text: str, markers) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in markers)


def difficulty_multiplier(difficulty: Optional[Difficulty]) -> float:
    match difficulty:
        case Difficulty.EASY:
            return 1.1
        case Difficulty.MEDIUM:
            return 1.15
        case Difficulty.HARD:
            return 1.2
        case _:
            return 1.1


def length_bonus(count: int) -> int:
    for minimum, bonus in LENGTH_BONUSES:
        if count >= minimum:
            return bonus
    return 0


def coherence_bonus(text: str) -> int:
    bonus = 0
    if has_marker(text, EXPLANATION_MARKERS):
        bonus += MARKER_BONUS
    if has_marker(text, EXAMPLE_MARKERS):
        bonus += MARKER_BONUS
    if has_marker(text, CONTRAST_MARKERS):
        bonus += MARKER_BONUS
    return bonus


def clamp_score(score: int) -> int:
    return max(0, min(100, score))


def score_breakdown(user_answer: str, model_answer: str, difficulty: Union[Difficulty, str, None]) -> ScoreBreakdown:
    """Every deterministic sub-score of an answer, before the random nudge.

    Short answers are reported with their fixed score and zeroed sub-scores.
    """
    count = word_count(user_answer)
    if count < SHORT_ANSWER_WORDS:
        return ScoreBreakdown(count, 0.0, 0.0, 0, 0, 0, SHORT_ANSWER_SCORE)

    user_concepts = concept_tokens(user_answer)
    model_concepts = concept_tokens(model_answer)
    user_set = set(user_concepts)
    model_set = set(model_concepts)

    found = sum(1 for w in model_concepts if w in user_set)
    coverage = found / len(model_concepts) if model_concepts else 0.0

    unique_user = sum(1 for w in user_concepts if w not in model_set)
    vocabulary_bonus = min(MAX_VOCABULARY_BONUS, unique_user / 20)

    base_score = coverage * COVERAGE_WEIGHT
    weighted = round_half_up(base_score * difficulty_multiplier(Difficulty.parse(difficulty)))
    bonus_for_length = length_bonus(count)
    bonus_for_coherence = coherence_bonus(user_answer)

    score = weighted + bonus_for_length + round_half_up(vocabulary_bonus * 100) + bonus_for_coherence

    # Minimum score for answers of decent length
    if count >= 50 and score < 60:
        score = 60
    elif count >= 30 and score < 50:
        score = 50

    return ScoreBreakdown(
        word_count=count,
        concept_coverage=coverage,
        vocabulary_bonus=vocabulary_bonus,
        weighted_score=weighted,
        length_bonus=bonus_for_length,
        coherence_bonus=bonus_for_coherence,
        score=clamp_score(score),
    )


def score_answer(user_answer: str, model_answer: str, difficulty: Union[Difficulty, str, None], rng: random.Random) -> int:
    breakdown = score_breakdown(user_answer, model_answer, difficulty)
    if breakdown.word_count < SHORT_ANSWER_WORDS:
        return SHORT_ANSWER_SCORE

    score = clamp_score(breakdown.score + rng.randint(PERTURBATION_LOW, PERTURBATION_HIGH))
    logger.info(
        "answer_scored",
        word_count=breakdown.word_count,
        concept_coverage=round(breakdown.concept_coverage, 2),
        score=score,
    )
    return score


def missing_concepts(user_answer: str, model_answer: str) -> List[str]:
    user_set = set(concept_tokens(user_answer))
    return [w for w in concept_tokens(model_answer) if w not in user_set]


def generate_feedback(user_answer: str, model_answer: str, question: str, difficulty: Union[Difficulty, str, None]) -> str:
    """Improvement hints, one per line.

    ``question`` and ``difficulty`` are accepted for parity with the scorer
    and are not consulted.
    """
    feedback = []

    if word_count(user_answer) < word_count(model_answer) * DETAIL_RATIO:
        feedback.append(FEEDBACK_MORE_DETAIL)

    important = [c for c in missing_concepts(user_answer, model_answer) if len(c) >= MIN_KEY_CONCEPT_CHARS]
    if important:
        feedback.append(FEEDBACK_KEY_CONCEPTS.format(concepts=", ".join(important[:MAX_KEY_CONCEPTS])))

    if not has_marker(user_answer, EXPLANATION_MARKERS):
        feedback.append(FEEDBACK_EXPLANATIONS)

    if not has_marker(user_answer, EXAMPLE_MARKERS):
        feedback.append(FEEDBACK_EXAMPLES)

    if not feedback:
        feedback.append(FEEDBACK_GOOD)

    return "\n".join(feedback)
