"""
Question and model answer synthesis from document fragments
"""
import random
import re
from typing import List, Optional, Union

from docqa.models import Difficulty
from docqa.services.normalizer import normalize

MIN_TEMPLATED_CHUNK_CHARS = 50
MIN_ANSWER_SENTENCE_CHARS = 20

MODEL_ANSWER_LEAD_IN = "The document explains that "
MODEL_ANSWER_PLACEHOLDER = "This is a model answer that would normally be generated by an AI model."

GENERIC_TEMPLATE = 'What is the significance of "{chunk}" in the context of the document?'

EASY_TEMPLATES = (
    'What does the document explain about "{chunk}"?',
    'According to the document, what is the main concept of "{chunk}"?',
    'Explain in your own words what "{chunk}" refers to in the document.',
)
MEDIUM_TEMPLATES = (
    'How does "{chunk}" relate to the main concepts in the document?',
    'What are the implications of "{chunk}" as described in the document?',
    'Compare and contrast "{chunk}" with other concepts mentioned in the document.',
)
HARD_TEMPLATES = (
    'Critically analyze the significance of "{chunk}" in the broader context of the document.',
    'Evaluate how "{chunk}" contributes to the overall thesis of the document.',
    'What theoretical frameworks might explain the role of "{chunk}" as described in the document?',
)

_SENTENCE_DELIMITERS = re.compile(r"[.!?]+")


def templates_for(difficulty: Optional[Difficulty]) -> tuple:
    match difficulty:
        case Difficulty.EASY:
            return EASY_TEMPLATES
        case Difficulty.MEDIUM:
            return MEDIUM_TEMPLATES
        case Difficulty.HARD:
            return HARD_TEMPLATES
        case _:
            return MEDIUM_TEMPLATES


def synthesize_question(chunk: str, difficulty: Union[Difficulty, str, None], rng: random.Random) -> str:
    if len(chunk) < MIN_TEMPLATED_CHUNK_CHARS:
        return GENERIC_TEMPLATE.format(chunk=chunk)
    template = rng.choice(templates_for(Difficulty.parse(difficulty)))
    return template.format(chunk=chunk)


def answer_sentences(document_text: str) -> List[str]:
    return [s for s in _SENTENCE_DELIMITERS.split(document_text or "") if len(s.strip()) > MIN_ANSWER_SENTENCE_CHARS]


def synthesize_model_answer(question: str, document_text: str, rng: random.Random) -> str:
    """Assemble a reference answer from randomly sampled document sentences.

    ``question`` is part of the call signature but does not influence the
    sampled sentences.
    """
    sentences = answer_sentences(document_text)
    if not sentences:
        return MODEL_ANSWER_PLACEHOLDER

    num_sentences = rng.randint(2, 4)
    parts = [MODEL_ANSWER_LEAD_IN]
    for _ in range(min(num_sentences, len(sentences))):
        parts.append(rng.choice(sentences).strip() + ". ")
    return normalize("".join(parts))
