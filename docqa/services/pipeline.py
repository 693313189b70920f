import random
from typing import List, Union

import structlog

from docqa.config import MAX_QUESTIONS, MIN_QUESTIONS
from docqa.models import Difficulty, QuestionRecord, ScoreResult
from docqa.services.chunker import extract_chunks
from docqa.services.logging import log_performance
from docqa.services.normalizer import normalize
from docqa.services.questions import synthesize_model_answer, synthesize_question
from docqa.services.scoring import generate_feedback, score_answer

logger = structlog.get_logger()


def new_rng() -> random.Random:
    """Fresh random source for one request (overridable FastAPI dependency)."""
    return random.Random()


@log_performance("generate_questions")
def generate_questions(
    document_text: str,
    num_questions: int,
    difficulty: Union[Difficulty, str, None],
    rng: random.Random,
) -> List[QuestionRecord]:
    count = max(MIN_QUESTIONS, min(MAX_QUESTIONS, int(num_questions)))
    document = normalize(document_text)

    chunks = extract_chunks(document, count, rng)
    logger.info("chunks_extracted", requested=count, extracted=len(chunks), document_chars=len(document))

    records = []
    for index, chunk in enumerate(chunks[:count]):
        question = synthesize_question(chunk, difficulty, rng)
        model_answer = synthesize_model_answer(question, document, rng)
        logger.debug("question_generated", index=index + 1, preview=question[:100])
        records.append(QuestionRecord(question=question, model_answer=model_answer))
    return records


@log_performance("evaluate_answer")
def evaluate_answer(
    question: str,
    user_answer: str,
    model_answer: str,
    difficulty: Union[Difficulty, str, None],
    rng: random.Random,
) -> ScoreResult:
    score = score_answer(user_answer, model_answer, difficulty, rng)
    feedback = generate_feedback(user_answer, model_answer, question, difficulty)
    return ScoreResult(score=score, feedback=feedback)
