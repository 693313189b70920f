import random

from fastapi import APIRouter, Depends, HTTPException, Request
import structlog

from docqa.config import MAX_QUESTIONS, MIN_QUESTIONS
from docqa.middleware.rate_limit import evaluation_limit, generation_limit
from docqa.models import (
    Difficulty,
    EvaluateAnswerRequest,
    GenerateQuestionsRequest,
    GenerateQuestionsResponse,
    ScoreResult,
)
from docqa.services.monitoring import ANSWERS_EVALUATED, QUESTIONS_GENERATED
from docqa.services.pipeline import evaluate_answer, generate_questions, new_rng

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["quiz"])


def _require_difficulty(value: str) -> Difficulty:
    difficulty = Difficulty.parse(value)
    if difficulty is None:
        raise HTTPException(status_code=400, detail="Invalid difficulty level")
    return difficulty


def _parse_num_questions(value) -> int:
    try:
        num = int(value)
    except (TypeError, ValueError):
        num = None
    if num is None or num < MIN_QUESTIONS or num > MAX_QUESTIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Number of questions must be between {MIN_QUESTIONS} and {MAX_QUESTIONS}",
        )
    return num


@router.post("/generate-questions", response_model=GenerateQuestionsResponse)
@generation_limit()
def generate_questions_route(
    request: Request,
    payload: GenerateQuestionsRequest,
    rng: random.Random = Depends(new_rng),
):
    if not payload.document_content or not payload.num_questions or not payload.difficulty:
        raise HTTPException(status_code=400, detail="Missing required parameters")

    num_questions = _parse_num_questions(payload.num_questions)
    difficulty = _require_difficulty(payload.difficulty)
    logger.info(
        "generating_questions",
        num_questions=num_questions,
        difficulty=difficulty.value,
        document_chars=len(payload.document_content),
    )

    try:
        questions = generate_questions(payload.document_content, num_questions, difficulty, rng)
    except Exception as e:
        logger.error("question_generation_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to generate questions")

    QUESTIONS_GENERATED.labels(difficulty=difficulty.value).inc(len(questions))
    return {"questions": questions}


@router.post("/evaluate-answer", response_model=ScoreResult)
@evaluation_limit()
def evaluate_answer_route(
    request: Request,
    payload: EvaluateAnswerRequest,
    rng: random.Random = Depends(new_rng),
):
    if not payload.question or not payload.user_answer or not payload.model_answer or not payload.difficulty:
        raise HTTPException(status_code=400, detail="Missing required parameters")

    difficulty = _require_difficulty(payload.difficulty)

    try:
        result = evaluate_answer(payload.question, payload.user_answer, payload.model_answer, difficulty, rng)
    except Exception as e:
        logger.error("answer_evaluation_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to evaluate answer")

    ANSWERS_EVALUATED.labels(difficulty=difficulty.value).inc()
    return result
