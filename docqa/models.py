from __future__ import annotations

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict


class Difficulty(str, Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"

    @classmethod
    def parse(cls, value: Union["Difficulty", str, None]) -> Optional["Difficulty"]:
        """Return the matching member, or None for anything unrecognized."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                return None
        return None


class QuestionRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    question: str
    model_answer: str


class ScoreResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int
    feedback: str


# ----------------- Request / response bodies -----------------

class GenerateQuestionsRequest(BaseModel):
    document_content: Optional[str] = None
    num_questions: Optional[Union[int, str]] = None
    difficulty: Optional[str] = None


class GenerateQuestionsResponse(BaseModel):
    questions: List[QuestionRecord]


class EvaluateAnswerRequest(BaseModel):
    question: Optional[str] = None
    user_answer: Optional[str] = None
    model_answer: Optional[str] = None
    difficulty: Optional[str] = None


class UploadResponse(BaseModel):
    content: str
