"""
Pydantic schemas for quiz submission and scoring
"""
from pydantic import BaseModel, Field
from typing import List, Optional


class AnswerSubmission(BaseModel):
    """One answer; which field is read depends on the question type"""
    question_id: int
    selected_choice_index: Optional[int] = None  # multiple-choice
    selected_choice_indexes: Optional[List[int]] = None  # multi-select
    selected_bool: Optional[bool] = None  # true-false
    entered_answer: Optional[str] = None  # fill-blank, short, long


class QuizSubmission(BaseModel):
    """Answers need not cover every question"""
    answers: List[AnswerSubmission] = Field(default_factory=list)


class SubmissionResult(BaseModel):
    """Response after scoring a submission"""
    quiz_id: int
    quiz_title: str
    difficulty: str
    total_questions: int
    correct_answers: int
    score: int = Field(..., description="Percentage of correct answers, rounded")
    feedback_messages: List[str]
