"""
Pydantic schemas for quiz questions
"""
from enum import Enum
from pydantic import BaseModel, Field
from typing import List, Optional


class QuestionType(str, Enum):
    MULTIPLE_CHOICE = "multiple-choice"
    MULTI_SELECT = "multi-select"
    TRUE_FALSE = "true-false"
    FILL_BLANK = "fill-blank"
    SHORT = "short"
    LONG = "long"


CHOICE_TYPES = {QuestionType.MULTIPLE_CHOICE, QuestionType.MULTI_SELECT}
TEXT_TYPES = {QuestionType.FILL_BLANK, QuestionType.SHORT, QuestionType.LONG}


class QuestionCreate(BaseModel):
    """Schema for adding a question to an existing quiz"""
    quiz_id: int
    text: str = ""
    type: QuestionType = QuestionType.MULTIPLE_CHOICE
    choices: List[str] = Field(default_factory=list, description="At least two for choice types")
    correct_answer_index: int = Field(0, description="0-based index into choices (multiple-choice)")
    correct_answer_indexes: Optional[List[int]] = Field(None, description="Indexes into choices (multi-select)")
    correct_bool: Optional[bool] = None
    correct_answer: Optional[str] = None


class QuestionUpdate(BaseModel):
    """Partial update: only supplied fields change"""
    text: Optional[str] = None
    type: Optional[QuestionType] = None
    choices: Optional[List[str]] = None
    correct_answer_index: Optional[int] = None
    correct_answer_indexes: Optional[List[int]] = None
    correct_bool: Optional[bool] = None
    correct_answer: Optional[str] = None


class QuestionRead(BaseModel):
    id: int
    quiz_id: int
    type: str
    text: str
    choices: List[str]
    correct_answer_index: int
    correct_answer_indexes: Optional[List[int]] = None
    correct_bool: Optional[bool] = None
    correct_answer: Optional[str] = None

    class Config:
        from_attributes = True
