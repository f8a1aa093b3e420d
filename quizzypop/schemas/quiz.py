"""
Pydantic schemas for quiz-related requests and responses
"""
from datetime import datetime
from pydantic import BaseModel, Field, computed_field, field_validator
from typing import Annotated, List, Optional

from quizzypop.schemas.category import CategoryRead
from quizzypop.schemas.question import QuestionRead
from quizzypop.utils.category_images import image_for_category


DIFFICULTIES = ("easy", "medium", "hard")

# Column widths of quizzes.title, quizzes.image_url and tags.name
TITLE_MAX = 120
IMAGE_URL_MAX = 500
TagName = Annotated[str, Field(max_length=50)]


def _check_difficulty(value: Optional[str]) -> Optional[str]:
    if value is not None and value.strip() and value.strip().lower() not in DIFFICULTIES:
        raise ValueError("Difficulty must be 'easy', 'medium', or 'hard' if provided")
    return value


def _tag_names(value):
    return [getattr(tag, "name", tag) for tag in value or []]


class QuizCreate(BaseModel):
    """Schema for creating a quiz"""
    title: str = Field("", max_length=TITLE_MAX)
    description: Optional[str] = Field(None, max_length=500)
    image_url: Optional[str] = Field(None, max_length=IMAGE_URL_MAX)
    difficulty: Optional[str] = Field("easy", description="easy, medium or hard; blank means easy")
    category_id: int = Field(..., gt=0)
    tags: List[TagName] = Field(default_factory=list)

    @field_validator("difficulty")
    @classmethod
    def difficulty_is_known(cls, value):
        return _check_difficulty(value)


class QuizUpdate(BaseModel):
    """Partial update: absent fields keep their stored value"""
    title: Optional[str] = Field(None, max_length=TITLE_MAX)
    description: Optional[str] = Field(None, max_length=500)
    image_url: Optional[str] = Field(None, max_length=IMAGE_URL_MAX)
    difficulty: Optional[str] = None
    category_id: Optional[int] = Field(None, gt=0)
    tags: Optional[List[TagName]] = None

    @field_validator("difficulty")
    @classmethod
    def difficulty_is_known(cls, value):
        return _check_difficulty(value)


class QuizOwner(BaseModel):
    id: int
    display_name: Optional[str] = None

    class Config:
        from_attributes = True


class QuizRead(BaseModel):
    """Quiz with its category, owner and tags"""
    id: int
    title: str
    description: str
    image_url: Optional[str] = None
    difficulty: str
    category_id: int
    category: Optional[CategoryRead] = None
    user_id: Optional[int] = None
    owner: Optional[QuizOwner] = None
    created_at: Optional[datetime] = None
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def tags_as_names(cls, value):
        return _tag_names(value)

    @computed_field
    @property
    def cover_url(self) -> str:
        if self.image_url:
            return self.image_url
        return image_for_category(self.category.name if self.category else None)

    class Config:
        from_attributes = True


class QuizDetail(QuizRead):
    """Quiz together with its ordered questions"""
    questions: List[QuestionRead] = Field(default_factory=list)


class QuizImageResponse(BaseModel):
    quiz_id: int
    image_url: str
