"""
Question service: validation, normalisation and persistence of quiz questions
"""
import logging
from typing import List, Optional, Sequence

from quizzypop.exceptions import IndexOutOfRangeError, NotFoundError, ValidationError
from quizzypop.models import Question
from quizzypop.repositories import QuestionRepository, QuizRepository
from quizzypop.schemas.question import (
    CHOICE_TYPES,
    TEXT_TYPES,
    QuestionCreate,
    QuestionType,
    QuestionUpdate,
)

logger = logging.getLogger(__name__)


def normalize_choices(choices: Optional[Sequence[Optional[str]]]) -> List[str]:
    """Trim every choice and drop the blank ones"""
    return [c.strip() for c in choices or [] if c is not None and c.strip()]


def normalize_indexes(indexes: Optional[Sequence[int]]) -> List[int]:
    return sorted(set(indexes or []))


def check_answer_fields(
    question_type: QuestionType,
    choices: List[str],
    correct_answer_index: int,
    correct_answer_indexes: List[int],
    correct_bool: Optional[bool],
    correct_answer: Optional[str]
) -> None:
    """
    Enforce the answer invariants for a question type

    Raises:
        ValidationError: a required answer field is missing
        IndexOutOfRangeError: an answer index does not point into choices
    """
    if question_type in CHOICE_TYPES and len(choices) < 2:
        raise ValidationError("Provide at least two choices.")

    if question_type == QuestionType.MULTIPLE_CHOICE:
        if not 0 <= correct_answer_index < len(choices):
            raise IndexOutOfRangeError("correct_answer_index must be a valid index into choices.")

    elif question_type == QuestionType.MULTI_SELECT:
        if not correct_answer_indexes:
            raise ValidationError("Multi-select questions need at least one correct choice.")
        if any(not 0 <= i < len(choices) for i in correct_answer_indexes):
            raise IndexOutOfRangeError("correct_answer_indexes must be valid indexes into choices.")

    elif question_type == QuestionType.TRUE_FALSE:
        if correct_bool is None:
            raise ValidationError("correct_bool is required for true-false questions.")

    elif question_type in TEXT_TYPES:
        if not (correct_answer or "").strip():
            raise ValidationError(f"correct_answer is required for {question_type.value} questions.")


class QuestionService:

    def __init__(self, repo: QuestionRepository, quiz_repo: QuizRepository):
        self.repo = repo
        self.quiz_repo = quiz_repo

    def create(self, dto: QuestionCreate) -> Question:
        if dto.quiz_id <= 0:
            raise ValidationError("quiz_id must be a positive integer")

        text = (dto.text or "").strip()
        if not text:
            raise ValidationError("Text is required")

        choices = normalize_choices(dto.choices)
        indexes = normalize_indexes(dto.correct_answer_indexes)
        answer = dto.correct_answer.strip() if dto.correct_answer is not None else None

        check_answer_fields(
            dto.type, choices, dto.correct_answer_index, indexes, dto.correct_bool, answer
        )

        quiz = self.quiz_repo.get_by_id(dto.quiz_id)
        if quiz is None:
            raise NotFoundError(f"Quiz {dto.quiz_id} not found")

        question = Question(
            quiz=quiz,
            text=text,
            type=dto.type.value,
            choices=choices,
            correct_answer_index=dto.correct_answer_index if dto.type == QuestionType.MULTIPLE_CHOICE else 0,
            correct_answer_indexes=indexes if dto.type == QuestionType.MULTI_SELECT else None,
            correct_bool=dto.correct_bool if dto.type == QuestionType.TRUE_FALSE else None,
            correct_answer=answer if dto.type in TEXT_TYPES else None,
        )

        created = self.repo.add(question)
        logger.info(f"Created {created.type} question {created.id} in quiz {created.quiz_id}")
        return created

    def get(self, question_id: int) -> Optional[Question]:
        return self.repo.get_by_id(question_id)

    def list_by_quiz(self, quiz_id: int) -> List[Question]:
        return self.repo.get_by_quiz_id(quiz_id)

    def update(self, question_id: int, dto: QuestionUpdate) -> bool:
        """
        Partial update; False if the question does not exist

        When supplied choices no longer cover a stored answer, the stored
        multiple-choice index resets to 0 and stored multi-select indexes
        that fell off the end are dropped. Explicitly supplied indexes are
        never adjusted and must fit the new choices.
        """
        existing = self.repo.get_by_id(question_id)
        if existing is None:
            logger.warning(f"Question {question_id} not found for update")
            return False

        text = existing.text
        if dto.text is not None:
            text = dto.text.strip()
            if not text:
                raise ValidationError("Text is required")

        question_type = dto.type or QuestionType(existing.type)
        choices = list(existing.choices)
        index = existing.correct_answer_index

        if dto.choices is not None:
            choices = normalize_choices(dto.choices)
            if len(choices) < 2 and question_type in CHOICE_TYPES:
                raise ValidationError("Provide at least two choices.")
            if question_type == QuestionType.MULTIPLE_CHOICE and not 0 <= index < len(choices):
                logger.warning(
                    f"Question {question_id}: correct_answer_index {index} does not fit "
                    f"{len(choices)} choices, resetting to 0"
                )
                index = 0

        if dto.correct_answer_index is not None:
            if not 0 <= dto.correct_answer_index < len(choices):
                raise IndexOutOfRangeError("correct_answer_index must be a valid index into choices.")
            index = dto.correct_answer_index

        if dto.correct_answer_indexes is not None:
            indexes = normalize_indexes(dto.correct_answer_indexes)
        else:
            indexes = list(existing.correct_answer_indexes or [])
            if dto.choices is not None and question_type == QuestionType.MULTI_SELECT:
                kept = [i for i in indexes if i < len(choices)]
                if kept != indexes:
                    logger.warning(
                        f"Question {question_id}: dropping correct_answer_indexes "
                        f"{sorted(set(indexes) - set(kept))} that do not fit {len(choices)} choices"
                    )
                    indexes = kept

        correct_bool = dto.correct_bool if dto.correct_bool is not None else existing.correct_bool
        answer = dto.correct_answer.strip() if dto.correct_answer is not None else existing.correct_answer

        check_answer_fields(question_type, choices, index, indexes, correct_bool, answer)

        existing.text = text
        existing.type = question_type.value
        existing.choices = choices
        existing.correct_answer_index = index
        existing.correct_answer_indexes = indexes if question_type == QuestionType.MULTI_SELECT else None
        existing.correct_bool = correct_bool if question_type == QuestionType.TRUE_FALSE else None
        existing.correct_answer = answer if question_type in TEXT_TYPES else None

        updated = self.repo.update(existing)
        if updated:
            logger.info(f"Question {question_id} updated")
        return updated

    def delete(self, question_id: int) -> bool:
        deleted = self.repo.delete(question_id)
        if not deleted:
            logger.warning(f"Question {question_id} not found for delete")
        return deleted
