"""
Question persistence
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from quizzypop.models import Question

logger = logging.getLogger(__name__)


class QuestionRepository:

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, question_id: int) -> Optional[Question]:
        try:
            return self.db.query(Question).filter(Question.id == question_id).first()
        except SQLAlchemyError:
            logger.error(f"Failed to retrieve question with ID {question_id}", exc_info=True)
            raise

    def get_by_quiz_id(self, quiz_id: int) -> List[Question]:
        try:
            return (
                self.db.query(Question)
                .filter(Question.quiz_id == quiz_id)
                .order_by(Question.id)
                .all()
            )
        except SQLAlchemyError:
            logger.error(f"Failed to retrieve questions for quiz {quiz_id}", exc_info=True)
            raise

    def add(self, question: Question) -> Question:
        try:
            self.db.add(question)
            self.db.commit()
            self.db.refresh(question)
            return question
        except SQLAlchemyError:
            logger.error(f"Error adding question to quiz {question.quiz_id}", exc_info=True)
            self.db.rollback()
            raise

    def update(self, question: Question) -> bool:
        try:
            if self.db.get(Question, question.id) is None:
                return False
            self.db.commit()
            return True
        except SQLAlchemyError:
            logger.error(f"Error updating question {question.id}", exc_info=True)
            self.db.rollback()
            raise

    def delete(self, question_id: int) -> bool:
        try:
            question = self.db.get(Question, question_id)
            if question is None:
                return False
            self.db.delete(question)
            self.db.commit()
            return True
        except SQLAlchemyError:
            logger.error(f"Error deleting question {question_id}", exc_info=True)
            self.db.rollback()
            raise
