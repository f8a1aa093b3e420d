"""
Quiz persistence: CRUD plus eager-loaded list and detail queries
"""
import logging
from typing import Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from quizzypop.models import Category, Quiz, Tag

logger = logging.getLogger(__name__)


class QuizRepository:
    """
    Data access for quizzes, categories and tags

    Reads return None when nothing matches. Store failures are logged,
    rolled back and re-raised to the caller.
    """

    def __init__(self, db: Session):
        self.db = db

    def _with_details(self, include_questions: bool):
        options = [
            joinedload(Quiz.category),
            joinedload(Quiz.owner),
            selectinload(Quiz.tags),
        ]
        if include_questions:
            options.append(selectinload(Quiz.questions))
        # populate_existing refreshes collections already loaded earlier in this session
        return self.db.query(Quiz).populate_existing().options(*options)

    def get_by_id(self, quiz_id: int) -> Optional[Quiz]:
        try:
            return self._with_details(include_questions=False).filter(Quiz.id == quiz_id).first()
        except SQLAlchemyError:
            logger.error(f"Failed to retrieve quiz with ID {quiz_id}", exc_info=True)
            raise

    def get_all_with_details(self) -> List[Quiz]:
        try:
            return self._with_details(include_questions=True).order_by(Quiz.id).all()
        except SQLAlchemyError:
            logger.error("Error retrieving all quizzes with details", exc_info=True)
            raise

    def get_with_questions(self, quiz_id: int) -> Optional[Quiz]:
        try:
            return self._with_details(include_questions=True).filter(Quiz.id == quiz_id).first()
        except SQLAlchemyError:
            logger.error(f"Failed to load quiz with questions (quiz_id: {quiz_id})", exc_info=True)
            raise

    def exists(self, quiz_id: int) -> bool:
        return self.db.query(Quiz.id).filter(Quiz.id == quiz_id).first() is not None

    def get_all_categories(self) -> List[Category]:
        try:
            return self.db.query(Category).order_by(Category.id).all()
        except SQLAlchemyError:
            logger.error("Failed to load categories", exc_info=True)
            raise

    def get_category(self, category_id: int) -> Optional[Category]:
        return self.db.get(Category, category_id)

    def get_or_create_tags(self, names: Iterable[str]) -> List[Tag]:
        """Resolve tag names (trimmed, de-duplicated) to Tag rows, adding unknown ones to the session"""
        wanted = []
        for name in names:
            name = name.strip()
            if name and name not in wanted:
                wanted.append(name)
        if not wanted:
            return []

        existing = {tag.name: tag for tag in self.db.query(Tag).filter(Tag.name.in_(wanted)).all()}
        tags = []
        for name in wanted:
            tag = existing.get(name)
            if tag is None:
                tag = Tag(name=name)
                self.db.add(tag)
            tags.append(tag)
        return tags

    def add(self, quiz: Quiz) -> Quiz:
        try:
            self.db.add(quiz)
            self.db.commit()
            self.db.refresh(quiz)
            return quiz
        except SQLAlchemyError:
            logger.error(f"Error adding quiz {quiz.title!r}", exc_info=True)
            self.db.rollback()
            raise

    def update(self, quiz: Quiz) -> bool:
        """Persist pending changes; False if the row no longer exists"""
        try:
            if self.db.get(Quiz, quiz.id) is None:
                return False
            self.db.commit()
            return True
        except SQLAlchemyError:
            logger.error(f"Error updating quiz {quiz.id}", exc_info=True)
            self.db.rollback()
            raise

    def delete(self, quiz_id: int) -> bool:
        try:
            quiz = self.db.get(Quiz, quiz_id)
            if quiz is None:
                return False
            self.db.delete(quiz)
            self.db.commit()
            return True
        except SQLAlchemyError:
            logger.error(f"Error deleting quiz {quiz_id}", exc_info=True)
            self.db.rollback()
            raise
