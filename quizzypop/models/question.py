"""
Question model - one quiz item with type-specific answer columns
"""
import json
import logging

from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.types import TypeDecorator
from quizzypop.database import Base

logger = logging.getLogger(__name__)


class JSONList(TypeDecorator):
    """
    Python list stored as JSON text in a single column.

    NULL, malformed JSON and non-list JSON all load as an empty list.
    Assign a new list to persist a change; in-place mutation is not tracked.
    """
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return json.dumps(list(value))

    def process_result_value(self, value, dialect):
        if not value:
            return []
        try:
            parsed = json.loads(value)
        except ValueError:
            logger.warning(f"Discarding malformed JSON list column value: {value!r}")
            return []
        return parsed if isinstance(parsed, list) else []


class Question(Base):
    """
    Questions table - choices and correct answers depend on `type`
    """
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(30), nullable=False, default="multiple-choice")
    text = Column(Text, nullable=False)
    choices = Column(JSONList, nullable=False, default=list)
    correct_answer_index = Column(Integer, nullable=False, default=0)  # multiple-choice
    correct_answer_indexes = Column(JSONList)  # multi-select
    correct_bool = Column(Boolean)  # true-false
    correct_answer = Column(Text)  # fill-blank, short, long

    quiz = relationship("Quiz", back_populates="questions")

    def __repr__(self):
        return f"<Question(id={self.id}, quiz_id={self.quiz_id}, type={self.type})>"
