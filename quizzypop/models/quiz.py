"""
Quiz model - a titled, categorised collection of questions
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from quizzypop.database import Base
from quizzypop.models.tag import quiz_tags


class Quiz(Base):
    """
    Quizzes table - owned by a category and (optionally) by the user who wrote it
    """
    __tablename__ = "quizzes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(120), nullable=False)
    description = Column(Text, nullable=False, default="")
    image_url = Column(String(500), default="")
    difficulty = Column(String(20), nullable=False, default="easy")  # easy, medium, hard
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    category = relationship("Category", back_populates="quizzes")
    owner = relationship("User", back_populates="quizzes")
    questions = relationship(
        "Question",
        back_populates="quiz",
        cascade="all, delete-orphan",
        order_by="Question.id",
    )
    tags = relationship("Tag", secondary=quiz_tags, back_populates="quizzes", order_by="Tag.id")

    def __repr__(self):
        return f"<Quiz(id={self.id}, title={self.title}, difficulty={self.difficulty})>"
