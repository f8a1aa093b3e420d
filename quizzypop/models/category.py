"""
Category model - topical grouping of quizzes
"""
from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship
from quizzypop.database import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(80), nullable=False)
    description = Column(Text)

    quizzes = relationship("Quiz", back_populates="category")

    def __repr__(self):
        return f"<Category(id={self.id}, name={self.name})>"
