"""
Tag model - free-form labels shared between quizzes
"""
from sqlalchemy import Column, Integer, String, Table, ForeignKey
from sqlalchemy.orm import relationship
from quizzypop.database import Base


quiz_tags = Table(
    "quiz_tags",
    Base.metadata,
    Column("quiz_id", Integer, ForeignKey("quizzes.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Tag(Base):
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), unique=True, nullable=False)

    quizzes = relationship("Quiz", secondary=quiz_tags, back_populates="tags")

    def __repr__(self):
        return f"<Tag(name={self.name})>"
