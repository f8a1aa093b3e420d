"""
Database models package
"""
from quizzypop.models.user import User
from quizzypop.models.category import Category
from quizzypop.models.tag import Tag, quiz_tags
from quizzypop.models.quiz import Quiz
from quizzypop.models.question import Question, JSONList
from quizzypop.models.refresh_token import RefreshToken

__all__ = ["User", "Category", "Tag", "quiz_tags", "Quiz", "Question", "JSONList", "RefreshToken"]
