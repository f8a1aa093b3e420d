"""
Repository layer over the SQLAlchemy session
"""
from quizzypop.repositories.quiz_repository import QuizRepository
from quizzypop.repositories.question_repository import QuestionRepository
from quizzypop.repositories.user_repository import UserRepository, RefreshTokenRepository

__all__ = ["QuizRepository", "QuestionRepository", "UserRepository", "RefreshTokenRepository"]
