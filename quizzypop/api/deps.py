"""
Shared FastAPI dependencies: services per request and bearer authentication
"""
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from quizzypop.config import settings
from quizzypop.database import get_db
from quizzypop.exceptions import UnauthorizedError
from quizzypop.repositories import (
    QuestionRepository,
    QuizRepository,
    RefreshTokenRepository,
    UserRepository,
)
from quizzypop.schemas.auth import CurrentUser
from quizzypop.services.auth_service import AuthService
from quizzypop.services.image_storage import ImageStorage, image_storage
from quizzypop.services.question_service import QuestionService
from quizzypop.services.quiz_service import QuizService
from quizzypop.services.submission_service import SubmissionService
from quizzypop.services.token_service import token_service
from quizzypop.utils.rate_limiter import rate_limiter

bearer_scheme = HTTPBearer(auto_error=False)


def get_image_storage() -> ImageStorage:
    return image_storage


def get_quiz_service(
    db: Session = Depends(get_db),
    images: ImageStorage = Depends(get_image_storage)
) -> QuizService:
    return QuizService(QuizRepository(db), images)


def get_question_service(db: Session = Depends(get_db)) -> QuestionService:
    return QuestionService(QuestionRepository(db), QuizRepository(db))


def get_submission_service(db: Session = Depends(get_db)) -> SubmissionService:
    return SubmissionService(QuizRepository(db))


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(UserRepository(db), RefreshTokenRepository(db), token_service)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)
) -> CurrentUser:
    """Resolve the caller from `Authorization: Bearer <access token>`"""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Not authenticated")

    claims = token_service.decode_access_token(credentials.credentials)
    try:
        return CurrentUser(
            id=int(claims["sub"]),
            name=claims.get("name", ""),
            role=claims.get("role", "student"),
        )
    except (KeyError, TypeError, ValueError):
        raise UnauthorizedError("Invalid access token")


async def limit_credential_requests(request: Request) -> None:
    if settings.RATE_LIMIT_ENABLED:
        await rate_limiter.check_rate_limit(request)
