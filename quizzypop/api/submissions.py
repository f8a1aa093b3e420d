"""
Quiz submission endpoint
"""
from fastapi import APIRouter, Depends
import logging

from quizzypop.api.deps import get_current_user, get_submission_service
from quizzypop.schemas.auth import CurrentUser
from quizzypop.schemas.submission import QuizSubmission, SubmissionResult
from quizzypop.services.submission_service import SubmissionService

router = APIRouter(prefix="/api/quizzes", tags=["submissions"])
logger = logging.getLogger(__name__)


@router.post("/{quiz_id}/submit", response_model=SubmissionResult)
async def submit_quiz(
    quiz_id: int,
    submission: QuizSubmission,
    user: CurrentUser = Depends(get_current_user),
    service: SubmissionService = Depends(get_submission_service)
):
    """
    Score a set of answers

    - 404 if the quiz does not exist
    - 400 if the quiz has no questions
    - Feedback lines are numbered in question id order
    """
    logger.info(f"Scoring quiz {quiz_id} for user {user.id}")
    return service.submit(quiz_id, submission)
