"""
Quiz API endpoints
"""

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile
from typing import List
import logging

from quizzypop.api.deps import get_current_user, get_quiz_service
from quizzypop.schemas.auth import CurrentUser
from quizzypop.schemas.quiz import QuizCreate, QuizDetail, QuizImageResponse, QuizRead, QuizUpdate
from quizzypop.services.quiz_service import QuizService


router = APIRouter(prefix="/api/quizzes", tags=["quizzes"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[QuizDetail])
async def list_quizzes(service: QuizService = Depends(get_quiz_service)):
    """
    List every quiz

    Category, owner, tags and questions are loaded in the same round of
    queries, so rendering the list needs no follow-up calls.
    """
    return service.list()


@router.get("/{quiz_id}", response_model=QuizRead)
async def get_quiz(quiz_id: int, service: QuizService = Depends(get_quiz_service)):
    quiz = service.get(quiz_id)
    if quiz is None:
        raise HTTPException(status_code=404, detail="Quiz not found")
    return quiz


@router.get("/{quiz_id}/with-questions", response_model=QuizDetail)
async def get_quiz_with_questions(quiz_id: int, service: QuizService = Depends(get_quiz_service)):
    quiz = service.get_with_questions(quiz_id)
    if quiz is None:
        raise HTTPException(status_code=404, detail="Quiz not found")
    return quiz


@router.post("", response_model=QuizRead, status_code=201)
async def create_quiz(
    dto: QuizCreate,
    response: Response,
    user: CurrentUser = Depends(get_current_user),
    service: QuizService = Depends(get_quiz_service)
):
    """
    Create a quiz owned by the caller

    - Title is required (trimmed)
    - Difficulty defaults to easy
    - Unknown tag names are created
    """
    quiz = service.create(dto, user_id=user.id)
    response.headers["Location"] = f"/api/quizzes/{quiz.id}"
    return quiz


@router.put("/{quiz_id}", status_code=204)
async def update_quiz(
    quiz_id: int,
    dto: QuizUpdate,
    user: CurrentUser = Depends(get_current_user),
    service: QuizService = Depends(get_quiz_service)
):
    """Partial update: only supplied fields change"""
    if not service.update(quiz_id, dto):
        raise HTTPException(status_code=404, detail="Quiz not found")
    return Response(status_code=204)


@router.delete("/{quiz_id}", status_code=204)
async def delete_quiz(
    quiz_id: int,
    user: CurrentUser = Depends(get_current_user),
    service: QuizService = Depends(get_quiz_service)
):
    """Delete a quiz, its questions and its uploaded cover image"""
    if not service.delete(quiz_id):
        raise HTTPException(status_code=404, detail="Quiz not found")
    logger.info(f"Quiz {quiz_id} deleted by user {user.id}")
    return Response(status_code=204)


@router.post("/{quiz_id}/image", response_model=QuizImageResponse)
async def upload_quiz_image(
    quiz_id: int,
    image: UploadFile = File(...),
    user: CurrentUser = Depends(get_current_user),
    service: QuizService = Depends(get_quiz_service)
):
    """
    Upload a cover image

    - JPG, PNG or WEBP only
    - At most 5 MB
    - Replaces (and deletes) a previously uploaded image
    """
    # Read one byte past the limit so oversize files are detected without buffering them whole
    content = await image.read(service.image_storage.max_bytes + 1)
    url = await service.upload_image(quiz_id, content, image.content_type)
    if url is None:
        raise HTTPException(status_code=404, detail="Quiz not found")
    return QuizImageResponse(quiz_id=quiz_id, image_url=url)


@router.delete("/{quiz_id}/image", status_code=204)
async def delete_quiz_image(
    quiz_id: int,
    user: CurrentUser = Depends(get_current_user),
    service: QuizService = Depends(get_quiz_service)
):
    if not service.clear_image(quiz_id):
        raise HTTPException(status_code=404, detail="Quiz not found")
    return Response(status_code=204)
