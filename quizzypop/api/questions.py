"""
Quiz question API endpoints (authenticated)
"""
from fastapi import APIRouter, Depends, HTTPException, Response
from typing import List

from quizzypop.api.deps import get_current_user, get_question_service
from quizzypop.schemas.question import QuestionCreate, QuestionRead, QuestionUpdate
from quizzypop.services.question_service import QuestionService

router = APIRouter(
    prefix="/api/quiz-questions",
    tags=["questions"],
    dependencies=[Depends(get_current_user)]
)


@router.get("/{question_id}", response_model=QuestionRead)
async def get_question(question_id: int, service: QuestionService = Depends(get_question_service)):
    question = service.get(question_id)
    if question is None:
        raise HTTPException(status_code=404, detail="Question not found")
    return question


@router.get("/by-quiz/{quiz_id}", response_model=List[QuestionRead])
async def list_questions_by_quiz(quiz_id: int, service: QuestionService = Depends(get_question_service)):
    return service.list_by_quiz(quiz_id)


@router.post("", response_model=QuestionRead, status_code=201)
async def create_question(
    dto: QuestionCreate,
    response: Response,
    service: QuestionService = Depends(get_question_service)
):
    """
    Add a question to an existing quiz

    Choices are trimmed and blanks dropped; at least two must remain for
    multiple-choice and multi-select questions.
    """
    question = service.create(dto)
    response.headers["Location"] = f"/api/quiz-questions/{question.id}"
    return question


@router.put("/{question_id}", status_code=204)
async def update_question(
    question_id: int,
    dto: QuestionUpdate,
    service: QuestionService = Depends(get_question_service)
):
    if not service.update(question_id, dto):
        raise HTTPException(status_code=404, detail="Question not found")
    return Response(status_code=204)


@router.delete("/{question_id}", status_code=204)
async def delete_question(question_id: int, service: QuestionService = Depends(get_question_service)):
    if not service.delete(question_id):
        raise HTTPException(status_code=404, detail="Question not found")
    return Response(status_code=204)
