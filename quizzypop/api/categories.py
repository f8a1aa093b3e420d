"""
Category API endpoints
"""
from fastapi import APIRouter, Depends
from typing import List

from quizzypop.api.deps import get_quiz_service
from quizzypop.schemas.category import CategoryRead
from quizzypop.services.quiz_service import QuizService

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=List[CategoryRead])
async def list_categories(service: QuizService = Depends(get_quiz_service)):
    return service.list_categories()
