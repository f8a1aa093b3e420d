"""
Quiz service: validation and normalisation in front of the quiz repository
"""
import logging
from typing import List, Optional

from quizzypop.exceptions import ValidationError
from quizzypop.models import Category, Quiz
from quizzypop.repositories import QuizRepository
from quizzypop.schemas.quiz import QuizCreate, QuizUpdate
from quizzypop.services.image_storage import ImageStorage

logger = logging.getLogger(__name__)


class QuizService:
    """
    Quiz CRUD

    Not-found is reported as None/False so the API layer picks the status
    code; invalid input raises ValidationError.
    """

    DEFAULT_DIFFICULTY = "easy"

    def __init__(self, repo: QuizRepository, image_storage: Optional[ImageStorage] = None):
        self.repo = repo
        self.image_storage = image_storage

    @staticmethod
    def _normalize_title(title: Optional[str]) -> str:
        title = (title or "").strip()
        if not title:
            raise ValidationError("Title is required")
        return title

    @staticmethod
    def _normalize_difficulty(difficulty: Optional[str], fallback: str) -> str:
        if difficulty is None or not difficulty.strip():
            return fallback
        return difficulty.strip().lower()

    def _require_category(self, category_id: int) -> Category:
        category = self.repo.get_category(category_id)
        if category is None:
            raise ValidationError(f"Category {category_id} does not exist")
        return category

    def create(self, dto: QuizCreate, user_id: Optional[int] = None) -> Quiz:
        title = self._normalize_title(dto.title)
        category = self._require_category(dto.category_id)

        quiz = Quiz(
            title=title,
            description=dto.description or "",
            image_url=dto.image_url or "",
            difficulty=self._normalize_difficulty(dto.difficulty, self.DEFAULT_DIFFICULTY),
            category=category,
            user_id=user_id,
        )
        quiz.tags = self.repo.get_or_create_tags(dto.tags)

        logger.info(f"Creating quiz with title {title!r}")
        created = self.repo.add(quiz)
        logger.info(f"Created quiz with id {created.id}")
        return created

    def get(self, quiz_id: int) -> Optional[Quiz]:
        return self.repo.get_by_id(quiz_id)

    def get_with_questions(self, quiz_id: int) -> Optional[Quiz]:
        return self.repo.get_with_questions(quiz_id)

    def list(self) -> List[Quiz]:
        return self.repo.get_all_with_details()

    def list_categories(self) -> List[Category]:
        return self.repo.get_all_categories()

    def update(self, quiz_id: int, dto: QuizUpdate) -> bool:
        quiz = self.repo.get_by_id(quiz_id)
        if quiz is None:
            logger.warning(f"Quiz {quiz_id} not found for update")
            return False

        # Validate everything before touching the entity
        title = self._normalize_title(dto.title) if dto.title is not None else quiz.title
        category = self._require_category(dto.category_id) if dto.category_id is not None else quiz.category
        old_image = quiz.image_url

        quiz.title = title
        quiz.category = category
        if dto.description is not None:
            quiz.description = dto.description
        if dto.image_url is not None:
            quiz.image_url = dto.image_url
        quiz.difficulty = self._normalize_difficulty(dto.difficulty, quiz.difficulty)
        if dto.tags is not None:
            quiz.tags = self.repo.get_or_create_tags(dto.tags)

        updated = self.repo.update(quiz)
        if updated:
            logger.info(f"Quiz {quiz_id} updated")
            if old_image != quiz.image_url:
                self._discard_image(old_image)
        return updated

    def delete(self, quiz_id: int) -> bool:
        quiz = self.repo.get_by_id(quiz_id)
        image_url = quiz.image_url if quiz else None

        deleted = self.repo.delete(quiz_id)
        if not deleted:
            logger.warning(f"Quiz {quiz_id} not found for delete")
            return False

        logger.info(f"Quiz {quiz_id} deleted")
        self._discard_image(image_url)
        return True

    async def upload_image(self, quiz_id: int, content: bytes, content_type: str) -> Optional[str]:
        """
        Store a new cover image and point the quiz at it

        Returns:
            The new image URL, or None if the quiz does not exist
        """
        if self.repo.get_by_id(quiz_id) is None:
            return None

        url = await self.image_storage.save(quiz_id, content, content_type)
        if not self.set_image(quiz_id, url):
            self.image_storage.remove(url)
            return None
        return url

    def set_image(self, quiz_id: int, image_url: str) -> bool:
        quiz = self.repo.get_by_id(quiz_id)
        if quiz is None:
            return False

        old_image = quiz.image_url
        quiz.image_url = image_url
        if not self.repo.update(quiz):
            return False

        if old_image != image_url:
            self._discard_image(old_image)
        return True

    def clear_image(self, quiz_id: int) -> bool:
        return self.set_image(quiz_id, "")

    def _discard_image(self, image_url: Optional[str]) -> None:
        if self.image_storage is None or not image_url:
            return
        try:
            self.image_storage.remove(image_url)
        except OSError:
            # The row change is already committed; a stale file is only logged
            logger.error(f"Failed to remove cover image {image_url}", exc_info=True)
