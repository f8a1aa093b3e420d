"""
Quiz cover image storage on local disk
"""
import logging
import os
import uuid
from pathlib import Path
from typing import Iterable

import aiofiles

from quizzypop.config import settings
from quizzypop.exceptions import ValidationError

logger = logging.getLogger(__name__)


class ImageStorage:
    """
    Validates and writes uploaded cover images under `<upload_dir>/quizzes/`

    Saved images are addressed by URLs of the form `/uploads/quizzes/<file>`.
    Only those URLs are ever deleted; seed images and external links are
    left alone.
    """

    URL_PREFIX = "/uploads/quizzes/"
    EXTENSIONS = {
        "image/jpeg": ".jpg",
        "image/png": ".png",
        "image/webp": ".webp",
    }

    def __init__(self, upload_dir: str, max_bytes: int, allowed_types: Iterable[str]):
        self.directory = Path(upload_dir) / "quizzes"
        self.max_bytes = max_bytes
        self.allowed_types = set(allowed_types)

    def validate(self, content_type: str, size: int) -> None:
        if content_type not in self.allowed_types or content_type not in self.EXTENSIONS:
            raise ValidationError("Only JPG, PNG, or WEBP images are allowed.")
        if size == 0:
            raise ValidationError("Image file is required.")
        if size > self.max_bytes:
            raise ValidationError(f"Image must be smaller than {self.max_bytes // 1_000_000} MB.")

    async def save(self, quiz_id: int, content: bytes, content_type: str) -> str:
        """
        Write an image for a quiz

        Returns:
            Public URL of the stored file
        """
        self.validate(content_type, len(content))

        self.directory.mkdir(parents=True, exist_ok=True)
        filename = f"quiz_{quiz_id}_{uuid.uuid4().hex}{self.EXTENSIONS[content_type]}"
        path = self.directory / filename

        try:
            async with aiofiles.open(path, "wb") as f:
                await f.write(content)
        except OSError:
            logger.error(f"Failed to write cover image {path}", exc_info=True)
            if path.exists():
                os.remove(path)
            raise

        logger.info(f"Stored cover image for quiz {quiz_id}: {filename} ({len(content)} bytes)")
        return self.URL_PREFIX + filename

    def path_for(self, url: str):
        if not url or not url.startswith(self.URL_PREFIX):
            return None
        name = url[len(self.URL_PREFIX):]
        if not name or "/" in name or "\\" in name or name.startswith("."):
            return None
        return self.directory / name

    def remove(self, url: str) -> bool:
        """Delete a file previously returned by `save`; False for any other URL"""
        path = self.path_for(url)
        if path is None or not path.exists():
            return False
        os.remove(path)
        logger.info(f"Removed cover image {path.name}")
        return True


# Global instance
image_storage = ImageStorage(
    upload_dir=settings.UPLOAD_DIR,
    max_bytes=settings.MAX_IMAGE_BYTES,
    allowed_types=settings.ALLOWED_IMAGE_TYPES
)
