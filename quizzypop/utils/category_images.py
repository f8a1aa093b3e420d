"""
Default cover images for quizzes that have no uploaded image
"""
from typing import Optional

CATEGORY_IMAGES = {
    "Math": "/images/categories/math.jpg",
    "History": "/images/categories/history.jpg",
    "Science": "/images/categories/science.jpg",
    "Geography": "/images/categories/geography.jpg",
    "Entertainment": "/images/categories/entertainment.jpg",
}

DEFAULT_IMAGE = "/images/categories/default.jpg"


def image_for_category(category_name: Optional[str]) -> str:
    return CATEGORY_IMAGES.get(category_name or "", DEFAULT_IMAGE)
