"""
Pydantic schemas for categories
"""
from pydantic import BaseModel
from typing import Optional


class CategoryRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    class Config:
        from_attributes = True
