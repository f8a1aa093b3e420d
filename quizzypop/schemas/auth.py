"""
Pydantic schemas for registration, login and token exchange
"""
import re
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


Role = Literal["student", "teacher", "admin"]


class RegisterRequest(BaseModel):
    """Schema for creating a user account"""
    email: EmailStr
    password: str = Field(..., min_length=8, description="At least 8 characters with upper, lower and digit")
    role: Optional[Role] = Field(None, description="Defaults to student")
    display_name: Optional[str] = Field(None, max_length=100)

    @field_validator("password")
    @classmethod
    def password_complexity(cls, value: str) -> str:
        if not re.search(r"[A-Z]", value):
            raise ValueError("Password must contain at least one uppercase letter")
        if not re.search(r"[a-z]", value):
            raise ValueError("Password must contain at least one lowercase letter")
        if not re.search(r"[0-9]", value):
            raise ValueError("Password must contain at least one number")
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RefreshRequest(BaseModel):
    """Blank tokens are rejected by the service with 401, not by schema validation"""
    refresh_token: str = ""


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    expires_at: datetime
    token_type: str = "Bearer"


class UserRead(BaseModel):
    id: int
    email: str
    role: str
    display_name: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CurrentUser(BaseModel):
    """Identity claims carried by a verified access token"""
    id: int
    name: str
    role: str
