"""
Configuration management using Pydantic Settings
"""
from pydantic import field_validator
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Database
    DATABASE_URL: str = "sqlite:///./quizzypop.db"

    # JWT
    JWT_SECRET_KEY: str
    JWT_ISSUER: str = "QuizzyPop.Api"
    JWT_AUDIENCE: str = "QuizzyPop.Client"
    ACCESS_TOKEN_MINUTES: int = 30
    REFRESH_TOKEN_DAYS: int = 7

    # Application
    APP_NAME: str = "QuizzyPop API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ALLOWED_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]
    SEED_DEMO_DATA: bool = False

    # Quiz cover images
    UPLOAD_DIR: str = "uploads"
    MAX_IMAGE_BYTES: int = 5_000_000  # 5 MB
    ALLOWED_IMAGE_TYPES: List[str] = ["image/jpeg", "image/png", "image/webp"]

    # Rate Limiting (credential endpoints)
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 20
    RATE_LIMIT_PER_HOUR: int = 200

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("JWT_SECRET_KEY")
    @classmethod
    def secret_must_be_256_bits(cls, value: str) -> str:
        # HS256 needs a key at least as long as the digest
        if len(value.encode("utf-8")) < 32:
            raise ValueError("JWT_SECRET_KEY must be at least 32 bytes (256 bits)")
        return value

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()
