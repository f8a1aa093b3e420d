"""
User model - registered accounts and their credentials
"""
from sqlalchemy import Column, Integer, String, LargeBinary, DateTime, func
from sqlalchemy.orm import relationship
from quizzypop.database import Base


class User(Base):
    """
    Users table - email identity with PBKDF2 hash and salt
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(LargeBinary(32), nullable=False)
    password_salt = Column(LargeBinary(16), nullable=False)
    role = Column(String(20), nullable=False, default="student")  # student, teacher, admin
    display_name = Column(String(100))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    quizzes = relationship("Quiz", back_populates="owner")
    refresh_tokens = relationship(
        "RefreshToken", back_populates="user", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
