import os
import tempfile

# Settings are read at import time, so the environment must be ready first
os.environ["JWT_SECRET_KEY"] = "test-signing-secret-that-is-at-least-32-bytes"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="quizzypop-uploads-")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from quizzypop.api.deps import get_image_storage
from quizzypop.database import Base, get_db
from quizzypop.main import app
from quizzypop.models import Category, Question, Quiz, User
from quizzypop.repositories import QuestionRepository, QuizRepository
from quizzypop.services.image_storage import ImageStorage
from quizzypop.services.password_hasher import hash_password

PASSWORD = "Secret123"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def image_storage(tmp_path):
    return ImageStorage(
        upload_dir=str(tmp_path),
        max_bytes=5_000_000,
        allowed_types=["image/jpeg", "image/png", "image/webp"],
    )


@pytest.fixture
def quiz_repo(db):
    return QuizRepository(db)


@pytest.fixture
def question_repo(db):
    return QuestionRepository(db)


@pytest.fixture
def category(db):
    category = Category(name="Math", description="Quizzes about numbers and calculations")
    db.add(category)
    db.commit()
    return category


@pytest.fixture
def author(db):
    password_hash, salt = hash_password(PASSWORD)
    user = User(
        email="author@example.com",
        role="teacher",
        display_name="Author",
        password_hash=password_hash,
        password_salt=salt,
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def make_quiz(db, category):
    """Insert a quiz with multiple-choice questions given as (choices, correct_index) pairs"""

    def _make(title="Arithmetic", questions=(), difficulty="easy", owner=None):
        quiz = Quiz(
            title=title,
            description="",
            image_url="",
            difficulty=difficulty,
            category=category,
            owner=owner,
            questions=[
                Question(
                    text=f"Question {n}",
                    type="multiple-choice",
                    choices=list(choices),
                    correct_answer_index=correct,
                )
                for n, (choices, correct) in enumerate(questions, start=1)
            ],
        )
        db.add(quiz)
        db.commit()
        return quiz

    return _make


@pytest.fixture
def client(session_factory, image_storage):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_storage] = lambda: image_storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    """Register a user through the API and return bearer headers for it"""
    client.post("/api/auth/register", json={
        "email": "writer@example.com",
        "password": PASSWORD,
        "role": "teacher",
        "display_name": "Writer",
    })
    response = client.post("/api/auth/login", json={"email": "writer@example.com", "password": PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def anyio_backend():
    return "asyncio"
