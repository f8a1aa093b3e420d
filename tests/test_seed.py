from quizzypop.models import Category, Question, Quiz, User
from quizzypop.seed import DEMO_CATEGORIES, DEMO_USERS, seed_demo_data
from quizzypop.services.password_hasher import verify_password


def test_seed_is_idempotent(db):
    seed_demo_data(db)
    seed_demo_data(db)

    assert db.query(User).count() == len(DEMO_USERS)
    assert db.query(Category).count() == len(DEMO_CATEGORIES)
    assert db.query(Quiz).count() == 2
    assert db.query(Question).count() == 6


def test_seeded_users_can_log_in(db):
    seed_demo_data(db)

    demo = db.query(User).filter(User.email == "demo@quizzypop.com").one()
    assert verify_password("Demo12345", demo.password_hash, demo.password_salt)


def test_seeded_quizzes_are_owned_by_teacher(db):
    seed_demo_data(db)

    for quiz in db.query(Quiz).all():
        assert quiz.owner.role == "teacher"
        assert all(0 <= q.correct_answer_index < len(q.choices) for q in quiz.questions)
