"""
Demo data for local development
"""
import logging

from sqlalchemy.orm import Session

from quizzypop.models import Category, Question, Quiz, User
from quizzypop.services.password_hasher import hash_password

logger = logging.getLogger(__name__)

DEMO_USERS = [
    {"email": "demo@quizzypop.com", "role": "student", "password": "Demo12345", "display_name": "Demo"},
    {"email": "test@quizzypop.com", "role": "teacher", "password": "Test12345", "display_name": "Test Teacher"},
    {"email": "admin@quizzypop.com", "role": "admin", "password": "Admin12345", "display_name": "Admin"},
]

DEMO_CATEGORIES = [
    ("Math", "Quizzes about numbers and calculations"),
    ("Entertainment", "Quizzes about movies, music and pop culture"),
    ("History", "Quizzes about historical events and figures"),
    ("Science", "Quizzes about biology, chemistry, physics and more"),
    ("Geography", "Quizzes about countries, cities and landmarks"),
]

DEMO_QUIZZES = [
    {
        "title": "Geometry",
        "description": "A simple quiz about basic geometry",
        "difficulty": "medium",
        "category": "Math",
        "image_url": "/images/geometry.jpeg",
        "questions": [
            ("What is the sum of the interior angles of a triangle?",
             ["90 degrees", "180 degrees", "270 degrees", "360 degrees"], 1),
            ("What is the area of a circle with radius r?", ["πr", "2πr", "πr²", "2r²"], 2),
            ("What do you call a polygon with eight sides?", ["Hexagon", "Heptagon", "Octagon", "Nonagon"], 2),
        ],
    },
    {
        "title": "Disney Characters",
        "description": "Test your knowledge about Disney Characters!",
        "difficulty": "easy",
        "category": "Entertainment",
        "image_url": "/images/disney.webp",
        "questions": [
            ("Who is the main character in 'The Little Mermaid'?", ["Belle", "Ariel", "Cinderella", "Jasmine"], 1),
            ("Which Disney movie features a wooden puppet?", ["Dumbo", "Mulan", "Hercules", "Pinocchio"], 3),
            ("In 'The Lion King', what is the name of Simba's father?", ["Mufasa", "Scar", "Timon", "Pumbaa"], 0),
        ],
    },
]


def seed_demo_data(db: Session) -> None:
    """Insert demo users, categories and quizzes into empty tables"""
    if db.query(User).first() is None:
        for demo in DEMO_USERS:
            password_hash, salt = hash_password(demo["password"])
            db.add(User(
                email=demo["email"],
                role=demo["role"],
                display_name=demo["display_name"],
                password_hash=password_hash,
                password_salt=salt,
            ))
        db.commit()
        logger.info(f"Seeded {len(DEMO_USERS)} demo users")

    if db.query(Category).first() is None:
        db.add_all(Category(name=name, description=description) for name, description in DEMO_CATEGORIES)
        db.commit()
        logger.info(f"Seeded {len(DEMO_CATEGORIES)} categories")

    if db.query(Quiz).first() is None:
        owner = db.query(User).filter(User.role == "teacher").first()
        for demo in DEMO_QUIZZES:
            category = db.query(Category).filter(Category.name == demo["category"]).first()
            db.add(Quiz(
                title=demo["title"],
                description=demo["description"],
                difficulty=demo["difficulty"],
                image_url=demo["image_url"],
                category=category,
                owner=owner,
                questions=[
                    Question(text=text, type="multiple-choice", choices=choices, correct_answer_index=correct)
                    for text, choices, correct in demo["questions"]
                ],
            ))
        db.commit()
        logger.info(f"Seeded {len(DEMO_QUIZZES)} demo quizzes")
