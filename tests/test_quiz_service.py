import pytest

from quizzypop.exceptions import ValidationError
from quizzypop.models import Tag
from quizzypop.schemas.quiz import QuizCreate, QuizUpdate
from quizzypop.services.quiz_service import QuizService


@pytest.fixture
def service(quiz_repo, image_storage):
    return QuizService(quiz_repo, image_storage)


def test_create_normalizes_fields(service, category, author):
    quiz = service.create(
        QuizCreate(title="  Capitals  ", difficulty="  Hard ", category_id=category.id),
        user_id=author.id,
    )

    assert quiz.id is not None
    assert quiz.title == "Capitals"
    assert quiz.description == ""
    assert quiz.image_url == ""
    assert quiz.difficulty == "hard"
    assert quiz.user_id == author.id


def test_create_defaults_blank_difficulty_to_easy(service, category):
    quiz = service.create(QuizCreate(title="Capitals", difficulty="   ", category_id=category.id))

    assert quiz.difficulty == "easy"
    assert quiz.user_id is None


@pytest.mark.parametrize("title", ["", "   ", "\t\n"])
def test_create_rejects_blank_title(service, category, title):
    with pytest.raises(ValidationError, match="Title is required"):
        service.create(QuizCreate(title=title, category_id=category.id))


def test_create_rejects_unknown_category(service, category):
    with pytest.raises(ValidationError):
        service.create(QuizCreate(title="Capitals", category_id=category.id + 100))


def test_create_reuses_existing_tags(service, category, db):
    service.create(QuizCreate(title="One", category_id=category.id, tags=["geo", "europe"]))
    second = service.create(QuizCreate(title="Two", category_id=category.id, tags=[" geo ", "asia", "geo"]))

    assert sorted(tag.name for tag in second.tags) == ["asia", "geo"]
    assert db.query(Tag).count() == 3


def test_update_only_changes_supplied_fields(service, category):
    quiz = service.create(QuizCreate(
        title="Capitals", description="Cities", difficulty="medium", category_id=category.id
    ))

    assert service.update(quiz.id, QuizUpdate(title="  World capitals "))

    updated = service.get(quiz.id)
    assert updated.title == "World capitals"
    assert updated.description == "Cities"
    assert updated.difficulty == "medium"


def test_update_rejects_blank_title_and_keeps_existing(service, category):
    quiz = service.create(QuizCreate(title="Capitals", category_id=category.id))

    with pytest.raises(ValidationError):
        service.update(quiz.id, QuizUpdate(title="  "))

    assert service.get(quiz.id).title == "Capitals"


def test_update_and_delete_missing_quiz_return_false(service):
    assert service.update(999, QuizUpdate(title="Nothing")) is False
    assert service.delete(999) is False


def test_delete_removes_quiz_and_questions(service, make_quiz, question_repo):
    quiz = make_quiz(questions=[(["A", "B"], 0), (["C", "D"], 1)])

    assert service.delete(quiz.id) is True
    assert service.get(quiz.id) is None
    assert question_repo.get_by_quiz_id(quiz.id) == []


def test_list_populates_relations_without_follow_up_queries(service, make_quiz, author, db):
    make_quiz(title="Owned", questions=[(["A", "B"], 1)], owner=author)
    make_quiz(title="Orphan", questions=[(["C", "D", "E"], 2)])

    quizzes = service.list()
    # Detached objects raise on any lazy load, so everything read below must already be loaded
    db.expunge_all()

    assert [q.title for q in quizzes] == ["Owned", "Orphan"]
    assert quizzes[0].category.name == "Math"
    assert quizzes[0].owner.display_name == "Author"
    assert quizzes[1].owner is None
    assert quizzes[1].questions[0].choices == ["C", "D", "E"]
    assert quizzes[0].tags == []


def test_list_categories(service, category):
    assert [c.name for c in service.list_categories()] == ["Math"]


@pytest.mark.anyio
async def test_upload_replaces_previous_image_file(service, make_quiz, image_storage):
    quiz = make_quiz()

    first = await service.upload_image(quiz.id, b"\x89PNG first", "image/png")
    second = await service.upload_image(quiz.id, b"\x89PNG second", "image/png")

    assert service.get(quiz.id).image_url == second
    assert not image_storage.path_for(first).exists()
    assert image_storage.path_for(second).read_bytes() == b"\x89PNG second"


@pytest.mark.anyio
async def test_upload_for_missing_quiz_stores_nothing(service, image_storage):
    assert await service.upload_image(404, b"data", "image/jpeg") is None
    assert not image_storage.directory.exists()


@pytest.mark.anyio
async def test_delete_quiz_removes_uploaded_image(service, make_quiz, image_storage):
    quiz = make_quiz()
    url = await service.upload_image(quiz.id, b"jpeg-bytes", "image/jpeg")

    assert service.delete(quiz.id)
    assert not image_storage.path_for(url).exists()


def test_clear_image_leaves_non_uploaded_urls_alone(service, category, image_storage):
    quiz = service.create(QuizCreate(title="Seeded", image_url="/images/geometry.jpeg", category_id=category.id))

    assert service.clear_image(quiz.id)
    assert service.get(quiz.id).image_url == ""
    assert service.clear_image(999) is False
