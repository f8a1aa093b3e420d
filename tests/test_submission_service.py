import pytest

from quizzypop.exceptions import EmptyQuizError, NotFoundError
from quizzypop.models import Question
from quizzypop.schemas.submission import AnswerSubmission, QuizSubmission
from quizzypop.services.submission_service import SubmissionService


@pytest.fixture
def service(quiz_repo):
    return SubmissionService(quiz_repo)


def submit(service, quiz, *answers):
    return service.submit(quiz.id, QuizSubmission(answers=[
        AnswerSubmission(question_id=question_id, selected_choice_index=index)
        for question_id, index in answers
    ]))


def test_one_of_two_correct(service, make_quiz):
    quiz = make_quiz(questions=[(["A", "B", "C"], 1), (["A", "B", "C"], 0)])
    q1, q2 = quiz.questions

    result = submit(service, quiz, (q1.id, 1), (q2.id, 1))

    assert result.quiz_id == quiz.id
    assert result.quiz_title == "Arithmetic"
    assert result.difficulty == "easy"
    assert result.total_questions == 2
    assert result.correct_answers == 1
    assert result.score == 50
    assert result.feedback_messages == [
        "Question 1: correct",
        "Question 2: wrong (your answer: 'B', correct answer: 'A')",
    ]


def test_unanswered_question_counts_as_wrong(service, make_quiz):
    quiz = make_quiz(questions=[(["Yes", "No"], 0), (["Yes", "No"], 1)])
    q1, _ = quiz.questions

    result = submit(service, quiz, (q1.id, 0))

    assert result.correct_answers == 1
    assert result.score == 50
    assert result.feedback_messages[1] == "Question 2: no answer"


def test_answers_for_other_quizzes_are_ignored(service, make_quiz):
    quiz = make_quiz(questions=[(["Yes", "No"], 0)])
    other = make_quiz(title="Other", questions=[(["Yes", "No"], 0)])

    result = submit(service, quiz, (other.questions[0].id, 0))

    assert result.total_questions == 1
    assert result.correct_answers == 0
    assert result.feedback_messages == ["Question 1: no answer"]


def test_first_answer_per_question_wins(service, make_quiz):
    quiz = make_quiz(questions=[(["Yes", "No"], 0)])
    question = quiz.questions[0]

    result = submit(service, quiz, (question.id, 1), (question.id, 0))

    assert result.correct_answers == 0


@pytest.mark.parametrize("selected", [5, -1])
def test_out_of_range_selection_is_shown_as_question_mark(service, make_quiz, selected):
    quiz = make_quiz(questions=[(["A", "B"], 0)])

    result = submit(service, quiz, (quiz.questions[0].id, selected))

    assert result.feedback_messages == ["Question 1: wrong (your answer: '?', correct answer: 'A')"]


def test_missing_selection_is_wrong(service, make_quiz):
    quiz = make_quiz(questions=[(["A", "B"], 0)])

    result = submit(service, quiz, (quiz.questions[0].id, None))

    assert result.feedback_messages == ["Question 1: wrong (your answer: 'none', correct answer: 'A')"]


def test_score_is_rounded(service, make_quiz):
    quiz = make_quiz(questions=[(["A", "B"], 0)] * 3)
    q1, q2, q3 = quiz.questions

    result = submit(service, quiz, (q1.id, 0), (q2.id, 0), (q3.id, 1))

    assert result.correct_answers == 2
    assert result.score == 67


def test_questions_are_numbered_by_id(service, make_quiz, db):
    quiz = make_quiz(questions=[(["A", "B"], 0), (["A", "B"], 1)])
    first, second = sorted(quiz.questions, key=lambda q: q.id)

    result = submit(service, quiz, (second.id, 1))

    assert result.feedback_messages == ["Question 1: no answer", "Question 2: correct"]


def test_empty_quiz_cannot_be_scored(service, make_quiz):
    quiz = make_quiz()

    with pytest.raises(EmptyQuizError, match="Quiz has no questions"):
        submit(service, quiz)


def test_missing_quiz(service):
    with pytest.raises(NotFoundError):
        service.submit(12345, QuizSubmission(answers=[]))


def test_other_question_types(service, make_quiz, db):
    quiz = make_quiz()
    quiz.questions.extend([
        Question(text="Pick the primes", type="multi-select", choices=["2", "4", "5"], correct_answer_indexes=[0, 2]),
        Question(text="Water is wet", type="true-false", choices=[], correct_bool=True),
        Question(text="Capital of Norway", type="short", choices=[], correct_answer="Oslo"),
        Question(text="Capital of Sweden", type="fill-blank", choices=[], correct_answer="Stockholm"),
    ])
    db.commit()
    multi, tf, short, blank = sorted(quiz.questions, key=lambda q: q.id)

    result = service.submit(quiz.id, QuizSubmission(answers=[
        AnswerSubmission(question_id=multi.id, selected_choice_indexes=[2, 0]),
        AnswerSubmission(question_id=tf.id, selected_bool=False),
        AnswerSubmission(question_id=short.id, entered_answer="  oslo "),
        AnswerSubmission(question_id=blank.id, entered_answer="Gothenburg"),
    ]))

    assert result.correct_answers == 2
    assert result.score == 50
    assert result.feedback_messages == [
        "Question 1: correct",
        "Question 2: wrong (your answer: False, correct answer: True)",
        "Question 3: correct",
        "Question 4: wrong (your answer: 'Gothenburg', correct answer: 'Stockholm')",
    ]


def test_multi_select_partial_answer_is_wrong(service, make_quiz, db):
    quiz = make_quiz()
    quiz.questions.append(
        Question(text="Pick the primes", type="multi-select", choices=["2", "4", "5"], correct_answer_indexes=[0, 2])
    )
    db.commit()

    result = service.submit(quiz.id, QuizSubmission(answers=[
        AnswerSubmission(question_id=quiz.questions[0].id, selected_choice_indexes=[0]),
    ]))

    assert result.feedback_messages == ["Question 1: wrong (your answers: 2, correct answers: 2, 5)"]
