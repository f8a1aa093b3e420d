"""
Quiz submission scoring
Choice questions: index match
Text questions: case-insensitive exact match
"""
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from quizzypop.exceptions import EmptyQuizError, NotFoundError
from quizzypop.models import Question
from quizzypop.repositories import QuizRepository
from quizzypop.schemas.question import QuestionType, TEXT_TYPES
from quizzypop.schemas.submission import AnswerSubmission, QuizSubmission, SubmissionResult

logger = logging.getLogger(__name__)


def _choice_text(choices: Sequence[str], index: Optional[int]) -> str:
    if index is None:
        return "none"
    # Submitted indexes may be stale or hostile; never let negatives wrap around
    if 0 <= index < len(choices):
        return choices[index]
    return "?"


def _bool_text(value: Optional[bool], missing: str) -> str:
    if value is None:
        return missing
    return "True" if value else "False"


class SubmissionService:
    """
    Scores a set of answers against a quiz without persisting anything

    Questions are numbered in id order for the feedback messages. An answer
    whose question_id is not in the quiz is ignored; a question without an
    answer scores as wrong with a "no answer" line.
    """

    def __init__(self, quiz_repo: QuizRepository):
        self.quiz_repo = quiz_repo

    def submit(self, quiz_id: int, submission: QuizSubmission) -> SubmissionResult:
        quiz = self.quiz_repo.get_with_questions(quiz_id)
        if quiz is None:
            raise NotFoundError(f"Quiz {quiz_id} not found")

        questions = sorted(quiz.questions, key=lambda q: q.id)
        if not questions:
            raise EmptyQuizError("Quiz has no questions")

        # First answer per question wins
        answers: Dict[int, AnswerSubmission] = {}
        for answer in submission.answers:
            answers.setdefault(answer.question_id, answer)

        correct_count = 0
        messages: List[str] = []

        for number, question in enumerate(questions, start=1):
            answer = answers.get(question.id)
            if answer is None:
                messages.append(f"Question {number}: no answer")
                continue

            is_correct, detail = self.grade_question(question, answer)
            if is_correct:
                correct_count += 1
                messages.append(f"Question {number}: correct")
            else:
                messages.append(f"Question {number}: wrong ({detail})")

        total = len(questions)
        score = round(correct_count / total * 100)

        logger.info(f"Quiz {quiz_id} scored: {correct_count}/{total} ({score}%)")

        return SubmissionResult(
            quiz_id=quiz.id,
            quiz_title=quiz.title,
            difficulty=quiz.difficulty,
            total_questions=total,
            correct_answers=correct_count,
            score=score,
            feedback_messages=messages,
        )

    def grade_question(self, question: Question, answer: AnswerSubmission) -> Tuple[bool, str]:
        """
        Grade one answer

        Returns:
            Tuple of (is_correct, detail for the feedback line when wrong)
        """
        try:
            question_type = QuestionType(question.type)
        except ValueError:
            return False, f"unknown question type '{question.type}'"

        if question_type == QuestionType.MULTIPLE_CHOICE:
            return self._grade_multiple_choice(question, answer)
        elif question_type == QuestionType.MULTI_SELECT:
            return self._grade_multi_select(question, answer)
        elif question_type == QuestionType.TRUE_FALSE:
            return self._grade_true_false(question, answer)
        elif question_type in TEXT_TYPES:
            return self._grade_text(question, answer)
        return False, f"unknown question type '{question.type}'"

    def _grade_multiple_choice(self, question: Question, answer: AnswerSubmission) -> Tuple[bool, str]:
        selected = answer.selected_choice_index
        if selected is not None and selected == question.correct_answer_index:
            return True, ""

        selected_text = _choice_text(question.choices, selected)
        correct_text = _choice_text(question.choices, question.correct_answer_index)
        return False, f"your answer: '{selected_text}', correct answer: '{correct_text}'"

    def _grade_multi_select(self, question: Question, answer: AnswerSubmission) -> Tuple[bool, str]:
        correct = sorted(set(question.correct_answer_indexes or []))
        if answer.selected_choice_indexes is None:
            selected = None
        else:
            selected = sorted(set(answer.selected_choice_indexes))
            if correct and selected == correct:
                return True, ""

        correct_texts = ", ".join(_choice_text(question.choices, i) for i in correct) or "unknown"
        if selected is None:
            selected_texts = "none"
        else:
            selected_texts = ", ".join(_choice_text(question.choices, i) for i in selected) or "none"
        return False, f"your answers: {selected_texts}, correct answers: {correct_texts}"

    def _grade_true_false(self, question: Question, answer: AnswerSubmission) -> Tuple[bool, str]:
        if (
            answer.selected_bool is not None
            and question.correct_bool is not None
            and answer.selected_bool == question.correct_bool
        ):
            return True, ""

        return False, (
            f"your answer: {_bool_text(answer.selected_bool, 'none')}, "
            f"correct answer: {_bool_text(question.correct_bool, 'unknown')}"
        )

    def _grade_text(self, question: Question, answer: AnswerSubmission) -> Tuple[bool, str]:
        entered = (answer.entered_answer or "").strip()
        expected = (question.correct_answer or "").strip()
        if entered and expected and entered.casefold() == expected.casefold():
            return True, ""

        return False, (
            f"your answer: '{answer.entered_answer or 'none'}', "
            f"correct answer: '{question.correct_answer or 'unknown'}'"
        )
