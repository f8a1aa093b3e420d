"""
Domain exceptions raised by services and translated to HTTP responses in main.py
"""


class QuizzyPopError(Exception):
    """Base class for expected, client-facing failures"""

    status_code = 400
    error_code = "bad_request"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(QuizzyPopError, ValueError):
    """Client input is malformed or a required field is missing"""

    status_code = 400
    error_code = "validation_error"


class IndexOutOfRangeError(ValidationError):
    """An answer index does not point into the question's choices"""

    error_code = "index_out_of_range"


class EmptyQuizError(ValidationError):
    """Scoring requested for a quiz that has no questions"""

    error_code = "empty_quiz"


class NotFoundError(QuizzyPopError, LookupError):
    status_code = 404
    error_code = "not_found"


class ConflictError(QuizzyPopError):
    status_code = 409
    error_code = "conflict"


class UnauthorizedError(QuizzyPopError):
    status_code = 401
    error_code = "unauthorized"


class ForbiddenError(QuizzyPopError):
    status_code = 403
    error_code = "forbidden"
