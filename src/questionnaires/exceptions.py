"""Custom exceptions for the questionnaires app."""


class QuestionnaireException(Exception):
    """Base exception for the questionnaires app."""


class MissingNameError(QuestionnaireException):
    """Raised when a rubric or survey is created without a title."""


class QuizValidationError(QuestionnaireException):
    """Raised when a quiz submission fails validation. The message is shown to the author verbatim."""


class ConfigurationError(QuestionnaireException):
    """Raised when a question type tag does not resolve to a known question variant."""


class ReferentialIntegrityError(QuestionnaireException):
    """Raised when a questionnaire cannot be deleted because something still depends on it."""


class LockedStateError(QuestionnaireException):
    """Raised when a quiz that has already been taken is edited."""


class QuestionIntegrityError(QuestionnaireException):
    """Raised when a question does not belong to the questionnaire being changed."""


class CopyError(QuestionnaireException):
    """Raised when copying a questionnaire fails part way through."""


class AssignmentQuizError(QuestionnaireException):
    """Raised when a quiz is authored for an assignment that does not use quizzes."""


class CsvFormatError(QuestionnaireException):
    """Raised when an imported CSV file does not have the expected columns."""
