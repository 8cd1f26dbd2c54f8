"""
Profiling quiz for climb-you onboarding

Question bank, branch resolution, navigation and answer validation.
"""

from .schema import (
    AnswerMap,
    BlockId,
    Dependency,
    NoveltyLevel,
    Question,
    QuestionId,
    QuestionNotFoundError,
    QuestionOption,
)
from .bank import QUESTIONS, QUESTION_ORDER, get_question
from .branching import (
    Progress,
    calculate_progress,
    get_all_questions,
    get_block_info,
    get_question_with_options,
    next_position,
    previous_position,
    resolve_options,
)
from .validation import (
    MIN_COMPLETION_RATIO,
    REQUIRED_FIELDS,
    ValidationResult,
    validate_answers,
)

__all__ = [
    "AnswerMap",
    "BlockId",
    "Dependency",
    "NoveltyLevel",
    "Question",
    "QuestionId",
    "QuestionNotFoundError",
    "QuestionOption",
    "QUESTIONS",
    "QUESTION_ORDER",
    "get_question",
    "Progress",
    "calculate_progress",
    "get_all_questions",
    "get_block_info",
    "get_question_with_options",
    "next_position",
    "previous_position",
    "resolve_options",
    "MIN_COMPLETION_RATIO",
    "REQUIRED_FIELDS",
    "ValidationResult",
    "validate_answers",
]
