"""
Onboarding session

One user's pass through the profiling questions: a private AnswerMap plus
a cursor. Sessions never share state, so running many at once needs no
locking.
"""

import logging
from typing import Optional

from .config import Config
from .quiz.branching import calculate_progress, next_position, previous_position, resolve_options, Progress
from .quiz.bank import QUESTIONS, QUESTION_ORDER
from .quiz.schema import AnswerMap, Question, QuestionId, QuestionOption
from .quiz.validation import ValidationResult, validate_answers

logger = logging.getLogger(__name__)


class OnboardingSession:
    """
    Walks the question flow and collects answers.

    Example:
        session = OnboardingSession()
        session.answer("skill")
        session.advance()
        session.options()  # A2 options for the "skill" branch
    """

    def __init__(self, config: Optional[Config] = None, answers: Optional[AnswerMap] = None):
        self.config = config or Config()
        self.answers = answers if answers is not None else AnswerMap()
        self.cursor: QuestionId = QUESTION_ORDER[0]

    def current_question(self) -> Question:
        """The question under the cursor, with resolved options."""
        question = QUESTIONS[self.cursor]
        return question.with_options(resolve_options(question, self.answers))

    def options(self) -> list[QuestionOption]:
        return resolve_options(self.cursor, self.answers)

    def answer(self, option_id: str, memo: Optional[str] = None) -> QuestionOption:
        """
        Select an option for the current question.

        Raises:
            ValueError: If option_id isn't one of the current options
        """
        for option in self.options():
            if option.id == option_id:
                break
        else:
            raise ValueError(f"Unknown option {option_id!r} for question {self.cursor.value}")

        self.answers.record(option)
        if memo is not None:
            self.answers.note(self.cursor, memo)
        logger.debug("%s answered %s=%r", self.cursor.value, option.data_key, option.value)
        return option

    def advance(self) -> bool:
        """Move to the next question. False if already at the last one."""
        nxt = next_position(self.cursor.block, self.cursor.step)
        if nxt is None:
            return False
        self.cursor = nxt
        return True

    def back(self) -> bool:
        """Move to the previous question. False if already at the first one."""
        prev = previous_position(self.cursor.block, self.cursor.step)
        if prev is None:
            return False
        self.cursor = prev
        return True

    def progress(self) -> Progress:
        return calculate_progress(self.cursor.block, self.cursor.step)

    def validate(self) -> ValidationResult:
        return validate_answers(
            self.answers,
            min_completion_ratio=self.config.validation.min_completion_ratio,
        )

    @property
    def is_complete(self) -> bool:
        """Whether enough has been answered to generate quests."""
        return self.validate().is_valid

    def to_dict(self) -> dict:
        return {
            "cursor": self.cursor.value,
            "answers": self.answers.to_dict(),
        }
