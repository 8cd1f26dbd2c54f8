"""
climb-you-onboarding - Profiling questions, answer validation and daily quests

Resolves branching onboarding questions, checks that enough was answered,
and turns model-generated quests into a list that fits the day.
"""

__version__ = "0.1.0"

from .config import Config
from .quiz import AnswerMap, QuestionId, resolve_options, validate_answers
from .quests import QuestCandidate, enforce_constraints
from .session import OnboardingSession

__all__ = [
    "Config",
    "AnswerMap",
    "QuestionId",
    "resolve_options",
    "validate_answers",
    "QuestCandidate",
    "enforce_constraints",
    "OnboardingSession",
]
