"""
Daily quests: data model, constraint enforcement and generation.
"""

from .schema import Pattern, QuestCandidate, coerce_number
from .constraints import (
    DEFAULT_DIFFICULTY,
    DEFAULT_PATTERN,
    DEFAULT_QUEST_MINUTES,
    DEFAULT_SESSION_BUDGET,
    MAX_QUEST_MINUTES,
    MIN_QUEST_MINUTES,
    PLACEHOLDER_DELIVERABLE,
    PLACEHOLDER_TITLE,
    QuestConstraints,
    avoid_consecutive_same_pattern,
    enforce_constraints,
    normalize_quest,
)

__all__ = [
    "Pattern",
    "QuestCandidate",
    "coerce_number",
    "DEFAULT_DIFFICULTY",
    "DEFAULT_PATTERN",
    "DEFAULT_QUEST_MINUTES",
    "DEFAULT_SESSION_BUDGET",
    "MAX_QUEST_MINUTES",
    "MIN_QUEST_MINUTES",
    "PLACEHOLDER_DELIVERABLE",
    "PLACEHOLDER_TITLE",
    "QuestConstraints",
    "avoid_consecutive_same_pattern",
    "enforce_constraints",
    "normalize_quest",
]
