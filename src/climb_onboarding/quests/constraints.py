"""
Quest constraint enforcement

Turns loosely shaped quest proposals into a list that the app can show:
every quest fits the per-quest time box, difficulty sits in [0, 1],
required text is present, and the whole list fits the session budget.
"""

import logging
from collections import Counter
from dataclasses import dataclass, replace
from typing import Any, Iterable, Mapping, Optional, Union

from ..config import QuestBudgetConfig
from .schema import Pattern, QuestCandidate, coerce_number

logger = logging.getLogger(__name__)


MIN_QUEST_MINUTES = 15
MAX_QUEST_MINUTES = 45
DEFAULT_QUEST_MINUTES = 30
DEFAULT_SESSION_BUDGET = 90
DEFAULT_DIFFICULTY = 0.5
PLACEHOLDER_TITLE = "Today's quest"
PLACEHOLDER_DELIVERABLE = "A short note on what you did"
DEFAULT_PATTERN = Pattern.READ_NOTE_Q.value


@dataclass(frozen=True)
class QuestConstraints:
    """Time limits applied to generated quests, in minutes."""
    min_minutes: int = MIN_QUEST_MINUTES
    max_minutes: int = MAX_QUEST_MINUTES
    default_minutes: int = DEFAULT_QUEST_MINUTES
    session_budget: int = DEFAULT_SESSION_BUDGET

    def __post_init__(self):
        if self.min_minutes <= 0:
            raise ValueError(f"min_minutes must be positive, got {self.min_minutes}")
        if not self.min_minutes <= self.default_minutes <= self.max_minutes:
            raise ValueError(
                f"default_minutes {self.default_minutes} outside "
                f"[{self.min_minutes}, {self.max_minutes}]"
            )

    @classmethod
    def from_config(cls, config: QuestBudgetConfig) -> "QuestConstraints":
        return cls(
            min_minutes=config.min_quest_minutes,
            max_minutes=config.max_quest_minutes,
            default_minutes=config.default_quest_minutes,
            session_budget=config.session_budget_minutes,
        )


DEFAULT_CONSTRAINTS = QuestConstraints()

QuestInput = Union[QuestCandidate, Mapping[str, Any]]


def normalize_quest(
    item: QuestInput,
    constraints: QuestConstraints = DEFAULT_CONSTRAINTS,
) -> QuestCandidate:
    """
    Clamp and backfill one quest.

    Missing or unusable minutes become the default; out-of-range minutes
    are clamped and rounded. Difficulty is clamped to [0, 1].
    """
    if not isinstance(item, QuestCandidate):
        item = QuestCandidate.from_dict(dict(item))

    minutes = coerce_number(item.minutes)
    if minutes is None:
        minutes = constraints.default_minutes
    minutes = int(round(min(constraints.max_minutes, max(constraints.min_minutes, minutes))))

    difficulty = coerce_number(item.difficulty)
    if difficulty is None:
        difficulty = DEFAULT_DIFFICULTY
    difficulty = min(1.0, max(0.0, difficulty))

    pattern = item.pattern
    if pattern not in Pattern.values():
        logger.debug("Unknown pattern %r, using %s", pattern, DEFAULT_PATTERN)
        pattern = DEFAULT_PATTERN

    return replace(
        item,
        title=item.title or PLACEHOLDER_TITLE,
        pattern=pattern,
        minutes=minutes,
        difficulty=difficulty,
        deliverable=item.deliverable or PLACEHOLDER_DELIVERABLE,
    )


def enforce_constraints(
    candidates: Iterable[QuestInput],
    budget: Optional[int] = None,
    constraints: Optional[QuestConstraints] = None,
) -> list[QuestCandidate]:
    """
    Apply per-quest limits, then fit the list into the session budget.

    Quests are kept in order while they fit. The first quest that would
    overflow is truncated to the remaining minutes if at least the
    minimum quest length is left, otherwise dropped; nothing after it is
    kept.

    Args:
        candidates: Quest proposals (QuestCandidate or dicts)
        budget: Session budget in minutes (defaults to the constraints' budget)
        constraints: Per-quest limits

    Returns:
        New list of fully populated quests
    """
    constraints = constraints or DEFAULT_CONSTRAINTS
    budget = constraints.session_budget if budget is None else int(budget)

    normalized = []
    for item in candidates:
        if not isinstance(item, (QuestCandidate, Mapping)):
            logger.warning("Skipping quest of unexpected type %s", type(item).__name__)
            continue
        normalized.append(normalize_quest(item, constraints))

    if normalized and budget < constraints.min_minutes:
        logger.warning(
            "Session budget %d is below the minimum quest length %d; no quests fit",
            budget, constraints.min_minutes,
        )
        return []

    result = []
    total = 0
    for quest in normalized:
        if total + quest.minutes <= budget:
            result.append(quest)
            total += quest.minutes
            continue

        remaining = budget - total
        if remaining >= constraints.min_minutes:
            logger.debug("Truncating %r to %d minutes", quest.title, remaining)
            result.append(replace(quest, minutes=remaining))
        else:
            logger.debug("Dropping %r: only %d minutes left", quest.title, remaining)
        break

    dropped = len(normalized) - len(result)
    if dropped:
        logger.info("Dropped %d quest(s) over the %d minute budget", dropped, budget)
    return result


def _pattern_of(quest: QuestInput) -> Any:
    if isinstance(quest, QuestCandidate):
        return quest.pattern
    return quest.get("pattern")


def avoid_consecutive_same_pattern(quests: Iterable[QuestInput]) -> list:
    """
    Reorder so that neighbouring quests use different patterns.

    Takes the earliest quest whose pattern differs from the previous one,
    unless some pattern has so many quests left that it must go next.
    Lists that already alternate come back in the same order; when no
    alternating order exists the leftovers keep their original order.
    """
    remaining = list(quests)
    counts = Counter(_pattern_of(q) for q in remaining)
    result = []
    last = None

    while remaining:
        pick = None
        size = len(remaining)
        for pattern, count in counts.items():
            if pattern != last and count * 2 > size:
                pick = next(i for i, q in enumerate(remaining) if _pattern_of(q) == pattern)
                break
        if pick is None:
            pick = next(
                (i for i, q in enumerate(remaining) if _pattern_of(q) != last),
                0,
            )

        quest = remaining.pop(pick)
        last = _pattern_of(quest)
        counts[last] -= 1
        result.append(quest)

    return result
