"""
Learning profile derived from onboarding answers

Condenses the raw answer map into the handful of traits that quest
generation actually uses.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from .quiz.schema import AnswerMap
from .quests.schema import coerce_number


DEFAULT_NOVELTY = 0.5
BASE_DIFFICULTY = 0.5


def _signed_number(value: Any) -> Optional[float]:
    # difficulty_bias is the one answer that may be negative
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _first(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


@dataclass
class LearningProfile:
    """What the generator needs to know about the learner."""
    difficulty_tolerance: float = BASE_DIFFICULTY
    difficulty_bias: float = 0.0
    novelty_preference: float = DEFAULT_NOVELTY
    pace_preference: str = "cadence"  # sprint | cadence
    motivation_style: str = "pull"  # push | pull
    goal_focus: Optional[str] = None
    scope_style: Optional[str] = None
    review_cadence: Optional[str] = None
    capstone_type: Optional[str] = None
    fallback_strategy: Optional[str] = None
    risk_factors: list[str] = field(default_factory=list)

    def difficulty_label(self) -> str:
        if self.difficulty_bias < -0.05:
            return "easy"
        if self.difficulty_bias > 0.1:
            return "hard"
        return "medium"

    def to_dict(self) -> dict:
        return {
            "difficulty_tolerance": self.difficulty_tolerance,
            "difficulty": self.difficulty_label(),
            "novelty_preference": self.novelty_preference,
            "pace_preference": self.pace_preference,
            "motivation_style": self.motivation_style,
            "goal_focus": self.goal_focus,
            "scope_style": self.scope_style,
            "review_cadence": self.review_cadence,
            "capstone_type": self.capstone_type,
            "fallback_strategy": self.fallback_strategy,
            "risk_factors": list(self.risk_factors),
        }


def build_learning_profile(answers: Union[AnswerMap, Mapping[str, Any]]) -> LearningProfile:
    """Derive a LearningProfile; unanswered fields fall back to neutral values."""
    bias = _signed_number(answers.get("difficulty_bias")) or 0.0
    novelty = coerce_number(answers.get("novelty_preference"))
    cadence = _first(answers.get("review_cadence"))
    goal_focus = _first(answers.get("goal_focus"))

    risks = [
        str(v) for v in (_first(answers.get("dropoff_type")), _first(answers.get("dropoff_trigger")))
        if v is not None
    ]

    return LearningProfile(
        difficulty_tolerance=min(1.0, max(0.0, BASE_DIFFICULTY + bias)),
        difficulty_bias=bias,
        novelty_preference=novelty if novelty is not None and novelty <= 1 else DEFAULT_NOVELTY,
        pace_preference="sprint" if cadence == "daily" else "cadence",
        motivation_style="push" if goal_focus == "outcome" else "pull",
        goal_focus=goal_focus,
        scope_style=_first(answers.get("scope_style")),
        review_cadence=cadence,
        capstone_type=_first(answers.get("capstone_type")),
        fallback_strategy=_first(answers.get("fallback_strategy")),
        risk_factors=risks,
    )
