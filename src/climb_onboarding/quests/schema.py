"""
Quest data structures

A quest is one small learning task: a title, a learning pattern, a time
box in minutes, a 0-1 difficulty and a deliverable.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional
import math


class Pattern(str, Enum):
    """Learning patterns a quest can follow."""
    READ_NOTE_Q = "read_note_q"
    FLASHCARDS = "flashcards"
    BUILD_MICRO = "build_micro"
    CONFIG_VERIFY = "config_verify"
    DEBUG_EXPLAIN = "debug_explain"
    FEYNMAN = "feynman"
    PAST_PAPER = "past_paper"
    SOCRATIC = "socratic"
    SHADOWING = "shadowing"
    RETROSPECTIVE = "retrospective"

    @classmethod
    def values(cls) -> set:
        return {p.value for p in cls}


def coerce_number(value: Any) -> Optional[float]:
    """
    Read a non-negative finite number from a loosely typed value.

    Accepts ints, floats and numeric strings. Booleans, NaN, infinities,
    negatives and anything non-numeric come back as None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _string_list(value: Any) -> tuple:
    if isinstance(value, str):
        return (value,) if value.strip() else ()
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(str(v) for v in value if v is not None)


@dataclass(frozen=True)
class QuestCandidate:
    """
    A quest as proposed by the generator.

    Fields other than pattern may be missing on input; after constraint
    enforcement every field is filled in and within bounds.
    """
    title: Optional[str] = None
    pattern: str = Pattern.READ_NOTE_Q.value
    minutes: Optional[Any] = None
    difficulty: Optional[Any] = None
    deliverable: Optional[str] = None
    criteria: tuple = field(default_factory=tuple)
    steps: tuple = field(default_factory=tuple)
    tags: tuple = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict) -> "QuestCandidate":
        """
        Build from model output. Numbers are kept raw; "description" is
        accepted as an alias of "deliverable".
        """
        deliverable = data.get("deliverable")
        if deliverable is None:
            deliverable = data.get("description")
        return cls(
            title=_text(data.get("title")),
            pattern=_text(data.get("pattern")) or Pattern.READ_NOTE_Q.value,
            minutes=data.get("minutes"),
            difficulty=data.get("difficulty"),
            deliverable=_text(deliverable),
            criteria=_string_list(data.get("criteria")),
            steps=_string_list(data.get("steps")),
            tags=_string_list(data.get("tags")),
        )

    def to_dict(self) -> dict:
        result = {
            "title": self.title,
            "pattern": self.pattern,
            "minutes": self.minutes,
            "difficulty": self.difficulty,
            "deliverable": self.deliverable,
        }
        if self.criteria:
            result["criteria"] = list(self.criteria)
        if self.steps:
            result["steps"] = list(self.steps)
        if self.tags:
            result["tags"] = list(self.tags)
        return result
