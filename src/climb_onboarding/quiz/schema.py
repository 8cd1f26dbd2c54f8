"""
Question schema and data structures

Defines question identity, options, dependencies and the per-session
answer map that the onboarding flow accumulates.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional, Union
import json


AnswerValue = Union[str, int, float, list]


class QuestionNotFoundError(LookupError):
    """Raised when a (block, step) pair names no question."""

    def __init__(self, block: Any, step: Any):
        self.block = block
        self.step = step
        super().__init__(f"Question not found for block {block}, step {step}")


class BlockId(str, Enum):
    """Thematic question blocks, in flow order."""
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class QuestionId(str, Enum):
    """Every question in the bank, identified by block and step."""
    A1 = "A1"
    A2 = "A2"
    A3 = "A3"
    B1 = "B1"
    B2 = "B2"
    B3 = "B3"
    C1 = "C1"
    C2 = "C2"
    C3 = "C3"
    D1 = "D1"
    D2 = "D2"
    D3 = "D3"

    @property
    def block(self) -> BlockId:
        return BlockId(self.value[0])

    @property
    def step(self) -> int:
        return int(self.value[1])

    @classmethod
    def of(cls, block: Union[BlockId, str], step: int) -> "QuestionId":
        """Look up a question id, failing fast on unknown positions."""
        block_value = block.value if isinstance(block, BlockId) else str(block)
        try:
            return cls(f"{block_value}{int(step)}")
        except (TypeError, ValueError):
            raise QuestionNotFoundError(block_value, step) from None


class NoveltyLevel(str, Enum):
    """
    How much new material vs. review the learner wants.

    B1 answers carry the numeric value; B2 branches are keyed by the level.
    """
    NEW_HEAVY = "new_heavy"
    NEW_SOME = "new_some"
    REPEAT_SOME = "repeat_some"
    REPEAT_HEAVY = "repeat_heavy"

    @property
    def ratio(self) -> float:
        return _NOVELTY_RATIOS[self]

    @classmethod
    def from_answer(cls, value: Any) -> Optional["NoveltyLevel"]:
        """
        Map a stored novelty_preference answer to a level.

        Tolerates float spelling variants (0.6, "0.60", "0.600") by trying
        the plain string form and then two fixed-precision formats.
        Returns None when nothing matches.
        """
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, cls):
            return value

        keys = [str(value)]
        try:
            number = float(value)
        except (TypeError, ValueError):
            number = None
        if number is not None:
            keys.extend([f"{number:.2f}", f"{number:.1f}"])

        for key in keys:
            level = _NOVELTY_KEYS.get(key)
            if level is not None:
                return level
        return None


_NOVELTY_RATIOS = {
    NoveltyLevel.NEW_HEAVY: 0.75,
    NoveltyLevel.NEW_SOME: 0.60,
    NoveltyLevel.REPEAT_SOME: 0.40,
    NoveltyLevel.REPEAT_HEAVY: 0.25,
}

_NOVELTY_KEYS = {
    "0.75": NoveltyLevel.NEW_HEAVY,
    "0.60": NoveltyLevel.NEW_SOME,
    "0.6": NoveltyLevel.NEW_SOME,
    "0.40": NoveltyLevel.REPEAT_SOME,
    "0.4": NoveltyLevel.REPEAT_SOME,
    "0.25": NoveltyLevel.REPEAT_HEAVY,
}


@dataclass(frozen=True)
class QuestionOption:
    """A selectable answer that writes `value` into `data_key`."""
    id: str
    label: str
    value: Union[str, int, float]
    data_key: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "label": self.label,
            "value": self.value,
            "data_key": self.data_key,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "QuestionOption":
        return cls(
            id=data["id"],
            label=data["label"],
            value=data["value"],
            data_key=data.get("data_key") or data["dataKey"],
        )


class DependencyKind(str, Enum):
    """How a question's options depend on earlier answers."""
    NONE = "none"
    SINGLE = "single"  # one data key
    FIRST_OF = "first_of"  # first of several keys that has a branch
    COMPOUND = "compound"  # two keys joined into one lookup key


@dataclass(frozen=True)
class Dependency:
    """Which earlier answers select a question's branch."""
    kind: DependencyKind = DependencyKind.NONE
    data_keys: tuple = ()
    parents: tuple = ()  # QuestionIds the keys are answered in

    @classmethod
    def single(cls, data_key: str, parent: QuestionId) -> "Dependency":
        return cls(DependencyKind.SINGLE, (data_key,), (parent,))

    @classmethod
    def first_of(cls, data_keys: tuple, parent: QuestionId) -> "Dependency":
        return cls(DependencyKind.FIRST_OF, tuple(data_keys), (parent,))

    @classmethod
    def compound(cls, first: str, second: str, parents: tuple) -> "Dependency":
        return cls(DependencyKind.COMPOUND, (first, second), tuple(parents))

    @property
    def is_none(self) -> bool:
        return self.kind == DependencyKind.NONE


NO_DEPENDENCY = Dependency()


@dataclass(frozen=True)
class Question:
    """A single profiling question with its base options."""
    id: QuestionId
    prompt: str
    options: tuple
    depends_on: Dependency = NO_DEPENDENCY
    allows_memo: bool = True

    @property
    def block(self) -> BlockId:
        return self.id.block

    @property
    def step(self) -> int:
        return self.id.step

    def with_options(self, options) -> "Question":
        """Copy of this question presenting a different option list."""
        return Question(
            id=self.id,
            prompt=self.prompt,
            options=tuple(options),
            depends_on=self.depends_on,
            allows_memo=self.allows_memo,
        )

    def find_option(self, option_id: str) -> Optional[QuestionOption]:
        for option in self.options:
            if option.id == option_id:
                return option
        return None

    def to_dict(self) -> dict:
        result = {
            "id": self.id.value,
            "block": self.block.value,
            "step": self.step,
            "prompt": self.prompt,
            "options": [o.to_dict() for o in self.options],
            "allows_memo": self.allows_memo,
        }
        if not self.depends_on.is_none:
            result["depends_on"] = [p.value for p in self.depends_on.parents]
        return result


@dataclass
class AnswerMap:
    """
    Answers collected during one onboarding attempt.

    Values are keyed by data key; memos are keyed by question id. One
    instance per session, never shared.
    """
    values: dict = field(default_factory=dict)
    memos: dict = field(default_factory=dict)

    def record(self, option: QuestionOption) -> None:
        """Store the value of a selected option under its data key."""
        self.values[option.data_key] = option.value

    def set(self, key: str, value: AnswerValue) -> None:
        self.values[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def clear(self, key: str) -> None:
        self.values.pop(key, None)

    def note(self, question_id: Union[QuestionId, str], text: str) -> None:
        """Attach a free-text memo to a question."""
        qid = question_id.value if isinstance(question_id, QuestionId) else str(question_id)
        if text:
            self.memos[qid] = text
        else:
            self.memos.pop(qid, None)

    def __getitem__(self, key: str) -> Any:
        return self.values[key]

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def to_dict(self) -> dict:
        result = dict(self.values)
        if self.memos:
            result["memos"] = dict(self.memos)
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "AnswerMap":
        values = {k: v for k, v in data.items() if k != "memos"}
        return cls(values=values, memos=dict(data.get("memos") or {}))

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
