"""
Profile answer validation

Decides whether an answer set is complete enough to move on to quest
generation.
"""

from typing import Any, Mapping, NamedTuple, Sequence, Union

from .schema import AnswerMap


# One data key per question that must end up answered, across all blocks
REQUIRED_FIELDS = (
    "goal_focus",
    "scope_style",
    "novelty_preference",
    "review_cadence",
    "difficulty_bias",
    "goal_evidence",
    "capstone_type",
    "dropoff_type",
    "dropoff_trigger",
    "fallback_strategy",
)

# Branch questions may be skipped depending on the path taken, so half is enough.
MIN_COMPLETION_RATIO = 0.5


class ValidationResult(NamedTuple):
    is_valid: bool
    missing_fields: list[str]
    completion_ratio: float

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "missing_fields": list(self.missing_fields),
            "completion_ratio": self.completion_ratio,
        }


def validate_answers(
    answers: Union[AnswerMap, Mapping[str, Any]],
    required_fields: Sequence[str] = REQUIRED_FIELDS,
    min_completion_ratio: float = MIN_COMPLETION_RATIO,
) -> ValidationResult:
    """
    Check how many required fields are answered.

    A field is missing when it is absent or None. Falsy values such as 0
    (a "normal" difficulty bias) still count as answered.

    Args:
        answers: Collected answers
        required_fields: Keys that should be present
        min_completion_ratio: Fraction of keys needed to pass

    Returns:
        ValidationResult with missing keys in required_fields order
    """
    missing = [key for key in required_fields if answers.get(key) is None]
    if not required_fields:
        ratio = 1.0
    else:
        ratio = (len(required_fields) - len(missing)) / len(required_fields)
    return ValidationResult(
        is_valid=ratio >= min_completion_ratio,
        missing_fields=missing,
        completion_ratio=ratio,
    )
