"""
Branch resolver and flow navigation

Given a question and the answers collected so far, decide which option
list to present. Resolution never fails for missing or unknown answers:
it falls back to the question's base options so the flow can't dead-end.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

from .bank import (
    A2_BRANCHES,
    A3_BRANCHES,
    B2_BRANCHES,
    B3_BRANCHES,
    BLOCK_TITLES,
    C2_BRANCHES,
    C3_BRANCHES,
    D2_BRANCHES,
    D3_BRANCHES,
    QUESTION_ORDER,
    QUESTIONS,
    STEPS_PER_BLOCK,
    get_question,
)
from .schema import AnswerMap, BlockId, NoveltyLevel, Question, QuestionId, QuestionOption

logger = logging.getLogger(__name__)

Answers = Union[AnswerMap, Mapping[str, Any]]

COMPOUND_SEPARATOR = "_"


def _branch_key(value: Any) -> Optional[str]:
    """Normalize a stored answer into a lookup key (lists use their first item)."""
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return None
    return str(value)


def _lookup(question: Question, table: dict, key: Any) -> list[QuestionOption]:
    branch = table.get(key) if key is not None else None
    if branch is None:
        logger.debug("%s: no branch for %r, using base options", question.id.value, key)
        return list(question.options)
    logger.debug("%s: branch %r", question.id.value, key)
    return list(branch)


def _base(question: Question, answers: Answers) -> list[QuestionOption]:
    return list(question.options)


def _single(table: dict) -> Callable[[Question, Answers], list[QuestionOption]]:
    def resolve(question: Question, answers: Answers) -> list[QuestionOption]:
        data_key = question.depends_on.data_keys[0]
        return _lookup(question, table, _branch_key(answers.get(data_key)))
    return resolve


def _resolve_scope(question: Question, answers: Answers) -> list[QuestionOption]:
    # A2 writes into one of several keys depending on the A1 branch taken
    for data_key in question.depends_on.data_keys:
        key = _branch_key(answers.get(data_key))
        if key is not None and key in A3_BRANCHES:
            return _lookup(question, A3_BRANCHES, key)
    return _lookup(question, A3_BRANCHES, None)


def _resolve_cadence(question: Question, answers: Answers) -> list[QuestionOption]:
    level = NoveltyLevel.from_answer(answers.get("novelty_preference"))
    return _lookup(question, B2_BRANCHES, level)


def _resolve_fallback(question: Question, answers: Answers) -> list[QuestionOption]:
    first, second = (_branch_key(answers.get(k)) for k in question.depends_on.data_keys)
    if first is None or second is None:
        return _lookup(question, D3_BRANCHES, None)
    return _lookup(question, D3_BRANCHES, f"{first}{COMPOUND_SEPARATOR}{second}")


RESOLVERS: dict[QuestionId, Callable[[Question, Answers], list[QuestionOption]]] = {
    QuestionId.A1: _base,
    QuestionId.A2: _single(A2_BRANCHES),
    QuestionId.A3: _resolve_scope,
    QuestionId.B1: _base,
    QuestionId.B2: _resolve_cadence,
    QuestionId.B3: _single(B3_BRANCHES),
    QuestionId.C1: _base,
    QuestionId.C2: _single(C2_BRANCHES),
    QuestionId.C3: _single(C3_BRANCHES),
    QuestionId.D1: _base,
    QuestionId.D2: _single(D2_BRANCHES),
    QuestionId.D3: _resolve_fallback,
}


def resolve_options(
    question: Union[Question, QuestionId],
    answers: Optional[Answers] = None,
) -> list[QuestionOption]:
    """
    Return the options to present for a question.

    Args:
        question: Question or its id
        answers: Answers collected so far (AnswerMap or plain mapping)

    Returns:
        A new, non-empty list of options
    """
    if isinstance(question, QuestionId):
        question = QUESTIONS[question]
    resolver = RESOLVERS[question.id]
    return resolver(question, answers if answers is not None else {})


def get_question_with_options(
    block: Union[BlockId, str],
    step: int,
    answers: Optional[Answers] = None,
) -> Question:
    """Look up a question and attach its resolved options."""
    question = get_question(block, step)
    return question.with_options(resolve_options(question, answers))


def get_all_questions(answers: Optional[Answers] = None) -> list[Question]:
    """All twelve questions in flow order, each with resolved options."""
    return [
        QUESTIONS[qid].with_options(resolve_options(QUESTIONS[qid], answers))
        for qid in QUESTION_ORDER
    ]


# Navigation

def next_position(block: Union[BlockId, str], step: int) -> Optional[QuestionId]:
    """The question after (block, step), or None at the end of the flow."""
    index = QUESTION_ORDER.index(QuestionId.of(block, step))
    if index + 1 < len(QUESTION_ORDER):
        return QUESTION_ORDER[index + 1]
    return None


def previous_position(block: Union[BlockId, str], step: int) -> Optional[QuestionId]:
    """The question before (block, step), or None at the start."""
    index = QUESTION_ORDER.index(QuestionId.of(block, step))
    if index > 0:
        return QUESTION_ORDER[index - 1]
    return None


@dataclass(frozen=True)
class Progress:
    """Where the user is in the flow, in percent."""
    block_progress: float
    overall_progress: float
    block_index: int

    def to_dict(self) -> dict:
        return {
            "block_progress": self.block_progress,
            "overall_progress": self.overall_progress,
            "block_index": self.block_index,
        }


def calculate_progress(block: Union[BlockId, str], step: int) -> Progress:
    question_id = QuestionId.of(block, step)
    block_index = list(BlockId).index(question_id.block)
    total = len(QUESTION_ORDER)
    return Progress(
        block_progress=question_id.step / STEPS_PER_BLOCK * 100,
        overall_progress=(block_index * STEPS_PER_BLOCK + question_id.step) / total * 100,
        block_index=block_index,
    )


def get_block_info(block: Union[BlockId, str]) -> dict:
    """Title and step count for a block."""
    block_id = BlockId(block)
    return {
        "id": block_id.value,
        "title": BLOCK_TITLES[block_id],
        "total_steps": STEPS_PER_BLOCK,
    }
