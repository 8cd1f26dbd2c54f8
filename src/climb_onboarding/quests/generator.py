"""
Quest generator

Asks a model for today's quests based on the learner's goal and profile.
Uses tool calling when the provider supports it, with fallback to a JSON
prompt. Whatever comes back (or the static fallback list, when nothing
usable does) is de-duplicated by pattern and passed through the
constraint enforcer.
"""

import json
import re
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from ..profile import build_learning_profile
from ..providers.base import ModelProvider, ProviderError, TokenUsage
from ..providers.tools import quest_tool
from ..quiz.schema import AnswerMap
from .constraints import (
    QuestConstraints,
    avoid_consecutive_same_pattern,
    enforce_constraints,
    normalize_quest,
)
from .prompts import format_quest_prompt, format_system_prompt, profile_summary
from .schema import Pattern, QuestCandidate

logger = logging.getLogger(__name__)


FALLBACK_QUESTS = (
    QuestCandidate(
        title="Daily study time",
        pattern=Pattern.READ_NOTE_Q.value,
        minutes=30,
        difficulty=0.5,
        deliverable="A one-page summary of what you read",
        criteria=("Summary written in your own words",),
    ),
    QuestCandidate(
        title="Skill practice",
        pattern=Pattern.BUILD_MICRO.value,
        minutes=45,
        difficulty=0.5,
        deliverable="A small working piece you built",
        criteria=("It runs or can be shown to someone",),
    ),
    QuestCandidate(
        title="Reflection time",
        pattern=Pattern.RETROSPECTIVE.value,
        minutes=15,
        difficulty=0.3,
        deliverable="Three lines on what went well and what to change",
        criteria=("Written down today",),
    ),
)


@dataclass
class QuestBatch:
    """Quests ready to show, plus where they came from."""
    quests: list[QuestCandidate]
    source: str  # "ai" or "fallback"
    usage: dict = field(default_factory=dict)
    raw_count: int = 0

    @property
    def total_minutes(self) -> int:
        return sum(q.minutes for q in self.quests)

    def to_dict(self) -> dict:
        return {
            "quests": [q.to_dict() for q in self.quests],
            "source": self.source,
            "total_minutes": self.total_minutes,
            "usage": dict(self.usage),
            "raw_count": self.raw_count,
        }


class QuestGenerator:
    """
    Generates daily quests through a model provider.

    Provider failures never reach the caller: they are logged and the
    static fallback quests are used instead.
    """

    def __init__(
        self,
        provider: ModelProvider,
        model: Optional[str] = None,
        constraints: Optional[QuestConstraints] = None,
        temperature: float = 0.7,
        max_tokens: int = 2048,
    ):
        """
        Initialize generator.

        Args:
            provider: AI model provider
            model: Optional model override
            constraints: Time limits (defaults to 15-45 minutes, 90 per session)
        """
        self.provider = provider
        self.model = model
        self.constraints = constraints or QuestConstraints()
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def generate(
        self,
        goal_text: str,
        answers: Union[AnswerMap, Mapping[str, Any]],
        count: int = 3,
    ) -> QuestBatch:
        """
        Generate quests for a goal.

        Args:
            goal_text: The learner's goal in their own words
            answers: Onboarding answers
            count: Number of quests to ask for

        Returns:
            QuestBatch whose quests satisfy the constraints
        """
        profile = build_learning_profile(answers)
        logger.debug("Generating %d quests for profile %s", count, profile_summary(profile))

        memos = answers.memos if isinstance(answers, AnswerMap) else None
        prompt_args = dict(
            goal_text=goal_text,
            profile=profile,
            count=count,
            min_minutes=self.constraints.min_minutes,
            max_minutes=self.constraints.max_minutes,
            session_budget=self.constraints.session_budget,
            memos=memos,
        )
        system = format_system_prompt(self.constraints.min_minutes, self.constraints.max_minutes)

        raw: list = []
        usage = TokenUsage()
        if self.provider.supports_tools:
            try:
                raw, usage = await self._generate_with_tool(
                    format_quest_prompt(**prompt_args), system
                )
            except ProviderError as e:
                logger.warning("Tool calling failed, falling back to JSON prompt: %s", e)

        if not raw:
            try:
                raw, json_usage = await self._generate_with_json(
                    format_quest_prompt(json_output=True, **prompt_args), system
                )
                usage = usage + json_usage
            except ProviderError as e:
                logger.warning("Quest generation failed: %s", e)
                raw = []

        source = "ai"
        if not raw:
            logger.warning("No usable quests from %s, using fallback quests", self.provider.name)
            raw = list(FALLBACK_QUESTS)
            source = "fallback"

        # Malformed patterns become the default before reordering
        normalized = [normalize_quest(q, self.constraints) for q in raw]
        ordered = avoid_consecutive_same_pattern(normalized)
        quests = enforce_constraints(ordered, constraints=self.constraints)
        return QuestBatch(quests=quests, source=source, usage=usage.to_dict(), raw_count=len(raw))

    async def _generate_with_tool(self, prompt: str, system: str) -> tuple[list, TokenUsage]:
        tool = quest_tool(self.constraints.min_minutes, self.constraints.max_minutes)
        response = await self.provider.generate_with_tool(
            prompt=prompt,
            tool=tool,
            system=system,
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )

        arguments = response.tool_arguments(tool.name)
        if arguments is not None:
            quests = _quest_items(arguments.get("quests"))
            logger.debug("Tool calling returned %d quests", len(quests))
        else:
            logger.debug("Model didn't use tool, parsing content")
            quests = parse_quests(response.content)
        return quests, response.usage

    async def _generate_with_json(self, prompt: str, system: str) -> tuple[list, TokenUsage]:
        response = await self.provider.generate(
            prompt=prompt,
            system=system,
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )
        return parse_quests(response.content), response.usage


def _quest_items(value: Any) -> list[dict]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def parse_quests(content: str) -> list[dict]:
    """
    Pull the quest list out of a model reply.

    Looks for the outermost JSON object and reads its "quests" array.
    Returns an empty list when there is nothing parseable.
    """
    match = re.search(r'\{[\s\S]*\}', content or "")
    if not match:
        return []
    try:
        data = json.loads(match.group())
    except json.JSONDecodeError:
        logger.debug("Model reply is not valid JSON")
        return []
    if not isinstance(data, dict):
        return []
    return _quest_items(data.get("quests"))
