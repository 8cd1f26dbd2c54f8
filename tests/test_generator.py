"""
Tests for the quest generator.
"""

import json

import pytest

from climb_onboarding.providers.mock import MockProvider
from climb_onboarding.quests.constraints import QuestConstraints
from climb_onboarding.quests.generator import FALLBACK_QUESTS, QuestGenerator, parse_quests
from climb_onboarding.quiz.schema import AnswerMap, QuestionId


ANSWERS = {
    "goal_focus": "outcome",
    "goal_evidence": "certification",
    "scope_style": "weak_areas",
    "novelty_preference": 0.6,
    "review_cadence": "daily",
    "difficulty_bias": 0.1,
    "capstone_type": "test",
    "dropoff_type": "time",
    "dropoff_trigger": "overtime_work",
    "fallback_strategy": "micro_switch",
}


def quests_json(*minutes, pattern="feynman") -> str:
    return json.dumps({"quests": [
        {"title": f"Quest {i}", "pattern": pattern, "minutes": m, "difficulty": 0.5, "deliverable": "Notes"}
        for i, m in enumerate(minutes)
    ]})


class TestQuestGenerator:
    """Tests for QuestGenerator."""

    @pytest.mark.asyncio
    async def test_json_path(self):
        """Providers without tools get a JSON prompt."""
        generator = QuestGenerator(MockProvider())
        batch = await generator.generate("Pass the AWS exam", ANSWERS)

        assert batch.source == "ai"
        assert batch.raw_count == 3
        assert [q.minutes for q in batch.quests] == [25, 35, 20]
        assert [q.pattern for q in batch.quests] == ["read_note_q", "build_micro", "flashcards"]
        assert batch.usage["output_tokens"] == 100
        assert set(batch.usage) == {"input_tokens", "output_tokens"}

    @pytest.mark.asyncio
    async def test_tool_path(self):
        """Providers with tools answer through the quest tool."""
        generator = QuestGenerator(MockProvider(tools_enabled=True))
        batch = await generator.generate("Pass the AWS exam", ANSWERS)

        assert batch.source == "ai"
        assert [q.minutes for q in batch.quests] == [25, 35, 20]

    @pytest.mark.asyncio
    async def test_provider_failure_uses_fallback(self):
        generator = QuestGenerator(MockProvider(fail=True, tools_enabled=True))
        batch = await generator.generate("Learn Spanish", {})

        assert batch.source == "fallback"
        assert [q.minutes for q in batch.quests] == [30, 45, 15]
        assert batch.total_minutes == 90
        assert [q.title for q in batch.quests] == [q.title for q in FALLBACK_QUESTS]

    @pytest.mark.asyncio
    async def test_unparseable_reply_uses_fallback(self):
        generator = QuestGenerator(MockProvider(fixed_response="Sorry, I can't help with that."))
        batch = await generator.generate("Learn Spanish", ANSWERS)
        assert batch.source == "fallback"

    @pytest.mark.asyncio
    async def test_prose_instead_of_tool_call(self):
        """A tool-capable model that replies in prose still falls back cleanly."""
        generator = QuestGenerator(MockProvider(fixed_response="no tools today", tools_enabled=True))
        batch = await generator.generate("Learn Spanish", ANSWERS)
        assert batch.source == "fallback"

    @pytest.mark.asyncio
    async def test_output_is_enforced(self):
        """Oversized model quests are clamped and fit into the budget."""
        provider = MockProvider(fixed_response=quests_json(60, 60, 60))
        batch = await QuestGenerator(provider).generate("Run a marathon", ANSWERS)

        assert [q.minutes for q in batch.quests] == [45, 45]
        assert batch.raw_count == 3

    @pytest.mark.asyncio
    async def test_custom_constraints(self):
        provider = MockProvider(fixed_response=quests_json(20, 20, 20))
        constraints = QuestConstraints(session_budget=50)
        batch = await QuestGenerator(provider, constraints=constraints).generate("Goal", ANSWERS)
        assert [q.minutes for q in batch.quests] == [20, 20]

    @pytest.mark.asyncio
    async def test_patterns_are_spread(self):
        content = json.dumps({"quests": [
            {"title": "A", "pattern": "feynman", "minutes": 20},
            {"title": "B", "pattern": "feynman", "minutes": 20},
            {"title": "C", "pattern": "socratic", "minutes": 20},
        ]})
        batch = await QuestGenerator(MockProvider(fixed_response=content)).generate("Goal", ANSWERS)
        assert [q.title for q in batch.quests] == ["A", "C", "B"]

    @pytest.mark.asyncio
    async def test_malformed_pattern(self):
        """A pattern that is not a string becomes the default instead of raising."""
        content = json.dumps({"quests": [
            {"title": "T", "pattern": ["feynman"], "minutes": 30},
            {"title": "U", "pattern": {"name": "socratic"}, "minutes": 30},
        ]})
        batch = await QuestGenerator(MockProvider(fixed_response=content)).generate("goal", {})

        assert batch.source == "ai"
        assert [q.title for q in batch.quests] == ["T", "U"]
        assert [q.pattern for q in batch.quests] == ["read_note_q", "read_note_q"]

    @pytest.mark.asyncio
    async def test_malformed_lists_in_tool_call(self):
        content = json.dumps({"quests": [
            {"title": "T", "pattern": "feynman", "minutes": 30, "criteria": 5, "tags": ["aws", "iam"]},
        ]})
        provider = MockProvider(fixed_response=content, tools_enabled=True)
        batch = await QuestGenerator(provider).generate("goal", ANSWERS)

        (quest,) = batch.quests
        assert quest.criteria == ()
        assert quest.tags == ("aws", "iam")

    @pytest.mark.asyncio
    async def test_tool_uses_configured_time_box(self):
        seen = []

        class RecordingProvider(MockProvider):
            async def generate_with_tool(self, prompt, tool, **kwargs):
                seen.append(tool)
                return await super().generate_with_tool(prompt, tool, **kwargs)

        constraints = QuestConstraints(min_minutes=10, max_minutes=60, default_minutes=30, session_budget=120)
        await QuestGenerator(RecordingProvider(tools_enabled=True), constraints=constraints).generate("goal", ANSWERS)

        minutes = seen[0].parameters["properties"]["quests"]["items"]["properties"]["minutes"]
        assert (minutes["minimum"], minutes["maximum"]) == (10, 60)

    @pytest.mark.asyncio
    async def test_prompt_contents(self):
        """The prompt carries the goal, profile and memos."""
        seen = []

        def capture(prompt: str) -> str:
            seen.append(prompt)
            return quests_json(20)

        answers = AnswerMap.from_dict(ANSWERS)
        answers.note(QuestionId.D2, "Long shifts on Tuesdays")

        await QuestGenerator(MockProvider(response_generator=capture)).generate("Pass the AWS exam", answers)

        prompt = seen[0]
        assert "Pass the AWS exam" in prompt
        assert "Long shifts on Tuesdays" in prompt
        assert "sprint" in prompt
        assert "time, overtime_work" in prompt
        assert '{"quests"' in prompt

    @pytest.mark.asyncio
    async def test_batch_to_dict(self):
        batch = await QuestGenerator(MockProvider()).generate("Goal", ANSWERS)
        data = batch.to_dict()
        assert data["source"] == "ai"
        assert data["total_minutes"] == 80
        assert len(data["quests"]) == 3


class TestParseQuests:
    """Tests for parse_quests."""

    def test_surrounding_text(self):
        content = 'Here you go:\n{"quests": [{"title": "Read"}]}\nGood luck!'
        assert parse_quests(content) == [{"title": "Read"}]

    def test_not_json(self):
        assert parse_quests("{not json}") == []

    def test_empty(self):
        assert parse_quests("") == []

    def test_wrong_shape(self):
        assert parse_quests('{"quests": "none"}') == []
        assert parse_quests('{"quests": [1, {"title": "x"}]}') == [{"title": "x"}]
