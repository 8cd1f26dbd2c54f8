"""
Tests for quest constraint enforcement.
"""

import dataclasses
import math

import pytest

from climb_onboarding.config import QuestBudgetConfig
from climb_onboarding.quests.constraints import (
    DEFAULT_DIFFICULTY,
    DEFAULT_PATTERN,
    DEFAULT_QUEST_MINUTES,
    MAX_QUEST_MINUTES,
    MIN_QUEST_MINUTES,
    PLACEHOLDER_DELIVERABLE,
    PLACEHOLDER_TITLE,
    QuestConstraints,
    avoid_consecutive_same_pattern,
    enforce_constraints,
    normalize_quest,
)
from climb_onboarding.quests.schema import QuestCandidate, coerce_number


def quest(minutes=None, pattern="read_note_q", **kwargs) -> dict:
    data = {"title": "Quest", "pattern": pattern, "deliverable": "Notes", "difficulty": 0.5}
    data.update(kwargs)
    if minutes is not None:
        data["minutes"] = minutes
    return data


CANDIDATE_LISTS = [
    [],
    [quest(45), quest(45), quest(45)],
    [quest(40), quest(40), quest(40)],
    [quest(30), quest(30), quest(45)],
    [quest(5), quest(100), quest(), quest("20"), quest(-3)],
    [quest(15)] * 8,
    [quest(44.6), quest(float("nan")), quest(True), quest("abc")],
]


class TestCoerceNumber:
    """Tests for tolerant numeric parsing."""

    @pytest.mark.parametrize("value,expected", [
        (20, 20.0),
        (22.5, 22.5),
        ("30", 30.0),
        (" 12.5 ", 12.5),
        (0, 0.0),
    ])
    def test_numbers(self, value, expected):
        assert coerce_number(value) == expected

    @pytest.mark.parametrize("value", [
        None, True, False, "abc", "", float("nan"), float("inf"), -1, "-5", [30], {},
    ])
    def test_missing(self, value):
        assert coerce_number(value) is None


class TestNormalizeQuest:
    """Tests for per-quest clamping and backfill."""

    def test_defaults(self):
        """Missing fields are backfilled."""
        result = normalize_quest({})
        assert result.minutes == DEFAULT_QUEST_MINUTES
        assert result.difficulty == DEFAULT_DIFFICULTY
        assert result.title == PLACEHOLDER_TITLE
        assert result.deliverable == PLACEHOLDER_DELIVERABLE
        assert result.pattern == DEFAULT_PATTERN

    @pytest.mark.parametrize("minutes,expected", [
        (5, MIN_QUEST_MINUTES),
        (90, MAX_QUEST_MINUTES),
        (25, 25),
        ("20", 20),
        (22.6, 23),
        (-10, DEFAULT_QUEST_MINUTES),
        (float("nan"), DEFAULT_QUEST_MINUTES),
        (True, DEFAULT_QUEST_MINUTES),
        ("soon", DEFAULT_QUEST_MINUTES),
    ])
    def test_minutes(self, minutes, expected):
        result = normalize_quest({"minutes": minutes})
        assert result.minutes == expected
        assert isinstance(result.minutes, int)

    @pytest.mark.parametrize("difficulty,expected", [
        (0.7, 0.7),
        ("0.3", 0.3),
        (2, 1.0),
        (-0.5, DEFAULT_DIFFICULTY),
        (None, DEFAULT_DIFFICULTY),
        (float("inf"), DEFAULT_DIFFICULTY),
    ])
    def test_difficulty(self, difficulty, expected):
        assert normalize_quest({"difficulty": difficulty}).difficulty == pytest.approx(expected)

    def test_description_alias(self):
        """'description' fills the deliverable."""
        result = normalize_quest({"title": "Read", "description": "Summary"})
        assert result.deliverable == "Summary"

    def test_blank_title_gets_placeholder(self):
        assert normalize_quest({"title": "   "}).title == PLACEHOLDER_TITLE

    def test_unknown_pattern(self):
        assert normalize_quest({"pattern": "juggling"}).pattern == DEFAULT_PATTERN
        assert normalize_quest({"pattern": ["feynman"]}).pattern == DEFAULT_PATTERN

    def test_tags_kept(self):
        data = quest(30, tags=["aws", "iam"], criteria=["Done"], steps=["Open console"])
        (result,) = enforce_constraints([data])
        out = result.to_dict()
        assert out["tags"] == ["aws", "iam"]
        assert out["criteria"] == ["Done"]
        assert out["steps"] == ["Open console"]

    def test_no_tags_key_when_empty(self):
        assert "tags" not in normalize_quest(quest(30)).to_dict()

    @pytest.mark.parametrize("value", [5, 2.5, True, {"a": 1}])
    def test_scalar_lists_become_empty(self, value):
        result = normalize_quest(quest(30, criteria=value, steps=value, tags=value))
        assert (result.criteria, result.steps, result.tags) == ((), (), ())

    def test_single_string_list(self):
        result = normalize_quest(quest(30, tags="aws", criteria="  "))
        assert result.tags == ("aws",)
        assert result.criteria == ()

    def test_candidate_input(self):
        candidate = QuestCandidate(title="Build", pattern="build_micro", minutes=60, difficulty=0.9)
        result = normalize_quest(candidate)
        assert result.minutes == MAX_QUEST_MINUTES
        assert result.title == "Build"
        assert candidate.minutes == 60

    def test_input_dict_not_mutated(self):
        data = {"minutes": 100, "title": None}
        normalize_quest(data)
        assert data == {"minutes": 100, "title": None}


class TestEnforceConstraints:
    """Tests for the session budget walk."""

    def test_three_long_quests(self):
        """45+45 fills the budget; the third is dropped."""
        result = enforce_constraints([quest(45), quest(45), quest(45)])
        assert [q.minutes for q in result] == [45, 45]

    def test_remainder_too_small_is_dropped(self):
        """40+40 leaves 10 minutes, under the minimum quest length."""
        result = enforce_constraints([quest(40), quest(40), quest(40)])
        assert [q.minutes for q in result] == [40, 40]

    def test_overflowing_quest_is_truncated(self):
        """30+30 leaves 30 minutes, so the 45-minute quest is cut to 30."""
        result = enforce_constraints([quest(30), quest(30), quest(45, title="Last")])
        assert [q.minutes for q in result] == [30, 30, 30]
        assert result[-1].title == "Last"

    def test_stops_after_truncation(self):
        result = enforce_constraints([quest(45), quest(30), quest(15), quest(15)])
        assert [q.minutes for q in result] == [45, 30, 15]

    def test_nothing_after_overflow(self):
        """Processing stops at the first quest that doesn't fit."""
        result = enforce_constraints([quest(40), quest(40), quest(40), quest(15)])
        assert [q.minutes for q in result] == [40, 40]

    def test_clamped_before_budgeting(self):
        result = enforce_constraints([quest(100), quest(5), quest()])
        assert [q.minutes for q in result] == [45, 15, 30]

    def test_custom_budget(self):
        result = enforce_constraints([quest(30), quest(30)], budget=45)
        assert [q.minutes for q in result] == [30, 15]

    def test_budget_below_minimum(self):
        assert enforce_constraints([quest(20)], budget=10) == []

    def test_empty_input(self):
        assert enforce_constraints([]) == []

    def test_non_mapping_items_skipped(self):
        result = enforce_constraints([42, "quest", None, quest(20)])
        assert [q.minutes for q in result] == [20]

    def test_output_is_frozen(self):
        result = enforce_constraints([quest(20)])
        with pytest.raises(dataclasses.FrozenInstanceError):
            result[0].minutes = 99

    @pytest.mark.parametrize("candidates", CANDIDATE_LISTS)
    @pytest.mark.parametrize("budget", [90, 60, 15, 200])
    def test_bounds_and_budget(self, candidates, budget):
        """Every quest is within bounds and the total fits the budget."""
        result = enforce_constraints(candidates, budget=budget)
        assert sum(q.minutes for q in result) <= budget
        for q in result:
            assert MIN_QUEST_MINUTES <= q.minutes <= MAX_QUEST_MINUTES
            assert 0.0 <= q.difficulty <= 1.0
            assert not math.isnan(q.difficulty)
            assert q.title and q.deliverable
        if candidates:
            assert result

    @pytest.mark.parametrize("candidates", CANDIDATE_LISTS)
    def test_idempotent(self, candidates):
        """Enforcing twice changes nothing."""
        once = enforce_constraints(candidates)
        assert enforce_constraints(once) == once

    def test_custom_constraints(self):
        constraints = QuestConstraints(min_minutes=10, max_minutes=20, default_minutes=15, session_budget=40)
        result = enforce_constraints([quest(5), quest(60), quest()], constraints=constraints)
        assert [q.minutes for q in result] == [10, 20, 10]


class TestQuestConstraints:
    """Tests for QuestConstraints."""

    def test_from_config(self):
        config = QuestBudgetConfig(min_quest_minutes=10, max_quest_minutes=30, default_quest_minutes=20, session_budget_minutes=60)
        constraints = QuestConstraints.from_config(config)
        assert constraints == QuestConstraints(10, 30, 20, 60)

    def test_default_outside_range(self):
        with pytest.raises(ValueError):
            QuestConstraints(min_minutes=15, max_minutes=45, default_minutes=60)

    def test_non_positive_minimum(self):
        with pytest.raises(ValueError):
            QuestConstraints(min_minutes=0)


class TestAvoidConsecutiveSamePattern:
    """Tests for pattern de-duplication."""

    def patterns(self, quests):
        return [q["pattern"] for q in quests]

    def test_splits_neighbours(self):
        quests = [quest(pattern="a"), quest(pattern="a"), quest(pattern="b")]
        assert self.patterns(avoid_consecutive_same_pattern(quests)) == ["a", "b", "a"]

    def test_alternating_list_unchanged(self):
        quests = [quest(pattern=p, title=str(i)) for i, p in enumerate("abcab")]
        assert avoid_consecutive_same_pattern(quests) == quests

    def test_needs_lookahead(self):
        quests = [quest(pattern=p) for p in "abcc"]
        result = self.patterns(avoid_consecutive_same_pattern(quests))
        assert sorted(result) == ["a", "b", "c", "c"]
        assert all(x != y for x, y in zip(result, result[1:]))

    def test_impossible_keeps_order(self):
        quests = [quest(pattern="a", title=str(i)) for i in range(3)]
        assert avoid_consecutive_same_pattern(quests) == quests

    def test_candidates(self):
        quests = [QuestCandidate(pattern="flashcards"), QuestCandidate(pattern="flashcards"), QuestCandidate(pattern="feynman")]
        result = avoid_consecutive_same_pattern(quests)
        assert [q.pattern for q in result] == ["flashcards", "feynman", "flashcards"]

    def test_empty(self):
        assert avoid_consecutive_same_pattern([]) == []
