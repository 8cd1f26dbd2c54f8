"""
Prompt templates for quest generation

All prompt wording for the quest generator lives here.
"""

import json

from ..profile import LearningProfile
from .schema import Pattern


QUEST_SYSTEM_PROMPT = """You are a precise learning planner.

You turn a learner's goal and profile into small, concrete quests they can finish today.

Key principles:
1. **One sitting**: each quest is a single focused session of {min_minutes}-{max_minutes} minutes.
2. **Tangible output**: every quest ends with a deliverable the learner can point to.
3. **Variety**: neighbouring quests should use different learning patterns.
4. **Right difficulty**: match the learner's tolerance; difficulty is a number from 0 (easy) to 1 (hard).
5. **Recoverable**: keep quests small enough that a bad day still allows one of them.

Allowed patterns: {patterns}
"""

QUEST_GENERATE_PROMPT = """Create {count} quests for today.

## Goal

{goal_text}

## Learner profile

- Goal type: {goal_focus}
- Scope: {scope_style}
- New material vs. review: {novelty_preference:.2f} (1.0 = all new)
- Review cadence: {review_cadence}
- Difficulty tolerance: {difficulty_tolerance:.2f} ({difficulty_label})
- Pace: {pace_preference}
- Motivation: {motivation_style}
- Final evidence: {capstone_type}
- Usually stops because of: {risk_factors}
- When that happens prefers to: {fallback_strategy}

## Constraints

- Each quest takes {min_minutes} to {max_minutes} minutes.
- All quests together take at most {session_budget} minutes.
{memo_section}"""

MEMO_SECTION = """
## Learner notes

{memos}
"""

JSON_OUTPUT_INSTRUCTIONS = """
Output only valid JSON in this format:
{"quests": [{"title": "...", "pattern": "read_note_q", "minutes": 30, "difficulty": 0.5, "deliverable": "...", "criteria": ["..."], "steps": ["..."], "tags": ["..."]}]}
"""


def _or_unknown(value) -> str:
    return str(value) if value else "not specified"


def format_system_prompt(min_minutes: int, max_minutes: int) -> str:
    return QUEST_SYSTEM_PROMPT.format(
        min_minutes=min_minutes,
        max_minutes=max_minutes,
        patterns=", ".join(p.value for p in Pattern),
    )


def format_quest_prompt(
    goal_text: str,
    profile: LearningProfile,
    count: int,
    min_minutes: int,
    max_minutes: int,
    session_budget: int,
    memos: dict = None,
    json_output: bool = False,
) -> str:
    """
    Format the quest generation prompt.

    Args:
        goal_text: The learner's goal in their own words
        profile: Derived learning profile
        count: Number of quests to ask for
        min_minutes: Shortest allowed quest
        max_minutes: Longest allowed quest
        session_budget: Total minutes for the day
        memos: Free-text notes keyed by question id
        json_output: Append JSON format instructions (no tool calling)

    Returns:
        Formatted prompt string
    """
    memo_section = ""
    if memos:
        memo_section = MEMO_SECTION.format(
            memos="\n".join(f"- {qid}: {text}" for qid, text in sorted(memos.items()))
        )

    prompt = QUEST_GENERATE_PROMPT.format(
        count=count,
        goal_text=goal_text.strip() or "not specified",
        goal_focus=_or_unknown(profile.goal_focus),
        scope_style=_or_unknown(profile.scope_style),
        novelty_preference=profile.novelty_preference,
        review_cadence=_or_unknown(profile.review_cadence),
        difficulty_tolerance=profile.difficulty_tolerance,
        difficulty_label=profile.difficulty_label(),
        pace_preference=profile.pace_preference,
        motivation_style=profile.motivation_style,
        capstone_type=_or_unknown(profile.capstone_type),
        risk_factors=", ".join(profile.risk_factors) or "not specified",
        fallback_strategy=_or_unknown(profile.fallback_strategy),
        min_minutes=min_minutes,
        max_minutes=max_minutes,
        session_budget=session_budget,
        memo_section=memo_section,
    )

    if json_output:
        prompt += JSON_OUTPUT_INSTRUCTIONS
    return prompt


def profile_summary(profile: LearningProfile) -> str:
    """Compact JSON view of a profile, for logs."""
    return json.dumps(profile.to_dict(), ensure_ascii=False)
