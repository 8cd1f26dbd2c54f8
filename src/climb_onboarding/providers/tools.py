"""
Tool definitions for quest generation via function calling.

Includes converters for the Anthropic and OpenAI tool formats.
"""

from typing import Dict, Any

from .base import ToolDefinition
from ..quests.constraints import MAX_QUEST_MINUTES, MIN_QUEST_MINUTES
from ..quests.schema import Pattern


def _string_array(description: str) -> dict:
    return {"type": "array", "items": {"type": "string"}, "description": description}


def quest_tool(min_minutes: int = MIN_QUEST_MINUTES, max_minutes: int = MAX_QUEST_MINUTES) -> ToolDefinition:
    """The quest proposal tool, with the time box the generator enforces."""
    return ToolDefinition(
        name="propose_quests",
        description="Propose today's learning quests for the user. Call this tool with the full list of quests.",
        parameters={
            "type": "object",
            "properties": {
                "quests": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "title": {
                                "type": "string",
                                "description": "Short, action-oriented title"
                            },
                            "pattern": {
                                "type": "string",
                                "enum": [p.value for p in Pattern],
                                "description": "Learning pattern this quest uses"
                            },
                            "minutes": {
                                "type": "integer",
                                "minimum": min_minutes,
                                "maximum": max_minutes,
                                "description": "Expected time in minutes"
                            },
                            "difficulty": {
                                "type": "number",
                                "minimum": 0,
                                "maximum": 1,
                                "description": "Difficulty from 0 (easy) to 1 (hard)"
                            },
                            "deliverable": {
                                "type": "string",
                                "description": "What the user produces when done"
                            },
                            "criteria": _string_array("Checks that confirm the quest is complete"),
                            "steps": _string_array("Concrete steps to follow"),
                            "tags": _string_array("Topic keywords, lowercase"),
                        },
                        "required": ["title", "pattern", "minutes", "difficulty", "deliverable"]
                    }
                }
            },
            "required": ["quests"]
        }
    )


QUEST_TOOL = quest_tool()


def to_anthropic_tool(tool: ToolDefinition) -> Dict[str, Any]:
    return {
        "name": tool.name,
        "description": tool.description,
        "input_schema": tool.parameters
    }


def to_openai_tool(tool: ToolDefinition) -> Dict[str, Any]:
    return {
        "type": "function",
        "function": {
            "name": tool.name,
            "description": tool.description,
            "parameters": tool.parameters
        }
    }
