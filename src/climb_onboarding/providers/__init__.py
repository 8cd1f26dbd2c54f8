"""
AI model providers for climb-you onboarding

Providers: Claude (Anthropic), OpenAI (and compatible endpoints), mock.
"""

from .base import (
    ModelProvider, ModelResponse, ProviderError, RateLimitError,
    AuthenticationError, ToolCallError, ToolDefinition, ToolCall, TokenUsage
)
from .claude import ClaudeProvider
from .openai_provider import OpenAIProvider
from .mock import MockProvider
from .tools import QUEST_TOOL, quest_tool, to_anthropic_tool, to_openai_tool

__all__ = [
    # Base classes and types
    "ModelProvider",
    "ModelResponse",
    "ProviderError",
    "RateLimitError",
    "AuthenticationError",
    "ToolCallError",
    "ToolDefinition",
    "ToolCall",
    "TokenUsage",
    # Providers
    "ClaudeProvider",
    "OpenAIProvider",
    "MockProvider",
    # Tools
    "QUEST_TOOL",
    "quest_tool",
    "to_anthropic_tool",
    "to_openai_tool",
    "get_provider",
]


def get_provider(name: str, **kwargs) -> ModelProvider:
    """
    Factory function to get a provider by name.

    Args:
        name: Provider name ('claude', 'openai', 'mock')
        **kwargs: Provider-specific options

    Raises:
        ValueError: If provider name is unknown
    """
    providers = {
        "claude": ClaudeProvider,
        "openai": OpenAIProvider,
        "mock": MockProvider,
    }

    if name not in providers:
        raise ValueError(f"Unknown provider: {name}. Valid options: {list(providers.keys())}")

    return providers[name](**kwargs)
