"""
climb-you-onboarding configuration

All budgets, thresholds, model choices and mode switches live here.
Nothing is read at import time: build a Config (or Config.from_env())
and hand it to the components that need it.
"""

import os
from dataclasses import dataclass, field
from typing import Literal, Optional


def _env_bool(name: str, default: Optional[bool] = None) -> Optional[bool]:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() == "true"


@dataclass
class QuestBudgetConfig:
    """Per-quest and per-session time limits (minutes)"""
    min_quest_minutes: int = 15
    max_quest_minutes: int = 45
    default_quest_minutes: int = 30
    session_budget_minutes: int = 90

    @classmethod
    def from_env(cls) -> "QuestBudgetConfig":
        return cls(
            min_quest_minutes=int(os.getenv("CLIMB_MIN_QUEST_MINUTES", "15")),
            max_quest_minutes=int(os.getenv("CLIMB_MAX_QUEST_MINUTES", "45")),
            default_quest_minutes=int(os.getenv("CLIMB_DEFAULT_QUEST_MINUTES", "30")),
            session_budget_minutes=int(os.getenv("CLIMB_SESSION_BUDGET", "90")),
        )


@dataclass
class ValidationConfig:
    """How complete an answer set must be before quest generation"""
    # Lenient on purpose: branch questions may be skipped depending on path.
    # Pending product decision on whether this should become 1.0.
    min_completion_ratio: float = 0.5

    @classmethod
    def from_env(cls) -> "ValidationConfig":
        return cls(min_completion_ratio=float(os.getenv("CLIMB_MIN_COMPLETION_RATIO", "0.5")))


@dataclass
class ModelConfig:
    """AI model selection"""
    provider: Literal["claude", "openai", "mock"] = "openai"
    model: str = ""  # Empty = use provider default
    temperature: float = 0.7
    max_tokens: int = 2048

    # Default models per provider
    PROVIDER_DEFAULTS = {
        "claude": "claude-sonnet-4-20250514",
        "openai": "gpt-4o-mini",
        "mock": "mock-model-v1",
    }

    def get_model(self) -> str:
        """Get model, falling back to provider default."""
        return self.model or self.PROVIDER_DEFAULTS.get(self.provider, "")

    @classmethod
    def from_env(cls) -> "ModelConfig":
        return cls(
            provider=os.getenv("CLIMB_AI_PROVIDER", "openai"),
            model=os.getenv("CLIMB_AI_MODEL", ""),
            temperature=float(os.getenv("CLIMB_AI_TEMPERATURE", "0.7")),
            max_tokens=int(os.getenv("CLIMB_AI_MAX_TOKENS", "2048")),
        )


@dataclass
class EnvironmentConfig:
    """Demo / production switches, resolved once when constructed"""
    demo_mode: bool = False
    ai_enabled: bool = True
    use_mock_ai: bool = False

    @property
    def use_real_ai(self) -> bool:
        """Whether quest generation should talk to a real model."""
        return not self.demo_mode and self.ai_enabled and not self.use_mock_ai

    @classmethod
    def from_env(cls) -> "EnvironmentConfig":
        """
        Read the mode switches from the environment.

        CLIMB_DEMO_MODE wins when set. Otherwise demo mode is inferred from
        CLIMB_USE_MOCK_AI=true or CLIMB_ENABLE_AI not being true.
        """
        use_mock_ai = _env_bool("CLIMB_USE_MOCK_AI", False)
        ai_enabled = _env_bool("CLIMB_ENABLE_AI", False)
        demo_mode = _env_bool("CLIMB_DEMO_MODE")
        if demo_mode is None:
            demo_mode = use_mock_ai or not ai_enabled

        return cls(
            demo_mode=demo_mode,
            ai_enabled=ai_enabled and not demo_mode,
            use_mock_ai=use_mock_ai or demo_mode,
        )

    def to_dict(self) -> dict:
        return {
            "mode": "demo" if self.demo_mode else "production",
            "ai_enabled": self.ai_enabled,
            "mock_ai": self.use_mock_ai,
        }


@dataclass
class Config:
    """Master config, constructed by the caller and passed down"""
    quests: QuestBudgetConfig = field(default_factory=QuestBudgetConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    models: ModelConfig = field(default_factory=ModelConfig)
    environment: EnvironmentConfig = field(default_factory=EnvironmentConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a config from CLIMB_* environment variables."""
        return cls(
            quests=QuestBudgetConfig.from_env(),
            validation=ValidationConfig.from_env(),
            models=ModelConfig.from_env(),
            environment=EnvironmentConfig.from_env(),
        )

    # Quick presets
    @classmethod
    def demo(cls) -> "Config":
        """No network: mock provider, AI disabled"""
        cfg = cls()
        cfg.environment = EnvironmentConfig(demo_mode=True, ai_enabled=False, use_mock_ai=True)
        cfg.models.provider = "mock"
        return cfg

    @classmethod
    def strict(cls) -> "Config":
        """Every required answer must be present"""
        cfg = cls()
        cfg.validation.min_completion_ratio = 1.0
        return cfg
