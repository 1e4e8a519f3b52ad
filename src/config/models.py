"""Configuration data models using Pydantic."""

from __future__ import annotations

import os
import re
from typing import Any, List

from pydantic import BaseModel, Field, field_validator


DEFAULT_FALLBACK_CATEGORIES = [
    "Animals",
    "Car Brands",
    "Countries",
    "Fruits",
    "Harry Potter Characters",
]


_ENV_REFERENCE = re.compile(r"\$\{(\w+)(?::([^}]*))?\}")


def resolve_env_vars(value: str) -> str:
    """Expand ``${NAME}`` and ``${NAME:default}`` references from the environment."""
    return _ENV_REFERENCE.sub(
        lambda match: os.environ.get(match.group(1), match.group(2) or ""),
        value,
    )


class DirectoriesConfig(BaseModel):
    game_storage_dir: str = "game_storage"


class GameSettingsConfig(BaseModel):
    default_language: str = "en"
    supported_languages: List[str] = Field(default_factory=lambda: ["en", "sv"])
    max_strikes: int = Field(default=5, ge=1)
    final_strike_delay_seconds: float = Field(default=1.0, ge=0.0)
    history_file: str = "history.json"


class JudgeConfig(BaseModel):
    timeout_seconds: float = Field(default=20.0, gt=0.0)
    suggestion_count: int = Field(default=5, ge=1)
    fallback_categories: List[str] = Field(
        default_factory=lambda: list(DEFAULT_FALLBACK_CATEGORIES)
    )


class GameConfig(BaseModel):
    directories: DirectoriesConfig = Field(default_factory=DirectoriesConfig)
    game: GameSettingsConfig = Field(default_factory=GameSettingsConfig)
    judge: JudgeConfig = Field(default_factory=JudgeConfig)


class ProviderConfig(BaseModel):
    """Connection settings shared by every LLM backend."""

    base_url: str
    api_key: str = ""
    llm_model_name: str
    default_temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    max_tokens: int = Field(default=512, ge=16)
    timeout: float = Field(default=60.0, gt=0.0)

    @field_validator("base_url", "api_key", "llm_model_name", mode="before")
    @classmethod
    def resolve_env(cls, v: Any) -> Any:
        if isinstance(v, str):
            return resolve_env_vars(v)
        return v


class OllamaConfig(ProviderConfig):
    base_url: str = "http://localhost:11434"
    llm_model_name: str = "qwen2.5:7b"


class APIConfig(ProviderConfig):
    base_url: str = "https://api.openai.com/v1"
    llm_model_name: str = "gpt-4o-mini"


class ModelsConfig(BaseModel):
    provider: str = "ollama"
    ollama: OllamaConfig = Field(default_factory=OllamaConfig)
    api: APIConfig = Field(default_factory=APIConfig)

    @field_validator("provider", mode="before")
    @classmethod
    def check_provider(cls, v: Any) -> str:
        if isinstance(v, str):
            v = resolve_env_vars(v)
        if v not in ("ollama", "api"):
            raise ValueError(f"Unknown model provider: {v}")
        return v

    def get_active_config(self) -> ProviderConfig:
        if self.provider == "ollama":
            return self.ollama
        return self.api
