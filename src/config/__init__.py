"""Configuration module for the guessing game."""

from .loader import ConfigError, ConfigLoader
from .models import (
    APIConfig,
    DirectoriesConfig,
    GameConfig,
    GameSettingsConfig,
    JudgeConfig,
    ModelsConfig,
    OllamaConfig,
    ProviderConfig,
)

__all__ = [
    "ConfigError",
    "ConfigLoader",
    "APIConfig",
    "DirectoriesConfig",
    "GameConfig",
    "GameSettingsConfig",
    "JudgeConfig",
    "ModelsConfig",
    "OllamaConfig",
    "ProviderConfig",
]
