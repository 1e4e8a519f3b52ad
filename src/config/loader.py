"""YAML-backed configuration loading for the guessing game."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Optional, Type, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from .models import GameConfig, ModelsConfig

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "GUESSER_CONFIG_DIR"
GAME_CONFIG_FILE = "game.yaml"
MODELS_CONFIG_FILE = "models.yaml"

ConfigT = TypeVar("ConfigT", bound=BaseModel)


class ConfigError(ValueError):
    """A configuration file exists but cannot be used."""


def default_config_dir() -> Path:
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    return Path(__file__).parent.parent.parent / "config"


class ConfigLoader:
    """Reads ``game.yaml`` and ``models.yaml``; missing files mean defaults."""

    def __init__(self, config_dir: Optional[str | Path] = None):
        self._config_dir = Path(config_dir) if config_dir is not None else default_config_dir()
        self._cache: Dict[str, BaseModel] = {}

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    def _read_mapping(self, filename: str) -> dict:
        path = self._config_dir / filename
        if not path.exists():
            logger.warning("Config file not found: %s, using defaults", path)
            return {}

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping at the top of {path}")
        return data

    def _load(self, filename: str, model: Type[ConfigT], force_reload: bool) -> ConfigT:
        cached = self._cache.get(filename)
        if cached is not None and not force_reload:
            return cached

        try:
            config = model(**self._read_mapping(filename))
        except ValidationError as e:
            raise ConfigError(f"Invalid settings in {self._config_dir / filename}: {e}") from e

        self._cache[filename] = config
        logger.info("Loaded %s from %s", model.__name__, self._config_dir / filename)
        return config

    def load_game_config(self, force_reload: bool = False) -> GameConfig:
        return self._load(GAME_CONFIG_FILE, GameConfig, force_reload)

    def load_models_config(self, force_reload: bool = False) -> ModelsConfig:
        return self._load(MODELS_CONFIG_FILE, ModelsConfig, force_reload)

    def load_all(self, force_reload: bool = False) -> tuple[GameConfig, ModelsConfig]:
        return self.load_game_config(force_reload), self.load_models_config(force_reload)

    @property
    def game(self) -> GameConfig:
        return self.load_game_config()

    @property
    def models(self) -> ModelsConfig:
        return self.load_models_config()
