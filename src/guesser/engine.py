"""Game Engine for wiring configuration, judge and history together."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from config import ConfigLoader, GameConfig, ModelsConfig
from guesser.domain.entities import GameSession
from guesser.judge import SemanticJudge
from guesser.normalizer import is_blank
from guesser.orchestrator import GameSessionOrchestrator, SessionEndCallback
from guesser.storage.history_store import FileHistoryStore, HistoryStore
from models import ModelProviderRegistry

logger = logging.getLogger(__name__)


class GameEngine:
    def __init__(
        self,
        config_dir: Optional[Path] = None,
        base_dir: Optional[Path] = None,
        history_store: Optional[HistoryStore] = None,
        judge: Optional[SemanticJudge] = None,
    ):
        self._config_loader = ConfigLoader(config_dir)
        self._game_config: GameConfig = self._config_loader.load_game_config()
        self._models_config: ModelsConfig = self._config_loader.load_models_config()

        if base_dir is None:
            base_dir = Path(__file__).parent.parent.parent

        self._base_dir = base_dir
        self._model_registry = ModelProviderRegistry(self._models_config)
        self._history_store = history_store or FileHistoryStore(
            config=self._game_config,
            base_dir=base_dir,
        )
        self._judge = judge

        logger.info("GameEngine initialized with base_dir=%s", base_dir)

    @property
    def game_config(self) -> GameConfig:
        return self._game_config

    @property
    def models_config(self) -> ModelsConfig:
        return self._models_config

    @property
    def model_registry(self) -> ModelProviderRegistry:
        return self._model_registry

    @property
    def history_store(self) -> HistoryStore:
        return self._history_store

    @property
    def judge(self) -> SemanticJudge:
        if self._judge is None:
            self._judge = SemanticJudge(
                llm_client=self._model_registry.get_llm_client(),
                config=self._game_config.judge,
            )
        return self._judge

    def resolve_language(self, language: Optional[str]) -> str:
        settings = self._game_config.game
        if not language:
            return settings.default_language
        language = language.lower()
        if language not in settings.supported_languages:
            raise ValueError(
                f"Unsupported language: {language}. "
                f"Supported: {', '.join(settings.supported_languages)}"
            )
        return language

    def create_session(self, category: str, language: Optional[str] = None) -> GameSession:
        if is_blank(category):
            raise ValueError("Category must not be empty")

        session = GameSession(
            category=category.strip(),
            language=self.resolve_language(language),
            max_strikes=self._game_config.game.max_strikes,
        )
        logger.info(
            "Created session %s for category %r (%s)",
            session.session_id,
            session.category,
            session.language,
        )
        return session

    def retry_session(self, session_id: str) -> GameSession:
        previous = self._history_store.get_session(session_id)
        return self.create_session(previous.category, previous.language)

    def create_orchestrator(
        self,
        session: GameSession,
        on_session_end: Optional[SessionEndCallback] = None,
    ) -> GameSessionOrchestrator:
        return GameSessionOrchestrator(
            session=session,
            judge=self.judge,
            history_store=self._history_store,
            final_strike_delay=self._game_config.game.final_strike_delay_seconds,
            on_session_end=on_session_end,
        )

    async def suggest_categories(self, language: Optional[str] = None) -> List[str]:
        locale_hints: Sequence[str] = [self.resolve_language(language)]
        return await self.judge.suggest_categories(locale_hints)

    def list_history(self, limit: Optional[int] = None) -> List[GameSession]:
        return self._history_store.list_sessions(limit=limit)

    def get_history_session(self, session_id: str) -> GameSession:
        return self._history_store.get_session(session_id)
