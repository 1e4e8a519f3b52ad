"""CLI Application for the guessing game.

This module provides the main CLI application that integrates with the GameEngine
and provides user-facing operations for suggestions, playing and game history.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from guesser.domain.entities import GameSession
from guesser.engine import GameEngine
from guesser.orchestrator import GameSessionOrchestrator, SessionEndCallback

logger = logging.getLogger(__name__)


class GameCLIApp:
    def __init__(
        self,
        config_dir: Optional[Path] = None,
        base_dir: Optional[Path] = None,
        engine: Optional[GameEngine] = None,
    ):
        self._engine = engine or GameEngine(config_dir=config_dir, base_dir=base_dir)
        self._active_orchestrator: Optional[GameSessionOrchestrator] = None
        self._sessions: Dict[str, GameSession] = {}

    @property
    def engine(self) -> GameEngine:
        return self._engine

    async def suggest_categories(self, language: Optional[str] = None) -> List[str]:
        return await self._engine.suggest_categories(language)

    def create_session(self, category: str, language: Optional[str] = None) -> GameSession:
        session = self._engine.create_session(category, language)
        self._sessions[session.session_id] = session
        return session

    def retry_session(self, session_id: str) -> GameSession:
        session = self._engine.retry_session(session_id)
        self._sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> GameSession:
        if session_id not in self._sessions:
            raise ValueError(f"Session not found: {session_id}")
        return self._sessions[session_id]

    def create_orchestrator(
        self,
        session: GameSession,
        on_session_end: Optional[SessionEndCallback] = None,
    ) -> GameSessionOrchestrator:
        orchestrator = self._engine.create_orchestrator(session, on_session_end)
        self._active_orchestrator = orchestrator
        return orchestrator

    def list_history(self, limit: Optional[int] = None) -> List[GameSession]:
        return self._engine.list_history(limit)

    def get_history_session(self, session_id: str) -> GameSession:
        return self._engine.get_history_session(session_id)

    def get_session_summary(self, session: GameSession) -> Dict[str, Any]:
        return {
            "session_id": session.session_id,
            "category": session.category,
            "language": session.language,
            "status": session.status.value,
            "end_reason": session.end_reason.value if session.end_reason else None,
            "score": session.score,
            "strikes": session.strikes,
            "max_strikes": session.max_strikes,
            "items": list(session.items),
            "started_at": session.started_at.isoformat(),
            "ended_at": session.ended_at.isoformat() if session.ended_at else None,
        }

    async def close(self) -> None:
        if self._active_orchestrator is not None:
            await self._active_orchestrator.close()
        logger.info("GameCLIApp closed")
