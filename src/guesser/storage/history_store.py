"""Storage layer for finished game sessions."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from config import ConfigLoader, GameConfig
from guesser.domain.entities import GameSession

logger = logging.getLogger(__name__)


class HistoryStore(ABC):
    """Ordered record of finished games, most recent first."""

    @abstractmethod
    def append(self, session: GameSession) -> None:
        ...

    @abstractmethod
    def list_sessions(self, limit: Optional[int] = None) -> List[GameSession]:
        ...

    def get_session(self, session_id: str) -> GameSession:
        for session in self.list_sessions():
            if session.session_id == session_id:
                return session
        raise ValueError(f"Session not found in history: {session_id}")

    @abstractmethod
    def clear(self) -> None:
        ...

    @staticmethod
    def _check_appendable(session: GameSession) -> None:
        if not session.is_ended:
            raise ValueError(
                f"Cannot store session {session.session_id} in state: {session.status.value}"
            )


class InMemoryHistoryStore(HistoryStore):
    def __init__(self):
        self._sessions: List[GameSession] = []

    def append(self, session: GameSession) -> None:
        self._check_appendable(session)
        self._sessions.insert(0, session)

    def list_sessions(self, limit: Optional[int] = None) -> List[GameSession]:
        sessions = list(self._sessions)
        return sessions[:limit] if limit is not None else sessions

    def clear(self) -> None:
        self._sessions.clear()


class FileHistoryStore(HistoryStore):
    def __init__(
        self,
        config: Optional[GameConfig] = None,
        base_dir: Optional[Path] = None,
    ):
        if config is None:
            loader = ConfigLoader()
            config = loader.load_game_config()

        self._config = config

        if base_dir is None:
            base_dir = Path(__file__).parent.parent.parent.parent

        self._game_storage_dir = base_dir / config.directories.game_storage_dir
        self._history_file = self._game_storage_dir / config.game.history_file

        self._ensure_directories()

    def _ensure_directories(self) -> None:
        self._game_storage_dir.mkdir(parents=True, exist_ok=True)

    @property
    def storage_dir(self) -> Path:
        return self._game_storage_dir

    @property
    def history_file(self) -> Path:
        return self._history_file

    @property
    def backup_file(self) -> Path:
        return self._history_file.with_name(self._history_file.name + ".bak")

    def _read_records(self) -> Optional[List[dict]]:
        """Load the stored records; None when the file exists but is unreadable."""
        if not self._history_file.exists():
            return []

        try:
            with open(self._history_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.error("Failed to load history %s: %s", self._history_file, exc)
            return None

        if not isinstance(data, list):
            logger.error("Ignoring malformed history file %s", self._history_file)
            return None
        return data

    def _move_aside(self) -> None:
        self._history_file.replace(self.backup_file)
        logger.error(
            "Moved unreadable history %s to %s", self._history_file, self.backup_file
        )

    def _write_records(self, records: List[dict]) -> None:
        tmp_file = self._history_file.with_suffix(".tmp")
        with open(tmp_file, "w", encoding="utf-8") as f:
            json.dump(records, f, ensure_ascii=False, indent=2)
        tmp_file.replace(self._history_file)

    def append(self, session: GameSession) -> None:
        self._check_appendable(session)
        records = self._read_records()
        if records is None:
            self._move_aside()
            records = []
        records.insert(0, session.model_dump(mode="json"))
        self._write_records(records)
        logger.info("Saved session %s to history", session.session_id)

    def list_sessions(self, limit: Optional[int] = None) -> List[GameSession]:
        records = self._read_records() or []
        if limit is not None:
            records = records[:limit]

        sessions = []
        for record in records:
            try:
                sessions.append(GameSession.model_validate(record))
            except ValidationError as exc:
                logger.error("Failed to load history entry: %s", exc)
        return sessions

    def clear(self) -> None:
        if self._history_file.exists():
            self._history_file.unlink()
            logger.info("Cleared history %s", self._history_file)
