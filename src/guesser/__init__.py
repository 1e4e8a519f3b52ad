"""Category guessing game: judge, session state machine and orchestration."""

from guesser.domain import (
    EndReason,
    Feedback,
    FeedbackType,
    GameSession,
    GuessVerdict,
    SessionStatus,
)
from guesser.engine import GameEngine
from guesser.judge import SemanticJudge
from guesser.normalizer import normalize
from guesser.orchestrator import GameSessionOrchestrator, GuessOutcome, GuessResponse
from guesser.storage import FileHistoryStore, HistoryStore, InMemoryHistoryStore

__all__ = [
    "EndReason",
    "Feedback",
    "FeedbackType",
    "GameSession",
    "GuessVerdict",
    "SessionStatus",
    "GameEngine",
    "SemanticJudge",
    "normalize",
    "GameSessionOrchestrator",
    "GuessOutcome",
    "GuessResponse",
    "FileHistoryStore",
    "HistoryStore",
    "InMemoryHistoryStore",
]
