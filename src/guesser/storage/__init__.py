"""Storage module for finished game sessions."""

from guesser.storage.history_store import (
    FileHistoryStore,
    HistoryStore,
    InMemoryHistoryStore,
)

__all__ = [
    "FileHistoryStore",
    "HistoryStore",
    "InMemoryHistoryStore",
]
