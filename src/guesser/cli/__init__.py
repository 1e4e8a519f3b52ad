"""CLI interface package for the guessing game."""

from guesser.cli.app import GameCLIApp
from guesser.cli.commands import (
    list_history,
    play_session,
    retry_session,
    show_session,
    start_session,
    suggest_categories,
)

__all__ = [
    "GameCLIApp",
    "list_history",
    "play_session",
    "retry_session",
    "show_session",
    "start_session",
    "suggest_categories",
]
