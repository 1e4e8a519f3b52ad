"""Domain models for the guessing game."""

from guesser.domain.entities import (
    ACCEPTED_MESSAGE,
    COULD_NOT_VERIFY_REASON,
    DEFAULT_REJECTION_REASON,
    DUPLICATE_MESSAGE,
    MAX_STRIKES,
    TOO_VAGUE_REASON,
    EndReason,
    Feedback,
    FeedbackType,
    GameSession,
    GuessVerdict,
    SessionStatus,
)

__all__ = [
    "ACCEPTED_MESSAGE",
    "COULD_NOT_VERIFY_REASON",
    "DEFAULT_REJECTION_REASON",
    "DUPLICATE_MESSAGE",
    "MAX_STRIKES",
    "TOO_VAGUE_REASON",
    "EndReason",
    "Feedback",
    "FeedbackType",
    "GameSession",
    "GuessVerdict",
    "SessionStatus",
]
