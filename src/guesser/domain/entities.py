"""Domain entities for the category guessing game.

This module defines the core domain entities:
- GuessVerdict: The judge's decision for one guess in a category
- GameSession: A single playthrough from category selection to termination
- Feedback: The player-facing outcome of one guess
"""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


MAX_STRIKES = 5
COULD_NOT_VERIFY_REASON = "Could not verify"
TOO_VAGUE_REASON = "Too vague"
DEFAULT_REJECTION_REASON = "Invalid"
DUPLICATE_MESSAGE = "Already listed!"
ACCEPTED_MESSAGE = "+1"


class SessionStatus(str, Enum):
    ACTIVE = "active"
    ENDED = "ended"


class EndReason(str, Enum):
    STRIKE_LIMIT = "strike_limit"
    GAVE_UP = "gave_up"


class FeedbackType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class Feedback(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: FeedbackType
    message: str


class GuessVerdict(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_member: bool
    is_specific: bool
    canonical_form: str
    rejection_reason: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.is_member and self.is_specific

    @classmethod
    def could_not_verify(cls, guess: str) -> GuessVerdict:
        """Default-reject verdict used whenever the judge cannot answer."""
        return cls(
            is_member=False,
            is_specific=False,
            canonical_form=guess,
            rejection_reason=COULD_NOT_VERIFY_REASON,
        )


class GameSession(BaseModel):
    """Immutable snapshot of a game; transitions produce new snapshots."""

    model_config = ConfigDict(frozen=True)

    session_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    category: str
    language: str = "en"
    items: List[str] = Field(default_factory=list)
    strikes: int = Field(default=0, ge=0)
    max_strikes: int = Field(default=MAX_STRIKES, ge=1)
    status: SessionStatus = SessionStatus.ACTIVE
    end_reason: Optional[EndReason] = None
    started_at: datetime = Field(default_factory=datetime.now)
    ended_at: Optional[datetime] = None
    schema_version: str = "1.0"

    @computed_field
    @property
    def score(self) -> int:
        return len(self.items)

    @property
    def is_active(self) -> bool:
        return self.status == SessionStatus.ACTIVE

    @property
    def is_ended(self) -> bool:
        return self.status == SessionStatus.ENDED

    @property
    def strikes_remaining(self) -> int:
        return max(0, self.max_strikes - self.strikes)

    @property
    def strike_limit_reached(self) -> bool:
        return self.strikes >= self.max_strikes
