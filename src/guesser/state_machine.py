"""Session state machine for the guessing game.

Every transition is a pure function of the current session snapshot and an
event, returning a ``Transition`` that carries the new snapshot and the
feedback to surface. Nothing here performs I/O or raises: judge failures have
already been converted into verdicts by the time they reach this module.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from guesser.domain.entities import (
    ACCEPTED_MESSAGE,
    DEFAULT_REJECTION_REASON,
    DUPLICATE_MESSAGE,
    EndReason,
    Feedback,
    FeedbackType,
    GameSession,
    GuessVerdict,
    SessionStatus,
)
from guesser.normalizer import contains_key


@dataclass(frozen=True)
class GuessJudged:
    guess: str
    verdict: GuessVerdict


@dataclass(frozen=True)
class GiveUp:
    pass


@dataclass(frozen=True)
class FinalizeStrikeOut:
    pass


SessionEvent = Union[GuessJudged, GiveUp, FinalizeStrikeOut]


@dataclass(frozen=True)
class Transition:
    session: GameSession
    feedback: Optional[Feedback] = None
    end_scheduled: bool = False
    ended: bool = False
    ignored: bool = False


def accepts_guesses(session: GameSession) -> bool:
    """Return True while new guesses may be submitted."""
    return session.is_active and not session.strike_limit_reached


def is_duplicate(session: GameSession, text: str) -> bool:
    return contains_key(session.items, text)


def check_duplicate(session: GameSession, guess: str) -> Optional[Transition]:
    """Return the duplicate outcome for a raw guess, or None when it is new."""
    if not is_duplicate(session, guess):
        return None
    return Transition(
        session=session,
        feedback=Feedback(type=FeedbackType.INFO, message=DUPLICATE_MESSAGE),
    )


def reduce(session: GameSession, event: SessionEvent) -> Transition:
    if not session.is_active:
        return Transition(session=session, ignored=True)

    if isinstance(event, GuessJudged):
        return _apply_verdict(session, event)
    if isinstance(event, GiveUp):
        return _apply_give_up(session)
    if isinstance(event, FinalizeStrikeOut):
        return _apply_strike_out(session)
    return Transition(session=session, ignored=True)


def _apply_verdict(session: GameSession, event: GuessJudged) -> Transition:
    if session.strike_limit_reached:
        return Transition(session=session, ignored=True)

    verdict = event.verdict

    if verdict.accepted:
        canonical = verdict.canonical_form.strip() or event.guess.strip()
        duplicate = check_duplicate(session, canonical)
        if duplicate is not None:
            return duplicate
        updated = session.model_copy(update={"items": [canonical, *session.items]})
        return Transition(
            session=updated,
            feedback=Feedback(type=FeedbackType.SUCCESS, message=ACCEPTED_MESSAGE),
        )

    strikes = session.strikes + 1
    updated = session.model_copy(update={"strikes": strikes})
    return Transition(
        session=updated,
        feedback=Feedback(
            type=FeedbackType.ERROR,
            message=verdict.rejection_reason or DEFAULT_REJECTION_REASON,
        ),
        end_scheduled=strikes >= session.max_strikes,
    )


def _apply_give_up(session: GameSession) -> Transition:
    # A give-up racing the strike-out delay still ends on the strike path.
    reason = EndReason.STRIKE_LIMIT if session.strike_limit_reached else EndReason.GAVE_UP
    return Transition(session=_end(session, reason), ended=True)


def _apply_strike_out(session: GameSession) -> Transition:
    if not session.strike_limit_reached:
        return Transition(session=session, ignored=True)
    return Transition(session=_end(session, EndReason.STRIKE_LIMIT), ended=True)


def _end(session: GameSession, reason: EndReason) -> GameSession:
    return session.model_copy(
        update={
            "status": SessionStatus.ENDED,
            "end_reason": reason,
            "ended_at": datetime.now(),
        }
    )
