"""Session orchestrator sequencing guesses through the judge and state machine."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from guesser.domain.entities import Feedback, FeedbackType, GameSession, GuessVerdict
from guesser.judge import SemanticJudge
from guesser.normalizer import is_blank
from guesser.state_machine import (
    FinalizeStrikeOut,
    GiveUp,
    GuessJudged,
    accepts_guesses,
    check_duplicate,
    reduce,
)
from guesser.storage.history_store import HistoryStore

logger = logging.getLogger(__name__)

# Game event logger for gameplay visibility
game_logger = logging.getLogger("guesser.session")

SessionEndCallback = Callable[[GameSession], None]


class GuessOutcome(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    DUPLICATE = "duplicate"
    IGNORED = "ignored"
    BUSY = "busy"
    DISCARDED = "discarded"


@dataclass
class GuessResponse:
    outcome: GuessOutcome
    session: GameSession
    feedback: Optional[Feedback] = None
    verdict: Optional[GuessVerdict] = None
    game_over: bool = False


class GameSessionOrchestrator:
    def __init__(
        self,
        session: GameSession,
        judge: SemanticJudge,
        history_store: HistoryStore,
        final_strike_delay: float = 1.0,
        on_session_end: Optional[SessionEndCallback] = None,
    ):
        self._session = session
        self._judge = judge
        self._history_store = history_store
        self._final_strike_delay = final_strike_delay
        self._on_session_end = on_session_end
        self._in_flight = False
        self._strike_out_task: Optional[asyncio.Task] = None
        self._ended = asyncio.Event()
        self._end_emitted = False

    @property
    def session(self) -> GameSession:
        return self._session

    @property
    def is_active(self) -> bool:
        return self._session.is_active

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def end_pending(self) -> bool:
        return self._strike_out_task is not None and not self._strike_out_task.done()

    async def submit_guess(self, text: str) -> GuessResponse:
        if is_blank(text):
            return GuessResponse(outcome=GuessOutcome.IGNORED, session=self._session)

        if self._in_flight:
            game_logger.debug("Guess %r ignored, a judgement is already in flight", text)
            return GuessResponse(outcome=GuessOutcome.BUSY, session=self._session)

        if not accepts_guesses(self._session):
            return GuessResponse(
                outcome=GuessOutcome.IGNORED,
                session=self._session,
                game_over=True,
            )

        guess = text.strip()

        duplicate = check_duplicate(self._session, guess)
        if duplicate is not None:
            game_logger.info("Duplicate guess %r", guess)
            return GuessResponse(
                outcome=GuessOutcome.DUPLICATE,
                session=self._session,
                feedback=duplicate.feedback,
            )

        session_id = self._session.session_id
        self._in_flight = True
        try:
            verdict = await self._judge.judge_guess(
                self._session.category,
                guess,
                locale_hint=self._session.language,
            )
        finally:
            self._in_flight = False

        if self._session.session_id != session_id or not accepts_guesses(self._session):
            game_logger.info("Discarding judgement for %r, session already ended", guess)
            return GuessResponse(
                outcome=GuessOutcome.DISCARDED,
                session=self._session,
                verdict=verdict,
                game_over=True,
            )

        transition = reduce(self._session, GuessJudged(guess=guess, verdict=verdict))
        self._session = transition.session
        outcome = self._outcome_for(transition.feedback)

        game_logger.info(
            "Guess %r -> %s (score=%d, strikes=%d/%d)",
            guess,
            outcome.value,
            self._session.score,
            self._session.strikes,
            self._session.max_strikes,
        )

        if transition.end_scheduled:
            game_logger.info("Strike limit reached, ending session %s", session_id)
            self._schedule_strike_out()

        return GuessResponse(
            outcome=outcome,
            session=self._session,
            feedback=transition.feedback,
            verdict=verdict,
            game_over=transition.end_scheduled,
        )

    def give_up(self) -> GameSession:
        self._cancel_strike_out()
        transition = reduce(self._session, GiveUp())
        if transition.ended:
            game_logger.info("Player gave up session %s", self._session.session_id)
            self._finalize(transition.session)
        return self._session

    async def wait_until_ended(self) -> GameSession:
        await self._ended.wait()
        return self._session

    async def close(self) -> None:
        """Settle a pending strike-out immediately instead of waiting out the delay."""
        if self.end_pending:
            self._cancel_strike_out()
            self._finish_strike_out()

    @staticmethod
    def _outcome_for(feedback: Optional[Feedback]) -> GuessOutcome:
        if feedback is None:
            return GuessOutcome.IGNORED
        if feedback.type == FeedbackType.SUCCESS:
            return GuessOutcome.ACCEPTED
        if feedback.type == FeedbackType.INFO:
            return GuessOutcome.DUPLICATE
        return GuessOutcome.REJECTED

    def _schedule_strike_out(self) -> None:
        self._cancel_strike_out()
        loop = asyncio.get_running_loop()
        self._strike_out_task = loop.create_task(
            self._strike_out_after_delay(self._session.session_id)
        )
        self._strike_out_task.add_done_callback(self._log_strike_out_failure)

    @staticmethod
    def _log_strike_out_failure(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Strike-out task failed: %s", exc, exc_info=exc)

    def _cancel_strike_out(self) -> None:
        if self._strike_out_task is not None and not self._strike_out_task.done():
            self._strike_out_task.cancel()
        self._strike_out_task = None

    async def _strike_out_after_delay(self, session_id: str) -> None:
        await asyncio.sleep(self._final_strike_delay)
        if self._session.session_id != session_id:
            return
        self._finish_strike_out()

    def _finish_strike_out(self) -> None:
        transition = reduce(self._session, FinalizeStrikeOut())
        if transition.ended:
            self._finalize(transition.session)

    def _finalize(self, session: GameSession) -> None:
        self._session = session

        try:
            if session.score > 0:
                try:
                    self._history_store.append(session)
                except (OSError, ValueError) as e:
                    logger.error(
                        "Failed to save session %s to history: %s", session.session_id, e
                    )
            else:
                logger.debug("Session %s has no items, not saved to history", session.session_id)

            game_logger.info(
                "Session %s ended (%s): score=%d, strikes=%d",
                session.session_id,
                session.end_reason.value if session.end_reason else "unknown",
                session.score,
                session.strikes,
            )
        finally:
            self._ended.set()
            if not self._end_emitted:
                self._end_emitted = True
                if self._on_session_end is not None:
                    self._on_session_end(session)
