"""Tests for the session state machine."""

from guesser.domain.entities import (
    EndReason,
    FeedbackType,
    GameSession,
    GuessVerdict,
    SessionStatus,
)
from guesser.state_machine import (
    FinalizeStrikeOut,
    GiveUp,
    GuessJudged,
    accepts_guesses,
    check_duplicate,
    is_duplicate,
    reduce,
)


def accept(canonical: str) -> GuessVerdict:
    return GuessVerdict(is_member=True, is_specific=True, canonical_form=canonical)


def reject(reason=None) -> GuessVerdict:
    return GuessVerdict(
        is_member=False,
        is_specific=False,
        canonical_form="",
        rejection_reason=reason,
    )


class TestAcceptsGuesses:
    def test_active_session(self):
        assert accepts_guesses(GameSession(category="Animals"))

    def test_strike_limit_reached(self):
        assert not accepts_guesses(GameSession(category="Animals", strikes=5))

    def test_ended_session(self):
        session = GameSession(category="Animals", status=SessionStatus.ENDED)
        assert not accepts_guesses(session)


class TestDuplicateCheck:
    def test_is_duplicate(self):
        session = GameSession(category="Animals", items=["Dog"])
        assert is_duplicate(session, " dog ")
        assert not is_duplicate(session, "cat")

    def test_check_duplicate_returns_info(self):
        session = GameSession(category="Animals", items=["Dog"])
        transition = check_duplicate(session, "DOG")

        assert transition is not None
        assert transition.session is session
        assert transition.feedback.type == FeedbackType.INFO
        assert transition.feedback.message == "Already listed!"

    def test_check_duplicate_none_for_new_guess(self):
        session = GameSession(category="Animals", items=["Dog"])
        assert check_duplicate(session, "Cat") is None


class TestAcceptedVerdict:
    def test_prepends_canonical_form(self):
        session = GameSession(category="Animals", items=["Cat"])
        transition = reduce(session, GuessJudged("dog", accept("Dog")))

        assert transition.session.items == ["Dog", "Cat"]
        assert transition.session.strikes == 0
        assert transition.feedback.type == FeedbackType.SUCCESS
        assert transition.feedback.message == "+1"
        assert not transition.end_scheduled

    def test_input_snapshot_unchanged(self):
        session = GameSession(category="Animals")
        reduce(session, GuessJudged("dog", accept("Dog")))
        assert session.items == []

    def test_blank_canonical_falls_back_to_guess(self):
        session = GameSession(category="Animals")
        transition = reduce(session, GuessJudged(" dog ", accept("  ")))
        assert transition.session.items == ["dog"]

    def test_canonical_duplicate_is_info(self):
        session = GameSession(category="Countries", items=["United States"])
        transition = reduce(session, GuessJudged("USA", accept("United States")))

        assert transition.session.items == ["United States"]
        assert transition.session.strikes == 0
        assert transition.feedback.type == FeedbackType.INFO
        assert transition.feedback.message == "Already listed!"


class TestRejectedVerdict:
    def test_increments_strikes_with_reason(self):
        session = GameSession(category="Animals")
        transition = reduce(session, GuessJudged("Toyota", reject("Not an animal")))

        assert transition.session.strikes == 1
        assert transition.session.items == []
        assert transition.feedback.type == FeedbackType.ERROR
        assert transition.feedback.message == "Not an animal"
        assert not transition.end_scheduled

    def test_missing_reason_uses_default(self):
        session = GameSession(category="Animals")
        transition = reduce(session, GuessJudged("Toyota", reject()))
        assert transition.feedback.message == "Invalid"

    def test_vague_member_counts_as_strike(self):
        session = GameSession(category="Dog Breeds")
        verdict = GuessVerdict(
            is_member=True,
            is_specific=False,
            canonical_form="Dog",
            rejection_reason="Too vague",
        )
        transition = reduce(session, GuessJudged("dog", verdict))

        assert transition.session.strikes == 1
        assert transition.feedback.message == "Too vague"

    def test_final_strike_schedules_end(self):
        session = GameSession(category="Animals", strikes=4)
        transition = reduce(session, GuessJudged("Toyota", reject("No")))

        assert transition.session.strikes == 5
        assert transition.end_scheduled
        assert transition.session.status == SessionStatus.ACTIVE

    def test_verdict_after_strike_limit_ignored(self):
        session = GameSession(category="Animals", strikes=5)
        transition = reduce(session, GuessJudged("Dog", accept("Dog")))

        assert transition.ignored
        assert transition.session is session


class TestGiveUp:
    def test_give_up_ends_session(self):
        session = GameSession(category="Animals", items=["Dog"], strikes=1)
        transition = reduce(session, GiveUp())

        assert transition.ended
        assert transition.session.status == SessionStatus.ENDED
        assert transition.session.end_reason == EndReason.GAVE_UP
        assert transition.session.ended_at is not None
        assert transition.session.items == ["Dog"]
        assert transition.session.strikes == 1

    def test_give_up_during_strike_out_delay(self):
        session = GameSession(category="Animals", strikes=5)
        transition = reduce(session, GiveUp())

        assert transition.session.end_reason == EndReason.STRIKE_LIMIT


class TestFinalizeStrikeOut:
    def test_ends_at_limit(self):
        session = GameSession(category="Animals", strikes=5)
        transition = reduce(session, FinalizeStrikeOut())

        assert transition.ended
        assert transition.session.status == SessionStatus.ENDED
        assert transition.session.end_reason == EndReason.STRIKE_LIMIT

    def test_ignored_below_limit(self):
        session = GameSession(category="Animals", strikes=2)
        transition = reduce(session, FinalizeStrikeOut())

        assert transition.ignored
        assert transition.session.is_active


class TestEndedSession:
    def test_events_are_no_ops(self):
        session = reduce(GameSession(category="Animals"), GiveUp()).session

        for event in (GuessJudged("Dog", accept("Dog")), GiveUp(), FinalizeStrikeOut()):
            transition = reduce(session, event)
            assert transition.ignored
            assert transition.session is session
            assert transition.feedback is None


class TestScenarios:
    def test_mixed_game_until_strike_out(self):
        session = GameSession(category="Dog Breeds")

        session = reduce(session, GuessJudged("poodle", accept("Poodle"))).session
        session = reduce(session, GuessJudged("labrador", accept("Labrador Retriever"))).session
        assert check_duplicate(session, "POODLE") is not None

        for _ in range(4):
            session = reduce(session, GuessJudged("cat", reject("Not a dog breed"))).session
        assert accepts_guesses(session)

        final = reduce(session, GuessJudged("car", reject("Not a dog breed")))
        assert final.end_scheduled
        assert not accepts_guesses(final.session)

        ended = reduce(final.session, FinalizeStrikeOut()).session
        assert ended.is_ended
        assert ended.score == 2
        assert ended.items == ["Labrador Retriever", "Poodle"]
        assert ended.strikes == 5

    def test_strikes_never_exceed_limit(self):
        session = GameSession(category="Fruits", max_strikes=3)
        for _ in range(10):
            session = reduce(session, GuessJudged("rock", reject("No"))).session
        assert session.strikes == 3
