"""Tests for domain entities."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from guesser.domain.entities import (
    COULD_NOT_VERIFY_REASON,
    MAX_STRIKES,
    EndReason,
    Feedback,
    FeedbackType,
    GameSession,
    GuessVerdict,
    SessionStatus,
)


class TestGuessVerdict:
    def test_accepted_requires_member_and_specific(self):
        assert GuessVerdict(is_member=True, is_specific=True, canonical_form="Dog").accepted
        assert not GuessVerdict(is_member=True, is_specific=False, canonical_form="Bird").accepted
        assert not GuessVerdict(is_member=False, is_specific=True, canonical_form="Car").accepted

    def test_could_not_verify(self):
        verdict = GuessVerdict.could_not_verify("zebra")
        assert verdict.is_member is False
        assert verdict.is_specific is False
        assert verdict.canonical_form == "zebra"
        assert verdict.rejection_reason == COULD_NOT_VERIFY_REASON
        assert not verdict.accepted

    def test_is_frozen(self):
        verdict = GuessVerdict(is_member=True, is_specific=True, canonical_form="Dog")
        with pytest.raises(ValidationError):
            verdict.canonical_form = "Cat"


class TestFeedback:
    def test_creation(self):
        feedback = Feedback(type=FeedbackType.ERROR, message="Invalid")
        assert feedback.type == FeedbackType.ERROR
        assert feedback.message == "Invalid"


class TestGameSession:
    def test_defaults(self):
        session = GameSession(category="Animals")

        assert session.category == "Animals"
        assert session.language == "en"
        assert session.items == []
        assert session.strikes == 0
        assert session.max_strikes == MAX_STRIKES == 5
        assert session.status == SessionStatus.ACTIVE
        assert session.end_reason is None
        assert session.ended_at is None
        assert isinstance(session.started_at, datetime)
        assert session.session_id

    def test_unique_session_ids(self):
        assert GameSession(category="A").session_id != GameSession(category="A").session_id

    def test_score_is_item_count(self):
        session = GameSession(category="Fruits", items=["Banana", "Apple"])
        assert session.score == 2

    def test_strike_properties(self):
        session = GameSession(category="Fruits", strikes=3)
        assert session.strikes_remaining == 2
        assert not session.strike_limit_reached

        limit = GameSession(category="Fruits", strikes=5)
        assert limit.strikes_remaining == 0
        assert limit.strike_limit_reached

    def test_status_properties(self):
        active = GameSession(category="Fruits")
        assert active.is_active
        assert not active.is_ended

        ended = GameSession(
            category="Fruits",
            status=SessionStatus.ENDED,
            end_reason=EndReason.GAVE_UP,
        )
        assert ended.is_ended
        assert not ended.is_active

    def test_negative_strikes_rejected(self):
        with pytest.raises(ValidationError):
            GameSession(category="Fruits", strikes=-1)

    def test_is_frozen(self):
        session = GameSession(category="Fruits")
        with pytest.raises(ValidationError):
            session.strikes = 2

    def test_json_round_trip(self):
        session = GameSession(
            category="Countries",
            language="sv",
            items=["Sverige", "Norge"],
            strikes=2,
            status=SessionStatus.ENDED,
            end_reason=EndReason.STRIKE_LIMIT,
            ended_at=datetime.now(),
        )
        data = session.model_dump(mode="json")

        assert data["score"] == 2
        assert data["status"] == "ended"
        assert data["end_reason"] == "strike_limit"

        restored = GameSession.model_validate(data)
        assert restored.session_id == session.session_id
        assert restored.items == ["Sverige", "Norge"]
        assert restored.end_reason == EndReason.STRIKE_LIMIT
