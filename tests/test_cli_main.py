"""Integration tests for CLI main entry point."""

import argparse
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from config import ConfigError
from guesser.cli.app import GameCLIApp
from guesser.cli.formatters import JsonFormatter, TextFormatter
from guesser.cli.main import InteractiveCLI, async_main, create_parser
from guesser.domain.entities import EndReason, GameSession, SessionStatus


@pytest.fixture
def sample_session():
    return GameSession(session_id="test-session-123", category="Animals")


@pytest.fixture
def finished_session():
    return GameSession(
        session_id="finished-123",
        category="Animals",
        items=["Dog"],
        status=SessionStatus.ENDED,
        end_reason=EndReason.GAVE_UP,
    )


@pytest.fixture
def summary(finished_session):
    return {
        "session_id": finished_session.session_id,
        "category": finished_session.category,
        "language": "en",
        "status": "ended",
        "end_reason": "gave_up",
        "score": 1,
        "strikes": 0,
        "max_strikes": 5,
        "items": ["Dog"],
        "started_at": finished_session.started_at.isoformat(),
        "ended_at": None,
    }


class TestParser:
    def test_create_parser(self):
        parser = create_parser()
        assert parser.prog == "infinite-guesser"

    def test_suggest_command(self):
        args = create_parser().parse_args(["suggest", "--language", "sv"])
        assert args.command == "suggest"
        assert args.language == "sv"

    def test_play_command(self):
        args = create_parser().parse_args(["play", "-c", "Dog Breeds"])
        assert args.command == "play"
        assert args.category == "Dog Breeds"
        assert args.language is None

    def test_play_requires_category(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["play"])

    def test_history_command(self):
        args = create_parser().parse_args(["history", "-n", "3"])
        assert args.command == "history"
        assert args.limit == 3

    def test_show_command(self):
        args = create_parser().parse_args(["show", "--session", "abc"])
        assert args.command == "show"
        assert args.session == "abc"

    def test_retry_command(self):
        args = create_parser().parse_args(["retry", "-s", "abc"])
        assert args.command == "retry"
        assert args.session == "abc"

    def test_json_and_verbose_flags(self):
        args = create_parser().parse_args(["--json", "-v", "history"])
        assert args.json is True
        assert args.verbose is True


class TestInteractiveCLI:
    @pytest.fixture
    def mock_app(self, finished_session, summary):
        app = MagicMock(spec=GameCLIApp)
        app.suggest_categories = AsyncMock(return_value=["Animals", "Fruits"])
        app.list_history.return_value = [finished_session]
        app.get_history_session.return_value = finished_session
        app.get_session_summary.return_value = summary
        return app

    @pytest.fixture
    def cli(self, mock_app):
        return InteractiveCLI(mock_app, TextFormatter())

    @pytest.mark.asyncio
    async def test_run_suggest(self, cli, mock_app, capsys):
        result = await cli.run_suggest("en")

        assert result == 0
        mock_app.suggest_categories.assert_awaited_once_with("en")
        assert "1. Animals" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_run_history(self, cli, mock_app, capsys):
        result = await cli.run_history(limit=10)

        assert result == 0
        mock_app.list_history.assert_called_once_with(10)
        assert "finished-123" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_run_show(self, cli, mock_app, capsys):
        result = await cli.run_show("finished-123")

        assert result == 0
        mock_app.get_history_session.assert_called_once_with("finished-123")
        assert "Items Found:" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_run_show_missing(self, cli, mock_app):
        mock_app.get_history_session.side_effect = ValueError("Session not found in history: x")

        result = await cli.run_show("x")

        assert result == 1

    @pytest.mark.asyncio
    async def test_run_play_invalid_category(self, cli, mock_app):
        mock_app.create_session.side_effect = ValueError("Category must not be empty")

        result = await cli.run_play(" ")

        assert result == 1

    @pytest.mark.asyncio
    async def test_run_play(self, mock_app, sample_session, summary, capsys):
        mock_app.create_session.return_value = sample_session
        mock_app.get_session.return_value = sample_session
        cli = InteractiveCLI(mock_app, JsonFormatter())

        with patch("guesser.cli.main.play_session", new_callable=AsyncMock) as mock_play:
            mock_play.return_value = MagicMock(
                success=True,
                message="Game completed.",
                data=summary,
                error=None,
            )
            result = await cli.run_play("Animals")

        assert result == 0
        mock_app.get_session.assert_called_once_with("test-session-123")
        assert '"success": true' in capsys.readouterr().out


class TestAsyncMain:
    @pytest.mark.asyncio
    async def test_async_main_suggest(self):
        args = argparse.Namespace(command="suggest", language=None, json=False, verbose=False)

        with patch("guesser.cli.main.GameCLIApp") as MockApp:
            mock_app = MockApp.return_value
            mock_app.suggest_categories = AsyncMock(return_value=["Animals"])
            mock_app.close = AsyncMock()

            result = await async_main(args)

            assert result == 0
            mock_app.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_async_main_history(self, finished_session, summary):
        args = argparse.Namespace(command="history", limit=None, json=True, verbose=False)

        with patch("guesser.cli.main.GameCLIApp") as MockApp:
            mock_app = MockApp.return_value
            mock_app.list_history.return_value = [finished_session]
            mock_app.get_session_summary.return_value = summary
            mock_app.close = AsyncMock()

            result = await async_main(args)

            assert result == 0
            mock_app.list_history.assert_called_once_with(None)

    @pytest.mark.asyncio
    async def test_async_main_unknown_command(self):
        args = argparse.Namespace(command="unknown", json=False, verbose=False)

        with patch("guesser.cli.main.GameCLIApp") as MockApp:
            mock_app = MockApp.return_value
            mock_app.close = AsyncMock()

            result = await async_main(args)

            assert result == 1
            mock_app.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_async_main_invalid_config(self, capsys):
        args = argparse.Namespace(command="history", limit=None, json=False, verbose=False)

        with patch("guesser.cli.main.GameCLIApp", side_effect=ConfigError("bad yaml")):
            result = await async_main(args)

        assert result == 2
        assert "Invalid configuration." in capsys.readouterr().out
