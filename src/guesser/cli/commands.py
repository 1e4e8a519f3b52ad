"""CLI command handlers for the guessing game.

This module provides individual command implementations that can be used
by the CLI entry point or tested independently.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from guesser.cli.app import GameCLIApp
from guesser.domain.entities import FeedbackType, GameSession
from guesser.orchestrator import GameSessionOrchestrator, GuessOutcome, GuessResponse

COMMAND_PREFIXES = ("/", "!", "\\")

HELP_TEXT = """**Available Commands:**
/status (s) - View score and strikes
/list (l) - View the items you have named
/giveup (quit, q) - End the game
/help (?) - Show this help

**How to Play:**
- Name as many members of the category as you can, one per line
- Vague or wrong answers cost a strike; the game ends at {max_strikes} strikes
"""


@dataclass
class CommandResult:
    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


async def suggest_categories(
    app: GameCLIApp,
    language: Optional[str] = None,
) -> CommandResult:
    try:
        categories = await app.suggest_categories(language)
        return CommandResult(
            success=True,
            message=f"Got {len(categories)} suggestion(s).",
            data={"categories": categories},
        )
    except ValueError as e:
        return CommandResult(
            success=False,
            message=f"Failed to suggest categories: {e}",
            error=str(e),
        )


def list_history(app: GameCLIApp, limit: Optional[int] = None) -> CommandResult:
    try:
        sessions = app.list_history(limit)
        session_list = [app.get_session_summary(s) for s in sessions]
        return CommandResult(
            success=True,
            message=f"Found {len(sessions)} game(s).",
            data={"sessions": session_list},
        )
    except Exception as e:
        return CommandResult(
            success=False,
            message="Failed to list history.",
            error=str(e),
        )


def show_session(app: GameCLIApp, session_id: str) -> CommandResult:
    try:
        session = app.get_history_session(session_id)
        return CommandResult(
            success=True,
            message="Session retrieved.",
            data=app.get_session_summary(session),
        )
    except ValueError as e:
        return CommandResult(
            success=False,
            message=f"Session not found: {session_id}",
            error=str(e),
        )
    except Exception as e:
        return CommandResult(
            success=False,
            message="Failed to load session.",
            error=str(e),
        )


def start_session(
    app: GameCLIApp,
    category: str,
    language: Optional[str] = None,
) -> CommandResult:
    try:
        session = app.create_session(category, language)
        return CommandResult(
            success=True,
            message=f"Session created: {session.session_id}",
            data={
                "session_id": session.session_id,
                "category": session.category,
                "language": session.language,
            },
        )
    except ValueError as e:
        return CommandResult(
            success=False,
            message=f"Failed to create session: {e}",
            error=str(e),
        )


def retry_session(app: GameCLIApp, session_id: str) -> CommandResult:
    try:
        session = app.retry_session(session_id)
        return CommandResult(
            success=True,
            message=f"Session created: {session.session_id}",
            data={
                "session_id": session.session_id,
                "category": session.category,
                "language": session.language,
            },
        )
    except ValueError as e:
        return CommandResult(
            success=False,
            message=f"Cannot retry session {session_id}: {e}",
            error=str(e),
        )


def format_intro(session: GameSession) -> str:
    return "\n".join([
        f"**Category: {session.category}**",
        f"Name them all! You have {session.max_strikes} strikes.",
        "Type /help for commands.",
    ])


def format_guess_response(response: GuessResponse) -> Optional[str]:
    session = response.session

    if response.outcome == GuessOutcome.BUSY:
        return "Still checking your last guess..."
    if response.outcome in (GuessOutcome.IGNORED, GuessOutcome.DISCARDED):
        return None
    if response.feedback is None:
        return None

    feedback = response.feedback
    if feedback.type == FeedbackType.SUCCESS:
        line = f"✓ {session.items[0]} ({feedback.message}) Score: {session.score}"
    elif feedback.type == FeedbackType.ERROR:
        line = f"✗ {feedback.message} Strikes: {session.strikes}/{session.max_strikes}"
    else:
        line = f"○ {feedback.message}"
    return line


def format_status(session: GameSession) -> str:
    return "\n".join([
        "**Game Status**",
        f"Category: {session.category}",
        f"State: {session.status.value}",
        f"Score: {session.score}",
        f"Strikes: {session.strikes}/{session.max_strikes}",
        f"Strikes left: {session.strikes_remaining}",
    ])


def format_items(session: GameSession) -> str:
    if not session.items:
        return "List is empty. Start guessing!"
    return ", ".join(session.items)


def format_summary(session: GameSession) -> str:
    if session.strike_limit_reached:
        headline = "Out of strikes!"
    else:
        headline = "Game over."
    lines = [
        f"**{headline}**",
        f"Category: {session.category}",
        f"Final score: {session.score}",
        f"Strikes: {session.strikes}/{session.max_strikes}",
    ]
    if session.items:
        lines.append(f"Items: {', '.join(session.items)}")
    return "\n".join(lines)


def _handle_command(
    orchestrator: GameSessionOrchestrator,
    message: str,
    max_strikes: int,
) -> Optional[str]:
    parts = message.lstrip("/!\\").lower().split()
    cmd = parts[0] if parts else ""
    session = orchestrator.session

    if cmd in ("giveup", "give-up", "quit", "exit", "q"):
        orchestrator.give_up()
        return None
    if cmd in ("status", "s"):
        return format_status(session)
    if cmd in ("list", "l"):
        return format_items(session)
    if cmd in ("help", "?"):
        return HELP_TEXT.format(max_strikes=max_strikes)
    return f"Unknown command: {cmd}. Type /help for available commands."


async def play_session(
    app: GameCLIApp,
    session: GameSession,
    input_handler: Callable[[], str],
    output_handler: Callable[[str], None],
) -> CommandResult:
    try:
        orchestrator = app.create_orchestrator(session)
        output_handler(format_intro(session))

        while orchestrator.is_active:
            try:
                user_input = await asyncio.to_thread(input_handler)
            except (EOFError, KeyboardInterrupt):
                orchestrator.give_up()
                break

            if not user_input or not user_input.strip():
                continue

            if user_input.strip().startswith(COMMAND_PREFIXES):
                reply = _handle_command(orchestrator, user_input.strip(), session.max_strikes)
                if reply:
                    output_handler(reply)
                continue

            response = await orchestrator.submit_guess(user_input)
            message = format_guess_response(response)
            if message:
                output_handler(message)

            if response.game_over:
                await orchestrator.wait_until_ended()

        final = orchestrator.session
        output_handler(format_summary(final))

        return CommandResult(
            success=True,
            message="Game completed.",
            data=app.get_session_summary(final),
        )

    except Exception as e:
        return CommandResult(
            success=False,
            message="Error during gameplay.",
            error=str(e),
        )
