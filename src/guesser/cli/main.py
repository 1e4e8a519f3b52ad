"""Main entry point for the guessing game CLI.

Usage:
    python -m guesser.cli.main suggest [--language <code>]
    python -m guesser.cli.main play --category <name> [--language <code>]
    python -m guesser.cli.main history [--limit <n>]
    python -m guesser.cli.main show --session <id>
    python -m guesser.cli.main retry --session <id>
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from config import ConfigError
from guesser.cli.app import GameCLIApp
from guesser.cli.commands import (
    list_history,
    play_session,
    retry_session,
    show_session,
    start_session,
    suggest_categories,
)
from guesser.cli.formatters import JsonFormatter, TextFormatter, get_formatter


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="infinite-guesser",
        description="Infinite Guesser - Name as many members of a category as you can",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results in JSON format",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    suggest_parser = subparsers.add_parser(
        "suggest",
        help="Suggest categories to play",
    )
    suggest_parser.add_argument(
        "--language", "-l",
        help="Language code for the suggestions (default: configured language)",
    )

    play_parser = subparsers.add_parser(
        "play",
        help="Play an interactive game",
    )
    play_parser.add_argument(
        "--category", "-c",
        required=True,
        help="Category to name members of",
    )
    play_parser.add_argument(
        "--language", "-l",
        help="Language code for the game (default: configured language)",
    )

    history_parser = subparsers.add_parser(
        "history",
        help="List recent games",
    )
    history_parser.add_argument(
        "--limit", "-n",
        type=int,
        default=None,
        help="Maximum number of games to show",
    )

    show_parser = subparsers.add_parser(
        "show",
        help="Show the details of a past game",
    )
    show_parser.add_argument(
        "--session", "-s",
        required=True,
        help="Session ID to show",
    )

    retry_parser = subparsers.add_parser(
        "retry",
        help="Play again with the category of a past game",
    )
    retry_parser.add_argument(
        "--session", "-s",
        required=True,
        help="Session ID whose category to replay",
    )

    return parser


class InteractiveCLI:
    def __init__(self, app: GameCLIApp, formatter: TextFormatter | JsonFormatter):
        self._app = app
        self._formatter = formatter

    def get_input(self) -> str:
        return input("\nYou: ").strip()

    def show_output(self, message: str) -> None:
        print(f"\n{message}")

    async def run_suggest(self, language: str | None = None) -> int:
        result = await suggest_categories(self._app, language)
        if result.success and result.data:
            print(self._formatter.format_categories(result.data.get("categories", [])))
        else:
            print(self._formatter.format_error(result.message, result.error))
        return 0 if result.success else 1

    async def run_play(self, category: str, language: str | None = None) -> int:
        session_result = start_session(self._app, category, language)
        if not session_result.success:
            print(self._formatter.format_error(session_result.message, session_result.error))
            return 1
        return await self._play(session_result.data["session_id"])

    async def run_retry(self, session_id: str) -> int:
        session_result = retry_session(self._app, session_id)
        if not session_result.success:
            print(self._formatter.format_error(session_result.message, session_result.error))
            return 1
        return await self._play(session_result.data["session_id"])

    async def _play(self, session_id: str) -> int:
        session = self._app.get_session(session_id)
        result = await play_session(
            self._app,
            session,
            self.get_input,
            self.show_output,
        )
        if not result.success:
            print(self._formatter.format_error(result.message, result.error))
        elif isinstance(self._formatter, JsonFormatter):
            print(self._formatter.format_result(result))
        else:
            self.show_output("Thanks for playing!")
        return 0 if result.success else 1

    async def run_history(self, limit: int | None = None) -> int:
        result = list_history(self._app, limit)
        if result.success and result.data:
            print(self._formatter.format_history(result.data.get("sessions", [])))
        else:
            print(self._formatter.format_error(result.message, result.error))
        return 0 if result.success else 1

    async def run_show(self, session_id: str) -> int:
        result = show_session(self._app, session_id)
        if result.success and result.data:
            print(self._formatter.format_session(result.data))
        else:
            print(self._formatter.format_error(result.message, result.error))
        return 0 if result.success else 1


async def async_main(args: argparse.Namespace) -> int:
    formatter = get_formatter(args.json)
    try:
        app = GameCLIApp()
    except ConfigError as e:
        print(formatter.format_error("Invalid configuration.", str(e)))
        return 2
    cli = InteractiveCLI(app, formatter)

    try:
        if args.command == "suggest":
            return await cli.run_suggest(args.language)

        elif args.command == "play":
            return await cli.run_play(args.category, args.language)

        elif args.command == "history":
            return await cli.run_history(args.limit)

        elif args.command == "show":
            return await cli.run_show(args.session)

        elif args.command == "retry":
            return await cli.run_retry(args.session)

        else:
            return 1

    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130
    finally:
        await app.close()


def main() -> int:
    parser = create_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(args.verbose)
    return asyncio.run(async_main(args))


if __name__ == "__main__":
    sys.exit(main())
