"""CLI output formatters for the guessing game.

This module provides consistent formatting for CLI output,
supporting both plain text and JSON output modes.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Protocol

from guesser.cli.commands import CommandResult


class OutputFormatter(Protocol):
    def format_result(self, result: CommandResult) -> str:
        ...

    def format_categories(self, categories: List[str]) -> str:
        ...

    def format_history(self, sessions: List[Dict[str, Any]]) -> str:
        ...

    def format_session(self, session: Dict[str, Any]) -> str:
        ...

    def format_error(self, message: str, error: Optional[str] = None) -> str:
        ...


class TextFormatter:
    def format_result(self, result: CommandResult) -> str:
        if not result.success:
            return self.format_error(result.message, result.error)
        return result.message

    def format_categories(self, categories: List[str]) -> str:
        if not categories:
            return "No categories found."

        lines = [f"\n{'='*50}", "Popular Categories", f"{'='*50}\n"]
        for i, category in enumerate(categories, 1):
            lines.append(f"{i}. {category}")
        return "\n".join(lines)

    def format_history(self, sessions: List[Dict[str, Any]]) -> str:
        if not sessions:
            return "No games played yet."

        lines = [f"\n{'='*50}", "Recent Games", f"{'='*50}\n"]

        for s in sessions:
            lines.append(f"Session: {s['session_id']}")
            lines.append(f"  Category: {s['category']} ({s['language']})")
            lines.append(f"  Score: {s['score']} items")
            lines.append(f"  Strikes: {s['strikes']}/{s['max_strikes']}")
            lines.append(f"  Played: {s['started_at'][:10]}")
            lines.append("")

        return "\n".join(lines)

    def format_session(self, session: Dict[str, Any]) -> str:
        lines = [
            f"\n{'='*50}",
            f"{session['category']}",
            f"{'='*50}\n",
            f"Session ID: {session['session_id']}",
            f"Language: {session['language']}",
            f"Played on: {session['started_at'][:10]}",
            f"Score: {session['score']} items found",
            f"Strikes: {session['strikes']}/{session['max_strikes']}",
        ]

        if session.get("end_reason"):
            lines.append(f"Ended by: {session['end_reason']}")

        items = session.get("items") or []
        lines.append("Items Found:")
        if items:
            lines.extend(f"  - {item}" for item in items)
        else:
            lines.append("  (none)")

        return "\n".join(lines)

    def format_error(self, message: str, error: Optional[str] = None) -> str:
        lines = [f"\nError: {message}"]
        if error:
            lines.append(f"Details: {error}")
        return "\n".join(lines)


class JsonFormatter:
    def format_result(self, result: CommandResult) -> str:
        return json.dumps({
            "success": result.success,
            "message": result.message,
            "data": result.data,
            "error": result.error,
        }, indent=2, default=str, ensure_ascii=False)

    def format_categories(self, categories: List[str]) -> str:
        return json.dumps({"categories": categories}, indent=2, ensure_ascii=False)

    def format_history(self, sessions: List[Dict[str, Any]]) -> str:
        return json.dumps({"sessions": sessions}, indent=2, default=str, ensure_ascii=False)

    def format_session(self, session: Dict[str, Any]) -> str:
        return json.dumps({"session": session}, indent=2, default=str, ensure_ascii=False)

    def format_error(self, message: str, error: Optional[str] = None) -> str:
        return json.dumps({
            "success": False,
            "message": message,
            "error": error,
        }, indent=2)


def get_formatter(json_mode: bool = False) -> OutputFormatter:
    return JsonFormatter() if json_mode else TextFormatter()
