"""Semantic judge backed by an LLM.

The judge decides whether a guess is a real, specific member of a category
and suggests example categories. It never raises to its callers: every
failure of the underlying model call is converted into a default-reject
verdict (or the fallback category list).
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field, ValidationError

from config import JudgeConfig
from guesser.domain.entities import TOO_VAGUE_REASON, GuessVerdict
from guesser.normalizer import normalize
from models.base import LLMClient

logger = logging.getLogger(__name__)

LANGUAGE_NAMES = {
    "en": "English",
    "sv": "Swedish",
    "de": "German",
    "fr": "French",
    "es": "Spanish",
}

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)

SYSTEM_PROMPT = (
    "You are the referee of a category guessing game. "
    "Answer with a single JSON object and nothing else."
)


class JudgeReply(BaseModel):
    is_member: bool
    is_specific: bool
    canonical_form: str = ""
    reason: Optional[str] = None


class SuggestionReply(BaseModel):
    categories: List[str] = Field(default_factory=list)


class JudgeResponseError(ValueError):
    pass


def language_name(code: Optional[str]) -> Optional[str]:
    if not code:
        return None
    return LANGUAGE_NAMES.get(code.lower(), code)


def extract_json(text: str) -> str:
    """Return the first JSON object found in a model response."""
    match = _JSON_OBJECT.search(text or "")
    if match is None:
        raise JudgeResponseError(f"No JSON object in response: {text[:100]!r}")
    return match.group(0)


class SemanticJudge:
    def __init__(self, llm_client: LLMClient, config: Optional[JudgeConfig] = None):
        self._llm_client = llm_client
        self._config = config or JudgeConfig()

    @property
    def config(self) -> JudgeConfig:
        return self._config

    async def judge_guess(
        self,
        category: str,
        guess: str,
        locale_hint: Optional[str] = None,
    ) -> GuessVerdict:
        prompt = self._build_guess_prompt(category, guess, locale_hint)

        try:
            response = await asyncio.wait_for(
                self._llm_client.agenerate(prompt, system=SYSTEM_PROMPT),
                timeout=self._config.timeout_seconds,
            )
            verdict = self._parse_guess_response(response, guess)
        except asyncio.TimeoutError:
            logger.warning(
                "Judge timed out after %.1fs for guess %r in %r",
                self._config.timeout_seconds,
                guess,
                category,
            )
            return GuessVerdict.could_not_verify(guess)
        except Exception as e:
            logger.error("Judge evaluation failed for guess %r in %r: %s", guess, category, e)
            return GuessVerdict.could_not_verify(guess)

        logger.debug(
            "Judged %r in %r: member=%s specific=%s canonical=%r",
            guess,
            category,
            verdict.is_member,
            verdict.is_specific,
            verdict.canonical_form,
        )
        return verdict

    def _build_guess_prompt(
        self,
        category: str,
        guess: str,
        locale_hint: Optional[str],
    ) -> str:
        language = language_name(locale_hint)
        language_rule = "Respond in the same language as the User Guess."
        if language:
            language_rule += f" The player is most likely writing in {language}."

        return f"""Game: Infinite Guesser.
Category: "{category}".
User Guess: "{guess}".

Task: Determine if the User Guess is a valid member of the Category.

Rules:
1. It must be factually correct: a genuine, real member of the Category.
2. It must be specific enough. A super-category or an overly generic instance is
   not specific (e.g. if the Category is "Car Brands", "Car" and "Blue Car" are
   not specific, "Ford" is valid).
3. {language_rule}
4. Return "canonical_form" formatted nicely (Title Case, or the equivalent
   convention of the language) in the same language as the User Guess.
5. If invalid, provide a short, fun "reason" in the same language as the User Guess.

RESPONSE FORMAT (JSON only, no other text):
{{"is_member": true|false, "is_specific": true|false, "canonical_form": "...", "reason": "..."}}"""

    def _parse_guess_response(self, response: str, guess: str) -> GuessVerdict:
        try:
            reply = JudgeReply.model_validate_json(extract_json(response))
        except ValidationError as e:
            raise JudgeResponseError(f"Malformed judge response: {e}") from e

        canonical_form = reply.canonical_form.strip() or guess
        reason = reply.reason.strip() if reply.reason else None

        if reply.is_member and not reply.is_specific:
            reason = TOO_VAGUE_REASON

        return GuessVerdict(
            is_member=reply.is_member,
            is_specific=reply.is_specific,
            canonical_form=canonical_form,
            rejection_reason=None if reply.is_member and reply.is_specific else reason,
        )

    async def suggest_categories(
        self,
        locale_hints: Optional[Sequence[str]] = None,
    ) -> List[str]:
        prompt = self._build_suggestion_prompt(locale_hints or [])

        try:
            response = await asyncio.wait_for(
                self._llm_client.agenerate(prompt, system=SYSTEM_PROMPT),
                timeout=self._config.timeout_seconds,
            )
            categories = self._parse_suggestion_response(response)
        except asyncio.TimeoutError:
            logger.warning("Category suggestions timed out, using fallback list")
            return list(self._config.fallback_categories)
        except Exception as e:
            logger.error("Category suggestions failed: %s", e)
            return list(self._config.fallback_categories)

        if not categories:
            logger.warning("Category suggestions were empty, using fallback list")
            return list(self._config.fallback_categories)

        return categories

    def _build_suggestion_prompt(self, locale_hints: Sequence[str]) -> str:
        languages = [name for name in (language_name(h) for h in locale_hints) if name]
        language = languages[0] if languages else "English"
        count = self._config.suggestion_count

        return f"""Generate {count} fun, diverse, and popular categories for a guessing game in {language}.
Each category should have many well-known members that players can name.

RESPONSE FORMAT (JSON only, no other text):
{{"categories": ["...", "..."]}}"""

    def _parse_suggestion_response(self, response: str) -> List[str]:
        try:
            reply = SuggestionReply.model_validate_json(extract_json(response))
        except ValidationError as e:
            raise JudgeResponseError(f"Malformed suggestion response: {e}") from e

        limit = self._config.suggestion_count + 2
        seen = set()
        categories = []
        for category in reply.categories:
            category = category.strip()
            key = normalize(category)
            if not category or key in seen:
                continue
            seen.add(key)
            categories.append(category)

        return categories[:limit]
