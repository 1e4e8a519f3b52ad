"""Base interface for LLM providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AsyncIterator


class LLMClient(ABC):
    @abstractmethod
    async def agenerate(self, prompt: str, **params) -> str:
        ...

    @abstractmethod
    async def astream(self, prompt: str, **params) -> AsyncIterator[str]:
        ...
