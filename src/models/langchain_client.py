"""LangChain chat models wrapped for JSON-answering game judges."""

from __future__ import annotations

import logging
import time
from typing import Any, AsyncIterator, Dict, List, Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_ollama import ChatOllama
from langchain_openai import ChatOpenAI

from .base import LLMClient

logger = logging.getLogger(__name__)

JSON_RESPONSE_FORMAT = {"type": "json_object"}


def build_messages(prompt: str, system: Optional[str] = None) -> List[BaseMessage]:
    messages: List[BaseMessage] = []
    if system:
        messages.append(SystemMessage(content=system))
    messages.append(HumanMessage(content=prompt))
    return messages


def content_text(content: Any) -> str:
    """Flatten a message payload into plain text.

    Some providers return a list of content blocks instead of a string; only
    the text blocks are kept.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(str(block.get("text", "")))
        return "".join(parts)
    return str(content)


class LangChainLLMClient(LLMClient):
    def __init__(self, chat_model: BaseChatModel, model_name: str = ""):
        self._chat_model = chat_model
        self._model_name = model_name

    @property
    def chat_model(self) -> BaseChatModel:
        return self._chat_model

    @property
    def model_name(self) -> str:
        return self._model_name

    async def agenerate(self, prompt: str, **params) -> str:
        started = time.perf_counter()
        response = await self._chat_model.ainvoke(build_messages(prompt, params.get("system")))
        logger.debug(
            "Model %s answered in %.2fs",
            self._model_name or "<unnamed>",
            time.perf_counter() - started,
        )
        return content_text(response.content)

    async def astream(self, prompt: str, **params) -> AsyncIterator[str]:
        async for chunk in self._chat_model.astream(build_messages(prompt, params.get("system"))):
            text = content_text(chunk.content)
            if text:
                yield text


def create_ollama_llm_client(
    base_url: str = "http://localhost:11434",
    model_name: str = "qwen2.5:7b",
    temperature: float = 0.2,
    max_tokens: int = 512,
    api_key: str = "",
    timeout: Optional[float] = None,
    **kwargs,
) -> LangChainLLMClient:
    client_kwargs: Dict[str, Any] = dict(kwargs.pop("client_kwargs", None) or {})
    if api_key:
        client_kwargs.setdefault("headers", {})["Authorization"] = f"Bearer {api_key}"
    if timeout is not None:
        client_kwargs.setdefault("timeout", timeout)
    if client_kwargs:
        kwargs["client_kwargs"] = client_kwargs

    chat_model = ChatOllama(
        base_url=base_url,
        model=model_name,
        temperature=temperature,
        num_predict=max_tokens,
        format="json",
        **kwargs,
    )
    return LangChainLLMClient(chat_model, model_name=model_name)


def create_openai_llm_client(
    base_url: str = "https://api.openai.com/v1",
    api_key: str = "",
    model_name: str = "gpt-4o-mini",
    temperature: float = 0.2,
    max_tokens: int = 512,
    timeout: float = 60.0,
    **kwargs,
) -> LangChainLLMClient:
    model_kwargs = dict(kwargs.pop("model_kwargs", None) or {})
    model_kwargs.setdefault("response_format", JSON_RESPONSE_FORMAT)

    chat_model = ChatOpenAI(
        base_url=base_url,
        api_key=api_key or None,
        model=model_name,
        temperature=temperature,
        max_tokens=max_tokens,
        timeout=timeout,
        model_kwargs=model_kwargs,
        **kwargs,
    )
    return LangChainLLMClient(chat_model, model_name=model_name)
