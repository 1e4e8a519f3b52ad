"""Model provider abstractions for LLM clients."""

from models.base import LLMClient
from models.langchain_client import (
    LangChainLLMClient,
    create_ollama_llm_client,
    create_openai_llm_client,
)
from models.registry import ModelProviderRegistry

__all__ = [
    "LLMClient",
    "LangChainLLMClient",
    "create_ollama_llm_client",
    "create_openai_llm_client",
    "ModelProviderRegistry",
]
