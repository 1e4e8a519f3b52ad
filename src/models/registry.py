"""Resolves the configured provider into the judge's LLM client."""

from __future__ import annotations

import logging
from typing import Optional

from config import ConfigLoader, ModelsConfig
from models.base import LLMClient
from models.langchain_client import (
    create_ollama_llm_client,
    create_openai_llm_client,
)

logger = logging.getLogger(__name__)


class ModelProviderRegistry:
    def __init__(self, config: Optional[ModelsConfig] = None):
        self._config = config or ConfigLoader().load_models_config()
        self._llm_client: Optional[LLMClient] = None

    @property
    def provider(self) -> str:
        return self._config.provider

    @property
    def model_name(self) -> str:
        return self._config.get_active_config().llm_model_name

    def _build_client(self) -> LLMClient:
        settings = self._config.get_active_config()
        factory = (
            create_ollama_llm_client
            if self._config.provider == "ollama"
            else create_openai_llm_client
        )
        return factory(
            base_url=settings.base_url,
            api_key=settings.api_key,
            model_name=settings.llm_model_name,
            temperature=settings.default_temperature,
            max_tokens=settings.max_tokens,
            timeout=settings.timeout,
        )

    def get_llm_client(self) -> LLMClient:
        if self._llm_client is None:
            self._llm_client = self._build_client()
            logger.info(
                "Initialized LLM client: provider=%s, model=%s",
                self.provider,
                self.model_name,
            )
        return self._llm_client
