"""OpenAI client construction shared by the embedding and generation providers."""

from __future__ import annotations

from openai import AsyncAzureOpenAI, AsyncOpenAI

from movie_rag.config import OpenAIModelConfig


def create_openai_client(config: OpenAIModelConfig) -> AsyncOpenAI:
    """Azure client when an endpoint is configured, public OpenAI otherwise."""
    if config.is_azure:
        return AsyncAzureOpenAI(
            api_key=config.api_key,
            azure_endpoint=config.endpoint,
            api_version=config.api_version,
        )
    return AsyncOpenAI(api_key=config.api_key or None)
