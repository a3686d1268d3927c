"""
Answer generation - ground a model response in the retrieved movies.

Dependencies are injectable for testing:
- The generation provider can be mocked
- Prompt construction is a pure function

INTERVIEW TALKING POINT:
------------------------
"The generator separates prompt construction from model invocation.
build_user_prompt() is a pure function I can test without API calls, and the
provider is a one-method protocol, so tests inject a canned answer. Errors
from the model propagate to the caller, which decides what the user sees."
"""

from __future__ import annotations

import asyncio
import logging

from openai import AsyncOpenAI

from movie_rag.clients import create_openai_client
from movie_rag.config import OpenAIModelConfig
from movie_rag.core import GenerationProvider, Timeouts
from movie_rag.observability import (
    GEN_AI_COMPLETION,
    GEN_AI_PROMPT,
    generation_attributes,
    get_config,
    get_tracer,
)

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a helpful assistant that answers questions about movies. "
    "Use only the provided movie data to answer questions accurately and concisely."
)

NO_ANSWER = "Sorry, I could not generate an answer."


def build_user_prompt(question: str, context: str) -> str:
    """
    Build the user message from the question and the movie context.

    PURE FUNCTION - no I/O.
    """
    return f"""Based on the following movie data, please answer this question: {question}

Movie Data:
{context}"""


# ---------------------------------------------------------------------------
# PROVIDERS
# ---------------------------------------------------------------------------


class OpenAIGeneration:
    """Chat completion provider backed by OpenAI or Azure OpenAI."""

    def __init__(
        self,
        config: OpenAIModelConfig | None = None,
        client: AsyncOpenAI | None = None,
    ):
        self.config = config or OpenAIModelConfig(deployment_name="gpt-4o")
        self._client = client or create_openai_client(self.config)

    @property
    def model(self) -> str:
        return self.config.deployment_name

    @property
    def system(self) -> str:
        return "azure_openai" if self.config.is_azure else "openai"

    async def complete(self, system_prompt: str, user_prompt: str) -> str | None:
        """Return the first choice's content, or None when there is none."""
        completion = await self._client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        if not completion.choices:
            return None
        return completion.choices[0].message.content


class MockGeneration:
    """
    Mock generation provider for testing without API calls.

    Returns a fixed response and remembers the prompts it was given.
    """

    model = "mock"
    system = "mock"

    def __init__(self, response: str | None = "This is a test response about movies."):
        self.response = response
        self.calls: list[tuple[str, str]] = []

    async def complete(self, system_prompt: str, user_prompt: str) -> str | None:
        self.calls.append((system_prompt, user_prompt))
        return self.response


def get_generation_provider(
    use_mock: bool = False,
    config: OpenAIModelConfig | None = None,
) -> GenerationProvider:
    """
    Factory function to get the appropriate generation provider.

    Args:
        use_mock: If True, return MockGeneration (for testing)
        config: Deployment settings for the real provider
    """
    if use_mock:
        return MockGeneration()
    return OpenAIGeneration(config)


# ---------------------------------------------------------------------------
# ANSWER GENERATOR
# ---------------------------------------------------------------------------


class AnswerGenerator:
    """Send question + context to the provider and return its answer."""

    def __init__(self, provider: GenerationProvider, timeouts: Timeouts | None = None):
        self._provider = provider
        self.timeouts = timeouts or Timeouts()

    async def generate(self, question: str, context: str) -> str:
        """
        Generate a grounded answer.

        Returns NO_ANSWER when the model gives back no usable text.
        Provider errors and timeouts propagate unchanged.
        """
        user_prompt = build_user_prompt(question, context)
        tracer = get_tracer()
        capture = get_config().capture_llm_content

        attributes = generation_attributes(
            getattr(self._provider, "system", "unknown"),
            getattr(self._provider, "model", "unknown"),
        )
        if capture:
            attributes[GEN_AI_PROMPT] = user_prompt

        with tracer.start_span("generation.complete", attributes=attributes) as span:
            content = await asyncio.wait_for(
                self._provider.complete(SYSTEM_PROMPT, user_prompt),
                timeout=self.timeouts.generation_seconds,
            )
            if capture and content:
                span.set_attribute(GEN_AI_COMPLETION, content)

        if not content or not content.strip():
            logger.warning("Generation returned no content, using fallback answer")
            return NO_ANSWER
        return content
