"""
Unit Tests for Context Assembly and Answer Generation

Prompt construction is pure and tested directly. The generator is tested
with MockGeneration and AsyncMock clients, so no API calls are made.
"""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from movie_rag.config import OpenAIModelConfig
from movie_rag.core import GenerationProvider, Timeouts
from movie_rag.generation import (
    NO_ANSWER,
    SYSTEM_PROMPT,
    AnswerGenerator,
    MockGeneration,
    OpenAIGeneration,
    assemble_context,
    build_user_prompt,
    format_movie,
    get_generation_provider,
)
from movie_rag.retrieval.document import Movie, Review


# ---------------------------------------------------------------------------
# FIXTURES
# ---------------------------------------------------------------------------


@pytest.fixture
def star_wars():
    return Movie(
        id="1",
        title="Star Wars",
        description="A space adventure.",
        genre="Sci-Fi",
        year=1977,
        actors=["Mark Hamill", "Harrison Ford"],
        reviews=[
            Review(reviewer="Critic", rating=5, review="Classic!"),
            Review(reviewer="Fan", rating=4, review="Great."),
        ],
    )


def completion(*contents):
    """Shape of an OpenAI chat completion with the given choice contents."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=c)) for c in contents]
    )


# ---------------------------------------------------------------------------
# CONTEXT ASSEMBLY
# ---------------------------------------------------------------------------


class TestContextAssembly:
    """Test format_movie and assemble_context."""

    def test_format_movie(self, star_wars):
        assert format_movie(star_wars) == (
            "Title: Star Wars (1977)\n"
            "Genre: Sci-Fi\n"
            "Actors: Mark Hamill, Harrison Ford\n"
            "Description: A space adventure.\n"
            "Reviews: Critic: Classic!; Fan: Great."
        )

    def test_movie_without_actors_or_reviews_keeps_labels(self):
        text = format_movie(Movie(id="6", title="Titanic", year=1997))

        assert "Actors: \n" in text
        assert text.endswith("Reviews: ")

    def test_blocks_separated_by_blank_line_in_order(self, star_wars):
        matrix = Movie(id="2", title="The Matrix", year=1999)

        context = assemble_context([star_wars, matrix])

        first, second = context.split("\n\n")
        assert first.startswith("Title: Star Wars")
        assert second.startswith("Title: The Matrix")

    def test_empty_input(self):
        assert assemble_context([]) == ""


# ---------------------------------------------------------------------------
# PROMPTS
# ---------------------------------------------------------------------------


class TestPrompts:
    """Test the fixed prompt text."""

    def test_user_prompt_embeds_question_and_context(self):
        prompt = build_user_prompt("Who directed it?", "Title: X (2000)")

        assert prompt == (
            "Based on the following movie data, please answer this question: Who directed it?\n\n"
            "Movie Data:\nTitle: X (2000)"
        )

    def test_system_prompt_restricts_to_movie_data(self):
        assert "Use only the provided movie data" in SYSTEM_PROMPT


# ---------------------------------------------------------------------------
# PROVIDERS
# ---------------------------------------------------------------------------


class TestOpenAIGeneration:
    """Test the OpenAI-backed provider with a mocked client."""

    @pytest.fixture
    def client(self):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value=completion("Mark Hamill."))
        return client

    @pytest.mark.asyncio
    async def test_sends_system_and_user_messages(self, client):
        provider = OpenAIGeneration(OpenAIModelConfig(deployment_name="gpt-4o", api_key="k"), client=client)

        result = await provider.complete("sys", "user")

        assert result == "Mark Hamill."
        kwargs = client.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["messages"] == [
            {"role": "system", "content": "sys"},
            {"role": "user", "content": "user"},
        ]

    @pytest.mark.asyncio
    async def test_first_choice_wins(self, client):
        client.chat.completions.create.return_value = completion("first", "second")
        provider = OpenAIGeneration(client=client)

        assert await provider.complete("sys", "user") == "first"

    @pytest.mark.asyncio
    async def test_no_choices_returns_none(self, client):
        client.chat.completions.create.return_value = completion()
        provider = OpenAIGeneration(client=client)

        assert await provider.complete("sys", "user") is None

    def test_system_label(self, client):
        azure = OpenAIModelConfig(deployment_name="gpt-4o", api_key="k", endpoint="https://x.openai.azure.com")

        assert OpenAIGeneration(azure, client=client).system == "azure_openai"
        assert OpenAIGeneration(client=client).system == "openai"


class TestGenerationFactory:
    """Test get_generation_provider."""

    def test_mock(self):
        provider = get_generation_provider(use_mock=True)
        assert isinstance(provider, MockGeneration)
        assert isinstance(provider, GenerationProvider)

    def test_real(self):
        provider = get_generation_provider(config=OpenAIModelConfig(deployment_name="gpt-4o", api_key="k"))
        assert isinstance(provider, OpenAIGeneration)


# ---------------------------------------------------------------------------
# ANSWER GENERATOR
# ---------------------------------------------------------------------------


class TestAnswerGenerator:
    """Test AnswerGenerator.generate."""

    @pytest.mark.asyncio
    async def test_returns_model_text(self):
        provider = MockGeneration(response="Star Wars is a space adventure.")
        generator = AnswerGenerator(provider)

        answer = await generator.generate("What is Star Wars?", "Title: Star Wars (1977)")

        assert answer == "Star Wars is a space adventure."
        system_prompt, user_prompt = provider.calls[0]
        assert system_prompt == SYSTEM_PROMPT
        assert user_prompt == build_user_prompt("What is Star Wars?", "Title: Star Wars (1977)")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [None, "", "   "])
    async def test_no_content_gives_fallback(self, response):
        generator = AnswerGenerator(MockGeneration(response=response))

        assert await generator.generate("q", "ctx") == NO_ANSWER

    @pytest.mark.asyncio
    async def test_provider_error_propagates(self):
        provider = MagicMock()
        provider.complete = AsyncMock(side_effect=RuntimeError("rate limited"))
        generator = AnswerGenerator(provider)

        with pytest.raises(RuntimeError, match="rate limited"):
            await generator.generate("q", "ctx")

    @pytest.mark.asyncio
    async def test_timeout_propagates(self):
        async def stall(system_prompt, user_prompt):
            await asyncio.sleep(5)

        provider = MagicMock()
        provider.complete = stall
        generator = AnswerGenerator(provider, timeouts=Timeouts(generation_seconds=0.05))

        with pytest.raises(asyncio.TimeoutError):
            await generator.generate("q", "ctx")
