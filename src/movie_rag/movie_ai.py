"""
MovieAI - the public entry point: search movies and answer questions.

LIFECYCLE:
----------
MovieAI is either Uninitialized or Ready. The only transition is one call
to init(), which builds (or accepts) the three collaborators:

    ai = MovieAI()
    await ai.init(MovieAIConfig.from_env())
    await ai.answer("Which movies star Leonardo DiCaprio?")

Calling search() or answer() on an Uninitialized instance raises
NotInitializedError. There is no teardown state; collaborators live for the
process lifetime.

PIPELINE:
---------
question -> embedding -> tiered retrieval -> context text -> generated answer

INTERVIEW TALKING POINT:
------------------------
"Instead of three Optional fields and a null check in every method, the state
is a small sum type. Ready carries everything the pipeline needs, so once I
have a Ready there is nothing left that can be None."
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np
from openai import OpenAIError

from movie_rag.config import MovieAIConfig
from movie_rag.core import (
    EmbeddingProvider,
    GenerationProvider,
    InitializationError,
    MovieStore,
    NotInitializedError,
    RankedResult,
    StoreError,
)
from movie_rag.embeddings import get_embedding_provider
from movie_rag.generation import NO_ANSWER, AnswerGenerator, assemble_context, get_generation_provider
from movie_rag.observability import RETRIEVAL_RESULT_COUNT, get_tracer
from movie_rag.retrieval import (
    Movie,
    RetrievalEngine,
    cosine_similarity,
    get_movie_store,
    get_sample_movies,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# STATE
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Collaborators:
    """The three external handles the pipeline depends on."""

    store: MovieStore
    embeddings: EmbeddingProvider
    generation: GenerationProvider


@dataclass(frozen=True)
class Uninitialized:
    """init() has not been called yet."""


@dataclass(frozen=True)
class Ready:
    """Collaborators acquired; the pipeline can run."""

    collaborators: Collaborators
    engine: RetrievalEngine
    generator: AnswerGenerator
    search_limit: int


MovieAIState = Union[Uninitialized, Ready]


async def create_collaborators(config: MovieAIConfig) -> Collaborators:
    """
    Build and connect the collaborators described by config.

    The in-memory store starts with the sample catalogue so the CLI works
    without a database.

    Raises:
        InitializationError: configuration incomplete or a client failed to start
    """
    config.validate()

    try:
        store = get_movie_store(
            use_postgres=config.use_postgres,
            config=config.store,
            movies=None if config.use_postgres else get_sample_movies(),
        )
        await store.connect()
        embeddings = get_embedding_provider(
            use_mock=config.use_mock_models,
            config=config.embedding,
            dimensions=config.store.embedding_dim,
        )
        generation = get_generation_provider(use_mock=config.use_mock_models, config=config.llm)
    except (StoreError, OpenAIError) as e:
        raise InitializationError(f"Could not create clients: {e}") from e

    logger.info(
        f"Clients created: store={type(store).__name__}, "
        f"llm={config.llm.deployment_name}, embedding={config.embedding.deployment_name}"
    )
    return Collaborators(store=store, embeddings=embeddings, generation=generation)


# ---------------------------------------------------------------------------
# ORCHESTRATOR
# ---------------------------------------------------------------------------


class MovieAI:
    """Retrieval-augmented question answering over the movie collection."""

    def __init__(self) -> None:
        self._state: MovieAIState = Uninitialized()

    @property
    def state(self) -> MovieAIState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return isinstance(self._state, Ready)

    @property
    def collaborators(self) -> Collaborators:
        return self._ready().collaborators

    async def init(
        self,
        config: MovieAIConfig | None = None,
        collaborators: Collaborators | None = None,
    ) -> None:
        """
        One-time transition from Uninitialized to Ready.

        Args:
            config: Settings; defaults to MovieAIConfig() when omitted
            collaborators: Ready-made handles (skips client construction)

        Raises:
            InitializationError: already initialized, or collaborators unavailable
        """
        if isinstance(self._state, Ready):
            raise InitializationError("MovieAI is already initialized")

        config = config or MovieAIConfig()
        if collaborators is None:
            collaborators = await create_collaborators(config)

        self._state = Ready(
            collaborators=collaborators,
            engine=RetrievalEngine(
                collaborators.store,
                collaborators.embeddings,
                keyword_weights=config.keyword_weights,
                timeouts=config.timeouts,
            ),
            generator=AnswerGenerator(collaborators.generation, timeouts=config.timeouts),
            search_limit=config.search_limit,
        )

    def _ready(self) -> Ready:
        if not isinstance(self._state, Ready):
            raise NotInitializedError()
        return self._state

    async def search_ranked(self, query: str) -> list[RankedResult]:
        """Ranked movies with scores and the tier that found them."""
        ready = self._ready()
        with get_tracer().start_span("movie_ai.search") as span:
            results = await ready.engine.retrieve_ranked(query, ready.search_limit)
            span.set_attribute(RETRIEVAL_RESULT_COUNT, len(results))
        return results

    async def search(self, query: str) -> list[Movie]:
        """Movies relevant to the query, most relevant first."""
        return [r.movie for r in await self.search_ranked(query)]

    async def answer(self, question: str) -> str:
        """
        Answer a question from the movie collection.

        Returns NO_ANSWER without calling the model when nothing relevant
        was found.

        Raises:
            NotInitializedError: init() was not called
            EmbeddingError: the question could not be embedded
            RetrievalUnavailableError: the movie store is unreachable
            Exception: whatever the generation provider raised
        """
        ready = self._ready()
        with get_tracer().start_span("movie_ai.answer") as span:
            movies = await self.search(question)
            span.set_attribute(RETRIEVAL_RESULT_COUNT, len(movies))
            if not movies:
                logger.info("No relevant movies found, returning fallback answer")
                return NO_ANSWER

            context = assemble_context(movies)
            return await ready.generator.generate(question, context)

    @staticmethod
    def cosine_similarity(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
        return cosine_similarity(a, b)
