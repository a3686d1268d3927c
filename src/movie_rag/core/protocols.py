"""
Core protocols defining contracts for the entire system.

All collaborators of the pipeline implement these protocols,
enabling dependency injection and easy testing.

PATTERN:
- Protocol defines the contract
- Production implementation (Postgres, OpenAI)
- Test double (in-memory store, mock models)
- Factory function for instantiation

INTERVIEW TALKING POINT:
------------------------
"The pipeline never talks to Postgres or OpenAI directly. It talks to three
protocols: an embedding provider, a movie store and a generation provider.
Swapping pgvector for an in-memory store in tests is a constructor argument,
not a monkeypatch."
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from movie_rag.retrieval.document import Movie


# ---------------------------------------------------------------------------
# EMBEDDING PROVIDER PROTOCOL
# ---------------------------------------------------------------------------


@runtime_checkable
class EmbeddingProvider(Protocol):
    """
    Contract for embedding generation.

    Implementations:
    - OpenAIEmbeddings (production)
    - MockEmbeddings (testing)
    """

    @property
    def dimensions(self) -> int:
        """Length of every vector this provider returns."""
        ...

    async def embed(self, text: str) -> np.ndarray:
        """Generate embedding for a single text."""
        ...

    async def embed_batch(self, texts: list[str]) -> list[np.ndarray]:
        """Generate embeddings for multiple texts."""
        ...


# ---------------------------------------------------------------------------
# MOVIE STORE PROTOCOL
# ---------------------------------------------------------------------------


@dataclass
class Query:
    """The raw question text and its embedding. Never persisted."""
    text: str
    embedding: np.ndarray


@dataclass
class RankedResult:
    """A retrieved movie with its relevance score.

    Built fresh for every query and never cached.
    """
    movie: Movie
    score: float
    tier: str = ""


@runtime_checkable
class MovieStore(Protocol):
    """
    Contract for movie persistence and lookup.

    Implementations:
    - PgMovieStore (production with PostgreSQL + pgvector)
    - InMemoryMovieStore (testing/development)
    """

    async def connect(self) -> None:
        """Establish connection to the store."""
        ...

    async def close(self) -> None:
        """Close connection to the store."""
        ...

    async def create_schema(self) -> None:
        """Create the movies table if it does not exist."""
        ...

    async def upsert_movie(self, movie: Movie) -> Movie:
        """Insert or replace a movie."""
        ...

    async def query_ordered_by_vector_distance(
        self,
        vector: np.ndarray,
        limit: int = 5,
    ) -> list[RankedResult]:
        """
        Movies with an embedding, nearest to vector first.

        Raises VectorSearchUnsupportedError when the store has no native
        vector distance ordering. Zero rows is a valid, empty answer.
        """
        ...

    async def query_all(self, with_embedding: bool = False) -> list[Movie]:
        """All movies in store order, optionally only those with an embedding."""
        ...


# ---------------------------------------------------------------------------
# GENERATION PROVIDER PROTOCOL
# ---------------------------------------------------------------------------


@runtime_checkable
class GenerationProvider(Protocol):
    """
    Contract for text generation.

    Implementations:
    - OpenAIGeneration (production)
    - MockGeneration (testing)
    """

    async def complete(self, system_prompt: str, user_prompt: str) -> str | None:
        """Return the first response text, or None when there is none."""
        ...
