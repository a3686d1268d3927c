"""
Retrieval tiers - the strategies the engine falls back through.

Each tier answers one question: "given this query, which movies are most
relevant?" and signals that it could not answer by raising StoreError
(VectorSearchUnsupportedError included). Returning [] is a valid answer,
not a failure.

    1. NativeVectorTier      - the store orders by vector distance
    2. ApplicationVectorTier - cosine similarity computed in process
    3. KeywordTier           - weighted substring matching, no embeddings

INTERVIEW TALKING POINT:
------------------------
"Fallback used to be nested try/catch. Now each tier is a small object with
one async method, and the engine walks a list of them. I can unit test
'keyword scoring' without a vector index and 'tier 2 only runs after tier 1
breaks' without a keyword matcher."
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Protocol

from movie_rag.core import Query, RankedResult
from movie_rag.retrieval.similarity import cosine_similarity

if TYPE_CHECKING:
    from movie_rag.core import MovieStore
    from movie_rag.retrieval.document import Movie


# ---------------------------------------------------------------------------
# TIER PROTOCOL
# ---------------------------------------------------------------------------


class RetrievalTier(Protocol):
    """A single retrieval strategy."""

    name: str
    # Only run when the previous tier raised, not when it returned nothing
    only_after_failure: bool

    async def attempt(self, query: Query, limit: int) -> list[RankedResult]:
        """Return ranked results, most relevant first."""
        ...


# ---------------------------------------------------------------------------
# TIER 1: NATIVE VECTOR SEARCH
# ---------------------------------------------------------------------------


class NativeVectorTier:
    """Delegate ordering to the store's vector distance function."""

    name: ClassVar[str] = "native_vector"
    only_after_failure: ClassVar[bool] = False

    def __init__(self, store: MovieStore):
        self._store = store

    async def attempt(self, query: Query, limit: int) -> list[RankedResult]:
        results = await self._store.query_ordered_by_vector_distance(query.embedding, limit)
        for result in results:
            result.tier = self.name
        return results[:limit]


# ---------------------------------------------------------------------------
# TIER 2: APPLICATION-LEVEL VECTOR SIMILARITY
# ---------------------------------------------------------------------------


class ApplicationVectorTier:
    """Fetch embedded movies and rank them by cosine similarity in process."""

    name: ClassVar[str] = "application_vector"
    only_after_failure: ClassVar[bool] = True

    def __init__(self, store: MovieStore):
        self._store = store

    async def attempt(self, query: Query, limit: int) -> list[RankedResult]:
        movies = await self._store.query_all(with_embedding=True)
        dim = len(query.embedding)

        scored = [
            RankedResult(
                movie=movie,
                score=cosine_similarity(query.embedding, movie.embedding),
                tier=self.name,
            )
            for movie in movies
            # Movies from a different embedding model never match
            if movie.has_embedding and len(movie.embedding) == dim
        ]
        scored.sort(key=lambda r: r.score, reverse=True)
        return scored[:limit]


# ---------------------------------------------------------------------------
# TIER 3: KEYWORD FALLBACK
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KeywordWeights:
    """Points awarded per field when the query appears in it.

    Tuning constants, not a contract. Override with KEYWORD_WEIGHT_* env vars.
    """

    title: float = 10.0
    actors: float = 7.0
    description: float = 5.0
    genre: float = 3.0
    review: float = 2.0

    @classmethod
    def from_env(cls) -> "KeywordWeights":
        """Load weights from environment variables."""
        defaults = cls()
        return cls(
            title=float(os.environ.get("KEYWORD_WEIGHT_TITLE", defaults.title)),
            actors=float(os.environ.get("KEYWORD_WEIGHT_ACTORS", defaults.actors)),
            description=float(os.environ.get("KEYWORD_WEIGHT_DESCRIPTION", defaults.description)),
            genre=float(os.environ.get("KEYWORD_WEIGHT_GENRE", defaults.genre)),
            review=float(os.environ.get("KEYWORD_WEIGHT_REVIEW", defaults.review)),
        )


def keyword_score(movie: Movie, query: str, weights: KeywordWeights = KeywordWeights()) -> float:
    """
    Score a movie by case-insensitive substring matches of the whole query.

    An empty or whitespace-only query matches nothing.
    """
    needle = query.strip().lower()
    if not needle:
        return 0.0

    score = 0.0
    if needle in movie.title.lower():
        score += weights.title
    if needle in movie.description.lower():
        score += weights.description
    if needle in movie.genre.lower():
        score += weights.genre
    if any(needle in actor.lower() for actor in movie.actors):
        score += weights.actors
    if any(needle in r.review.lower() for r in movie.reviews):
        score += weights.review
    return score


class KeywordTier:
    """Last resort: scan everything and score by keyword matches."""

    name: ClassVar[str] = "keyword"
    only_after_failure: ClassVar[bool] = False

    def __init__(self, store: MovieStore, weights: KeywordWeights | None = None):
        self._store = store
        self.weights = weights or KeywordWeights()

    async def attempt(self, query: Query, limit: int) -> list[RankedResult]:
        movies = await self._store.query_all()

        scored = [
            RankedResult(movie=movie, score=keyword_score(movie, query.text, self.weights), tier=self.name)
            for movie in movies
        ]
        # sort() is stable, so equal scores keep store order
        scored.sort(key=lambda r: r.score, reverse=True)
        return [r for r in scored if r.score > 0][:limit]


def default_tiers(
    store: MovieStore,
    weights: KeywordWeights | None = None,
) -> list[RetrievalTier]:
    """The standard fallback chain, most sophisticated first."""
    return [
        NativeVectorTier(store),
        ApplicationVectorTier(store),
        KeywordTier(store, weights),
    ]
