"""
Retrieval engine - embed the question, then walk the tier chain.

Tier rules:
- A tier that returns results wins; nothing after it runs.
- A tier that returns [] hands over to the next tier, except that tiers
  marked only_after_failure are skipped unless their predecessor raised.
- A tier that raises StoreError, OSError or times out is logged and the
  next tier runs. If no tier completed without raising,
  RetrievalUnavailableError is raised: the store is unreachable rather than
  merely empty. If any tier answered, even with [], the result is [].

The query embedding is computed once, before any tier. If it fails there is
nothing to retrieve with, so EmbeddingError is raised immediately.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from movie_rag.core import (
    EmbeddingError,
    Query,
    RankedResult,
    RetrievalUnavailableError,
    StoreError,
    Timeouts,
)
from movie_rag.observability import (
    RETRIEVAL_LIMIT,
    RETRIEVAL_QUERY,
    RETRIEVAL_TIER,
    get_config,
    get_tracer,
    mark_tier_failed,
    retrieval_result_attributes,
)
from movie_rag.retrieval.tiers import KeywordWeights, RetrievalTier, default_tiers

if TYPE_CHECKING:
    from movie_rag.core import EmbeddingProvider, MovieStore
    from movie_rag.retrieval.document import Movie

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5

# Errors that mean "this tier could not answer", not "the caller is wrong"
_TIER_FAILURES = (StoreError, OSError, asyncio.TimeoutError)


class RetrievalEngine:
    """
    Three-tier fallback retrieval over a movie store.

    Dependencies are INJECTED, not created internally:
        engine = RetrievalEngine(store, embeddings)
        movies = await engine.retrieve("space adventure")
    """

    def __init__(
        self,
        store: MovieStore,
        embeddings: EmbeddingProvider,
        tiers: list[RetrievalTier] | None = None,
        keyword_weights: KeywordWeights | None = None,
        timeouts: Timeouts | None = None,
    ):
        self._store = store
        self._embeddings = embeddings
        self.tiers = tiers if tiers is not None else default_tiers(store, keyword_weights)
        self.timeouts = timeouts or Timeouts()

    async def embed_query(self, text: str) -> Query:
        """Compute the query embedding, wrapping every failure in EmbeddingError."""
        logger.debug(f"Creating embedding for input: {text!r}")
        try:
            vector = await asyncio.wait_for(
                self._embeddings.embed(text),
                timeout=self.timeouts.embedding_seconds,
            )
        except asyncio.TimeoutError as e:
            raise EmbeddingError(
                f"Embedding timed out after {self.timeouts.embedding_seconds}s"
            ) from e
        except EmbeddingError:
            raise
        except Exception as e:
            raise EmbeddingError(f"Embedding failed: {e}") from e
        return Query(text=text, embedding=vector)

    async def retrieve_ranked(self, query: str, limit: int = DEFAULT_LIMIT) -> list[RankedResult]:
        """
        Top `limit` movies for the query with their scores, most relevant first.

        Returns [] when nothing matches. A blank query returns [] before
        embedding, so no tier runs, the vector tiers included.
        """
        if not query.strip():
            logger.debug("Blank query, nothing to retrieve")
            return []

        tracer = get_tracer()
        attributes = {RETRIEVAL_LIMIT: limit}
        if get_config().capture_llm_content:
            attributes[RETRIEVAL_QUERY] = query

        q = await self.embed_query(query)

        previous_failed = False
        any_succeeded = False
        last_error: BaseException | None = None

        for tier in self.tiers:
            if tier.only_after_failure and not previous_failed:
                logger.debug(f"Skipping {tier.name} tier: previous tier answered without error")
                continue

            with tracer.start_span("retrieval.tier", attributes={**attributes, RETRIEVAL_TIER: tier.name}) as span:
                try:
                    results = await asyncio.wait_for(
                        tier.attempt(q, limit),
                        timeout=self.timeouts.store_seconds,
                    )
                except _TIER_FAILURES as e:
                    logger.warning(f"Retrieval tier {tier.name} unavailable, falling back: {e!r}")
                    mark_tier_failed(span, e)
                    previous_failed = True
                    last_error = e
                    continue

                previous_failed = False
                any_succeeded = True
                status = "hit" if results else "empty"
                for key, value in retrieval_result_attributes(
                    tier.name, status, [r.movie.id for r in results]
                ).items():
                    span.set_attribute(key, value)

            if results:
                logger.info(f"Using {tier.name} retrieval ({len(results)} results)")
                return results[:limit]

            logger.debug(f"Tier {tier.name} returned no results")

        if not any_succeeded and last_error is not None:
            raise RetrievalUnavailableError(
                f"All retrieval tiers failed, last error: {last_error!r}"
            ) from last_error

        return []

    async def retrieve(self, query: str, limit: int = DEFAULT_LIMIT) -> list[Movie]:
        """
        Top `limit` movies for the query, most relevant first.

        A blank query returns [] without embedding or touching the store.
        """
        return [r.movie for r in await self.retrieve_ranked(query, limit)]
