"""
Vectorization job - give every stored movie an embedding.

Runs outside the question-answering path. Movies that already carry an
embedding are skipped, so the job is safe to re-run after loading new data.
Requests go out concurrently in bounded batches with a pause in between to
stay under embedding rate limits. A failure on one movie is logged and
counted; it never aborts the batch.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Awaitable, Callable

if TYPE_CHECKING:
    from movie_rag.core import EmbeddingProvider, MovieStore
    from movie_rag.retrieval.document import Movie

logger = logging.getLogger(__name__)


@dataclass
class VectorizeReport:
    """Outcome of one vectorization run."""

    total: int = 0
    processed: int = 0
    skipped: int = 0
    failed: int = 0

    @property
    def all_succeeded(self) -> bool:
        return self.failed == 0


def movie_embedding_text(movie: Movie) -> str:
    """The text a movie's embedding is computed from."""
    parts = [
        movie.title,
        movie.description,
        movie.genre,
        f"Year: {movie.year}",
        f"Actors: {', '.join(movie.actors) or 'Unknown'}",
        " ".join(r.review for r in movie.reviews),
    ]
    return " ".join(p for p in parts if p)


async def vectorize_movie(
    store: MovieStore,
    embeddings: EmbeddingProvider,
    movie: Movie,
) -> Movie:
    """Embed one movie and upsert the result. The input movie is not mutated."""
    vector = await embeddings.embed(movie_embedding_text(movie))
    return await store.upsert_movie(replace(movie, embedding=vector))


async def vectorize_movies(
    store: MovieStore,
    embeddings: EmbeddingProvider,
    batch_size: int = 5,
    delay_seconds: float = 2.0,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> VectorizeReport:
    """
    Embed every movie in the store that lacks an embedding.

    Args:
        store: Movie store to read from and write back to
        embeddings: Embedding provider
        batch_size: Maximum concurrent embedding requests
        delay_seconds: Pause between batches
        sleep: Injected for tests

    Returns:
        VectorizeReport with per-outcome counts
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")

    movies = await store.query_all()
    report = VectorizeReport(total=len(movies))
    logger.info(f"Found {len(movies)} movies to vectorize")

    async def process(movie: Movie) -> None:
        if movie.has_embedding:
            logger.debug(f"Movie {movie.title!r} already has embedding, skipping")
            report.skipped += 1
            return
        try:
            await vectorize_movie(store, embeddings, movie)
        except Exception as e:
            logger.error(f"Failed to process movie {movie.title!r}: {e}")
            report.failed += 1
            return
        report.processed += 1
        logger.info(f"Processed {movie.title} ({report.processed}/{report.total})")

    for start in range(0, len(movies), batch_size):
        batch = movies[start:start + batch_size]
        await asyncio.gather(*(process(movie) for movie in batch))

        if start + batch_size < len(movies):
            logger.debug(f"Waiting {delay_seconds}s before next batch...")
            await sleep(delay_seconds)

    logger.info(
        f"Vectorization complete: {report.processed} processed, "
        f"{report.skipped} skipped, {report.failed} failed"
    )
    return report
