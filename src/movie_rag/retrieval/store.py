"""
Movie store implementations following the gold standard pattern.

Pattern: Protocol -> Production impl -> Test double -> Factory

This module contains:
1. StoreConfig - Configuration dataclass
2. PgMovieStore - PostgreSQL with pgvector (production)
3. InMemoryMovieStore - In-memory store (testing/development)
4. get_movie_store() - Factory function

INTERVIEW TALKING POINT:
------------------------
"The store only has to answer two questions: 'give me the nearest movies to
this vector' and 'give me everything'. If the database can't do the first
one - no pgvector extension, old server - it says so with a dedicated
exception, and the retrieval engine drops down a tier instead of failing
the user's question."
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import numpy as np
import psycopg
from psycopg import errors as pg_errors
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb
from pgvector.psycopg import register_vector_async

from movie_rag.core import RankedResult, StoreError, VectorSearchUnsupportedError
from movie_rag.retrieval.document import Movie
from movie_rag.retrieval.similarity import cosine_similarity

logger = logging.getLogger(__name__)

# SQLSTATEs that mean "this server cannot do vector distance ordering"
_VECTOR_UNSUPPORTED_ERRORS = (
    pg_errors.UndefinedFunction,
    pg_errors.UndefinedObject,
    pg_errors.FeatureNotSupported,
)


# ---------------------------------------------------------------------------
# CONFIGURATION
# ---------------------------------------------------------------------------


@dataclass
class StoreConfig:
    """Configuration for the movie store."""

    connection_string: str = "postgresql://localhost/movie_db"
    table_name: str = "movies"
    embedding_dim: int = 1536

    @classmethod
    def from_env(cls) -> "StoreConfig":
        """Load config from environment variables."""
        return cls(
            connection_string=os.environ.get("DATABASE_URL", "postgresql://localhost/movie_db"),
            table_name=os.environ.get("MOVIE_TABLE_NAME", "movies"),
            embedding_dim=int(os.environ.get("EMBEDDING_DIM", "1536")),
        )


# ---------------------------------------------------------------------------
# PGVECTOR STORE (Production)
# ---------------------------------------------------------------------------


class PgMovieStore:
    """
    PostgreSQL movie store using pgvector.

    When the vector extension is missing the embedding column falls back to
    DOUBLE PRECISION[] and native vector search reports unsupported, leaving
    similarity to the application.
    """

    def __init__(self, config: StoreConfig):
        self.config = config
        self._conn: psycopg.AsyncConnection | None = None
        self._vector_enabled = False

    @property
    def vector_enabled(self) -> bool:
        return self._vector_enabled

    async def connect(self) -> None:
        """Establish database connection and register the vector type."""
        if self._conn is not None:
            return
        try:
            self._conn = await psycopg.AsyncConnection.connect(
                self.config.connection_string,
                autocommit=True,
                row_factory=dict_row,
            )
        except psycopg.Error as e:
            raise StoreError(f"Could not connect to movie store: {e}") from e

        try:
            await self._conn.execute("CREATE EXTENSION IF NOT EXISTS vector")
        except psycopg.Error as e:
            logger.debug(f"Could not create vector extension: {e}")

        try:
            await register_vector_async(self._conn)
            self._vector_enabled = True
        except psycopg.Error as e:
            logger.warning(f"pgvector unavailable, native vector search disabled: {e}")
            self._vector_enabled = False

    async def close(self) -> None:
        """Close database connection."""
        if self._conn is not None:
            await self._conn.close()
            self._conn = None

    async def _execute(self, query: str, params: tuple | None = None) -> list[dict]:
        if self._conn is None:
            await self.connect()
        cursor = await self._conn.execute(query, params)
        if cursor.description is None:
            return []
        return await cursor.fetchall()

    async def create_schema(self) -> None:
        """Create the movies table and, when pgvector is present, its index."""
        table = self.config.table_name
        if self._conn is None:
            await self.connect()

        embedding_type = (
            f"vector({self.config.embedding_dim})"
            if self._vector_enabled
            else "DOUBLE PRECISION[]"
        )
        try:
            await self._execute(
                f"""
                CREATE TABLE IF NOT EXISTS {table} (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    description TEXT NOT NULL DEFAULT '',
                    genre TEXT NOT NULL DEFAULT '',
                    year INTEGER NOT NULL DEFAULT 0,
                    actors TEXT[] NOT NULL DEFAULT '{{}}',
                    reviews JSONB NOT NULL DEFAULT '[]',
                    embedding {embedding_type}
                )
                """
            )
            if self._vector_enabled:
                await self._execute(
                    f"""
                    CREATE INDEX IF NOT EXISTS {table}_embedding_idx
                    ON {table}
                    USING hnsw (embedding vector_cosine_ops)
                    WITH (m = 16, ef_construction = 64)
                    """
                )
        except psycopg.Error as e:
            raise StoreError(f"Could not create schema for {table}: {e}") from e

    async def upsert_movie(self, movie: Movie) -> Movie:
        """Insert a movie or replace the stored copy."""
        embedding = movie.embedding
        if embedding is not None and not self._vector_enabled:
            embedding = [float(x) for x in embedding]

        try:
            await self._execute(
                f"""
                INSERT INTO {self.config.table_name}
                    (id, title, description, genre, year, actors, reviews, embedding)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                ON CONFLICT (id) DO UPDATE SET
                    title = EXCLUDED.title,
                    description = EXCLUDED.description,
                    genre = EXCLUDED.genre,
                    year = EXCLUDED.year,
                    actors = EXCLUDED.actors,
                    reviews = EXCLUDED.reviews,
                    embedding = EXCLUDED.embedding
                """,
                (
                    movie.id,
                    movie.title,
                    movie.description,
                    movie.genre,
                    movie.year,
                    movie.actors,
                    Jsonb([r.to_dict() for r in movie.reviews]),
                    embedding,
                ),
            )
        except psycopg.Error as e:
            raise StoreError(f"Failed to upsert movie {movie.title!r}: {e}") from e
        return movie

    async def query_ordered_by_vector_distance(
        self,
        vector: np.ndarray,
        limit: int = 5,
    ) -> list[RankedResult]:
        """Nearest movies by cosine distance, computed by pgvector."""
        if self._conn is None:
            await self.connect()
        if not self._vector_enabled:
            raise VectorSearchUnsupportedError("pgvector extension is not available")

        try:
            rows = await self._execute(
                f"""
                SELECT id, title, description, genre, year, actors, reviews, embedding,
                       embedding <=> %s AS distance
                FROM {self.config.table_name}
                WHERE embedding IS NOT NULL
                ORDER BY distance
                LIMIT %s
                """,
                (np.asarray(vector, dtype=np.float32), limit),
            )
        except _VECTOR_UNSUPPORTED_ERRORS as e:
            raise VectorSearchUnsupportedError(str(e)) from e
        except psycopg.Error as e:
            raise StoreError(f"Vector query failed: {e}") from e

        # Convert distance to similarity
        return [
            RankedResult(movie=Movie.from_dict(row), score=1 - float(row["distance"]))
            for row in rows
        ]

    async def query_all(self, with_embedding: bool = False) -> list[Movie]:
        """Plain scan in primary key order."""
        where = "WHERE embedding IS NOT NULL" if with_embedding else ""
        try:
            rows = await self._execute(
                f"""
                SELECT id, title, description, genre, year, actors, reviews, embedding
                FROM {self.config.table_name}
                {where}
                ORDER BY id
                """
            )
        except psycopg.Error as e:
            raise StoreError(f"Scan of {self.config.table_name} failed: {e}") from e
        return [Movie.from_dict(row) for row in rows]


# ---------------------------------------------------------------------------
# IN-MEMORY STORE (Testing/Development)
# ---------------------------------------------------------------------------


class InMemoryMovieStore:
    """
    In-memory movie store for development/testing.

    Implements the same interface as PgMovieStore but doesn't require Postgres.
    Set supports_vector_search=False to behave like a database without pgvector.
    """

    def __init__(
        self,
        movies: list[Movie] | None = None,
        supports_vector_search: bool = True,
    ):
        self.supports_vector_search = supports_vector_search
        self._movies: dict[str, Movie] = {}
        for movie in movies or []:
            self._movies[movie.id] = movie

    async def connect(self) -> None:
        """No-op for in-memory store."""
        pass

    async def close(self) -> None:
        """No-op for in-memory store."""
        pass

    async def create_schema(self) -> None:
        """No-op for in-memory store."""
        pass

    async def upsert_movie(self, movie: Movie) -> Movie:
        """Insert or replace, keeping the original position of existing ids."""
        self._movies[movie.id] = movie
        return movie

    async def query_ordered_by_vector_distance(
        self,
        vector: np.ndarray,
        limit: int = 5,
    ) -> list[RankedResult]:
        """Search using cosine similarity."""
        if not self.supports_vector_search:
            raise VectorSearchUnsupportedError("vector search disabled for this store")

        scored = [
            RankedResult(movie=movie, score=cosine_similarity(vector, movie.embedding))
            for movie in self._movies.values()
            if movie.has_embedding and len(movie.embedding) == len(vector)
        ]
        scored.sort(key=lambda r: r.score, reverse=True)
        return scored[:limit]

    async def query_all(self, with_embedding: bool = False) -> list[Movie]:
        """All movies in insertion order."""
        return [m for m in self._movies.values() if m.has_embedding or not with_embedding]


# ---------------------------------------------------------------------------
# FACTORY FUNCTION
# ---------------------------------------------------------------------------


def get_movie_store(
    use_postgres: bool = False,
    config: StoreConfig | None = None,
    movies: list[Movie] | None = None,
) -> PgMovieStore | InMemoryMovieStore:
    """
    Factory function to get the appropriate movie store.

    Args:
        use_postgres: Use PostgreSQL store (default: False for dev)
        config: Store configuration (uses env defaults if not provided)
        movies: Initial contents for the in-memory store

    Returns:
        MovieStore implementation
    """
    if use_postgres:
        return PgMovieStore(config or StoreConfig.from_env())
    return InMemoryMovieStore(movies)
