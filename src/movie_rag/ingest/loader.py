"""
Movie data loading.

The catalogue arrives as a JSON array of movie objects. Pydantic models
validate it on the way in, so a malformed file fails with a precise error
instead of a half-loaded table.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from movie_rag.retrieval.document import Movie

if TYPE_CHECKING:
    from movie_rag.core import MovieStore

logger = logging.getLogger(__name__)


class ReviewRecord(BaseModel):
    """A review as it appears in the source file."""

    reviewer: str
    rating: float = Field(ge=0, le=5)
    review: str


class MovieRecord(BaseModel):
    """A movie as it appears in the source file."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    title: str
    description: str = ""
    genre: str = ""
    year: int
    actors: list[str] = Field(default_factory=list)
    reviews: list[ReviewRecord] = Field(default_factory=list)
    embedding: list[float] | None = None

    def to_movie(self) -> Movie:
        return Movie.from_dict(self.model_dump())


_MOVIE_LIST = TypeAdapter(list[MovieRecord])


def parse_movies(raw: str | bytes) -> list[Movie]:
    """Validate a JSON array of movies and convert it to Movie objects."""
    return [record.to_movie() for record in _MOVIE_LIST.validate_json(raw)]


def load_movies_file(path: str | Path) -> list[Movie]:
    """Read and validate a movies JSON file."""
    return parse_movies(Path(path).read_bytes())


async def load_movies(store: MovieStore, movies: list[Movie]) -> int:
    """
    Upsert movies into the store one by one.

    Returns:
        Number of movies written
    """
    logger.info(f"Loading {len(movies)} movies into the store...")
    for movie in movies:
        await store.upsert_movie(movie)
        logger.info(f"Loaded/Updated: {movie.title}")
    return len(movies)


__all__ = [
    "ReviewRecord",
    "MovieRecord",
    "parse_movies",
    "load_movies_file",
    "load_movies",
]
