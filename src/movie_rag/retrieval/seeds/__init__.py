"""Built-in movie catalogue used by the in-memory store and `movie-rag load`."""

from movie_rag.retrieval.seeds.movie_catalog import (
    get_sample_movies,
    seed_movie_store,
)

__all__ = ["get_sample_movies", "seed_movie_store"]
