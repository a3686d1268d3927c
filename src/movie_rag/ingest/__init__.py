"""
Ingest module - get movies into the store and give them embeddings.

These jobs run before any question is asked:
1. load_movies_file() + load_movies(): JSON file -> store
2. vectorize_movies(): store -> embeddings -> store
"""

from movie_rag.ingest.loader import (
    MovieRecord,
    ReviewRecord,
    parse_movies,
    load_movies_file,
    load_movies,
)
from movie_rag.ingest.vectorize import (
    VectorizeReport,
    movie_embedding_text,
    vectorize_movie,
    vectorize_movies,
)

__all__ = [
    # Loading
    "MovieRecord",
    "ReviewRecord",
    "parse_movies",
    "load_movies_file",
    "load_movies",
    # Vectorization
    "VectorizeReport",
    "movie_embedding_text",
    "vectorize_movie",
    "vectorize_movies",
]
