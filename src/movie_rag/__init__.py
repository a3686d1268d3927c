"""
movie-rag: answer natural-language questions about a movie collection.

Retrieval-augmented generation with tiered fallback:
native vector search -> application-level cosine similarity -> keyword match.

USAGE:
------
from movie_rag import MovieAI, MovieAIConfig

ai = MovieAI()
await ai.init(MovieAIConfig.from_env())
print(await ai.answer("Which movies star Keanu Reeves?"))
"""

from movie_rag.config import MovieAIConfig, OpenAIModelConfig
from movie_rag.core import (
    EmbeddingError,
    InitializationError,
    MovieRagError,
    NotInitializedError,
    RetrievalUnavailableError,
)
from movie_rag.movie_ai import Collaborators, MovieAI, Ready, Uninitialized

__all__ = [
    "MovieAI",
    "MovieAIConfig",
    "OpenAIModelConfig",
    "Collaborators",
    "Ready",
    "Uninitialized",
    "MovieRagError",
    "InitializationError",
    "NotInitializedError",
    "EmbeddingError",
    "RetrievalUnavailableError",
]
