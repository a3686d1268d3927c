"""
Core module - shared protocols, types and errors for the entire system.

USAGE:
------
from movie_rag.core import MovieStore, EmbeddingProvider

class MyMovieStore:
    '''Implements MovieStore protocol.'''
    ...
"""

from movie_rag.core.errors import (
    MovieRagError,
    InitializationError,
    NotInitializedError,
    EmbeddingError,
    StoreError,
    VectorSearchUnsupportedError,
    RetrievalUnavailableError,
)
from movie_rag.core.timeouts import Timeouts
from movie_rag.core.protocols import (
    # Protocols
    EmbeddingProvider,
    MovieStore,
    GenerationProvider,
    # Data classes
    Query,
    RankedResult,
)

__all__ = [
    # Protocols
    "EmbeddingProvider",
    "MovieStore",
    "GenerationProvider",
    # Data classes
    "Query",
    "RankedResult",
    "Timeouts",
    # Errors
    "MovieRagError",
    "InitializationError",
    "NotInitializedError",
    "EmbeddingError",
    "StoreError",
    "VectorSearchUnsupportedError",
    "RetrievalUnavailableError",
]
