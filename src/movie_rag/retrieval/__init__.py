"""
Retrieval module - find the movies a question is about.

This module provides:
- Movie, Review: The document model
- cosine_similarity(): Vector scoring
- StoreConfig, PgMovieStore, InMemoryMovieStore, get_movie_store(): Stores
- NativeVectorTier, ApplicationVectorTier, KeywordTier: Fallback tiers
- RetrievalEngine: Walks the tiers for a query

ARCHITECTURE:
-------------
1. Protocol defines the contract (in core.protocols)
2. Multiple implementations (PgMovieStore, InMemoryMovieStore)
3. Factory function for instantiation
4. Test doubles for fast unit tests
"""

# Document model
from movie_rag.retrieval.document import Movie, Review

# Scoring
from movie_rag.retrieval.similarity import cosine_similarity

# Store implementations and factory
from movie_rag.retrieval.store import (
    StoreConfig,
    PgMovieStore,
    InMemoryMovieStore,
    get_movie_store,
)

# Tiers and engine
from movie_rag.retrieval.tiers import (
    RetrievalTier,
    NativeVectorTier,
    ApplicationVectorTier,
    KeywordTier,
    KeywordWeights,
    keyword_score,
    default_tiers,
)
from movie_rag.retrieval.engine import RetrievalEngine, DEFAULT_LIMIT

# Seed data
from movie_rag.retrieval.seeds import get_sample_movies, seed_movie_store

__all__ = [
    # Document
    "Movie",
    "Review",
    # Scoring
    "cosine_similarity",
    # Stores
    "StoreConfig",
    "PgMovieStore",
    "InMemoryMovieStore",
    "get_movie_store",
    # Tiers
    "RetrievalTier",
    "NativeVectorTier",
    "ApplicationVectorTier",
    "KeywordTier",
    "KeywordWeights",
    "keyword_score",
    "default_tiers",
    # Engine
    "RetrievalEngine",
    "DEFAULT_LIMIT",
    # Seeds
    "get_sample_movies",
    "seed_movie_store",
]
