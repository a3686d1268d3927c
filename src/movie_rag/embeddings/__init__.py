"""
Embeddings module - questions and movies as vectors.

OpenAIEmbeddings calls the configured (Azure) OpenAI deployment;
MockEmbeddings returns hash-seeded unit vectors so retrieval can run
offline. Query and catalogue vectors must come from the same provider.
"""

from movie_rag.core import EmbeddingProvider
from movie_rag.embeddings.openai_embeddings import (
    OpenAIEmbeddings,
    MockEmbeddings,
    get_embedding_provider,
)

__all__ = [
    "EmbeddingProvider",
    "OpenAIEmbeddings",
    "MockEmbeddings",
    "get_embedding_provider",
]
