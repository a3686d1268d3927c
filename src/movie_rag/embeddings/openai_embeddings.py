"""
Embeddings Module - Single Responsibility: Generate text embeddings.

It has ONE job: convert text to vector embeddings.
- No database logic, no movie handling
- Easy to swap for different embedding providers
"""

from __future__ import annotations

import hashlib

import numpy as np
from openai import AsyncOpenAI

from movie_rag.clients import create_openai_client
from movie_rag.config import OpenAIModelConfig
from movie_rag.core import EmbeddingError, EmbeddingProvider

_MODEL_DIMS = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}


class OpenAIEmbeddings:
    """
    OpenAI (or Azure OpenAI) embedding provider.

    Uses text-embedding-ada-002 by default (1536 dimensions).
    """

    def __init__(
        self,
        config: OpenAIModelConfig | None = None,
        client: AsyncOpenAI | None = None,
    ):
        self.config = config or OpenAIModelConfig(deployment_name="text-embedding-ada-002")
        self._client = client or create_openai_client(self.config)

    @property
    def model(self) -> str:
        return self.config.deployment_name

    @property
    def dimensions(self) -> int:
        """Return embedding dimensions for the model."""
        return _MODEL_DIMS.get(self.model, 1536)

    async def embed(self, text: str) -> np.ndarray:
        """Generate embedding for a single text."""
        response = await self._client.embeddings.create(input=text, model=self.model)
        if not response.data:
            raise EmbeddingError(f"Embedding model {self.model} returned no data")
        return np.array(response.data[0].embedding, dtype=np.float32)

    async def embed_batch(self, texts: list[str]) -> list[np.ndarray]:
        """Generate embeddings for multiple texts in one request."""
        if not texts:
            return []

        response = await self._client.embeddings.create(input=texts, model=self.model)
        return [
            np.array(item.embedding, dtype=np.float32)
            for item in sorted(response.data, key=lambda d: d.index)
        ]


class MockEmbeddings:
    """
    Mock embedding provider for testing without API calls.

    Generates deterministic unit vectors seeded from a text hash.
    NOT for production use - only for testing/development.
    """

    def __init__(self, dimensions: int = 1536):
        self._dimensions = dimensions

    @property
    def dimensions(self) -> int:
        return self._dimensions

    async def embed(self, text: str) -> np.ndarray:
        """Generate deterministic pseudo-embedding from text hash."""
        seed = int.from_bytes(hashlib.sha256(text.encode()).digest()[:8], "big")
        vector = np.random.default_rng(seed).standard_normal(self._dimensions)
        return (vector / np.linalg.norm(vector)).astype(np.float32)

    async def embed_batch(self, texts: list[str]) -> list[np.ndarray]:
        """Generate embeddings for multiple texts."""
        return [await self.embed(text) for text in texts]


def get_embedding_provider(
    use_mock: bool = False,
    config: OpenAIModelConfig | None = None,
    dimensions: int = 1536,
) -> EmbeddingProvider:
    """
    Factory function to get the appropriate embedding provider.

    Args:
        use_mock: If True, return MockEmbeddings (for testing)
        config: Deployment settings for the real provider
        dimensions: Vector length for MockEmbeddings
    """
    if use_mock:
        return MockEmbeddings(dimensions)
    return OpenAIEmbeddings(config)
