"""
Application configuration.

One explicit record, MovieAIConfig, is handed to MovieAI.init(). Nothing in
the pipeline reads the environment on its own; MovieAIConfig.from_env() is
the single place environment variables become configuration, and only the
CLI calls it.

Environment Variables:
    OPENAI_LLM_ENDPOINT / OPENAI_LLM_KEY / OPENAI_LLM_DEPLOYMENT_NAME / OPENAI_LLM_API_VERSION
    OPENAI_EMBEDDING_ENDPOINT / OPENAI_EMBEDDING_KEY / OPENAI_EMBEDDING_DEPLOYMENT_NAME /
        OPENAI_EMBEDDING_API_VERSION
    OPENAI_API_KEY: fallback key for both models
    DATABASE_URL, MOVIE_TABLE_NAME, EMBEDDING_DIM: see StoreConfig
    USE_POSTGRES: use PgMovieStore instead of the in-memory store (default: false)
    USE_MOCK_MODELS: use mock embeddings and generation (default: false)
    SEARCH_LIMIT: movies retrieved per question (default: 5)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from movie_rag.core import InitializationError, Timeouts
from movie_rag.observability.config import _env_flag
from movie_rag.retrieval.store import StoreConfig
from movie_rag.retrieval.tiers import KeywordWeights


@dataclass
class OpenAIModelConfig:
    """
    Connection settings for one OpenAI model deployment.

    An endpoint means Azure OpenAI; without one the public OpenAI API is used
    and deployment_name is the model name.
    """

    deployment_name: str
    api_key: str = ""
    endpoint: str = ""
    api_version: str = "2024-06-01"

    @property
    def is_azure(self) -> bool:
        return bool(self.endpoint)

    @classmethod
    def from_env(cls, prefix: str, default_deployment: str) -> "OpenAIModelConfig":
        """Load from {prefix}_ENDPOINT, {prefix}_KEY, ... environment variables."""
        return cls(
            endpoint=os.environ.get(f"{prefix}_ENDPOINT", ""),
            api_key=os.environ.get(f"{prefix}_KEY") or os.environ.get("OPENAI_API_KEY", ""),
            deployment_name=os.environ.get(f"{prefix}_DEPLOYMENT_NAME", default_deployment),
            api_version=os.environ.get(f"{prefix}_API_VERSION", "2024-06-01"),
        )

    def problems(self, label: str) -> list[str]:
        """Human-readable list of missing settings."""
        missing = []
        if not self.api_key:
            missing.append(f"{label} configuration must include an API key")
        if not self.deployment_name:
            missing.append(f"{label} configuration must include a deployment name")
        return missing


@dataclass
class MovieAIConfig:
    """Everything MovieAI.init() needs to build its collaborators."""

    llm: OpenAIModelConfig = field(
        default_factory=lambda: OpenAIModelConfig(deployment_name="gpt-4o")
    )
    embedding: OpenAIModelConfig = field(
        default_factory=lambda: OpenAIModelConfig(deployment_name="text-embedding-ada-002")
    )
    store: StoreConfig = field(default_factory=StoreConfig)
    timeouts: Timeouts = field(default_factory=Timeouts)
    keyword_weights: KeywordWeights = field(default_factory=KeywordWeights)
    search_limit: int = 5
    use_postgres: bool = False
    use_mock_models: bool = False

    @classmethod
    def from_env(cls) -> "MovieAIConfig":
        """Load config from environment variables."""
        return cls(
            llm=OpenAIModelConfig.from_env("OPENAI_LLM", "gpt-4o"),
            embedding=OpenAIModelConfig.from_env("OPENAI_EMBEDDING", "text-embedding-ada-002"),
            store=StoreConfig.from_env(),
            timeouts=Timeouts.from_env(),
            keyword_weights=KeywordWeights.from_env(),
            search_limit=int(os.environ.get("SEARCH_LIMIT", "5")),
            use_postgres=_env_flag("USE_POSTGRES"),
            use_mock_models=_env_flag("USE_MOCK_MODELS"),
        )

    def validate(self) -> None:
        """Raise InitializationError listing every missing setting."""
        problems: list[str] = []
        if not self.use_mock_models:
            problems.extend(self.llm.problems("LLM"))
            problems.extend(self.embedding.problems("Embedding"))
        if self.use_postgres and not self.store.connection_string:
            problems.append("Postgres store requires a connection string (DATABASE_URL)")
        if self.search_limit < 1:
            problems.append(f"search_limit must be positive, got {self.search_limit}")
        if problems:
            raise InitializationError("; ".join(problems))
