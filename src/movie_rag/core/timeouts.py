"""Wall-clock limits for every external call the pipeline makes."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Timeouts:
    """Per-call timeouts in seconds.

    Environment Variables:
        EMBEDDING_TIMEOUT_SECONDS: query embedding (default: 30)
        STORE_TIMEOUT_SECONDS: each movie store query (default: 30)
        GENERATION_TIMEOUT_SECONDS: answer generation (default: 60)
    """

    embedding_seconds: float = 30.0
    store_seconds: float = 30.0
    generation_seconds: float = 60.0

    @classmethod
    def from_env(cls) -> "Timeouts":
        """Load timeouts from environment variables."""
        return cls(
            embedding_seconds=float(os.environ.get("EMBEDDING_TIMEOUT_SECONDS", "30")),
            store_seconds=float(os.environ.get("STORE_TIMEOUT_SECONDS", "30")),
            generation_seconds=float(os.environ.get("GENERATION_TIMEOUT_SECONDS", "60")),
        )
