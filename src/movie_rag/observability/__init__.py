"""
Observability - tracing for searches and answers.

Spans emitted by the pipeline:
    movie_ai.answer / movie_ai.search   one per call
    retrieval.tier                      one per tier attempted, with its status
    generation.complete                 the model call, GenAI semconv attributes

With PHOENIX_ENABLED unset every span is a no-op. Question text, prompts and
answers are only attached when PHOENIX_CAPTURE_LLM_CONTENT=true.

    from movie_rag.observability import init_phoenix, get_tracer

    init_phoenix()
    with get_tracer().start_span("movie_ai.answer") as span:
        span.set_attribute(RETRIEVAL_RESULT_COUNT, 3)
"""

from movie_rag.observability.config import (
    PhoenixConfig,
    get_config,
    reset_config,
)
from movie_rag.observability.tracer import (
    TracerProtocol,
    SpanProtocol,
    NoOpTracer,
    NoOpSpan,
    get_tracer,
    mark_tier_failed,
    reset_tracer,
)
from movie_rag.observability.attributes import (
    # GenAI
    GEN_AI_SYSTEM,
    GEN_AI_REQUEST_MODEL,
    GEN_AI_PROMPT,
    GEN_AI_COMPLETION,
    # Retrieval
    RETRIEVAL_TIER,
    RETRIEVAL_TIER_STATUS,
    RETRIEVAL_LIMIT,
    RETRIEVAL_RESULT_COUNT,
    RETRIEVAL_MOVIE_IDS,
    RETRIEVAL_QUERY,
    # Helpers
    retrieval_result_attributes,
    generation_attributes,
)
from movie_rag.observability.phoenix import init_phoenix, shutdown_phoenix

__all__ = [
    # Initialization
    "init_phoenix",
    "shutdown_phoenix",
    # Config
    "PhoenixConfig",
    "get_config",
    "reset_config",
    # Tracer
    "TracerProtocol",
    "SpanProtocol",
    "NoOpTracer",
    "NoOpSpan",
    "get_tracer",
    "mark_tier_failed",
    "reset_tracer",
    # Attributes - GenAI
    "GEN_AI_SYSTEM",
    "GEN_AI_REQUEST_MODEL",
    "GEN_AI_PROMPT",
    "GEN_AI_COMPLETION",
    # Attributes - Retrieval
    "RETRIEVAL_TIER",
    "RETRIEVAL_TIER_STATUS",
    "RETRIEVAL_LIMIT",
    "RETRIEVAL_RESULT_COUNT",
    "RETRIEVAL_MOVIE_IDS",
    "RETRIEVAL_QUERY",
    # Helpers
    "retrieval_result_attributes",
    "generation_attributes",
]
