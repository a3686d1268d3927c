"""
Semantic Conventions for Span Attributes

Defines attribute keys following OpenTelemetry GenAI conventions
plus a custom namespace for retrieval.

Reference: https://opentelemetry.io/docs/specs/semconv/gen-ai/
"""

# ---------------------------------------------------------------------------
# GENAI NAMESPACE (OTel standard)
# ---------------------------------------------------------------------------

GEN_AI_SYSTEM = "gen_ai.system"  # "openai", "azure_openai"
GEN_AI_REQUEST_MODEL = "gen_ai.request.model"  # deployment name

# Request/Response (optional, controlled by PHOENIX_CAPTURE_LLM_CONTENT)
GEN_AI_PROMPT = "gen_ai.prompt"
GEN_AI_COMPLETION = "gen_ai.completion"


# ---------------------------------------------------------------------------
# RETRIEVAL NAMESPACE (custom)
# ---------------------------------------------------------------------------

RETRIEVAL_TIER = "retrieval.tier"  # "native_vector", "application_vector", "keyword"
RETRIEVAL_TIER_STATUS = "retrieval.tier.status"  # "hit", "empty", "failed", "skipped"
RETRIEVAL_LIMIT = "retrieval.limit"
RETRIEVAL_RESULT_COUNT = "retrieval.result_count"
RETRIEVAL_MOVIE_IDS = "retrieval.movie_ids"
RETRIEVAL_QUERY = "retrieval.query"  # only when content capture is on


# ---------------------------------------------------------------------------
# HELPER FUNCTIONS
# ---------------------------------------------------------------------------


def retrieval_result_attributes(tier: str, status: str, movie_ids: list[str]) -> dict:
    """Create attributes dict describing one tier's outcome."""
    return {
        RETRIEVAL_TIER: tier,
        RETRIEVAL_TIER_STATUS: status,
        RETRIEVAL_RESULT_COUNT: len(movie_ids),
        RETRIEVAL_MOVIE_IDS: ",".join(movie_ids),
    }


def generation_attributes(system: str, model: str) -> dict:
    """Create attributes dict for a generation span."""
    return {
        GEN_AI_SYSTEM: system,
        GEN_AI_REQUEST_MODEL: model,
    }
