"""
Error taxonomy for the question-answering pipeline.

Only a handful of these ever reach a caller of MovieAI:
InitializationError, NotInitializedError, EmbeddingError and
RetrievalUnavailableError. StoreError and VectorSearchUnsupportedError
are absorbed by the retrieval tiers.
"""


class MovieRagError(Exception):
    """Base class for all movie-rag errors."""


class InitializationError(MovieRagError):
    """Collaborators could not be created from the supplied configuration."""


class NotInitializedError(MovieRagError):
    """search() or answer() was called before init()."""

    def __init__(self, message: str = "MovieAI not initialized. Call init() first."):
        super().__init__(message)


class EmbeddingError(MovieRagError):
    """The query embedding could not be produced. Fatal for the current call."""


class StoreError(MovieRagError):
    """A movie store call failed."""


class VectorSearchUnsupportedError(StoreError):
    """The store cannot order results by vector distance."""


class RetrievalUnavailableError(MovieRagError):
    """Every retrieval tier that could run failed."""
