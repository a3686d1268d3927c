"""
Context assembly - render retrieved movies as plain text for the prompt.

This is a PURE FUNCTION - same inputs always produce same output,
testable without any model call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from movie_rag.retrieval.document import Movie


def format_movie(movie: Movie) -> str:
    """Render one movie as a fixed five-line block."""
    actors = ", ".join(movie.actors)
    reviews = "; ".join(f"{r.reviewer}: {r.review}" for r in movie.reviews)
    return (
        f"Title: {movie.title} ({movie.year})\n"
        f"Genre: {movie.genre}\n"
        f"Actors: {actors}\n"
        f"Description: {movie.description}\n"
        f"Reviews: {reviews}"
    )


def assemble_context(movies: Iterable[Movie]) -> str:
    """
    Join movie blocks with a blank line, preserving relevance order.

    An empty input gives an empty string.
    """
    return "\n\n".join(format_movie(movie) for movie in movies)
