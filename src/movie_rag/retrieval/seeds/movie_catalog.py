"""
Sample movie catalogue seed data.

A small built-in collection for local development and demos.
In production the catalogue is loaded from a JSON file with
`movie-rag load <file>`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from movie_rag.retrieval.document import Movie, Review

if TYPE_CHECKING:
    from movie_rag.core import MovieStore


def get_sample_movies() -> list[Movie]:
    """Get the built-in sample movies (no embeddings)."""
    return [
        Movie(
            id="1",
            title="Star Wars",
            description="A farm boy joins a rebellion and a space adventure against the Galactic Empire.",
            genre="Sci-Fi",
            year=1977,
            actors=["Mark Hamill", "Harrison Ford", "Carrie Fisher"],
            reviews=[
                Review(reviewer="Critic", rating=5, review="Classic!"),
                Review(reviewer="Fan", rating=4.5, review="The Force is strong with this one."),
            ],
        ),
        Movie(
            id="2",
            title="The Matrix",
            description="A hacker discovers reality is a simulation and joins the fight against the machines.",
            genre="Sci-Fi",
            year=1999,
            actors=["Keanu Reeves", "Laurence Fishburne", "Carrie-Anne Moss"],
            reviews=[
                Review(reviewer="User", rating=4, review="Mind-bending!"),
            ],
        ),
        Movie(
            id="3",
            title="Inception",
            description="A thief who steals secrets through dreams is given the task of planting an idea.",
            genre="Sci-Fi",
            year=2010,
            actors=["Leonardo DiCaprio", "Marion Cotillard", "Elliot Page"],
            reviews=[
                Review(reviewer="Expert", rating=5, review="Complex and brilliant!"),
            ],
        ),
        Movie(
            id="4",
            title="The Godfather",
            description="The aging patriarch of a crime dynasty transfers control to his reluctant son.",
            genre="Crime",
            year=1972,
            actors=["Marlon Brando", "Al Pacino", "James Caan"],
            reviews=[
                Review(reviewer="Critic", rating=5, review="An offer you can't refuse."),
            ],
        ),
        Movie(
            id="5",
            title="Toy Story",
            description="A cowboy doll feels threatened when a space ranger toy becomes the favourite.",
            genre="Animation",
            year=1995,
            actors=["Tom Hanks", "Tim Allen"],
            reviews=[
                Review(reviewer="Parent", rating=4.5, review="Fun for the whole family."),
            ],
        ),
        Movie(
            id="6",
            title="Titanic",
            description="A young aristocrat falls in love with a poor artist aboard the ill-fated ship.",
            genre="Romance",
            year=1997,
            actors=["Leonardo DiCaprio", "Kate Winslet"],
            reviews=[],
        ),
    ]


async def seed_movie_store(store: MovieStore) -> int:
    """
    Seed a movie store with the sample catalogue.

    Works with PgMovieStore, InMemoryMovieStore, or any other implementation.

    Returns:
        Number of movies written
    """
    movies = get_sample_movies()
    for movie in movies:
        await store.upsert_movie(movie)
    return len(movies)
