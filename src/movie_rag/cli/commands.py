"""
CLI commands - entry points for asking questions and preparing data.

Each command follows a consistent pattern:
1. Parse arguments
2. Load environment and build MovieAIConfig
3. Run the async operation
4. Print results
5. Return exit code

Errors that escape the pipeline are logged in full and shown to the user
as a generic message.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from pydantic import ValidationError

from movie_rag.config import MovieAIConfig
from movie_rag.core import MovieRagError
from movie_rag.movie_ai import MovieAI

logger = logging.getLogger("movie_rag.cli")

ERROR_MESSAGE = "Sorry, there was an error processing your question."


def _load_env() -> None:
    """Load environment variables from .env file."""
    from dotenv import load_dotenv

    load_dotenv()


def _configure_logging() -> None:
    """Root logging from LOG_LEVEL (default WARNING), with chatty clients quieted."""
    level = os.environ.get("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    for noisy in ("openai", "httpx", "psycopg"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--postgres", action="store_true", help="Use the PostgreSQL store")
    parser.add_argument("--mock", action="store_true", help="Use mock embedding and generation models")


def _build_config(args: argparse.Namespace) -> MovieAIConfig:
    config = MovieAIConfig.from_env()
    if args.postgres:
        config.use_postgres = True
    if args.mock:
        config.use_mock_models = True
    return config


async def _open_movie_ai(config: MovieAIConfig) -> MovieAI:
    from movie_rag.observability import init_phoenix

    init_phoenix()
    movie_ai = MovieAI()
    await movie_ai.init(config)
    return movie_ai


# ---------------------------------------------------------------------------
# QUESTION ANSWERING
# ---------------------------------------------------------------------------


async def _ask(config: MovieAIConfig, question: str) -> int:
    movie_ai = await _open_movie_ai(config)
    try:
        print(await movie_ai.answer(question))
        return 0
    except Exception as e:
        logger.error(f"Question failed: {e!r}")
        print(ERROR_MESSAGE)
        return 1
    finally:
        await movie_ai.collaborators.store.close()


def run_ask_cli(argv: list[str] | None = None) -> int:
    """CLI entry point for a single question."""
    parser = argparse.ArgumentParser(description="Answer one question about movies")
    parser.add_argument("question", nargs="+", help="The question to answer")
    _add_common_args(parser)
    args = parser.parse_args(argv)

    return asyncio.run(_ask(_build_config(args), " ".join(args.question)))


async def _search(config: MovieAIConfig, query: str) -> int:
    movie_ai = await _open_movie_ai(config)
    try:
        results = await movie_ai.search_ranked(query)
    except MovieRagError as e:
        logger.error(f"Search failed: {e!r}")
        print(ERROR_MESSAGE)
        return 1
    finally:
        await movie_ai.collaborators.store.close()

    if not results:
        print("No matching movies found.")
        return 0

    for i, result in enumerate(results, 1):
        movie = result.movie
        print(f"  {i}. {movie.title} ({movie.year}) [{movie.genre}] - {result.tier}: {result.score:.3f}")
    return 0


def run_search_cli(argv: list[str] | None = None) -> int:
    """CLI entry point for retrieval only (no generation)."""
    parser = argparse.ArgumentParser(description="Search movies without generating an answer")
    parser.add_argument("query", nargs="+", help="Search text")
    _add_common_args(parser)
    args = parser.parse_args(argv)

    return asyncio.run(_search(_build_config(args), " ".join(args.query)))


async def _chat(config: MovieAIConfig) -> int:
    movie_ai = await _open_movie_ai(config)

    print("Welcome to Movie AI! Ask me anything about movies.")
    print('Type "exit" to quit.\n')

    try:
        while True:
            try:
                question = await asyncio.to_thread(input, "Ask me about movies: ")
            except EOFError:
                break

            if question.strip().lower() == "exit":
                break
            if not question.strip():
                continue

            print("\nThinking...\n")
            try:
                answer = await movie_ai.answer(question)
            except Exception as e:
                logger.error(f"Question failed: {e!r}")
                print(f"{ERROR_MESSAGE}\n")
                continue
            print(f"{answer}\n")
    finally:
        await movie_ai.collaborators.store.close()

    print("Goodbye!")
    return 0


def run_chat_cli(argv: list[str] | None = None) -> int:
    """CLI entry point for the interactive conversation loop."""
    parser = argparse.ArgumentParser(description="Interactive movie Q&A")
    _add_common_args(parser)
    args = parser.parse_args(argv)

    return asyncio.run(_chat(_build_config(args)))


# ---------------------------------------------------------------------------
# DATA PREPARATION
# ---------------------------------------------------------------------------


async def _init_db(config: MovieAIConfig) -> int:
    from movie_rag.retrieval import PgMovieStore

    store = PgMovieStore(config.store)
    try:
        await store.connect()
        await store.create_schema()
    finally:
        await store.close()

    vector = "pgvector" if store.vector_enabled else "application-level similarity"
    print(f"Table '{config.store.table_name}' is ready ({vector})")
    return 0


def run_init_db_cli(argv: list[str] | None = None) -> int:
    """CLI entry point for creating the movies table."""
    parser = argparse.ArgumentParser(description="Create the movies table in PostgreSQL")
    parser.parse_args(argv)

    return asyncio.run(_init_db(MovieAIConfig.from_env()))


async def _load(config: MovieAIConfig, path: str | None) -> int:
    from movie_rag.ingest import load_movies, load_movies_file
    from movie_rag.retrieval import PgMovieStore, get_sample_movies

    try:
        movies = load_movies_file(path) if path else get_sample_movies()
    except (ValidationError, OSError) as e:
        print(f"Error: could not load movies from {path}: {e}")
        return 1

    store = PgMovieStore(config.store)
    try:
        await store.connect()
        count = await load_movies(store, movies)
    finally:
        await store.close()

    print(f"Movie data loading complete! ({count} movies)")
    return 0


def run_load_cli(argv: list[str] | None = None) -> int:
    """CLI entry point for loading movies into PostgreSQL."""
    parser = argparse.ArgumentParser(description="Load movies into PostgreSQL")
    parser.add_argument("file", nargs="?", help="JSON file of movies (default: built-in sample)")
    args = parser.parse_args(argv)

    return asyncio.run(_load(MovieAIConfig.from_env(), args.file))


async def _vectorize(config: MovieAIConfig, batch_size: int, delay: float) -> int:
    from movie_rag.embeddings import get_embedding_provider
    from movie_rag.ingest import vectorize_movies
    from movie_rag.retrieval import PgMovieStore

    embeddings = get_embedding_provider(
        use_mock=config.use_mock_models,
        config=config.embedding,
        dimensions=config.store.embedding_dim,
    )
    store = PgMovieStore(config.store)
    try:
        await store.connect()
        report = await vectorize_movies(store, embeddings, batch_size=batch_size, delay_seconds=delay)
    finally:
        await store.close()

    print(f"\nVectorization complete! Processed {report.processed} movies.")
    print(f"Skipped (already embedded): {report.skipped}")
    print(f"Failed: {report.failed}")
    return 0 if report.all_succeeded else 1


def run_vectorize_cli(argv: list[str] | None = None) -> int:
    """CLI entry point for the vectorization job."""
    parser = argparse.ArgumentParser(description="Generate embeddings for stored movies")
    parser.add_argument("--batch-size", type=int, default=5, help="Concurrent requests per batch")
    parser.add_argument("--delay", type=float, default=2.0, help="Seconds between batches")
    parser.add_argument("--mock", action="store_true", help="Use mock embeddings")
    args = parser.parse_args(argv)

    config = MovieAIConfig.from_env()
    if args.mock:
        config.use_mock_models = True
    return asyncio.run(_vectorize(config, args.batch_size, args.delay))


# ---------------------------------------------------------------------------
# MAIN
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """
    Main CLI entry point with subcommands.

    Usage:
        movie-rag ask "Who starred in The Matrix?"
        movie-rag search space adventure
        movie-rag chat
        movie-rag init-db
        movie-rag load movies.json
        movie-rag vectorize
    """
    _load_env()
    _configure_logging()

    parser = argparse.ArgumentParser(
        description="Movie question answering with retrieval-augmented generation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  ask         Answer one question
  search      Show the movies retrieved for a query
  chat        Interactive question loop
  init-db     Create the movies table (PostgreSQL)
  load        Load movies from a JSON file (PostgreSQL)
  vectorize   Generate embeddings for stored movies (PostgreSQL)

Examples:
  movie-rag ask --mock "Which movies are about space?"
  movie-rag load data/movies.json && movie-rag vectorize
        """,
    )
    parser.add_argument(
        "command",
        choices=["ask", "search", "chat", "init-db", "load", "vectorize"],
        help="Command to run",
    )

    args, remaining = parser.parse_known_args(argv)

    commands = {
        "ask": run_ask_cli,
        "search": run_search_cli,
        "chat": run_chat_cli,
        "init-db": run_init_db_cli,
        "load": run_load_cli,
        "vectorize": run_vectorize_cli,
    }

    try:
        return commands[args.command](remaining)
    except MovieRagError as e:
        print(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
